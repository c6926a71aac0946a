"""Dominator report and CFG visualization.

Text output lists one block per line in registry order; DOT output draws
the CFG with each block labelled by its dominator set.
"""

import io

from cfgdom.util.io import dot
from cfgdom.util.io.formatting import idList

UNREACHABLE = "<unreachable>"


def formatDominators(analysis):
    """Render ``id: dom, dom, ...`` lines for every registered block."""
    lines = []
    for block in analysis.registry:
        if analysis.isReachable(block.id):
            lines.append("%d: %s" % (block.id, idList(analysis.dominatorsOf(block.id))))
        else:
            lines.append("%d: %s" % (block.id, UNREACHABLE))
    return "\n".join(lines)


def formatOrder(analysis):
    return " ".join(str(i) for i in analysis.reversePostOrder())


class CFGToDot(object):
    """Builds a DOT graph of the CFG of a DominanceAnalysis.

    Attributes:
        g: The dot.Graph being populated.
    """

    reachableStyle = dict(shape="box", fontsize=10)
    unreachableStyle = dict(shape="box", fontsize=10, style="dashed", color="gray")

    def __init__(self, g=None):
        if g is None:
            g = dot.Digraph("cfg")
        self.g = g

    def label(self, analysis, block):
        if analysis.isReachable(block.id):
            doms = "{%s}" % idList(analysis.dominatorsOf(block.id))
        else:
            doms = UNREACHABLE
        return "%d\ndom: %s" % (block.id, doms)

    def process(self, analysis):
        registry = analysis.registry

        for block in registry:
            if analysis.isReachable(block.id):
                style = self.reachableStyle
            else:
                style = self.unreachableStyle
            self.g.node(block.id, label=self.label(analysis, block), **style)

        for block in registry:
            for succ in block.successors:
                self.g.edge(block.id, registry.idOf(succ))

        return self.g


def toDot(analysis):
    """Return the CFG of ``analysis`` as DOT source text."""
    g = CFGToDot().process(analysis)
    out = io.StringIO()
    g.outputDot(out)
    return out.getvalue()
