"""networkx interop for CFGs.

Exports a BlockRegistry as a ``networkx.DiGraph`` and derives reference
dominator sets from networkx's immediate dominators, giving an independent
check of the iterative solver.
"""

import logging

import networkx as nx

LOG = logging.getLogger(__name__)


def toDiGraph(registry):
    """Return a DiGraph over external block ids.

    Repeated edges collapse into one; every registered block becomes a
    node, including blocks without edges.
    """
    g = nx.DiGraph()
    for block in registry:
        g.add_node(block.id)
    for block in registry:
        for succ in block.successors:
            g.add_edge(block.id, registry.idOf(succ))
    return g


def referenceDominators(registry):
    """Dominator sets of the reachable blocks, computed by networkx.

    Returns:
        dict: block id -> frozenset of dominating block ids. Unreachable
        blocks are absent.
    """
    if not len(registry):
        return {}

    g = toDiGraph(registry)
    start = registry.entry.id
    idom = nx.immediate_dominators(g, start)

    reachable = {start} | nx.descendants(g, start)

    result = {}
    for node in reachable:
        doms = {node}
        current = node
        while current != start:
            current = idom[current]
            doms.add(current)
        result[node] = frozenset(doms)
    return result


def crossCheck(analysis):
    """Compare an analysis against networkx.

    Returns:
        list: Ids of blocks whose dominator sets disagree, in registry
        order. Empty when both agree.
    """
    expected = referenceDominators(analysis.registry)

    mismatches = []
    for block in analysis.registry:
        actual = analysis.dominatorsOf(block.id)
        if actual != expected.get(block.id, frozenset()):
            LOG.warning("block %d: got {%s}, networkx says {%s}", block.id,
                        ", ".join(map(str, sorted(actual))),
                        ", ".join(map(str, sorted(expected.get(block.id, ())))))
            mismatches.append(block.id)
    return mismatches
