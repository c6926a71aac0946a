"""
DOT graph output.

A small writer for the subset of the DOT language needed to draw a CFG:
one directed graph with attributed nodes and edges. The result can be
rendered with Graphviz.
"""
import re

__all__ = "Digraph", "escapeField"

# Regular expression for escaping special characters in DOT field values
makeescape = re.compile(r"[\n\t\"]")

# Lookup table for escaping special characters in DOT format
lut = {"\n": r"\n", "\t": r"\t", '"': r"\""}


def escapeField(s):
    """
    Escape newlines, tabs and double quotes for use inside a quoted DOT field.
    """
    return makeescape.sub(lambda c: lut[c.group()], str(s))


def dumpAttr(attr, out):
    """
    Output attributes in DOT format, as ``[key1="value1", key2="value2"]``.
    """
    out.write(" [")
    out.write(", ".join('%s="%s"' % (k, escapeField(v)) for k, v in attr.items()))
    out.write("]")


class Node(object):
    __slots__ = ("name", "attr")

    def __init__(self, name, **attr):
        assert isinstance(name, str)
        self.name = name
        self.attr = attr

    def dump(self, out, tabs=""):
        out.write('%s"%s"' % (tabs, escapeField(self.name)))
        if self.attr:
            dumpAttr(self.attr, out)
        out.write(";\n")


class Edge(object):
    __slots__ = ("src", "dst", "attr")

    def __init__(self, src, dst, **attr):
        self.src = src
        self.dst = dst
        self.attr = attr

    def dump(self, out, tabs=""):
        out.write('%s"%s" -> "%s"' % (tabs, escapeField(self.src), escapeField(self.dst)))
        if self.attr:
            dumpAttr(self.attr, out)
        out.write(";\n")


class Graph(object):
    """
    A directed graph that can write itself in DOT format.

    Nodes must be declared before edges refer to them; output lists nodes
    and edges in creation order so it is stable across runs.
    """
    __slots__ = ("name", "attr", "nodetype", "nodes", "nameLUT", "edges")

    def __init__(self, name, nodetype=None, **attr):
        self.name = name
        self.attr = attr
        self.nodetype = nodetype

        self.nodes = []
        self.nameLUT = {}
        self.edges = []

    def node(self, name, **attr):
        name = str(name)
        assert name not in self.nameLUT, name
        n = Node(name, **attr)
        self.nodes.append(n)
        self.nameLUT[name] = n
        return n

    def edge(self, n1, n2, **attr):
        n1 = str(n1)
        n2 = str(n2)
        assert n1 in self.nameLUT and n2 in self.nameLUT, (n1, n2)
        e = Edge(n1, n2, **attr)
        self.edges.append(e)
        return e

    def outputDot(self, out):
        indent = "\t"
        out.write('digraph "%s" {\n' % escapeField(self.name))

        for k, v in self.attr.items():
            out.write('%s%s = "%s";\n' % (indent, k, escapeField(v)))

        if self.nodetype:
            out.write("%snode" % indent)
            dumpAttr(self.nodetype, out)
            out.write(";\n")

        for n in self.nodes:
            n.dump(out, indent)

        for e in self.edges:
            e.dump(out, indent)

        out.write("}\n")


def Digraph(name="G", **attr):
    """
    Create a new directed graph.

    Keyword arguments become graph-level attributes, except ``nodetype``
    which sets the default node style.
    """
    return Graph(name, **attr)
