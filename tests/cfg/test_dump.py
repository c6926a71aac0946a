"""
Tests for the dominator report and DOT output.
"""
import unittest

from cfgdom.analysis.cfg import dump
from cfgdom.util.io import dot

from .base import DIAMOND, DominanceTestBase


class TestTextReport(DominanceTestBase):
    def testDiamond(self):
        analysis = self.analyse(DIAMOND)
        self.assertEqual(
            dump.formatDominators(analysis).splitlines(),
            ["1: 1", "2: 1, 2", "3: 1, 3", "4: 1, 4"],
        )

    def testUnreachable(self):
        analysis = self.analyse([(1, [2]), (9, [])])
        self.assertEqual(
            dump.formatDominators(analysis).splitlines(),
            ["1: 1", "2: 1, 2", "9: <unreachable>"],
        )

    def testOrder(self):
        analysis = self.analyse(DIAMOND)
        self.assertEqual(dump.formatOrder(analysis), "1 3 2 4")


class TestDot(DominanceTestBase):
    def testCFGToDot(self):
        analysis = self.analyse([(1, [2, 2]), (9, [2])])
        text = dump.toDot(analysis)

        self.assertTrue(text.startswith('digraph "cfg" {\n'))
        self.assertTrue(text.endswith("}\n"))
        self.assertEqual(text.count('"1" -> "2";'), 2)
        self.assertIn('"9" -> "2";', text)
        self.assertIn(r'label="2\ndom: {1, 2}"', text)
        self.assertIn(r'label="9\ndom: <unreachable>"', text)
        self.assertIn('style="dashed"', text)

    def testEscaping(self):
        self.assertEqual(dot.escapeField('a"b\nc'), r'a\"b\nc')

    def testGraphAttributes(self):
        import io

        g = dot.Digraph("g", rankdir="TB", nodetype=dict(shape="box"))
        g.node("a")
        g.node("b", label="B")
        g.edge("a", "b", color="red")
        out = io.StringIO()
        g.outputDot(out)
        self.assertEqual(
            out.getvalue(),
            'digraph "g" {\n'
            '\trankdir = "TB";\n'
            '\tnode [shape="box"];\n'
            '\t"a";\n'
            '\t"b" [label="B"];\n'
            '\t"a" -> "b" [color="red"];\n'
            "}\n",
        )


if __name__ == "__main__":
    unittest.main()
