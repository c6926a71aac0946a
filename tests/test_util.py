import io
import itertools
import unittest

from cfgdom.application.errors import InternalError
from cfgdom.util.graphalgorithim.domset import UNIVERSAL, Finite, intersect, intersectAll
from cfgdom.util.graphalgorithim.dominator import (
    ReversePostorderCrawler,
    computeReversePostOrder,
    solveDominators,
)


class TestDomSet(unittest.TestCase):
    def testUniversalIsIdentity(self):
        a = Finite([3, 1, 2])
        self.assertEqual(intersect(UNIVERSAL, a), a)
        self.assertEqual(intersect(a, UNIVERSAL), a)
        self.assertIs(intersect(UNIVERSAL, UNIVERSAL), UNIVERSAL)

    def testFiniteIntersection(self):
        self.assertEqual(intersect(Finite([1, 2, 3]), Finite([2, 3, 4])), Finite([2, 3]))
        self.assertEqual(Finite([1, 1, 2]), Finite([2, 1]))

    def testEmptyIsNotUniversal(self):
        empty = Finite()
        self.assertFalse(empty.isUniversal)
        self.assertNotEqual(empty, UNIVERSAL)
        self.assertEqual(intersect(empty, Finite([1])), Finite())
        self.assertEqual(intersect(UNIVERSAL, empty), empty)

    def testIntersectAll(self):
        self.assertIs(intersectAll([]), UNIVERSAL)
        self.assertIs(intersectAll([UNIVERSAL, UNIVERSAL]), UNIVERSAL)
        self.assertEqual(
            intersectAll([Finite([0, 1, 2]), UNIVERSAL, Finite([0, 2, 5])]),
            Finite([0, 2]),
        )

    def testIntersectAllOrderIndependent(self):
        values = [Finite([0, 1, 2, 3]), UNIVERSAL, Finite([0, 2, 3]), Finite([0, 3, 7])]
        results = {intersectAll(p) for p in itertools.permutations(values)}
        self.assertEqual(results, {Finite([0, 3])})

    def testUnion(self):
        self.assertEqual(Finite([0]).union(4), Finite([0, 4]))
        self.assertIs(UNIVERSAL.union(4), UNIVERSAL)

    def testContainment(self):
        a = Finite([0, 2])
        self.assertIn(2, a)
        self.assertNotIn(1, a)
        self.assertIn(1, UNIVERSAL)
        self.assertEqual(len(a), 2)
        self.assertEqual(sorted(a), [0, 2])

    def testLatticeOrder(self):
        self.assertTrue(Finite([1]) <= Finite([1, 2]))
        self.assertFalse(Finite([1, 3]) <= Finite([1, 2]))
        self.assertTrue(Finite([1]) <= UNIVERSAL)
        self.assertTrue(UNIVERSAL <= UNIVERSAL)
        self.assertFalse(UNIVERSAL <= Finite([1]))

    def testUniversalCannotBeMaterialized(self):
        self.assertEqual(Finite([4]).toSet(), frozenset([4]))
        with self.assertRaises(InternalError):
            UNIVERSAL.toSet()


def successors(graph):
    return lambda node: graph.get(node, ())


def predecessors(graph):
    pred = {}
    for node, nexts in graph.items():
        for n in nexts:
            pred.setdefault(n, []).append(node)
    return lambda node: pred.get(node, [])


class TestReversePostorder(unittest.TestCase):
    def testDiamond(self):
        G = {0: [1, 2], 1: [3], 2: [3], 3: []}
        crawler = ReversePostorderCrawler(successors(G), 0)
        self.assertEqual(crawler.postorder, [3, 1, 2, 0])
        self.assertEqual(crawler.order, [0, 2, 1, 3])

    def testDefinition(self):
        G = {0: [1, 4], 1: [2, 3], 2: [1, 5], 3: [5], 4: [5], 5: [0]}
        crawler = ReversePostorderCrawler(successors(G), 0)
        n = len(crawler.order)
        for post, node in enumerate(crawler.postorder):
            self.assertEqual(crawler.order[n - 1 - post], node)

    def testUnreachableExcluded(self):
        G = {0: [1], 1: [], 7: [8, 0], 8: [7]}
        order = computeReversePostOrder(successors(G), 0)
        self.assertEqual(order, [0, 1])

    def testSelfLoopsAndDuplicates(self):
        G = {0: [0, 1, 1], 1: [1, 0]}
        self.assertEqual(computeReversePostOrder(successors(G), 0), [0, 1])

    def testDeepChain(self):
        n = 100000
        G = {i: [i + 1] for i in range(n)}
        order = computeReversePostOrder(successors(G), 0)
        self.assertEqual(order, list(range(n + 1)))


class TestDominatorSolver(unittest.TestCase):
    def solve(self, G, **kwargs):
        order = computeReversePostOrder(successors(G), 0)
        count = max(G) + 1
        return solveDominators(predecessors(G), order, count, 0, **kwargs)

    def testLoop(self):
        G = {0: [1], 1: [2, 3], 2: [1], 3: []}
        solver = self.solve(G)
        self.assertEqual(solver.doms[0], Finite([0]))
        self.assertEqual(solver.doms[1], Finite([0, 1]))
        self.assertEqual(solver.doms[2], Finite([0, 1, 2]))
        self.assertEqual(solver.doms[3], Finite([0, 1, 3]))
        self.assertEqual(solver.passes, 2)

    def testUnreachableLeftUnset(self):
        G = {0: [1], 1: [], 2: [1]}
        solver = self.solve(G)
        self.assertIsNone(solver.doms[2])
        self.assertEqual(solver.doms[1], Finite([0, 1]))

    def testObserverSeesEveryPass(self):
        G = {0: [1], 1: [2, 3], 2: [1], 3: []}
        seen = []
        solver = self.solve(G, observer=lambda n, doms: seen.append((n, doms)))
        self.assertEqual([n for n, _ in seen], [1, 2])
        self.assertEqual(seen[-1][1], solver.doms)

    def testPassCap(self):
        G = {0: [1], 1: []}
        with self.assertRaises(InternalError):
            self.solve(G, maxPasses=1)
        self.assertEqual(self.solve(G, maxPasses=2).passes, 2)

    def testAnyVisitOrderConverges(self):
        G = {0: [1, 2], 1: [3], 2: [3], 3: [4, 1], 4: []}
        expected = self.solve(G).doms
        for order in itertools.permutations(range(5)):
            solver = solveDominators(predecessors(G), list(order), 5, 0)
            self.assertEqual(solver.doms, expected, order)


class TestConsole(unittest.TestCase):
    def testScopes(self):
        from cfgdom.util.application.console import Console

        out = io.StringIO()
        console = Console(out)
        with console.scope("read"):
            with console.scope("parse"):
                pass
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[0].startswith("begin [ read ]"))
        self.assertTrue(lines[1].startswith("begin [ read | parse ]"))
        self.assertTrue(lines[2].startswith("end   [ read | parse ]"))
        self.assertTrue(lines[3].startswith("end   [ read ]"))
        self.assertEqual(console.depth, 0)

    def testScopeClosesOnError(self):
        from cfgdom.util.application.console import Console

        out = io.StringIO()
        console = Console(out)
        with self.assertRaises(KeyError):
            with console.scope("solve"):
                raise KeyError(1)
        self.assertEqual(console.depth, 0)
        self.assertTrue(out.getvalue().splitlines()[-1].startswith("end   [ solve ]"))

    def testDisabled(self):
        from cfgdom.util.application.console import Console

        out = io.StringIO()
        console = Console(out, enabled=False)
        with console.scope("solve"):
            pass
        self.assertEqual(out.getvalue(), "")


class TestErrors(unittest.TestCase):
    def testAbortRaisesAnalysisAbort(self):
        from cfgdom.application.errors import AnalysisAbort, CfgDomError, abort

        with self.assertRaises(AnalysisAbort) as cm:
            abort("stop here")
        self.assertEqual(str(cm.exception), "stop here")
        self.assertFalse(isinstance(cm.exception, CfgDomError))


if __name__ == "__main__":
    unittest.main()
