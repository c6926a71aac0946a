"""
Dominator set computation.

This module provides the two graph algorithms behind the dominance
analysis:

1. ReversePostorderCrawler: numbers the nodes reachable from an entry in
   reverse post-order using an explicit stack
2. DominatorSolver: the iterative data-flow fixed point that computes the
   full dominator set of every reachable node

Nodes are plain integers (registry indices); the graph is supplied through
callbacks so the algorithms stay independent of any particular CFG class.
"""

import logging

from cfgdom.application.errors import InternalError
from .domset import UNIVERSAL, Finite, intersectAll

LOG = logging.getLogger(__name__)


class ReversePostorderCrawler(object):
    """
    Performs depth-first traversal to compute reverse post-order numbering.

    Successors are visited in the order ``forwardCallback`` yields them.
    Nodes that cannot be reached from the head are never visited and do
    not appear in ``order``.

    Attributes
    ----------
    order : list
        Reachable nodes in reverse post-order; ``order[0]`` is the head.
    postorder : list
        Reachable nodes in the order they finished.
    processed : set
        Every node visited by the traversal.
    """

    def __init__(self, forwardCallback, head):
        """
        Initialize the crawler and compute reverse post-order.

        Parameters
        ----------
        forwardCallback : callable
            Function(node) -> iterable of successor nodes
        head : int
            The entry node to start traversal from
        """
        self.forwardCallback = forwardCallback
        self.head = head

        self.processed = set()
        self.postorder = []

        self(head)

        self.order = list(reversed(self.postorder))

    def __call__(self, node):
        """
        Perform DFS traversal from a node using an explicit stack.

        Uses an explicit stack instead of recursion so long chains of
        blocks cannot hit Python's recursion limit.

        Parameters
        ----------
        node : int
            The node to start DFS traversal from
        """
        if node in self.processed:
            return

        # Each stack entry is (node, iterator over its successors)
        self.processed.add(node)
        stack = [(node, iter(self.forwardCallback(node)))]
        while stack:
            _parent, children = stack[-1]
            try:
                child = children.__next__()
                if child not in self.processed:
                    self.processed.add(child)
                    stack.append((child, iter(self.forwardCallback(child))))
            except StopIteration:
                self.postorder.append(stack[-1][0])
                stack.pop()


def computeReversePostOrder(forwardCallback, head):
    """
    Compute the reverse post-order of the nodes reachable from ``head``.

    Parameters
    ----------
    forwardCallback : callable
        Function(node) -> iterable of successor nodes
    head : int
        The entry node

    Returns
    -------
    list
        Reachable nodes; ``result[0]`` is ``head``.
    """
    return ReversePostorderCrawler(forwardCallback, head).order


class DominatorSolver(object):
    """
    Iterative fixed-point computation of dominator sets.

    For every node ``b`` other than the entry, taken in ``order``::

        dom(b) = {b} | intersect(dom(p) for p in preds(b))

    Updates happen in place, so a node sees predecessors already updated
    earlier in the same pass. Passes repeat until one changes nothing.

    The entry is seeded with ``{entry}`` and never recomputed; every other
    node in ``order`` starts at ``UNIVERSAL``. Nodes absent from ``order``
    (unreachable ones) keep ``None`` and are skipped when they show up as a
    predecessor.

    Attributes
    ----------
    doms : list
        ``doms[i]`` is the DomSet of node ``i``, or None if unreachable.
    passes : int
        Number of passes run, including the final no-change pass.
    """

    def __init__(self, predecessorCallback, order, count, entry=0,
                 observer=None, predecessorOrder=None, maxPasses=None,
                 trace=False):
        """
        Parameters
        ----------
        predecessorCallback : callable
            Function(node) -> sequence of predecessor nodes
        order : list
            Reachable nodes in visitation order; must contain ``entry``
        count : int
            Total number of nodes (reachable or not)
        entry : int
            The entry node
        observer : callable, optional
            Function(passNumber, doms) called after every pass with a
            snapshot of the dominator sets. Must not mutate solver state.
        predecessorOrder : callable, optional
            Function(node, preds) -> preds, permuting the predecessors
            before they are intersected.
        maxPasses : int, optional
            Raise InternalError if the fixed point is not reached within
            this many passes.
        trace : bool
            Log the nodes changed by every pass at DEBUG level.
        """
        assert entry in order, "entry must be reachable from itself"

        self.predecessorCallback = predecessorCallback
        self.order = order
        self.count = count
        self.entry = entry
        self.observer = observer
        self.predecessorOrder = predecessorOrder
        self.maxPasses = maxPasses
        self.trace = trace

        self.doms = [None] * count
        self.passes = 0

    def initialize(self):
        for node in self.order:
            self.doms[node] = UNIVERSAL
        self.doms[self.entry] = Finite((self.entry,))

    def newDoms(self, node):
        preds = self.predecessorCallback(node)
        if self.predecessorOrder is not None:
            preds = self.predecessorOrder(node, list(preds))

        doms = self.doms
        incoming = intersectAll(doms[p] for p in preds if doms[p] is not None)
        return incoming.union(node)

    def step(self):
        """
        Run a single pass over ``order``.

        Returns
        -------
        list
            The nodes whose dominator set changed during this pass.
        """
        changed = []
        for node in self.order:
            if node == self.entry:
                continue

            new = self.newDoms(node)
            if new != self.doms[node]:
                self.doms[node] = new
                changed.append(node)
        return changed

    def solve(self):
        self.initialize()
        self.passes = 0

        changed = True
        while changed:
            if self.maxPasses is not None and self.passes >= self.maxPasses:
                raise InternalError(
                    "dominator sets did not converge within %d passes" % self.maxPasses
                )

            changedNodes = self.step()
            changed = bool(changedNodes)
            self.passes += 1

            if self.trace:
                LOG.debug("pass %d changed %d node(s): %s",
                          self.passes, len(changedNodes), changedNodes)

            if self.observer is not None:
                self.observer(self.passes, list(self.doms))

        LOG.debug("dominator sets converged after %d pass(es) over %d node(s)",
                  self.passes, len(self.order))
        return self.doms


def solveDominators(predecessorCallback, order, count, entry=0, **kwargs):
    """
    Compute dominator sets for the nodes in ``order``.

    Convenience wrapper around DominatorSolver; extra keyword arguments are
    passed through.

    Returns
    -------
    DominatorSolver
        The solver after convergence; read ``doms`` and ``passes`` from it.
    """
    solver = DominatorSolver(predecessorCallback, order, count, entry, **kwargs)
    solver.solve()
    return solver
