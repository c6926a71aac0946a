"""Dominance analysis for control flow graphs.

A block A dominates block B if every path from the entry to B passes
through A. This module ties the pieces together:

- edge records are fed into a BlockRegistry through a GraphBuilder
- the reachable blocks are numbered in reverse post-order
- the iterative solver computes every reachable block's dominator set

Results are stored on the registry's blocks and translated back to
external ids on query. Blocks not reachable from the entry never get a
dominator set; querying one yields the empty set.
"""

import logging

from cfgdom.application.config import AnalysisConfig
from cfgdom.util.graphalgorithim import dominator
from .graph import BlockRegistry, GraphBuilder

LOG = logging.getLogger(__name__)


class DominanceAnalysis(object):
    """Incrementally built CFG plus its dominator sets.

    Attributes:
        config: AnalysisConfig controlling the solver.
        registry: The owned BlockRegistry.
        builder: GraphBuilder writing into ``registry``.
        order: Reachable block indices in reverse post-order (last run).
        passes: Number of solver passes in the last run.
    """

    def __init__(self, config=None):
        if config is None:
            config = AnalysisConfig()
        self.config = config

        self.registry = BlockRegistry()
        self.builder = GraphBuilder(self.registry)

        self.order = []
        self.passes = 0
        self.analyzedVersion = None

        # Instrumentation hooks, forwarded to the solver.
        self.observer = None
        self.predecessorOrder = None

    @classmethod
    def fromRecords(cls, records, config=None):
        """Build an analysis from ``(src, dests)`` pairs or SpecRecords."""
        analysis = cls(config)
        for record in records:
            src, dests = record[0], record[1]
            analysis.ingestEdge(src, dests)
        return analysis

    def ingestEdge(self, srcID, destIDs=()):
        """Record that block ``srcID`` branches to each of ``destIDs``."""
        self.builder.ingest(srcID, destIDs)

    @property
    def stale(self):
        return self.analyzedVersion != self.registry.version

    def invalidate(self):
        """Force the next runAnalysis() to recompute."""
        self.analyzedVersion = None

    def runAnalysis(self):
        """Compute reverse post-order and dominator sets from scratch.

        Does nothing if the graph has not changed since the last run.
        """
        registry = self.registry
        if not self.stale:
            return

        for block in registry:
            block.dominators = None

        if not len(registry):
            self.order = []
            self.passes = 0
            self.analyzedVersion = registry.version
            return

        entry = registry.entry.index
        self.order = dominator.computeReversePostOrder(registry.successors, entry)

        if self.config.order == "rpo":
            visit = self.order
        else:
            visit = sorted(self.order)

        solver = dominator.solveDominators(
            registry.predecessors,
            visit,
            registry.count(),
            entry,
            observer=self.observer,
            predecessorOrder=self.predecessorOrder,
            maxPasses=self.config.maxPasses,
            trace=self.config.trace,
        )

        for block, doms in zip(registry, solver.doms):
            block.dominators = doms

        self.passes = solver.passes
        self.analyzedVersion = registry.version

        LOG.info("analysed %d block(s), %d reachable, in %d pass(es)",
                 registry.count(), len(self.order), self.passes)

    def _ensureAnalyzed(self):
        if self.stale:
            self.runAnalysis()

    def dominatorsOf(self, blockID):
        """Return the external ids of the blocks dominating ``blockID``.

        Raises:
            UnknownBlock: If ``blockID`` was never registered.

        Returns:
            frozenset: Empty if the block is unreachable from the entry.
        """
        index = self.registry.indexOf(blockID)
        self._ensureAnalyzed()

        doms = self.registry.block(index).dominators
        if doms is None:
            return frozenset()
        return frozenset(self.registry.idOf(i) for i in doms.toSet())

    def dominatorSets(self):
        """Map every registered block id to its dominator id set."""
        return {block.id: self.dominatorsOf(block.id) for block in self.registry}

    def isReachable(self, blockID):
        index = self.registry.indexOf(blockID)
        self._ensureAnalyzed()
        return self.registry.block(index).dominators is not None

    def unreachableBlocks(self):
        self._ensureAnalyzed()
        return [block.id for block in self.registry if block.dominators is None]

    def reversePostOrder(self):
        """Reachable block ids in reverse post-order; the entry comes first."""
        self._ensureAnalyzed()
        return [self.registry.idOf(i) for i in self.order]


def evaluate(records, config=None):
    """Build a DominanceAnalysis from edge records and run it."""
    analysis = DominanceAnalysis.fromRecords(records, config)
    analysis.runAnalysis()
    return analysis
