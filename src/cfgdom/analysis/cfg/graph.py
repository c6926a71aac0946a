"""Control Flow Graph (CFG) representation.

This module provides the core data structures for a CFG read from an edge
list:

- Block: a basic block with successor/predecessor index lists and its
  dominator set
- BlockRegistry: the owned pool of blocks, addressed by stable 0-based
  indices assigned in first-seen order (index 0 is the entry)
- GraphBuilder: records edges, keeping both ends of every edge in sync

Blocks refer to each other by registry index only, never by object, so
growing the pool can never leave a dangling reference behind.
"""

import logging

from cfgdom.application.errors import UnknownBlock

LOG = logging.getLogger(__name__)


class Block(object):
    """A basic block in the CFG.

    Attributes:
        id: External integer id, as written in the input file.
        index: Position in the registry; 0 is the entry.
        successors: Successor indices in insertion order (may repeat).
        predecessors: Predecessor indices in insertion order (may repeat).
        dominators: DomSet after analysis, None when unreachable or not
            yet analysed.
    """
    __slots__ = "id", "index", "successors", "predecessors", "dominators"

    def __init__(self, id, index):
        self.id = id
        self.index = index
        self.successors = []
        self.predecessors = []
        self.dominators = None

    def __repr__(self):
        return "%s(%r, index=%d)" % (type(self).__name__, self.id, self.index)


class BlockRegistry(object):
    """The set of discovered basic blocks.

    Grows without bound as new ids are observed. Blocks are never removed
    and their id/index never change.

    Attributes:
        blocks: Blocks in index order.
        version: Bumped on every mutation, so callers can detect that the
            graph changed since they last looked at it.
    """

    def __init__(self):
        self.blocks = []
        self.lut = {}
        self.version = 0

    def lookupOrCreate(self, id):
        """Return the index of block ``id``, creating the block if needed.

        Args:
            id: External block id.

        Returns:
            int: The block's registry index.
        """
        index = self.lut.get(id)
        if index is None:
            index = len(self.blocks)
            self.blocks.append(Block(id, index))
            self.lut[id] = index
            self.version += 1

            if index == 0:
                LOG.debug("block %r is the entry", id)
        return index

    def count(self):
        return len(self.blocks)

    def indexOf(self, id):
        """Return the index of a registered block.

        Raises:
            UnknownBlock: If ``id`` was never registered.
        """
        try:
            return self.lut[id]
        except KeyError:
            raise UnknownBlock(id) from None

    def block(self, index):
        assert 0 <= index < len(self.blocks), index
        return self.blocks[index]

    def idOf(self, index):
        return self.block(index).id

    def successors(self, index):
        return self.blocks[index].successors

    def predecessors(self, index):
        return self.blocks[index].predecessors

    def edgeCount(self):
        return sum(len(b.successors) for b in self.blocks)

    @property
    def entry(self):
        """The entry block, or None while the registry is empty."""
        return self.blocks[0] if self.blocks else None

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __contains__(self, id):
        return id in self.lut


class GraphBuilder(object):
    """Populates a BlockRegistry from edge records.

    Attributes:
        registry: The BlockRegistry being populated.
    """

    def __init__(self, registry=None):
        if registry is None:
            registry = BlockRegistry()
        self.registry = registry

    def addEdge(self, srcID, destID):
        """Record the edge ``srcID -> destID``.

        Both blocks are created if needed. Self-loops are recorded as both a
        successor and a predecessor of the same block.
        """
        registry = self.registry
        src = registry.lookupOrCreate(srcID)
        dest = registry.lookupOrCreate(destID)

        registry.blocks[src].successors.append(dest)
        registry.blocks[dest].predecessors.append(src)
        registry.version += 1

    def ingest(self, srcID, destIDs=()):
        """Record one ``src: dest, ...`` record.

        The source is resolved before any destination, so the first record
        ever ingested always makes its source the entry. An empty
        destination list only registers the source (an exit block).
        """
        self.registry.lookupOrCreate(srcID)
        for destID in destIDs:
            self.addEdge(srcID, destID)
