"""
Dominator set lattice values.

A dominator set is either the universal set (the top of the lattice,
meaning "not yet constrained") or a finite set of block indices. The
universal set is an explicit sentinel and is never materialized. The
empty finite set is a distinct value and never doubles as "universal".
"""

from cfgdom.application.errors import InternalError


class DomSet(object):
    """
    Base class for dominator set values.

    Instances are immutable; every operation returns a new value.
    """

    __slots__ = ()

    isUniversal = False

    def intersect(self, other):
        raise NotImplementedError

    def union(self, index):
        raise NotImplementedError

    def toSet(self):
        raise NotImplementedError


class _Universal(DomSet):
    """
    The universal set: identity element of intersection.

    There is exactly one instance, ``UNIVERSAL``.
    """

    __slots__ = ()

    isUniversal = True

    def intersect(self, other):
        return other

    def union(self, index):
        return self

    def toSet(self):
        raise InternalError("universal set cannot be materialized")

    def __contains__(self, index):
        return True

    def __eq__(self, other):
        return other is self

    def __hash__(self):
        return hash(_Universal)

    def __le__(self, other):
        return other.isUniversal

    def __repr__(self):
        return "UNIVERSAL"


UNIVERSAL = _Universal()


class Finite(DomSet):
    """
    A concrete, duplicate-free set of block indices.

    Parameters
    ----------
    indices : iterable of int
        Block indices in the set. Order and duplicates are irrelevant.
    """

    __slots__ = ("indices",)

    def __init__(self, indices=()):
        self.indices = frozenset(indices)

    def intersect(self, other):
        if other.isUniversal:
            return self
        return Finite(self.indices & other.indices)

    def union(self, index):
        if index in self.indices:
            return self
        return Finite(self.indices | {index})

    def toSet(self):
        return self.indices

    def __contains__(self, index):
        return index in self.indices

    def __iter__(self):
        return iter(self.indices)

    def __len__(self):
        return len(self.indices)

    def __eq__(self, other):
        return isinstance(other, Finite) and self.indices == other.indices

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.indices)

    def __le__(self, other):
        # Subset order of the lattice; everything is below UNIVERSAL.
        if other.isUniversal:
            return True
        return self.indices <= other.indices

    def __repr__(self):
        return "Finite(%s)" % sorted(self.indices)


def intersect(a, b):
    """
    Intersect two dominator set values.

    ``UNIVERSAL`` is the identity on either side; two finite sets yield
    their common indices.

    Parameters
    ----------
    a, b : DomSet

    Returns
    -------
    DomSet
    """
    if a.isUniversal:
        return b
    return a.intersect(b)


def intersectAll(values):
    """
    Fold ``intersect`` over an iterable of dominator set values.

    An empty iterable folds to ``UNIVERSAL``, and adding a block to
    ``UNIVERSAL`` leaves it unchanged. A block whose predecessors are all
    still unconstrained therefore stays unconstrained for this pass.

    Because intersection is commutative and associative, the result does
    not depend on the iteration order of ``values``.
    """
    result = UNIVERSAL
    for value in values:
        result = intersect(result, value)
    return result
