"""Persistent loose octree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from loctree._volume import Volume
from loctree.models import (
    DEFAULT_LOOSENESS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    OctreeConfig,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from loctree._geometry import AABB

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Volume)


class Octree(Generic[D]):
    """A loose octree of [`Volume`][loctree.Volume] payloads.

    Every node of the tree is an `Octree`, and the root node is the handle
    callers hold.  The tree is fully immutable: `insert`, `insert_data`,
    `insert_many` and `delete` return a new root and leave the receiver (and any
    other handle) untouched.  Only the nodes on the path from the root to the
    change are rebuilt; every other subtree is shared by reference.

    An entry is stored at a node when the center of its bounds lies inside the
    node's `bounds` and its whole box lies inside the node's `loose_bounds`.  A
    node keeps up to `max_entries` entries itself.  A full leaf is split into 8
    children; a full internal node pushes new entries down to the first child
    that can hold them, and keeps the ones no child can hold.
    Leaves at `max_depth` are never split, so entries sharing a single point
    cannot deepen the tree without bound.

    Parameters
    ----------
    bounds : AABB
        Bounds of the root node.
    looseness : float
        Factor by which the bounds of every node are grown to obtain its loose
        bounds.  Defaults to 1.5.
    max_entries : int
        Number of entries a node holds before it is split.  Defaults to 32.
    max_depth : int
        Deepest level of the tree, the root being level 0.  Defaults to 16.
    """

    __slots__ = (
        "_bounds",
        "_children",
        "_config",
        "_entries",
        "_level",
        "_loose_bounds",
    )

    _bounds: AABB
    _loose_bounds: AABB
    _children: tuple[Octree[D], ...]
    _entries: tuple[D, ...]
    _config: OctreeConfig
    _level: int

    def __init__(
        self,
        bounds: AABB,
        looseness: float = DEFAULT_LOOSENESS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        config = OctreeConfig(
            looseness=looseness, max_entries=max_entries, max_depth=max_depth
        )
        self._bounds = bounds
        self._loose_bounds = bounds.grow(config.looseness)
        self._children = ()
        self._entries = ()
        self._config = config
        self._level = 0

    @classmethod
    def from_config(cls, bounds: AABB, config: OctreeConfig) -> Octree[D]:
        """Create an empty tree over `bounds` using an existing `config`."""
        return cls._node(bounds, bounds.grow(config.looseness), (), (), config, 0)

    @classmethod
    def _node(
        cls,
        bounds: AABB,
        loose_bounds: AABB,
        children: tuple[Octree[D], ...],
        entries: tuple[D, ...],
        config: OctreeConfig,
        level: int,
    ) -> Octree[D]:
        node = cls.__new__(cls)
        node._bounds = bounds
        node._loose_bounds = loose_bounds
        node._children = children
        node._entries = entries
        node._config = config
        node._level = level
        return node

    def _replace(
        self,
        *,
        children: tuple[Octree[D], ...] | None = None,
        entries: tuple[D, ...] | None = None,
    ) -> Octree[D]:
        return self._node(
            self._bounds,
            self._loose_bounds,
            self._children if children is None else children,
            self._entries if entries is None else entries,
            self._config,
            self._level,
        )

    # -------------------- Properties --------------------

    @property
    def bounds(self) -> AABB:
        """The exact region covered by this node."""
        return self._bounds

    @property
    def loose_bounds(self) -> AABB:
        """The region entries of this node may extend into."""
        return self._loose_bounds

    @property
    def config(self) -> OctreeConfig:
        """Tree-wide constants, shared by every node."""
        return self._config

    @property
    def looseness(self) -> float:
        return self._config.looseness

    @property
    def children(self) -> tuple[Octree[D], ...]:
        """The 8 children of this node in octant order, or `()` for a leaf."""
        return self._children

    @property
    def entries(self) -> tuple[D, ...]:
        """The entries stored at this node (not including its children)."""
        return self._entries

    @property
    def is_leaf(self) -> bool:
        return not self._children

    @property
    def level(self) -> int:
        """Depth of this node in its tree, the root being level 0."""
        return self._level

    @property
    def can_split(self) -> bool:
        """True if this node is a leaf above `max_depth`."""
        return not self._children and self._level < self._config.max_depth

    @property
    def is_full(self) -> bool:
        """True if this node holds `max_entries` entries or more itself."""
        return len(self._entries) >= self._config.max_entries

    def accepts(self, bounds: AABB) -> bool:
        """Return True if an entry with the given `bounds` may be stored here."""
        return self._bounds.contains(bounds.center) and self._loose_bounds.contains(
            bounds
        )

    # -------------------- Selection --------------------

    def select(self, bounds: AABB) -> list[D]:
        """Return all entries whose bounds intersect `bounds`.

        The order of the returned entries is unspecified.
        """
        selected: list[D] = []
        self._select(bounds, selected)
        return selected

    def _select(self, bounds: AABB, out: list[D]) -> None:
        for entry in self._entries:
            if entry.bounds.intersects(bounds):
                out.append(entry)
        for child in self._children:
            if child._loose_bounds.intersects(bounds):
                child._select(bounds, out)

    def query(self, bounds: AABB) -> Iterator[D]:
        """Yield all entries whose bounds intersect `bounds`.

        Lazy version of `select`.
        """
        for entry in self._entries:
            if entry.bounds.intersects(bounds):
                yield entry
        for child in self._children:
            if child._loose_bounds.intersects(bounds):
                yield from child.query(bounds)

    # -------------------- Insertion --------------------

    def insert(self, entry: D) -> Octree[D]:
        """Insert a single entry.

        Returns the new tree, or `self` (by identity) if the entry cannot be
        stored in this tree because its center lies outside `bounds` or its box
        extends past `loose_bounds`.
        """
        if not self.accepts(entry.bounds):
            logger.debug(
                "%r does not fit in octree %s, not inserted", entry, self._bounds
            )
            return self
        return self._insert(entry)

    def _insert(self, entry: D) -> Octree[D]:
        if not self.is_full:
            return self._add_entries((entry,))
        if self.can_split:
            return self._split()._insert(entry)
        if self.is_leaf:
            # at max_depth, keep everything here
            return self._add_entries((entry,))
        return self._insert_child(entry)

    def _insert_child(self, entry: D) -> Octree[D]:
        bounds = entry.bounds
        for i, child in enumerate(self._children):
            if child.accepts(bounds):
                children = list(self._children)
                children[i] = child._insert(entry)
                return self._replace(children=tuple(children))
        # fits no child, the entry straddles octants
        return self._add_entries((entry,))

    def insert_many(self, data: Iterable[D]) -> Octree[D]:
        """Insert all entries of an iterable.  See `insert_data`."""
        return self.insert_data(list(data))

    def insert_data(self, data: Sequence[D]) -> Octree[D]:
        """Insert a sequence of entries.

        This is the preferred way of inserting many entries.  The resulting tree
        holds the same entries as after inserting them one by one, but node
        capacity is divided differently: a leaf that cannot hold the whole batch
        is split up front, and an internal node fills its own spare capacity with
        the first entries of the batch before routing the rest to its children.

        Entries that do not fit in this tree are skipped.  Returns `self` (by
        identity) if no entry was inserted.
        """
        accepted = [entry for entry in data if self.accepts(entry.bounds)]
        if len(accepted) < len(data):
            logger.debug(
                "%d of %d entries do not fit in octree %s, not inserted",
                len(data) - len(accepted),
                len(data),
                self._bounds,
            )
        if not accepted:
            return self
        return self._insert_data(accepted)

    def _insert_data(self, data: list[D]) -> Octree[D]:
        max_entries = self._config.max_entries
        if self.is_leaf:
            if len(self._entries) + len(data) > max_entries and self.can_split:
                return self._split()._insert_data(data)
            return self._add_entries(data)
        room = max_entries - len(self._entries)
        if room > 0:
            return self._add_entries(data[:room])._insert_children(data[room:])
        return self._insert_children(data)

    def _insert_children(self, data: Sequence[D]) -> Octree[D]:
        # offer the pool to each child in octant order, keep the leftovers here
        if not data:
            return self
        children = list(self._children)
        remaining = list(data)
        for i, child in enumerate(children):
            placed: list[D] = []
            unplaced: list[D] = []
            for entry in remaining:
                (placed if child.accepts(entry.bounds) else unplaced).append(entry)
            if placed:
                children[i] = child._insert_data(placed)
                remaining = unplaced
        return self._node(
            self._bounds,
            self._loose_bounds,
            tuple(children),
            self._entries + tuple(remaining),
            self._config,
            self._level,
        )

    def _add_entries(self, data: Iterable[D]) -> Octree[D]:
        return self._replace(entries=self._entries + tuple(data))

    def _split(self) -> Octree[D]:
        config = self._config
        logger.debug(
            "splitting octree node %s holding %d entries",
            self._bounds,
            len(self._entries),
        )
        children = tuple(
            self._node(box, box.grow(config.looseness), (), (), config, self._level + 1)
            for box in self._bounds.split()
        )
        node = self._node(
            self._bounds, self._loose_bounds, children, (), config, self._level
        )
        return node._insert_children(self._entries)

    # -------------------- Deletion --------------------

    def delete(self, entry: D) -> Octree[D]:
        """Remove the first entry equal to `entry`.

        Returns the new tree, or `self` (by identity) if no such entry is stored.
        Removal never merges children back together, so the depth of the tree
        never decreases.
        """
        result = self._delete(entry, entry.bounds)
        if result is self:
            logger.debug("%r not found in octree %s, not deleted", entry, self._bounds)
        return result

    def _delete(self, entry: D, bounds: AABB) -> Octree[D]:
        for i, existing in enumerate(self._entries):
            if entry == existing:
                return self._replace(entries=self._entries[:i] + self._entries[i + 1 :])
        for i, child in enumerate(self._children):
            if child.accepts(bounds):
                new_child = child._delete(entry, bounds)
                if new_child is child:
                    return self
                children = list(self._children)
                children[i] = new_child
                return self._replace(children=tuple(children))
        return self

    # -------------------- Diagnostics --------------------

    def depth(self) -> int:
        """Return the depth of the tree (0 for a single leaf)."""
        if not self._children:
            return 0
        return 1 + max(child.depth() for child in self._children)

    def max_entries(self) -> int:
        """Return the largest number of entries stored in any single node.

        This is a performance indicator, not the configured limit (which is
        `config.max_entries`).
        """
        return max(
            [len(self._entries), *(child.max_entries() for child in self._children)]
        )

    def total_at(self, level: int) -> int:
        """Return the number of entries stored in all nodes at depth `level`.

        The root is at level 0.
        """
        if level < 0:
            return 0
        if level == 0:
            return len(self._entries)
        return sum(child.total_at(level - 1) for child in self._children)

    def size(self) -> int:
        """Return the number of entries in the tree.

        Traverses the whole tree, so it is intended for debugging only.
        """
        return len(self._entries) + sum(child.size() for child in self._children)

    def __iter__(self) -> Iterator[D]:
        yield from self._entries
        for child in self._children:
            yield from child

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"<Octree LEAF box={self._bounds} entries={len(self._entries)}>"
        return (
            f"<Octree NODE box={self._bounds} entries={len(self._entries)} "
            f"depth={self.depth()}>"
        )
