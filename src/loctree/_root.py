"""A mutable reference to the current root of a persistent octree."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Generic

from psygnal import Signal

from loctree._octree import D, Octree

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Callable

logger = logging.getLogger(__name__)


class OctreeRoot(Generic[D]):
    """Holds the current version of an [`Octree`][loctree.Octree].

    Octrees are persistent values, so two writers starting from the same
    snapshot each produce their own tree and neither sees the other's change.
    `OctreeRoot` serializes writers: every update is applied to the current tree
    while holding a lock, and `compare_and_set` allows optimistic updates that
    fail when another writer got there first.  Readers simply take `tree` and use
    it without any locking.

    Parameters
    ----------
    tree : Octree
        The initial tree.

    Signals
    -------
    changed : Signal(object, object)
        Emitted with `(new, old)` trees whenever the current tree is replaced by a
        different tree.  Emitted after the lock is released, so callbacks may
        update the root themselves.
        With several writers the emissions are not ordered: a listener may
        receive the pair of a later replacement before that of an earlier one.
        Use `tree` for the current state rather than the last `new` received.
    """

    changed = Signal(object, object)  # new, old

    def __init__(self, tree: Octree[D]) -> None:
        self._tree = tree
        self._lock = threading.Lock()

    @property
    def tree(self) -> Octree[D]:
        """The current snapshot."""
        return self._tree

    def compare_and_set(self, expected: Octree[D], new: Octree[D]) -> bool:
        """Install `new` if the current tree is (by identity) `expected`.

        Returns True if the tree was replaced.
        """
        with self._lock:
            if self._tree is not expected:
                return False
            self._tree = new
        if new is not expected:
            self._emit(new, expected)
        return True

    def update(self, fn: Callable[[Octree[D]], Octree[D]]) -> Octree[D]:
        """Replace the current tree by `fn(tree)` and return the new tree.

        `fn` must be a pure function of the tree: it runs while the lock is held.
        """
        with self._lock:
            old = self._tree
            new = self._tree = fn(old)
        if new is not old:
            self._emit(new, old)
        return new

    def insert(self, entry: D) -> Octree[D]:
        return self.update(lambda tree: tree.insert(entry))

    def insert_many(self, data: Iterable[D]) -> Octree[D]:
        data = list(data)
        return self.update(lambda tree: tree.insert_data(data))

    def delete(self, entry: D) -> Octree[D]:
        return self.update(lambda tree: tree.delete(entry))

    def _emit(self, new: Octree[D], old: Octree[D]) -> None:
        logger.debug("octree root replaced (%#x -> %#x)", id(old), id(new))
        self.changed.emit(new, old)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tree!r})"
