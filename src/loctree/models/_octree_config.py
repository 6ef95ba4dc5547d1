from __future__ import annotations

from pydantic import NonNegativeInt, PositiveInt

from loctree.models._base_model import LoctreeModel

DEFAULT_LOOSENESS = 1.5
DEFAULT_MAX_ENTRIES = 32
DEFAULT_MAX_DEPTH = 16


class OctreeConfig(LoctreeModel):
    """Tree-wide constants of an [`Octree`][loctree.Octree].

    Fixed when the root is constructed and shared, unchanged, by every node
    created while splitting.

    Attributes
    ----------
    looseness : float
        Factor by which each node's exact bounds are grown to obtain its loose
        bounds.  Values greater than 1 give a loose octree; values of 1 or less
        are accepted and degrade to a strict octree.  Defaults to 1.5.
    max_entries : int
        Number of entries a node stores itself before a leaf is split, or before
        an internal node starts pushing entries down to its children.
        Defaults to 32.
    max_depth : int
        Deepest level a node may be created at (the root is level 0).  Leaves at
        this level are never split and keep every entry they receive, even past
        `max_entries`.  Defaults to 16.
    """

    looseness: float = DEFAULT_LOOSENESS
    max_entries: PositiveInt = DEFAULT_MAX_ENTRIES
    max_depth: NonNegativeInt = DEFAULT_MAX_DEPTH
