"""Immutable loose octree of axis-aligned bounding volumes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("loctree")
except PackageNotFoundError:
    __version__ = "uninstalled"

from ._geometry import AABB, Coord
from ._octree import Octree
from ._root import OctreeRoot
from ._volume import BoundedItem, Volume
from .models import OctreeConfig
from .util import print_tree, render_tree

__all__ = [
    "AABB",
    "BoundedItem",
    "Coord",
    "Octree",
    "OctreeConfig",
    "OctreeRoot",
    "Volume",
    "print_tree",
    "render_tree",
]
