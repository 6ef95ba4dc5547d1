"""Models for `loctree`."""

from ._base_model import LoctreeModel
from ._octree_config import (
    DEFAULT_LOOSENESS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    OctreeConfig,
)

__all__ = [
    "DEFAULT_LOOSENESS",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_ENTRIES",
    "LoctreeModel",
    "OctreeConfig",
]
