"""The capability required of anything stored in an octree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ._geometry import AABB

T = TypeVar("T")


@runtime_checkable
class Volume(Protocol):
    """Anything occupying an axis-aligned region of space.

    Payload types stored in an [`Octree`][loctree.Octree] must expose their
    `bounds` and implement value equality (`__eq__`), which is used to locate the
    entry to remove on delete.  Nothing else about a payload is inspected.
    """

    @property
    def bounds(self) -> AABB: ...


@dataclass(frozen=True)
class BoundedItem(Generic[T]):
    """A `Volume` attaching arbitrary `data` to a bounding box.

    Parameters
    ----------
    bounds : AABB
        The region occupied by the item.
    data : T
        Any payload.  Two items are equal when both their bounds and their data
        are equal.
    """

    bounds: AABB
    data: T
