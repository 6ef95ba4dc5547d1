"""Axis-aligned bounding boxes and points."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Union

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt
    from typing_extensions import TypeAlias


class Coord(NamedTuple):
    x: float
    y: float
    z: float = 0


# anything that can be unpacked into three coordinates
PointLike: TypeAlias = Union[Coord, "tuple[float, float, float]"]


class AABB(NamedTuple):
    """Axis-aligned bounding box in 3D.

    The six extremes are stored per axis, so a box is written as
    ``AABB(min_x, max_x, min_y, max_y, min_z, max_z)``.  Boundaries are
    inclusive for every test.  Zero-volume boxes are legal; boxes with
    ``min > max`` on some axis are accepted but give unspecified results.

    An `AABB` is also a [`Volume`][loctree.Volume]: its `bounds` is itself, so
    plain boxes can be stored in an [`Octree`][loctree.Octree].
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float = 0
    max_z: float = 0

    # -------------------- Constructors --------------------

    @classmethod
    def from_points(cls, points: npt.ArrayLike) -> AABB:
        """Return the smallest box containing all `points` (an (N, 3) array)."""
        arr = np.asarray(points, dtype=float).reshape(-1, 3)
        if not len(arr):
            raise ValueError("Cannot compute the bounds of an empty set of points")
        lo = arr.min(axis=0)
        hi = arr.max(axis=0)
        return cls(
            float(lo[0]), float(hi[0]), float(lo[1]), float(hi[1]),
            float(lo[2]), float(hi[2]),
        )  # fmt: skip

    @classmethod
    def from_center(
        cls, center: PointLike, size: float | PointLike
    ) -> AABB:
        """Return a box of the given `size` (scalar or per axis) around `center`."""
        cx, cy, cz = center
        if isinstance(size, (int, float)):
            sx = sy = sz = float(size)
        else:
            sx, sy, sz = size
        return cls(
            cx - sx / 2, cx + sx / 2, cy - sy / 2, cy + sy / 2, cz - sz / 2, cz + sz / 2
        )

    # -------------------- Properties --------------------

    @property
    def bounds(self) -> AABB:
        return self

    @property
    def center(self) -> Coord:
        return Coord(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
            (self.min_z + self.max_z) / 2,
        )

    @property
    def extent(self) -> Coord:
        """Size of the box along each axis."""
        return Coord(
            self.max_x - self.min_x,
            self.max_y - self.min_y,
            self.max_z - self.min_z,
        )

    # -------------------- Predicates --------------------

    def contains(self, other: AABB | PointLike) -> bool:
        """Return True if `other` (a box or a point) lies entirely inside this box."""
        if isinstance(other, AABB):
            return (
                self.min_x <= other.min_x
                and other.max_x <= self.max_x
                and self.min_y <= other.min_y
                and other.max_y <= self.max_y
                and self.min_z <= other.min_z
                and other.max_z <= self.max_z
            )
        x, y, z = other
        return (
            self.min_x <= x <= self.max_x
            and self.min_y <= y <= self.max_y
            and self.min_z <= z <= self.max_z
        )

    def isdisjoint(self, other: AABB) -> bool:
        return (
            self.max_x < other.min_x
            or self.min_x > other.max_x
            or self.max_y < other.min_y
            or self.min_y > other.max_y
            or self.max_z < other.min_z
            or self.min_z > other.max_z
        )

    def intersects(self, other: AABB) -> bool:
        return not self.isdisjoint(other)

    # -------------------- Derived boxes --------------------

    def grow(self, factor: float) -> AABB:
        """Scale the box about its center by `factor` on each axis.

        This is how the loose bounds of an octree node are derived from its
        exact bounds.
        """
        cx, cy, cz = self.center
        hx = (self.max_x - self.min_x) * factor / 2
        hy = (self.max_y - self.min_y) * factor / 2
        hz = (self.max_z - self.min_z) * factor / 2
        return AABB(cx - hx, cx + hx, cy - hy, cy + hy, cz - hz, cz + hz)

    def union(self, other: AABB) -> AABB:
        """Return the smallest box containing both boxes."""
        return AABB(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
            min(self.min_z, other.min_z),
            max(self.max_z, other.max_z),
        )

    def split(self) -> tuple[AABB, ...]:
        """Subdivide into the 8 octants around the midpoint.

        Octants are enumerated X-low, X-high (outermost), then Y-low, Y-high,
        then Z-low, Z-high (innermost), so index ``4 * ix + 2 * iy + iz``
        addresses the octant with high-side flags ``ix``, ``iy``, ``iz``.
        Octree child indexing relies on this order.
        """
        x_min, x_max, y_min, y_max, z_min, z_max = self
        x_mid, y_mid, z_mid = self.center
        return (
            AABB(x_min, x_mid, y_min, y_mid, z_min, z_mid),
            AABB(x_min, x_mid, y_min, y_mid, z_mid, z_max),
            AABB(x_min, x_mid, y_mid, y_max, z_min, z_mid),
            AABB(x_min, x_mid, y_mid, y_max, z_mid, z_max),
            AABB(x_mid, x_max, y_min, y_mid, z_min, z_mid),
            AABB(x_mid, x_max, y_min, y_mid, z_mid, z_max),
            AABB(x_mid, x_max, y_mid, y_max, z_min, z_mid),
            AABB(x_mid, x_max, y_mid, y_max, z_mid, z_max),
        )
