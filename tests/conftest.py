from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest

from loctree import AABB, BoundedItem

if TYPE_CHECKING:
    from typing import Callable

    ItemFactory = Callable[..., list[BoundedItem[int]]]


@pytest.fixture
def rng() -> np.random.Generator:
    # Seeded random Generator
    return np.random.default_rng(0xDEADBEEF)


@pytest.fixture
def make_items(rng: np.random.Generator) -> ItemFactory:
    """Factory for distinct items with centers inside [0, 100] on each axis."""

    def _make_items(n: int, max_size: float = 10) -> list[BoundedItem[int]]:
        centers = rng.uniform(0, 100, size=(n, 3))
        sizes = rng.uniform(0, max_size, size=(n, 3))
        return [
            BoundedItem(AABB.from_center(tuple(c), tuple(s)), i)
            for i, (c, s) in enumerate(zip(centers.tolist(), sizes.tolist()))
        ]

    return _make_items

