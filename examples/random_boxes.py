# /// script
# dependencies = [
#     "loctree",
# ]
# ///
from __future__ import annotations

import numpy as np

import loctree
from loctree import AABB, BoundedItem, Octree

rng = np.random.default_rng()
centers = rng.uniform(0, 100, size=(500, 3))
sizes = rng.uniform(0.5, 5, size=(500, 3))
items = [
    BoundedItem(AABB.from_center(tuple(c), tuple(s)), i)
    for i, (c, s) in enumerate(zip(centers.tolist(), sizes.tolist()))
]

tree: Octree[BoundedItem[int]] = Octree(AABB(0, 100, 0, 100, 0, 100), max_entries=16)
tree = tree.insert_data(items)

print(tree)
print(f"size={tree.size()} depth={tree.depth()} fullest node={tree.max_entries()}")
for level in range(tree.depth() + 1):
    print(f"  level {level}: {tree.total_at(level)} entries")

query = AABB(20, 40, 20, 40, 20, 40)
hits = tree.select(query)
print(f"{len(hits)} boxes intersect {query}")

loctree.print_tree(tree, max_depth=1, skip_empty=True)
