# /// script
# dependencies = [
#     "loctree",
# ]
# ///
"""Readers keep using old snapshots while a writer updates the current tree."""

from __future__ import annotations

from loctree import AABB, BoundedItem, Octree, OctreeRoot

WORLD = AABB(0, 100, 0, 100, 0, 100)

root: OctreeRoot[BoundedItem[str]] = OctreeRoot(Octree(WORLD, max_entries=4))


@root.changed.connect
def _on_changed(new: Octree, old: Octree) -> None:
    print(f"tree changed: {old.size()} -> {new.size()} entries")


snapshot = root.tree
for i, name in enumerate(["alpha", "beta", "gamma", "delta", "epsilon"]):
    root.insert(BoundedItem(AABB.from_center((10 + i, 10, 10), 2), name))

# the snapshot taken before the inserts still sees an empty tree
assert snapshot.size() == 0
print("snapshot:", snapshot.select(WORLD))
print("current: ", sorted(item.data for item in root.tree.select(WORLD)))

# a stale writer loses the race
stale = snapshot.insert(BoundedItem(AABB.from_center((90, 90, 90), 2), "late"))
assert not root.compare_and_set(snapshot, stale)
