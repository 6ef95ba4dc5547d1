"""Utility and convenience functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

if TYPE_CHECKING:
    from loctree._octree import Octree


def _label(node: Octree, octant: int | None) -> str:
    kind = "leaf" if node.is_leaf else "node"
    prefix = f"[dim]{octant}[/dim] " if octant is not None else ""
    b = node.bounds
    box = (
        f"x=[{b.min_x:g}, {b.max_x:g}] "
        f"y=[{b.min_y:g}, {b.max_y:g}] "
        f"z=[{b.min_z:g}, {b.max_z:g}]"
    )
    return f"{prefix}[bold]{kind}[/bold] {escape(box)} entries={len(node.entries)}"


def render_tree(
    octree: Octree, *, max_depth: int | None = None, skip_empty: bool = False
) -> Tree:
    """Build a [rich.tree.Tree][] summarizing the nodes of `octree`.

    Parameters
    ----------
    octree : Octree
        The tree to render.
    max_depth : int, optional
        Deepest level to render (the root is level 0).  By default the whole tree
        is rendered.
    skip_empty : bool
        If True, leaves that hold no entries are left out.
    """
    root = Tree(_label(octree, None))
    _add_children(root, octree, 1, max_depth, skip_empty)
    return root


def _add_children(
    parent: Tree,
    node: Octree,
    level: int,
    max_depth: int | None,
    skip_empty: bool,
) -> None:
    if max_depth is not None and level > max_depth:
        return
    for octant, child in enumerate(node.children):
        if skip_empty and child.is_leaf and not child.entries:
            continue
        branch = parent.add(_label(child, octant))
        _add_children(branch, child, level + 1, max_depth, skip_empty)


def print_tree(
    octree: Octree,
    *,
    max_depth: int | None = None,
    skip_empty: bool = False,
    console: Console | None = None,
) -> None:
    """Print a summary of the nodes of `octree`.  See `render_tree`."""
    console = console or Console()
    console.print(render_tree(octree, max_depth=max_depth, skip_empty=skip_empty))
