"""Rich rendering utilities for graph inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.tree import Tree

from lazygraph._cache import Valid
from lazygraph._utils import round_to

if TYPE_CHECKING:
    from rich.console import Console

    from lazygraph._cache import CacheState
    from lazygraph._traverse import TreeNode


def render_tree(tree_node: TreeNode, console: Console, *, precision: int = 5) -> None:
    """Render an expression tree with the cache state of every node.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.
        precision: Decimal digits shown for cached values.

    """
    rich_tree = Tree(_label(tree_node, precision, root=True))
    _add_tree_children(rich_tree, tree_node.children, precision)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode], precision: int) -> None:
    for child in children:
        child_tree = parent.add(_label(child, precision))
        _add_tree_children(child_tree, child.children, precision)


def _label(tree_node: TreeNode, precision: int, *, root: bool = False) -> str:
    name = escape(tree_node.name)
    if root:
        name = f"[bold]{name}[/bold]"
    return f"{name} [dim]#{tree_node.node_id}[/dim] {_format_state(tree_node.state, precision)}"


def _format_state(state: CacheState, precision: int) -> str:
    match state:
        case Valid(value):
            return f"[green]valid[/green] = {round_to(value, precision)}"
        case _:
            return "[yellow]empty[/yellow]"
