"""Rich rendering of graph queries, for debugging and notebooks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from ._ids import NodeID
    from ._query import NodeDetail, NodeInfo, TreeNode


def _format_ids(ids: frozenset[NodeID]) -> str:
    return ", ".join(str(i) for i in sorted(ids)) if ids else "[dim]None[/dim]"


def _state_markup(*, clean: bool) -> str:
    return "[green]clean[/green]" if clean else "[yellow]dirty[/yellow]"


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render a node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("Kind")
    table.add_column("State")
    table.add_column("Deps", justify="right")
    table.add_column("Dependents", justify="right")

    for node in nodes:
        kind = "[blue]CONSTANT[/blue]" if node.is_constant else "[magenta]DERIVED[/magenta]"
        table.add_row(
            str(node.id),
            kind,
            _state_markup(clean=node.clean),
            str(node.dependency_count),
            str(node.dependent_count),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_node_detail(detail: NodeDetail, console: Console) -> None:
    """Render detailed node information."""
    console.print(f"[bold]Node:[/bold] {detail.id}")
    console.print(f"[cyan]Computation:[/cyan]  {escape(detail.computation)}")
    console.print(f"[cyan]State:[/cyan]        {_state_markup(clean=detail.clean)}")
    keys = ", ".join(str(k) for k in sorted(detail.cached_keys)) or "-"
    console.print(f"[cyan]Cached keys:[/cyan]  {keys}")
    console.print(f"[cyan]Dependencies:[/cyan] {_format_ids(detail.direct_dependencies)}")
    console.print(f"[cyan]Dependents:[/cyan]   {_format_ids(detail.direct_dependents)}")
    stats = detail.stats
    console.print(
        f"[cyan]Stats:[/cyan]        executions={stats.executions} "
        f"cache_hits={stats.cache_hits} invalidations={stats.invalidations}",
    )


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a dependency tree using Rich Tree."""
    rich_tree = Tree(f"[bold]{tree_node.id}[/bold]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    for child in children:
        label = f"{child.id} [dim](see above)[/dim]" if child.repeated else str(child.id)
        child_tree = parent.add(label)
        _add_tree_children(child_tree, child.children)
