"""Query functions over a live graph.

These are pure reads with no rendering; see `incgraph._render` for Rich output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._computation import Constant

if TYPE_CHECKING:
    from ._engine import Graph
    from ._ids import NodeID
    from ._keys import MemoKey
    from ._node import NodeStats


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    id: NodeID
    is_constant: bool
    clean: bool
    dependency_count: int
    dependent_count: int


@dataclass(frozen=True, slots=True)
class NodeDetail:
    """Detailed information about a node."""

    id: NodeID
    computation: str
    clean: bool
    cached_keys: frozenset[MemoKey]
    direct_dependencies: frozenset[NodeID]
    direct_dependents: frozenset[NodeID]
    stats: NodeStats


@dataclass(slots=True)
class TreeNode:
    """A node in a dependency tree for rendering.

    ``repeated`` marks a node already shown elsewhere in the tree; its
    children are not expanded again.
    """

    id: NodeID
    children: list[TreeNode]
    repeated: bool = False


def _is_constant(graph: Graph, node_id: NodeID) -> bool:
    return isinstance(graph._node(node_id).computation, Constant)  # noqa: SLF001


def list_nodes(graph: Graph) -> list[NodeInfo]:
    """List every node of the graph in creation order."""
    return [
        NodeInfo(
            id=node_id,
            is_constant=_is_constant(graph, node_id),
            clean=graph.is_clean(node_id),
            dependency_count=len(graph.dependencies(node_id)),
            dependent_count=len(graph.dependents(node_id)),
        )
        for node_id in graph.nodes()
    ]


def get_node_detail(graph: Graph, node_id: NodeID) -> NodeDetail:
    """Get detailed information about one node.

    Raises:
        UnknownNodeError: If ``node_id`` is not a node of the graph.

    """
    computation = graph._node(node_id).computation  # noqa: SLF001
    return NodeDetail(
        id=node_id,
        computation=repr(computation),
        clean=graph.is_clean(node_id),
        cached_keys=graph.cached_keys(node_id),
        direct_dependencies=graph.dependencies(node_id),
        direct_dependents=graph.dependents(node_id),
        stats=graph.stats(node_id),
    )


def get_dependency_tree(
    graph: Graph,
    node_id: NodeID,
    *,
    reverse: bool = False,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a tree of a node's dependencies, or of its dependents if ``reverse``.

    Args:
        graph: The graph to read.
        node_id: Root of the tree.
        reverse: Follow dependents (what an update would invalidate) instead
            of dependencies.
        max_depth: Maximum depth to expand. None means unlimited.

    Raises:
        UnknownNodeError: If ``node_id`` is not a node of the graph.

    """
    step = graph.dependents if reverse else graph.dependencies
    seen: set[NodeID] = set()

    def build_tree(current: NodeID, depth: int) -> TreeNode:
        if current in seen:
            return TreeNode(id=current, children=[], repeated=True)
        seen.add(current)
        if max_depth is not None and depth >= max_depth:
            return TreeNode(id=current, children=[])
        children = [build_tree(child, depth + 1) for child in sorted(step(current))]
        return TreeNode(id=current, children=children)

    return build_tree(node_id, 0)
