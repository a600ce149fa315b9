"""Exceptions raised by incgraph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._ids import NodeID


class GraphError(Exception):
    """Base class for errors raised by a computation graph."""


class UnknownNodeError(GraphError, KeyError):
    """Raised when a NodeID does not refer to a node of the graph it is used with."""

    def __init__(self, node_id: object) -> None:
        self.node_id = node_id
        super().__init__(f"Unknown node: {node_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return str(self.args[0])


class CycleError(GraphError):
    """Raised when a node is re-entered while it is still being evaluated."""

    def __init__(self, node_id: NodeID, path: tuple[NodeID, ...] = ()) -> None:
        self.node_id = node_id
        self.path = path
        if path:
            chain = " -> ".join(str(p) for p in path)
            msg = f"Dependency cycle detected at {node_id}: {chain}"
        else:
            msg = f"Dependency cycle detected at {node_id}"
        super().__init__(msg)


class ReentrantUpdateError(GraphError):
    """Raised when a node is updated from inside a running evaluation."""


class ContextExpiredError(GraphError):
    """Raised when an evaluation context is used after its computation returned."""


class ConfigError(GraphError):
    """Error in incgraph configuration."""
