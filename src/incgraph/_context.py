"""Evaluation context handed to a running computation.

The context is the only way a computation talks back to the graph: it reads
its own arguments, declares which nodes it depends on, and asks for their
values. A context lives exactly as long as one execution of a computation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ._errors import ContextExpiredError, UnknownNodeError

if TYPE_CHECKING:
    from ._engine import Graph
    from ._ids import NodeID


class EvaluationContext:
    """Handle through which a computation declares and reads its dependencies.

    Attributes:
        args: Argument vector of the current evaluation.
        node_id: Identity of the node being evaluated.

    """

    __slots__ = ("_active", "_dependencies", "_graph", "args", "node_id")

    def __init__(
        self,
        graph: Graph,
        node_id: NodeID,
        dependencies: set[NodeID],
        args: tuple[float, ...],
    ) -> None:
        self._graph = graph
        self._dependencies = dependencies
        self._active = True
        self.node_id = node_id
        self.args = args

    def _check_active(self) -> None:
        if not self._active:
            msg = f"Evaluation context of {self.node_id} used after its computation returned"
            raise ContextExpiredError(msg)

    def close(self) -> None:
        """Invalidate the context. Called by the graph once the computation returns."""
        self._active = False

    def declare_dependency(self, dep_id: NodeID) -> None:
        """Record that the current node reads ``dep_id``.

        Declaring the same dependency more than once is a no-op.

        Raises:
            UnknownNodeError: If ``dep_id`` is not a node of this graph.
            CycleError: If ``dep_id`` is currently being evaluated.

        """
        self._check_active()
        self._graph._add_edge(self.node_id, dep_id, self._dependencies)  # noqa: SLF001

    def evaluate(self, dep_id: NodeID, args: Sequence[float] = ()) -> float | None:
        """Evaluate another node. Returns None if ``dep_id`` is unknown.

        This does not declare the dependency; call `declare_dependency` for
        every node whose value the computation reads, or use `require`.
        """
        self._check_active()
        return self._graph.evaluate(dep_id, args)

    def require(self, dep_id: NodeID, args: Sequence[float] = ()) -> float:
        """Declare a dependency on ``dep_id`` and return its value.

        Raises:
            UnknownNodeError: If ``dep_id`` is not a node of this graph.

        """
        self.declare_dependency(dep_id)
        value = self.evaluate(dep_id, args)
        if value is None:
            raise UnknownNodeError(dep_id)
        return value

    def __repr__(self) -> str:
        return f"EvaluationContext(node_id={self.node_id}, args={self.args!r})"
