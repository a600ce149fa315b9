"""Incremental computation graph engine.

A `Graph` owns an append-only arena of `Node` records. Evaluating a node
either serves a memoized result or runs the node's computation, which pulls
values from other nodes through an `EvaluationContext` and declares the edges
it used. Updating a node dirties it and, transitively, every node that read
it, so the next evaluation recomputes exactly what changed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING

from ._computation import Constant, as_computation
from ._config import EdgePolicy, GraphConfig
from ._context import EvaluationContext
from ._errors import CycleError, ReentrantUpdateError, UnknownNodeError
from ._graph import DependencyGraph
from ._ids import NodeID, next_graph_token
from ._keys import MemoKey, make_key
from ._node import Node, NodeStats

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from ._computation import ComputationLike

logger = logging.getLogger(__name__)


class Graph:
    """A store of memoized, dependency-tracked computations.

    Example:
        >>> graph = Graph()
        >>> x = graph.create_constant(3.0)
        >>> y = graph.create(lambda ctx: ctx.require(x) * 2)
        >>> graph.evaluate(y)
        6.0
        >>> graph.update(x, 5.0)
        >>> graph.evaluate(y)
        10.0

    """

    def __init__(self, config: GraphConfig | None = None) -> None:
        self.config = config if config is not None else GraphConfig()
        self._token = next_graph_token()
        self._nodes: list[Node] = []
        # Nodes whose computation is running, outermost first
        self._active: list[NodeID] = []

    def create(self, computation: ComputationLike) -> NodeID:
        """Allocate a new node bound to a computation.

        The node starts dirty with an empty memo table and no edges.

        Args:
            computation: A `Computation`, a function ``fn(ctx) -> float``, or
                a number (which creates a constant leaf).

        Returns:
            The new node's identity.

        """
        node_id = NodeID(index=len(self._nodes), graph_token=self._token)
        self._nodes.append(Node(id=node_id, computation=as_computation(computation)))
        logger.debug("Created node %s", node_id)
        return node_id

    def create_constant(self, value: float) -> NodeID:
        """Allocate a leaf node that always returns ``value``."""
        return self.create(Constant(float(value)))

    def _get(self, node_id: object) -> Node | None:
        if not isinstance(node_id, NodeID) or node_id.graph_token != self._token:
            return None
        if not 0 <= node_id.index < len(self._nodes):
            return None
        return self._nodes[node_id.index]

    def _node(self, node_id: NodeID) -> Node:
        node = self._get(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        """Check if an identity refers to a node of this graph."""
        return self._get(node_id) is not None

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, config={self.config!r})"

    @property
    def evaluating(self) -> bool:
        """Whether an evaluation call tree is currently running."""
        return bool(self._active)

    def evaluate(self, node_id: NodeID, args: Sequence[float] = ()) -> float | None:
        """Return the value of a node for an argument vector.

        The cached result is returned if the node is clean and the argument
        key was computed before. Otherwise the node's computation runs.

        Args:
            node_id: The node to evaluate.
            args: Argument vector passed to the computation as ``ctx.args``.

        Returns:
            The node's value, or None if ``node_id`` is not a node of this graph.

        Raises:
            CycleError: If the node is already being evaluated in this call tree.

        """
        node = self._get(node_id)
        if node is None:
            logger.debug("Evaluate of unknown node %r", node_id)
            return None
        return self._compute(node, tuple(float(a) for a in args))

    @contextmanager
    def _enter(self, node: Node) -> Iterator[Node]:
        if node.busy:
            start = self._active.index(node.id)
            raise CycleError(node.id, (*self._active[start:], node.id))
        with node.exclusive():
            self._active.append(node.id)
            try:
                yield node
            finally:
                self._active.pop()

    def _compute(self, node: Node, args: tuple[float, ...]) -> float:
        key = make_key(args, self.config.key_policy)
        with self._enter(node):
            cached = node.lookup(key)
            if cached is not None:
                node.stats.cache_hits += 1
                logger.debug("Cache hit for %s with key %r", node.id, key)
                return cached

            if not node.clean or self.config.edge_policy is EdgePolicy.REBUILD:
                self._clear_edges(node)

            # Clean before running, so nested reads through this node see a clean state
            node.clean = True
            logger.debug("Evaluating %s with args %r", node.id, args)

            ctx = EvaluationContext(self, node.id, node.dependencies, args)
            node.stats.executions += 1
            try:
                value = float(node.computation.evaluate(ctx))
            finally:
                ctx.close()

            node.memo[key] = value
            logger.debug("Result for %s with key %r: %r", node.id, key, value)
            return value

    def _clear_edges(self, node: Node) -> None:
        if not node.dependencies:
            return
        logger.debug("Tearing down %d edges of %s", len(node.dependencies), node.id)
        for dep_id in node.dependencies:
            self._nodes[dep_id.index].dependents.discard(node.id)
        node.dependencies.clear()

    def _add_edge(self, node_id: NodeID, dep_id: NodeID, dependencies: set[NodeID]) -> None:
        dep = self._node(dep_id)
        if dep.busy:
            start = self._active.index(dep_id)
            raise CycleError(dep_id, (*self._active[start:], dep_id))
        dependencies.add(dep_id)
        dep.dependents.add(node_id)

    def _check_not_evaluating(self, action: str) -> None:
        if self._active:
            msg = f"Cannot {action} while {self._active[-1]} is being evaluated"
            raise ReentrantUpdateError(msg)

    def update(self, node_id: NodeID, computation: ComputationLike) -> None:
        """Replace a node's computation and invalidate everything depending on it.

        An update always counts as a change: the node's dependents are
        invalidated even if the node itself was already dirty. Nothing is
        evaluated here.

        Args:
            node_id: The node to update.
            computation: New computation, function of the context, or constant.

        Raises:
            UnknownNodeError: If ``node_id`` is not a node of this graph.
            ReentrantUpdateError: If called from inside a running computation.

        """
        self._check_not_evaluating("update")
        node = self._node(node_id)
        node.computation = as_computation(computation)
        logger.debug("Updated computation of %s", node_id)
        node.mark_dirty()
        self._propagate(node.dependents)

    def invalidate(self, node_id: NodeID) -> None:
        """Dirty a node and every node that transitively depends on it.

        Propagation stops at nodes that are already dirty.

        Raises:
            UnknownNodeError: If ``node_id`` is not a node of this graph.
            ReentrantUpdateError: If called from inside a running computation.

        """
        self._check_not_evaluating("invalidate")
        self._propagate((self._node(node_id).id,))

    def _propagate(self, start: Iterable[NodeID]) -> None:
        stack = list(start)
        dirtied = 0
        while stack:
            node = self._nodes[stack.pop().index]
            if node.mark_dirty():
                dirtied += 1
                stack.extend(node.dependents)
        logger.debug("Invalidation dirtied %d nodes", dirtied)

    def nodes(self) -> list[NodeID]:
        """All node identities in creation order."""
        return [node.id for node in self._nodes]

    def is_clean(self, node_id: NodeID) -> bool:
        """Whether a node's cached results are currently valid."""
        return self._node(node_id).clean

    def dependencies(self, node_id: NodeID) -> frozenset[NodeID]:
        """Nodes the given node read in its latest evaluation(s)."""
        return frozenset(self._node(node_id).dependencies)

    def dependents(self, node_id: NodeID) -> frozenset[NodeID]:
        """Nodes that read the given node in their latest evaluation(s)."""
        return frozenset(self._node(node_id).dependents)

    def cached_keys(self, node_id: NodeID) -> frozenset[MemoKey]:
        """Memo keys currently held by a node. Empty while the node is dirty."""
        return frozenset(self._node(node_id).memo)

    def stats(self, node_id: NodeID) -> NodeStats:
        """A copy of a node's usage counters."""
        return replace(self._node(node_id).stats)

    def snapshot(self) -> DependencyGraph[NodeID]:
        """Immutable view of the current dependency edges.

        An edge (a, b) in the snapshot means "b depends on a".
        """
        edges = [(dep_id, node.id) for node in self._nodes for dep_id in node.dependencies]
        return DependencyGraph.from_edges(edges, nodes=self.nodes())
