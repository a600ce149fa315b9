"""Immutable snapshot of a computation graph's edges."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ._algorithms import topological_sort

T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True, slots=True)
class DependencyGraph(Generic[T]):
    """Directed graph of "depends on" relationships, frozen at one point in time.

    - predecessors(b) == {a} means "b read a in its latest evaluation"
    - successors(a) == {b} means "a was read by b"

    Attributes:
        _predecessors: Mapping from node to its direct dependencies.
        _successors: Mapping from node to its direct dependents.

    """

    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)
    _successors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a snapshot from (dependency, dependent) edges.

        Args:
            edges: Pairs ``(a, b)`` meaning "b depends on a".
            nodes: Extra nodes to include even if no edge touches them.

        Example:
            >>> graph = DependencyGraph.from_edges([("r1", "a1"), ("a1", "a3")])
            >>> graph.predecessors("a3")
            frozenset({'a1'})

        """
        predecessors: defaultdict[T, set[T]] = defaultdict(set)
        successors: defaultdict[T, set[T]] = defaultdict(set)

        for node in nodes:
            predecessors.setdefault(node, set())
            successors.setdefault(node, set())

        for src, dst in edges:
            predecessors[dst].add(src)
            successors[src].add(dst)
            # Ensure both endpoints exist in both mappings
            predecessors.setdefault(src, set())
            successors.setdefault(dst, set())

        return cls(
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the snapshot."""
        return frozenset(self._predecessors)

    def predecessors(self, node: T) -> frozenset[T]:
        """Direct dependencies of a node."""
        return self._predecessors.get(node, frozenset())

    def successors(self, node: T) -> frozenset[T]:
        """Direct dependents of a node."""
        return self._successors.get(node, frozenset())

    def roots(self) -> frozenset[T]:
        """Nodes that read nothing (leaves of the computation, e.g. constants)."""
        return frozenset(n for n, deps in self._predecessors.items() if not deps)

    def sinks(self) -> frozenset[T]:
        """Nodes nothing reads."""
        return frozenset(n for n, deps in self._successors.items() if not deps)

    def _reach(self, node: T, step: dict[T, frozenset[T]]) -> frozenset[T]:
        visited: set[T] = set()
        stack = list(step.get(node, ()))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(step.get(current, ()))
        return frozenset(visited)

    def ancestors(self, node: T) -> frozenset[T]:
        """All nodes the given node transitively depends on."""
        return self._reach(node, self._predecessors)

    def descendants(self, node: T) -> frozenset[T]:
        """All nodes an invalidation of the given node would reach."""
        return self._reach(node, self._successors)

    def topological_order(self) -> list[T]:
        """Nodes with every dependency before its dependents.

        Raises:
            ValueError: If the snapshot contains a cycle.

        """
        return topological_sort(self._successors)

    def has_cycle(self) -> bool:
        """Check if the snapshot contains a cycle."""
        try:
            self.topological_order()
        except ValueError:
            return True
        return False

    def subgraph(self, nodes: frozenset[T]) -> DependencyGraph[T]:
        """Restrict the snapshot to the given nodes, dropping edges that leave the set."""
        return DependencyGraph(
            _predecessors={n: self.predecessors(n) & nodes for n in nodes},
            _successors={n: self.successors(n) & nodes for n in nodes},
        )

    def __len__(self) -> int:
        """Return the number of nodes in the snapshot."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the snapshot."""
        return node in self._predecessors
