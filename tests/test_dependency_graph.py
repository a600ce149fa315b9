"""Tests for DependencyGraph snapshots and graph algorithms."""

import pytest

from incgraph import DependencyGraph
from incgraph._graph import topological_sort


class TestTopologicalSort:
    """Tests for the topological_sort algorithm."""

    def test_empty_graph(self) -> None:
        assert topological_sort({}) == []

    def test_linear_chain(self) -> None:
        assert topological_sort({"a": ["b"], "b": ["c"], "c": []}) == ["a", "b", "c"]

    def test_diamond(self) -> None:
        result = topological_sort({"w": ["y", "z"], "y": ["x"], "z": ["x"], "x": []})
        assert result[0] == "w"
        assert result[-1] == "x"

    def test_keeps_input_order_for_ties(self) -> None:
        assert topological_sort({"b": [], "a": [], "c": []}) == ["b", "a", "c"]

    def test_cycle_detection(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort({"a": ["b"], "b": ["a"]})

    def test_self_loop_detection(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort({"a": ["a"]})


class TestDependencyGraph:
    """Tests for DependencyGraph queries."""

    def test_empty(self) -> None:
        graph = DependencyGraph.from_edges([])
        assert graph.nodes == frozenset()
        assert len(graph) == 0

    def test_isolated_nodes(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b")], nodes=["c"])
        assert graph.nodes == frozenset({"a", "b", "c"})
        assert "c" in graph
        assert graph.roots() == frozenset({"a", "c"})
        assert graph.sinks() == frozenset({"b", "c"})

    def test_predecessors_and_successors(self) -> None:
        graph = DependencyGraph.from_edges([("a", "c"), ("b", "c")])
        assert graph.predecessors("c") == frozenset({"a", "b"})
        assert graph.successors("a") == frozenset({"c"})
        assert graph.predecessors("missing") == frozenset()

    def test_ancestors_and_descendants_diamond(self) -> None:
        graph = DependencyGraph.from_edges([("w", "y"), ("w", "z"), ("y", "x"), ("z", "x")])
        assert graph.ancestors("x") == frozenset({"w", "y", "z"})
        assert graph.descendants("w") == frozenset({"x", "y", "z"})
        assert graph.descendants("x") == frozenset()

    def test_has_cycle(self) -> None:
        assert not DependencyGraph.from_edges([("a", "b")]).has_cycle()
        assert DependencyGraph.from_edges([("a", "b"), ("b", "a")]).has_cycle()

    def test_subgraph(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
        sub = graph.subgraph(frozenset({"b", "c"}))
        assert sub.nodes == frozenset({"b", "c"})
        assert sub.predecessors("b") == frozenset()
        assert sub.predecessors("c") == frozenset({"b"})
