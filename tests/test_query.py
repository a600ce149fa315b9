"""Tests for graph queries and their Rich rendering."""

import io

import pytest
from rich.console import Console

from incgraph import (
    Graph,
    NodeID,
    UnknownNodeError,
    get_dependency_tree,
    get_node_detail,
    list_nodes,
    render_node_detail,
    render_node_table,
    render_tree,
)


@pytest.fixture
def diamond() -> tuple[Graph, dict[str, NodeID]]:
    graph = Graph()
    w = graph.create_constant(1.0)
    y = graph.create(lambda ctx: ctx.require(w) + 1)
    z = graph.create(lambda ctx: ctx.require(w) + 2)
    x = graph.create(lambda ctx: ctx.require(y) * ctx.require(z))
    graph.evaluate(x)
    return graph, {"w": w, "y": y, "z": z, "x": x}


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120), buffer


class TestListNodes:
    """Tests for list_nodes."""

    def test_lists_in_creation_order(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        infos = list_nodes(graph)
        assert [info.id for info in infos] == [ids["w"], ids["y"], ids["z"], ids["x"]]

    def test_counts_and_kinds(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        by_id = {info.id: info for info in list_nodes(graph)}
        assert by_id[ids["w"]].is_constant
        assert not by_id[ids["x"]].is_constant
        assert by_id[ids["w"]].dependent_count == 2
        assert by_id[ids["x"]].dependency_count == 2
        assert all(info.clean for info in by_id.values())


class TestNodeDetail:
    """Tests for get_node_detail."""

    def test_detail(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        detail = get_node_detail(graph, ids["y"])
        assert detail.clean
        assert detail.cached_keys == frozenset({()})
        assert detail.direct_dependencies == frozenset({ids["w"]})
        assert detail.direct_dependents == frozenset({ids["x"]})
        assert detail.stats.executions == 1

    def test_unknown_node(self, diamond) -> None:  # noqa: ANN001
        graph, _ = diamond
        with pytest.raises(UnknownNodeError):
            get_node_detail(graph, Graph().create_constant(0.0))


class TestDependencyTree:
    """Tests for get_dependency_tree."""

    def test_dependencies(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        tree = get_dependency_tree(graph, ids["x"])
        assert tree.id == ids["x"]
        assert [child.id for child in tree.children] == [ids["y"], ids["z"]]
        assert tree.children[0].children[0].id == ids["w"]
        assert not tree.children[0].children[0].repeated
        # w is reached a second time through z
        assert tree.children[1].children[0].repeated
        assert tree.children[1].children[0].children == []

    def test_dependents(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        tree = get_dependency_tree(graph, ids["w"], reverse=True)
        assert [child.id for child in tree.children] == [ids["y"], ids["z"]]

    def test_max_depth(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        tree = get_dependency_tree(graph, ids["x"], max_depth=1)
        assert [child.id for child in tree.children] == [ids["y"], ids["z"]]
        assert all(child.children == [] for child in tree.children)


class TestRendering:
    """Tests for the Rich renderers."""

    def test_node_table(self, diamond) -> None:  # noqa: ANN001
        graph, _ = diamond
        console, buffer = _console()
        render_node_table(list_nodes(graph), console)
        output = buffer.getvalue()
        assert "CONSTANT" in output
        assert "DERIVED" in output
        assert "Total: 4 nodes" in output

    def test_empty_table(self) -> None:
        console, buffer = _console()
        render_node_table([], console)
        assert "Graph has no nodes" in buffer.getvalue()

    def test_node_detail(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        graph.update(ids["w"], 5.0)
        console, buffer = _console()
        render_node_detail(get_node_detail(graph, ids["w"]), console)
        output = buffer.getvalue()
        assert "Constant(value=5.0)" in output
        assert "dirty" in output
        assert "invalidations=1" in output

    def test_tree(self, diamond) -> None:  # noqa: ANN001
        graph, ids = diamond
        console, buffer = _console()
        render_tree(get_dependency_tree(graph, ids["x"]), console)
        output = buffer.getvalue()
        assert str(ids["x"]) in output
        assert "(see above)" in output
