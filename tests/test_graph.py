"""Tests for graph data model."""

from pathlib import Path

from graph.model import ImportGraph


class TestImportGraph:
    """Tests for ImportGraph class."""

    def test_empty_graph(self):
        """Test empty graph initialization."""
        graph = ImportGraph()
        assert len(graph) == 0
        assert graph.nodes == []
        assert graph.edges == {}

    def test_add_node_keeps_first_depth(self):
        """Test a node keeps the depth it was first added with."""
        graph = ImportGraph()
        path = Path("src/main.ts")

        graph.add_node(path, 0)
        graph.add_node(path, 3)

        assert len(graph) == 1
        assert path in graph
        assert graph.depth_of(path) == 0

    def test_nodes_in_discovery_order(self):
        """Test nodes are listed in insertion order."""
        graph = ImportGraph()
        for name in ["z.js", "a.js", "m.js"]:
            graph.add_node(Path(name))

        assert graph.nodes == [Path("z.js"), Path("a.js"), Path("m.js")]

    def test_add_edge(self):
        """Test adding edges."""
        graph = ImportGraph()
        source = Path("src/main.ts")
        target = Path("src/lib.ts")

        graph.add_node(source, 2)
        graph.add_edge(source, target)

        assert len(graph) == 2
        assert target in graph.get_targets(source)
        assert graph.depth_of(target) == 3

    def test_get_sources(self):
        """Test getting files that import a target."""
        graph = ImportGraph()
        a = Path("a.js")
        b = Path("b.js")
        shared = Path("shared.js")

        graph.add_edge(a, shared)
        graph.add_edge(b, shared)

        assert graph.get_sources(shared) == {a, b}

    def test_iter_edges(self):
        """Test iterating over edges."""
        graph = ImportGraph()
        edges = [
            (Path("a.js"), Path("b.js")),
            (Path("a.js"), Path("c.js")),
            (Path("b.js"), Path("d.js")),
        ]

        for source, target in edges:
            graph.add_edge(source, target)

        assert list(graph.iter_edges()) == edges

    def test_missing_and_external(self):
        """Test tracking unresolved and package references."""
        graph = ImportGraph()
        source = Path("src/app.ts")

        graph.add_missing(source, "./gone")
        graph.add_external(source, "react")
        graph.add_external(source, "@scope/pkg")

        assert graph.get_missing(source) == {"./gone"}
        assert list(graph.iter_external()) == [(source, "@scope/pkg"), (source, "react")]
        assert list(graph.iter_missing()) == [(source, "./gone")]

    def test_properties_return_copies(self):
        """Test the exposed mappings are copies."""
        graph = ImportGraph()
        source = Path("a.js")
        graph.add_missing(source, "./x")

        missing = graph.missing
        missing[source].add("./y")

        assert "./y" not in graph.get_missing(source)

    def test_repr(self):
        """Test string representation."""
        graph = ImportGraph()
        graph.add_edge(Path("a.js"), Path("b.js"))
        graph.add_external(Path("a.js"), "lodash")

        assert "nodes=2" in repr(graph)
        assert "edges=1" in repr(graph)
        assert "missing=0" in repr(graph)
        assert "external=1" in repr(graph)
