"""
Tests for GraphNode and the DAG-enforcing Graph.
"""

import logging

import pytest

from graph import Graph, GraphNode
from spatial_errors import CycleError, ParentNotFoundError


def diamond() -> Graph[str]:
    """root -> A -> C and root -> B -> C."""
    graph = Graph("root")
    graph.add("A", "root")
    graph.add("B", "root")
    graph.add("C", "A")
    graph.add("C", "B")
    return graph


# =============================================================================
# Test GraphNode
# =============================================================================


class TestGraphNode:
    """Tests for node links and path enumeration."""

    def test_new_node_has_no_links(self) -> None:
        node = GraphNode("a")
        assert node.id == "a"
        assert node.parents == []
        assert node.children == []
        assert not node.has_children()

    def test_constructor_parent_links_both_ways(self) -> None:
        parent = GraphNode("p")
        child = GraphNode("c", parent)
        assert parent.children == [child]
        assert child.parents == [parent]

    def test_add_child_links_both_ways(self) -> None:
        parent, child = GraphNode("p"), GraphNode("c")
        parent.add_child(child)
        assert parent.children == [child]
        assert child.parents == [parent]
        assert parent.has_children()

    def test_add_child_is_idempotent(self) -> None:
        parent, child = GraphNode("p"), GraphNode("c")
        parent.add_child(child)
        parent.add_child(child)
        assert len(parent.children) == 1
        assert len(child.parents) == 1

    def test_children_are_copies(self) -> None:
        parent = GraphNode("p")
        parent.add_child(GraphNode("c"))
        parent.children.clear()
        parent.parents.append(GraphNode("x"))
        assert len(parent.children) == 1
        assert parent.parents == []

    def test_leaf_paths(self) -> None:
        assert GraphNode("leaf").get_child_paths() == [["leaf"]]

    def test_leaf_paths_with_prefix(self) -> None:
        assert GraphNode("leaf").get_child_paths(["a", "b"]) == [["a", "b", "leaf"]]

    def test_branching_paths(self) -> None:
        root = GraphNode(1)
        left = GraphNode(2, root)
        GraphNode(3, root)
        GraphNode(4, left)
        assert root.get_child_paths() == [[1, 2, 4], [1, 3]]

    def test_cycle_guard(self) -> None:
        a, b, c = GraphNode("a"), GraphNode("b"), GraphNode("c")
        a.add_child(b)
        b.add_child(a)
        assert a.get_child_paths() == []

        b.add_child(c)
        assert a.get_child_paths() == [["a", "b", "c"]]

    def test_id_in_ancestors_returns_nothing(self) -> None:
        assert GraphNode("x").get_child_paths(["x"]) == []

    def test_str(self) -> None:
        parent = GraphNode("p")
        child = GraphNode("c", parent)
        assert str(child) == "GraphNode(id='c', parents=[p], children=)"
        assert "children=[c]" in str(parent)


# =============================================================================
# Test Graph
# =============================================================================


class TestGraphConstruction:
    """Tests for a new graph."""

    def test_root(self) -> None:
        graph = Graph("root")
        assert graph.root.id == "root"
        assert graph.nodes_by_id["root"] is graph.root
        assert len(graph.nodes_by_id) == 1

    def test_numeric_ids(self) -> None:
        graph = Graph(42)
        assert graph.nodes_by_id[42] is graph.root

    def test_tuple_ids(self) -> None:
        graph = Graph((0, 0))
        graph.add((0, 1), (0, 0))
        assert graph.root.children[0].id == (0, 1)

    def test_nodes_by_id_is_read_only(self) -> None:
        graph = Graph("root")
        with pytest.raises(TypeError):
            graph.nodes_by_id["x"] = GraphNode("x")  # type: ignore[index]


class TestGraphAdd:
    """Tests for adding edges."""

    def test_add_by_parent_id(self) -> None:
        graph = Graph("root")
        graph.add("child", "root")
        assert len(graph.nodes_by_id) == 2
        assert [node.id for node in graph.root.children] == ["child"]

    def test_add_by_parent_node(self) -> None:
        graph = Graph("root")
        graph.add("child", graph.root)
        child = graph.nodes_by_id["child"]
        graph.add("grandchild", child)
        assert len(graph.nodes_by_id) == 3
        assert [node.id for node in child.children] == ["grandchild"]

    def test_bidirectional_links(self) -> None:
        graph = Graph("root")
        graph.add("child", "root")
        child = graph.nodes_by_id["child"]
        assert graph.root.children[0] is child
        assert child.parents[0] is graph.root

    def test_convergent_child_is_reused(self) -> None:
        graph = diamond()
        assert len(graph.nodes_by_id) == 4
        assert [node.id for node in graph.nodes_by_id["C"].parents] == ["A", "B"]

    def test_repeated_edge_is_noop(self) -> None:
        graph = Graph("root")
        graph.add("A", "root")
        graph.add("A", "root")
        assert len(graph.root.children) == 1
        assert len(graph.nodes_by_id["A"].parents) == 1

    def test_diamond_paths(self) -> None:
        assert diamond().root.get_child_paths() == [["root", "A", "C"], ["root", "B", "C"]]

    def test_unknown_parent_id(self) -> None:
        graph = Graph("root")
        with pytest.raises(ParentNotFoundError, match="Cannot add child. Parent not found"):
            graph.add("child", "nonexistent")
        assert len(graph.nodes_by_id) == 1

    def test_orphan_parent_node(self) -> None:
        graph = Graph("root")
        with pytest.raises(ParentNotFoundError):
            graph.add("child", GraphNode("orphan"))

    def test_parent_node_from_other_graph(self) -> None:
        graph, other = Graph("root"), Graph("root")
        with pytest.raises(LookupError):
            graph.add("child", other.root)
        assert other.root.children == []


class TestGraphCycles:
    """Tests for DAG enforcement."""

    def test_back_edge_to_root(self) -> None:
        graph = diamond()
        with pytest.raises(CycleError):
            graph.add("root", "C")

    def test_failed_add_leaves_graph_unchanged(self) -> None:
        graph = diamond()
        before = {node_id: (node.parents, node.children) for node_id, node in graph.nodes_by_id.items()}
        with pytest.raises(CycleError, match="would create a cycle"):
            graph.add("A", "C")
        after = {node_id: (node.parents, node.children) for node_id, node in graph.nodes_by_id.items()}
        assert len(graph.nodes_by_id) == 4
        assert after == before

    def test_self_loop(self) -> None:
        graph = Graph("root")
        graph.add("A", "root")
        with pytest.raises(CycleError):
            graph.add("A", "A")
        with pytest.raises(CycleError):
            graph.add("root", "root")

    def test_long_cycle(self) -> None:
        graph = Graph(0)
        for node_id in range(1, 20):
            graph.add(node_id, node_id - 1)
        with pytest.raises(CycleError):
            graph.add(3, 19)

    def test_cross_edge_is_allowed(self) -> None:
        graph = diamond()
        graph.add("D", "C")
        graph.add("D", "A")
        assert len(graph.nodes_by_id["D"].parents) == 2
        assert graph.root.get_child_paths() == [
            ["root", "A", "C", "D"],
            ["root", "A", "D"],
            ["root", "B", "C", "D"],
        ]

    def test_check_handles_shared_descendants(self) -> None:
        # Many routes converge on the same nodes; the check must still finish
        graph = Graph("s")
        previous = ["s"]
        for layer in range(12):
            current = [f"{layer}a", f"{layer}b"]
            for node_id in current:
                for parent_id in previous:
                    graph.add(node_id, parent_id)
            previous = current
        with pytest.raises(CycleError):
            graph.add("s", "11a")
        graph.add("end", "11b")
        assert "end" in graph.nodes_by_id

    def test_cycle_error_is_value_error(self) -> None:
        graph = Graph("root")
        with pytest.raises(ValueError):
            graph.add("root", "root")

    def test_rejected_edge_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="graph")
        graph = diamond()
        with pytest.raises(CycleError):
            graph.add("B", "C")
        assert "Rejected edge 'C' -> 'B'" in caplog.text
