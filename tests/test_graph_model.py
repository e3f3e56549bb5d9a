"""Tests for the graph model and authoring validation."""

from __future__ import annotations

import pytest

from stylegraph.graph import Connection, Graph, GraphConfigError, Node, build_graph, validate_graph


def codes(issues):
    return [issue.code for issue in issues]


class TestGraphModel:
    def test_from_dict(self):
        g = Graph.from_dict(
            {
                "id": "g",
                "nodes": [{"id": "n", "type": "NUMBER", "data": {"value": 3}}, {"id": "out", "type": "OUTPUT"}],
                "connections": [{"sourceNodeId": "n", "targetNodeId": "out", "targetSocketId": "in-content"}],
            }
        )
        assert g.id == "g"
        assert g.node("n") == Node("n", "NUMBER", {"value": 3})
        assert g.connections == (Connection("n", "out", "in-content"),)
        assert g.output_node.id == "out"

    def test_to_dict_uses_wire_keys(self):
        g = build_graph([("n", "NUMBER", 1)], [("n", "out", "in-a")])
        assert g.to_dict() == {
            "nodes": [{"id": "n", "type": "NUMBER", "data": {"value": 1}}],
            "connections": [{"sourceNodeId": "n", "targetNodeId": "out", "targetSocketId": "in-a"}],
        }

    def test_first_node_with_id_wins(self):
        g = build_graph([("n", "TEXT", "first"), ("n", "TEXT", "second")])
        assert g.node("n").value == "first"

    def test_is_wired(self):
        g = build_graph([("a", "TOGGLE"), ("anim", "ANIMATION")], [("a", "anim", "in-trigger")])
        assert g.is_wired("anim", "in-trigger")
        assert not g.is_wired("anim", "in-duration")

    def test_action_nodes_in_order(self):
        g = build_graph([("x", "ALERT"), ("y", "TEXT"), ("z", "NAVIGATE")])
        assert [n.id for n in g.action_nodes] == ["x", "z"]

    def test_nx_graph_skips_dangling(self):
        g = build_graph(
            [("a", "NUMBER"), ("b", "NUMBER"), ("sum", "ADD")],
            [("a", "sum", "in-a"), ("b", "sum", "in-b"), ("ghost", "sum", "in-a")],
        )
        nx_graph = g.nx_graph
        assert set(nx_graph.nodes) == {"a", "b", "sum"}
        assert nx_graph.in_degree("sum") == 2
        assert nx_graph.edges["a", "sum"]["sockets"] == ["in-a"]


class TestValidation:
    def test_clean_graph(self):
        g = build_graph(
            [("t", "TEXT", "hi"), ("out", "OUTPUT")],
            [("t", "out", "in-content")],
        )
        assert validate_graph(g) == []

    def test_duplicate_socket(self):
        g = build_graph(
            [("a", "TEXT"), ("b", "TEXT"), ("out", "OUTPUT")],
            [("a", "out", "in-content"), ("b", "out", "in-content")],
        )
        assert codes(validate_graph(g)) == ["duplicate-socket"]

    def test_multiple_outputs(self):
        g = build_graph([("o1", "OUTPUT"), ("o2", "OUTPUT")])
        (issue,) = validate_graph(g)
        assert issue.code == "multiple-outputs"
        assert issue.node_id == "o1"

    def test_dangling_connection(self):
        g = build_graph([("out", "OUTPUT")], [("ghost", "out", "in-content")])
        (issue,) = validate_graph(g)
        assert issue.code == "dangling-connection"
        assert issue.node_id == "ghost"

    def test_unknown_type(self):
        assert codes(validate_graph(build_graph([("x", "SPARKLE")]))) == ["unknown-type"]

    def test_duplicate_node_id(self):
        g = build_graph([("n", "TEXT"), ("n", "NUMBER")])
        assert codes(validate_graph(g)) == ["duplicate-node-id"]

    def test_cycle(self):
        g = build_graph(
            [("p", "IF_ELSE"), ("q", "IF_ELSE")],
            [("p", "q", "in-false"), ("q", "p", "in-false")],
        )
        (issue,) = validate_graph(g)
        assert issue.code == "cycle"
        assert "p, q" in issue.message

    def test_self_loop_is_a_cycle(self):
        g = build_graph([("n", "ADD")], [("n", "n", "in-a")])
        assert codes(validate_graph(g)) == ["cycle"]

    def test_strict_raises(self):
        g = build_graph([("o1", "OUTPUT"), ("o2", "OUTPUT")], id="dup")
        with pytest.raises(GraphConfigError) as exc_info:
            validate_graph(g, strict=True)
        assert "graph 'dup'" in str(exc_info.value)
        assert "How to fix" in str(exc_info.value)
        assert codes(exc_info.value.issues) == ["multiple-outputs"]

    def test_strict_clean_graph_passes(self):
        assert validate_graph(build_graph([("out", "OUTPUT")]), strict=True) == []
