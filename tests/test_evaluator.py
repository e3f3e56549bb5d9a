"""Tests for graph evaluation."""

from __future__ import annotations

import math

import pytest

from stylegraph.actions import ActionDispatcher, ActionRecorder
from stylegraph.evaluator import EvaluationContext, evaluate, evaluate_node
from stylegraph.events.types import AlertEvent, LinkEvent, NavigateEvent
from stylegraph.graph import Node, build_graph


def binary(kind, a, b):
    """Graph computing ``kind(a, b)`` into node 'op'."""
    return build_graph(
        [("a", "NUMBER", a), ("b", "NUMBER", b), ("op", kind)],
        [("a", "op", "in-a"), ("b", "op", "in-b")],
    )


def content_graph(*nodes, connections=(), source="src"):
    """Graph whose OUTPUT content is fed by ``source``."""
    return build_graph(
        [*nodes, ("out", "OUTPUT")],
        [*connections, (source, "out", "in-content")],
    )


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


class TestArithmetic:
    def test_add(self):
        assert evaluate_node(binary("ADD", 2, 3), "op") == 5

    def test_add_content_formats_like_a_number(self):
        g = content_graph(("a", "NUMBER", 2), ("b", "NUMBER", 3), ("src", "ADD"),
                          connections=[("a", "src", "in-a"), ("b", "src", "in-b")])
        assert evaluate(g).content == "5"

    def test_divide_by_zero_is_zero(self):
        assert evaluate_node(binary("DIVIDE", 10, 0), "op") == 0

    def test_modulo_by_zero_is_zero(self):
        assert evaluate_node(binary("MODULO", 7, 0), "op") == 0

    def test_divide_unwired_divisor_defaults_to_one(self):
        g = build_graph([("a", "NUMBER", 10), ("op", "DIVIDE")], [("a", "op", "in-a")])
        assert evaluate_node(g, "op") == 10

    def test_modulo_sign_follows_dividend(self):
        assert evaluate_node(binary("MODULO", -7, 3), "op") == -1

    def test_clamp(self):
        g = build_graph(
            [("v", "NUMBER", 5), ("lo", "NUMBER", 0), ("hi", "NUMBER", 1), ("op", "CLAMP")],
            [("v", "op", "in-value"), ("lo", "op", "in-min"), ("hi", "op", "in-max")],
        )
        assert evaluate_node(g, "op") == 1

    def test_map_range(self):
        g = build_graph(
            [("v", "NUMBER", 5), ("hi", "NUMBER", 10), ("omax", "NUMBER", 100), ("op", "MAP_RANGE")],
            [("v", "op", "in-value"), ("hi", "op", "in-in-max"), ("omax", "op", "in-out-max")],
        )
        assert evaluate_node(g, "op") == 50

    def test_map_range_zero_width_returns_out_min(self):
        g = build_graph(
            [("v", "NUMBER", 3), ("lo", "NUMBER", 5), ("hi", "NUMBER", 5), ("omin", "NUMBER", 10), ("op", "MAP_RANGE")],
            [("v", "op", "in-value"), ("lo", "op", "in-in-min"), ("hi", "op", "in-in-max"), ("omin", "op", "in-out-min")],
        )
        assert evaluate_node(g, "op") == 10

    def test_round_is_half_up(self):
        g = build_graph([("a", "NUMBER", -2.5), ("op", "ROUND")], [("a", "op", "in-a")])
        assert evaluate_node(g, "op") == -2
        g = build_graph([("a", "NUMBER", 2.5), ("op", "ROUND")], [("a", "op", "in-a")])
        assert evaluate_node(g, "op") == 3

    def test_string_operands_are_coerced(self):
        assert evaluate_node(binary("MULTIPLY", "4", "2.5"), "op") == 10

    def test_non_numeric_operand_gives_nan(self):
        assert math.isnan(evaluate_node(binary("ADD", "abc", 1), "op"))

    def test_min_propagates_nan(self):
        assert math.isnan(evaluate_node(binary("MIN", "abc", 1), "op"))

    def test_power_defaults_exponent_to_one(self):
        g = build_graph([("a", "NUMBER", 7), ("op", "POWER")], [("a", "op", "in-a")])
        assert evaluate_node(g, "op") == 7

    def test_random_uses_injected_source(self):
        g = build_graph([("op", "RANDOM")])
        assert evaluate_node(g, "op", rng=lambda: 0.25) == 0.25


class TestComparisonAndLogic:
    @pytest.mark.parametrize(
        "kind, a, b, expected",
        [
            ("EQUAL", 1, "1", True),
            ("EQUAL", "a", "b", False),
            ("NOT_EQUAL", 0, "", False),
            ("GREATER_THAN", "10", 9, True),
            ("LESS_EQUAL", 3, 3, True),
            ("AND", 1, 0, False),
            ("OR", 0, "x", True),
        ],
    )
    def test_binary(self, kind, a, b, expected):
        assert evaluate_node(binary(kind, a, b), "op") is expected

    def test_aliases_are_normalized(self):
        g = binary("GT", 2, 1)
        assert g.node("op").type == "GREATER_THAN"
        assert evaluate_node(g, "op") is True

    def test_not_of_unwired_is_true(self):
        assert evaluate_node(build_graph([("op", "NOT")]), "op") is True

    def test_if_else_picks_branch(self):
        g = build_graph(
            [("c", "TOGGLE", True), ("t", "TEXT", "yes"), ("f", "TEXT", "no"), ("op", "IF_ELSE")],
            [("c", "op", "in-condition"), ("t", "op", "in-true"), ("f", "op", "in-false")],
        )
        assert evaluate_node(g, "op") == "yes"
        assert evaluate_node(g, "op", {"c": False}) == "no"


class TestContextNodes:
    def test_hover_and_click_default_false(self):
        g = build_graph([("h", "HOVER"), ("c", "CLICK")])
        assert evaluate_node(g, "h") is False
        assert evaluate_node(g, "c") is False

    def test_hover_from_context(self):
        g = build_graph([("h", "INTERACTION_HOVER")])
        assert evaluate_node(g, "h", context=EvaluationContext(is_hovered=True)) is True

    def test_timer_scales_time(self):
        g = build_graph([("s", "NUMBER", 2), ("t", "TIMER")], [("s", "t", "in-speed")])
        assert evaluate_node(g, "t", context=EvaluationContext(time=1.5)) == 3


# ---------------------------------------------------------------------------
# Style producers
# ---------------------------------------------------------------------------


class TestStyleNodes:
    def test_style_collects_wired_keys(self):
        g = build_graph(
            [("bg", "COLOR", "#fff"), ("size", "NUMBER", 24), ("s", "STYLE"), ("out", "OUTPUT")],
            [("bg", "s", "in-bg"), ("size", "s", "in-size"), ("s", "out", "in-style")],
        )
        assert evaluate(g).style == {"backgroundColor": "#fff", "fontSize": 24}

    def test_merge_prefers_second_input(self):
        g = build_graph(
            [
                ("red", "COLOR", "red"),
                ("blue", "COLOR", "blue"),
                ("white", "COLOR", "white"),
                ("sa", "STYLE"),
                ("sb", "STYLE"),
                ("m", "MERGE"),
                ("out", "OUTPUT"),
            ],
            [
                ("red", "sa", "in-text"),
                ("white", "sa", "in-bg"),
                ("blue", "sb", "in-text"),
                ("sa", "m", "in-style-a"),
                ("sb", "m", "in-style-b"),
                ("m", "out", "in-style"),
            ],
        )
        assert evaluate(g).style == {"color": "blue", "backgroundColor": "white"}

    def test_merge_ignores_non_objects(self):
        g = build_graph(
            [("t", "TEXT", "oops"), ("c", "COLOR", "red"), ("s", "STYLE"), ("m", "MERGE")],
            [("c", "s", "in-text"), ("t", "m", "in-style-a"), ("s", "m", "in-style-b")],
        )
        assert evaluate_node(g, "m") == {"color": "red"}

    def test_animation_descriptor(self):
        g = build_graph([("a", "ANIMATION", "fadeIn")])
        assert evaluate_node(g, "a") == {"animation": "fadeIn 1s ease-in-out 0s 1 both"}

    def test_looping_animation_is_infinite(self):
        g = build_graph([("d", "NUMBER", 0.5), ("a", "ANIMATION", "spin")], [("d", "a", "in-duration")])
        assert evaluate_node(g, "a") == {"animation": "spin 0.5s ease-in-out 0s infinite both"}

    def test_animation_gated_by_trigger(self):
        g = build_graph([("h", "HOVER"), ("a", "ANIMATION", "pulse")], [("h", "a", "in-trigger")])
        assert evaluate_node(g, "a") == {"animation": "none"}
        hovered = EvaluationContext(is_hovered=True)
        assert evaluate_node(g, "a", context=hovered)["animation"].startswith("pulse ")

    def test_transition_default(self):
        g = build_graph([("t", "TRANSITION")])
        assert evaluate_node(g, "t") == {"transition": "all 0.3s ease-in-out 0s"}

    def test_non_object_style_output_is_empty(self):
        g = build_graph([("n", "NUMBER", 3), ("out", "OUTPUT")], [("n", "out", "in-style")])
        assert evaluate(g).style == {}


# ---------------------------------------------------------------------------
# Evaluation rules
# ---------------------------------------------------------------------------


class TestEvaluationRules:
    def test_deterministic(self):
        g = content_graph(("a", "TEXT", "x"), ("b", "TEXT", "y"), ("src", "CONCAT"),
                          connections=[("a", "src", "in-a"), ("b", "src", "in-b")])
        assert evaluate(g) == evaluate(g)
        assert evaluate(g).content == "xy"

    def test_cycle_nodes_resolve_to_none(self):
        g = build_graph(
            [("p", "IF_ELSE"), ("q", "IF_ELSE"), ("out", "OUTPUT")],
            [("q", "p", "in-false"), ("p", "q", "in-false"), ("p", "out", "in-content")],
        )
        assert evaluate_node(g, "p") is None
        assert evaluate_node(g, "q") is None
        assert evaluate(g).content == ""

    def test_override_bypasses_upstream(self):
        g = build_graph(
            [("r", "RANDOM"), ("n", "NUMBER", 1), ("sum", "ADD")],
            [("r", "sum", "in-a"), ("n", "sum", "in-b")],
        )

        def never():
            pytest.fail("overridden upstream must not be evaluated")

        assert evaluate_node(g, "sum", {"sum": 42}, rng=never) == 42

    def test_override_replaces_literal(self):
        g = binary("ADD", 2, 3)
        assert evaluate_node(g, "op", {"a": 10}) == 13

    def test_missing_output(self):
        result = evaluate(build_graph([("t", "TEXT", "hi")]))
        assert result.style == {}
        assert result.content == ""

    def test_unwired_content_is_none(self):
        g = build_graph([("s", "STYLE"), ("out", "OUTPUT")], [("s", "out", "in-style")])
        assert evaluate(g).content is None

    def test_first_output_wins(self):
        g = build_graph(
            [("a", "TEXT", "first"), ("b", "TEXT", "second"), ("o1", "OUTPUT"), ("o2", "OUTPUT")],
            [("a", "o1", "in-content"), ("b", "o2", "in-content")],
        )
        assert evaluate(g).content == "first"

    def test_first_connection_per_socket_wins(self):
        g = content_graph(
            ("a", "TEXT", "a"), ("b", "TEXT", "b"), ("src", "CONCAT"),
            connections=[("a", "src", "in-a"), ("b", "src", "in-a")],
        )
        assert evaluate(g).content == "a"

    def test_dangling_connection_is_none(self):
        g = build_graph([("out", "OUTPUT")], [("ghost", "out", "in-content")])
        assert evaluate(g).content == ""
        g = build_graph([("n", "NUMBER", 4), ("op", "ADD")], [("n", "op", "in-a"), ("ghost", "op", "in-b")])
        assert evaluate_node(g, "op") == 4

    def test_unknown_type_passes_literal(self):
        g = build_graph([("x", "SPARKLE", "shiny")])
        assert evaluate_node(g, "x") == "shiny"

    def test_missing_node_is_none(self):
        assert evaluate_node(build_graph([]), "nope") is None

    def test_string_number_content(self):
        g = content_graph(("a", "NUMBER", 1), ("b", "NUMBER", 2), ("src", "DIVIDE"),
                          connections=[("a", "src", "in-a"), ("b", "src", "in-b")])
        assert evaluate(g).content == "0.5"

    def test_node_data_without_value(self):
        g = build_graph([Node("l", "LINK", {"newTab": True})])
        assert g.node("l").value is None


# ---------------------------------------------------------------------------
# Actions fired during evaluation
# ---------------------------------------------------------------------------


def action_graph(kind, value, **data):
    return build_graph(
        [("t", "TOGGLE", False), Node("act", kind, {"value": value, **data})],
        [("t", "act", "in-trigger")],
    )


class TestActionsDuringEvaluation:
    def test_rising_edge_fires_once(self):
        g = action_graph("ALERT", "hello")
        recorder = ActionRecorder()
        actions = ActionDispatcher([recorder])
        triggers: dict = {}

        for trigger in (False, True, True):
            evaluate(g, {"t": trigger}, trigger_state=triggers, actions=actions)
            actions.flush()

        assert [e.message for e in recorder.of_type(AlertEvent)] == ["hello"]

    def test_fires_again_after_falling_edge(self):
        g = action_graph("NAVIGATE", "page-2")
        recorder = ActionRecorder()
        actions = ActionDispatcher([recorder])
        triggers: dict = {}

        for trigger in (True, False, True):
            evaluate(g, {"t": trigger}, trigger_state=triggers, actions=actions)

        assert len(recorder.of_type(NavigateEvent)) == 2

    def test_truthy_non_boolean_does_not_fire(self):
        g = action_graph("NAVIGATE", "page-2")
        recorder = ActionRecorder()
        evaluate(g, {"t": 1}, actions=ActionDispatcher([recorder]))
        assert recorder.events == []

    def test_action_without_payload_does_not_fire_but_records(self):
        g = action_graph("ALERT", "")
        triggers: dict = {}
        recorder = ActionRecorder()
        evaluate(g, {"t": True}, trigger_state=triggers, actions=ActionDispatcher([recorder]))
        assert triggers == {"act": True}
        assert recorder.events == []

    def test_actions_evaluated_without_output(self):
        g = action_graph("NAVIGATE", "next")
        recorder = ActionRecorder()
        evaluate(g, {"t": True}, actions=ActionDispatcher([recorder]))
        assert recorder.of_type(NavigateEvent)[0].page_id == "next"

    def test_link_new_tab_from_data(self):
        g = action_graph("LINK", "https://example.com", newTab=True)
        recorder = ActionRecorder()
        evaluate(g, {"t": True}, actions=ActionDispatcher([recorder]))
        (event,) = recorder.of_type(LinkEvent)
        assert event.url == "https://example.com"
        assert event.new_tab is True

    def test_link_url_socket_wins_over_literal(self):
        g = build_graph(
            [("t", "TOGGLE", True), ("u", "TEXT", "https://wired.example"), ("act", "LINK", "https://literal.example")],
            [("t", "act", "in-trigger"), ("u", "act", "in-url")],
        )
        recorder = ActionRecorder()
        evaluate(g, actions=ActionDispatcher([recorder]))
        assert recorder.of_type(LinkEvent)[0].url == "https://wired.example"
