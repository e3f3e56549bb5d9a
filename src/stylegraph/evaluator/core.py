"""Recursive dataflow evaluation of a graph into style and content."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from typing import Any, TYPE_CHECKING

from stylegraph.actions import rising_edge
from stylegraph.evaluator.coercion import or_default, to_string
from stylegraph.evaluator.operations import get_operation
from stylegraph.evaluator.types import EvaluationContext, EvaluationResult

if TYPE_CHECKING:
    from stylegraph.actions import ActionDispatcher, TriggerState
    from stylegraph.events.types import ActionEvent
    from stylegraph.graph.core import Graph, Node

_DEFAULT_CONTEXT = EvaluationContext()


class Evaluation:
    """State of one top-level ``evaluate`` call.

    Holds the per-call memo and the in-progress set. Both start empty for
    every call, so nothing computed here leaks into the next call; only
    ``trigger_state`` (owned by the caller) persists.
    """

    def __init__(
        self,
        graph: Graph,
        overrides: Mapping[str, Any] | None = None,
        context: EvaluationContext | None = None,
        *,
        trigger_state: TriggerState | None = None,
        actions: ActionDispatcher | None = None,
        rng: Callable[[], float] | None = None,
    ) -> None:
        self.graph = graph
        self.overrides = overrides or {}
        self.context = context or _DEFAULT_CONTEXT
        self.trigger_state = trigger_state if trigger_state is not None else {}
        self.actions = actions
        self.rng = rng or random.random
        self.results: dict[str, Any] = {}
        self.in_progress: set[str] = set()

    def value(self, node_id: str) -> Any:
        """Evaluate one node (override, memo, cycle check, then dispatch)."""
        if node_id in self.overrides:
            return self.overrides[node_id]
        if node_id in self.results:
            return self.results[node_id]
        if node_id in self.in_progress:
            return None
        node = self.graph.node(node_id)
        if node is None:
            return None

        self.in_progress.add(node_id)
        try:
            result = get_operation(node.type)(self, node)
        finally:
            self.in_progress.discard(node_id)
        self.results[node_id] = result
        return result

    def input(self, node: Node, socket: str) -> Any:
        """Value feeding ``socket`` on ``node``; None when unwired."""
        source = self.graph.source_of(node.id, socket)
        if source is None:
            return None
        return self.value(source)

    def rising_edge(self, node: Node, trigger: Any) -> bool:
        """Record the trigger value and report whether the action fires."""
        return rising_edge(self.trigger_state, node.id, trigger)

    def emit(self, event: ActionEvent) -> None:
        if self.actions is not None:
            self.actions.emit(event)

    def run(self) -> EvaluationResult:
        """Evaluate every action node, then resolve the OUTPUT node."""
        for node in self.graph.action_nodes:
            self.value(node.id)

        output = self.graph.output_node
        if output is None:
            return EvaluationResult(style={}, content="")

        style: dict[str, Any] = {}
        style_source = self.graph.source_of(output.id, "in-style")
        if style_source is not None:
            computed = self.value(style_source)
            if isinstance(computed, dict):
                style = dict(computed)

        content: str | None = None
        content_source = self.graph.source_of(output.id, "in-content")
        if content_source is not None:
            content = to_string(or_default(self.value(content_source), ""))

        return EvaluationResult(style=style, content=content)


def evaluate(
    graph: Graph,
    overrides: Mapping[str, Any] | None = None,
    context: EvaluationContext | None = None,
    *,
    trigger_state: TriggerState | None = None,
    actions: ActionDispatcher | None = None,
    rng: Callable[[], float] | None = None,
) -> EvaluationResult:
    """Evaluate a graph into a style object and a content value.

    Malformed graphs never raise: dangling connections and nodes on a
    cycle evaluate to None, unknown kinds pass their literal through and
    a graph without an OUTPUT node yields ``{style: {}, content: ""}``.

    Args:
        graph: Graph to evaluate
        overrides: Node id -> literal; a present value replaces the node
            and its upstream entirely
        context: Hover/click/time seen by context nodes (defaults to
            not hovered, not clicked, time 0)
        trigger_state: Last trigger value per action node id, read and
            updated in place; a fresh mapping is used when omitted
        actions: Receives fired action events; when omitted actions are
            tracked but not delivered
        rng: Source for RANDOM nodes (defaults to ``random.random``)

    Returns:
        EvaluationResult with the style dict and content string (None when
        the OUTPUT content socket is unwired)

    Example:
        >>> from stylegraph.graph import build_graph
        >>> g = build_graph(
        ...     [("a", "NUMBER", 2), ("b", "NUMBER", 3), ("sum", "ADD"), ("out", "OUTPUT")],
        ...     [("a", "sum", "in-a"), ("b", "sum", "in-b"), ("sum", "out", "in-content")],
        ... )
        >>> evaluate(g).content
        '5'
    """
    return Evaluation(
        graph,
        overrides,
        context,
        trigger_state=trigger_state,
        actions=actions,
        rng=rng,
    ).run()


def evaluate_node(
    graph: Graph,
    node_id: str,
    overrides: Mapping[str, Any] | None = None,
    context: EvaluationContext | None = None,
    **kwargs: Any,
) -> Any:
    """Evaluate a single node in a fresh evaluation (inspection and tests).

    Action nodes reached this way still update ``trigger_state`` if given.
    """
    return Evaluation(graph, overrides, context, **kwargs).value(node_id)
