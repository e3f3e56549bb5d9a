"""Composition: merge an element's static appearance with its graph outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from stylegraph.evaluator.core import evaluate

if TYPE_CHECKING:
    from collections.abc import Callable

    from stylegraph.actions import ActionDispatcher, TriggerState
    from stylegraph.evaluator.types import EvaluationContext
    from stylegraph.graph.core import Graph
    from stylegraph.project import Element, Project


@dataclass
class Composition:
    """Effective appearance of one element for one context.

    Attributes:
        style: Static style overridden by computed style
        content: Computed content if non-empty, else static content, else ""
        computed_style: Style produced by the element's graphs alone
        computed_content: Content produced by the graphs (None if none did)
        dynamic: True when at least one graph was evaluated
    """

    style: dict[str, Any] = field(default_factory=dict)
    content: str = ""
    computed_style: dict[str, Any] = field(default_factory=dict)
    computed_content: str | None = None
    dynamic: bool = False


def definition_graph(element: Element, project: Project) -> Graph | None:
    """The component graph behind a CUSTOM element.

    A detached element owns its graph inline; otherwise the shared
    component is looked up by id. Non-CUSTOM elements have none.
    """
    if not element.is_custom:
        return None
    if element.is_detached and element.custom_node_group is not None:
        return element.custom_node_group
    return project.component(element.custom_component_id)


def element_graphs(element: Element, project: Project) -> list[Graph]:
    """Graphs evaluated for an element, in composition order.

    Script ids with no matching script are skipped.
    """
    if not element.has_graphs:
        return []
    graphs: list[Graph] = []
    definition = definition_graph(element, project)
    if definition is not None:
        graphs.append(definition)
    for script_id in element.scripts:
        script = project.script(script_id)
        if script is not None:
            graphs.append(script)
    return graphs


def compose(
    element: Element,
    project: Project,
    context: EvaluationContext | None = None,
    *,
    trigger_state: TriggerState | None = None,
    actions: ActionDispatcher | None = None,
    rng: Callable[[], float] | None = None,
) -> Composition:
    """Evaluate an element's graphs and merge them over its static appearance.

    The component definition (CUSTOM elements) seeds the computed style
    and content; attached scripts follow in list order, later scripts
    winning style key conflicts and replacing content when they produce
    any. All graphs of the element see the same overrides, context and
    trigger state.
    """
    computed_style: dict[str, Any] = {}
    computed_content: str | None = None
    graphs = element_graphs(element, project)
    if actions is not None:
        actions = actions.scoped(element.id)

    for graph in graphs:
        result = evaluate(
            graph,
            element.prop_overrides,
            context,
            trigger_state=trigger_state,
            actions=actions,
            rng=rng,
        )
        computed_style.update(result.style)
        if result.content is not None:
            computed_content = result.content

    return Composition(
        style={**element.style, **computed_style},
        content=computed_content if computed_content is not None else (element.content or ""),
        computed_style=computed_style,
        computed_content=computed_content,
        dynamic=bool(graphs),
    )
