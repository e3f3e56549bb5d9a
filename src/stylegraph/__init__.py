"""Stylegraph - node-graph driven styling, actions and static export for visual designs."""

from stylegraph.actions import ActionDispatcher, ActionRecorder, BrowserProcessor, rising_edge
from stylegraph.composition import Composition, compose, element_graphs
from stylegraph.evaluator import EvaluationContext, EvaluationResult, evaluate, evaluate_node
from stylegraph.events import (
    ActionEvent,
    AlertEvent,
    BaseEvent,
    Event,
    EventDispatcher,
    EventProcessor,
    LinkEvent,
    NavigateEvent,
    PageChangedEvent,
    TypedEventProcessor,
)
from stylegraph.exceptions import SnapshotError
from stylegraph.export import export_html, generate_html
from stylegraph.graph import Connection, Graph, GraphConfigError, GraphIssue, Node, build_graph, validate_graph
from stylegraph.project import Element, ElementType, Page, Project, load_project
from stylegraph.runtime import InMemoryDocument, RuntimeLoop, RuntimeState

__all__ = [
    # Graph model
    "Graph",
    "Node",
    "Connection",
    "build_graph",
    "validate_graph",
    "GraphIssue",
    # Evaluation
    "evaluate",
    "evaluate_node",
    "EvaluationContext",
    "EvaluationResult",
    # Actions and events
    "rising_edge",
    "ActionDispatcher",
    "ActionRecorder",
    "BrowserProcessor",
    "BaseEvent",
    "ActionEvent",
    "NavigateEvent",
    "LinkEvent",
    "AlertEvent",
    "PageChangedEvent",
    "Event",
    "EventProcessor",
    "TypedEventProcessor",
    "EventDispatcher",
    # Project and composition
    "Project",
    "Page",
    "Element",
    "ElementType",
    "load_project",
    "compose",
    "Composition",
    "element_graphs",
    # Runtime
    "RuntimeLoop",
    "RuntimeState",
    "InMemoryDocument",
    # Export
    "generate_html",
    "export_html",
    # Exceptions
    "SnapshotError",
    "GraphConfigError",
]
