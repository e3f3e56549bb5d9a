"""Authoring-time graph validation.

The evaluator never rejects a graph: dangling connections and cycles
degrade to None, ambiguous wiring resolves first-found-wins. This module
reports those situations so an authoring tool (or the CLI) can surface or
reject them before they reach a page.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

from stylegraph.nodes.catalog import OUTPUT, is_known

if TYPE_CHECKING:
    from stylegraph.graph.core import Graph


class GraphConfigError(Exception):
    """Raised when strict validation finds authoring errors."""

    def __init__(self, issues: list[GraphIssue], graph_label: str = "graph") -> None:
        self.issues = issues
        lines = "\n".join(f"  -> [{i.code}] {i.message}" for i in issues)
        super().__init__(
            f"Invalid {graph_label}\n\n{lines}\n\n"
            f"How to fix:\n"
            f"  Remove duplicate or dangling connections and keep a single OUTPUT node"
        )


@dataclass(frozen=True)
class GraphIssue:
    """One authoring problem found in a graph.

    Attributes:
        code: Stable identifier (``duplicate-node-id``, ``duplicate-socket``,
            ``multiple-outputs``, ``dangling-connection``, ``unknown-type``,
            ``cycle``)
        message: Human-readable description
        node_id: Node the issue is attached to, if any
    """

    code: str
    message: str
    node_id: str | None = None


def validate_graph(graph: Graph, *, strict: bool = False) -> list[GraphIssue]:
    """Collect authoring issues in ``graph``.

    Args:
        graph: Graph to check
        strict: Raise GraphConfigError instead of returning issues

    Returns:
        Issues in a stable order (empty when the graph is clean)
    """
    issues: list[GraphIssue] = []
    issues.extend(_duplicate_node_ids(graph))
    issues.extend(_duplicate_sockets(graph))
    issues.extend(_multiple_outputs(graph))
    issues.extend(_dangling_connections(graph))
    issues.extend(_unknown_types(graph))
    issues.extend(_cycles(graph))
    if strict and issues:
        label = f"graph '{graph.id}'" if graph.id else "graph"
        raise GraphConfigError(issues, label)
    return issues


def _duplicate_node_ids(graph: Graph) -> list[GraphIssue]:
    counts = Counter(n.id for n in graph.nodes)
    return [
        GraphIssue("duplicate-node-id", f"Node id '{nid}' is used {n} times", nid)
        for nid, n in counts.items()
        if n > 1
    ]


def _duplicate_sockets(graph: Graph) -> list[GraphIssue]:
    counts = Counter((c.target, c.socket) for c in graph.connections)
    return [
        GraphIssue(
            "duplicate-socket",
            f"Socket '{socket}' on node '{target}' has {n} incoming connections; "
            f"only the first is used",
            target,
        )
        for (target, socket), n in counts.items()
        if n > 1
    ]


def _multiple_outputs(graph: Graph) -> list[GraphIssue]:
    outputs = [n.id for n in graph.nodes if n.type == OUTPUT]
    if len(outputs) <= 1:
        return []
    return [
        GraphIssue(
            "multiple-outputs",
            f"Graph has {len(outputs)} OUTPUT nodes ({', '.join(outputs)}); "
            f"only '{outputs[0]}' is used",
            outputs[0],
        )
    ]


def _dangling_connections(graph: Graph) -> list[GraphIssue]:
    issues = []
    for conn in graph.connections:
        for end in (conn.source, conn.target):
            if graph.node(end) is None:
                issues.append(
                    GraphIssue(
                        "dangling-connection",
                        f"Connection {conn.source} -> {conn.target}:{conn.socket} "
                        f"references missing node '{end}'",
                        end,
                    )
                )
    return issues


def _unknown_types(graph: Graph) -> list[GraphIssue]:
    return [
        GraphIssue(
            "unknown-type",
            f"Node '{n.id}' has unknown type '{n.type}'; its literal value is passed through",
            n.id,
        )
        for n in graph.nodes
        if not is_known(n.type)
    ]


def _cycles(graph: Graph) -> list[GraphIssue]:
    issues = []
    for component in nx.strongly_connected_components(graph.nx_graph):
        members = sorted(component)
        if len(members) == 1 and not graph.nx_graph.has_edge(members[0], members[0]):
            continue
        issues.append(
            GraphIssue(
                "cycle",
                f"Nodes {', '.join(members)} form a cycle and evaluate to null",
                members[0],
            )
        )
    return issues
