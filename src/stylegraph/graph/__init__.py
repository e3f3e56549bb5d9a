"""Graph package - graph model and validation."""

from stylegraph.graph.core import Connection, Graph, Node, build_graph
from stylegraph.graph.validation import GraphConfigError, GraphIssue, validate_graph

__all__ = [
    "Connection",
    "Graph",
    "GraphConfigError",
    "GraphIssue",
    "Node",
    "build_graph",
    "validate_graph",
]
