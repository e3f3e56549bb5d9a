"""Graph model: nodes, connections and the graph that owns them."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

import networkx as nx

from stylegraph.exceptions import SnapshotError
from stylegraph.nodes.catalog import ACTION_KINDS, OUTPUT, canonical_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class Node:
    """One operation instance within a graph.

    Attributes:
        id: Node id, unique within its graph
        type: Wire name of the node kind (aliases already resolved)
        data: Literal node data; ``data["value"]`` is the literal payload
    """

    id: str
    type: str
    data: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def value(self) -> Any:
        """The node's literal payload, or None."""
        return self.data.get("value")

    @classmethod
    def from_dict(cls, raw: Any, path: str = "node") -> Node:
        if not isinstance(raw, dict):
            raise SnapshotError(path, f"expected an object, got {type(raw).__name__}")
        node_id = raw.get("id")
        node_type = raw.get("type")
        if not isinstance(node_id, str):
            raise SnapshotError(f"{path}.id", "node id must be a string")
        if not isinstance(node_type, str):
            raise SnapshotError(f"{path}.type", "node type must be a string")
        data = raw.get("data") or {}
        if not isinstance(data, dict):
            raise SnapshotError(f"{path}.data", "node data must be an object")
        return cls(id=node_id, type=canonical_type(node_type), data=dict(data))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "type": self.type}
        if self.data:
            result["data"] = dict(self.data)
        return result


@dataclass(frozen=True)
class Connection:
    """Directed link from a source node's output to a target node's input socket."""

    source: str
    target: str
    socket: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "connection") -> Connection:
        if not isinstance(raw, dict):
            raise SnapshotError(path, f"expected an object, got {type(raw).__name__}")
        values = []
        for key in ("sourceNodeId", "targetNodeId", "targetSocketId"):
            value = raw.get(key)
            if not isinstance(value, str):
                raise SnapshotError(f"{path}.{key}", f"'{key}' must be a string")
            values.append(value)
        return cls(*values)

    def to_dict(self) -> dict[str, str]:
        return {
            "sourceNodeId": self.source,
            "targetNodeId": self.target,
            "targetSocketId": self.socket,
        }


@dataclass(frozen=True)
class Graph:
    """A node/connection dataflow definition (component or script).

    Graph is a pure structure definition. Lookups used by the evaluator
    (node by id, source feeding a socket) are indexed once per instance;
    when several nodes share an id, or several connections feed the same
    socket, the first one in list order wins.

    Attributes:
        nodes: Nodes in authoring order
        connections: Connections in authoring order
        id: Library id, if the graph is a shared component or script
        name: Display name

    Example:
        >>> g = Graph.from_dict({
        ...     "nodes": [{"id": "t", "type": "TEXT", "data": {"value": "hi"}},
        ...               {"id": "out", "type": "OUTPUT"}],
        ...     "connections": [{"sourceNodeId": "t", "targetNodeId": "out",
        ...                      "targetSocketId": "in-content"}],
        ... })
        >>> g.source_of("out", "in-content")
        't'
    """

    nodes: tuple[Node, ...] = ()
    connections: tuple[Connection, ...] = ()
    id: str | None = None
    name: str | None = None

    @functools.cached_property
    def _node_index(self) -> dict[str, Node]:
        index: dict[str, Node] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index

    @functools.cached_property
    def _socket_index(self) -> dict[tuple[str, str], str]:
        index: dict[tuple[str, str], str] = {}
        for conn in self.connections:
            index.setdefault((conn.target, conn.socket), conn.source)
        return index

    def node(self, node_id: str) -> Node | None:
        """Return the node with this id, or None for a dangling reference."""
        return self._node_index.get(node_id)

    def source_of(self, node_id: str, socket: str) -> str | None:
        """Return the id of the node feeding ``socket`` on ``node_id``, if wired."""
        return self._socket_index.get((node_id, socket))

    def is_wired(self, node_id: str, socket: str) -> bool:
        """True if some connection targets this socket."""
        return (node_id, socket) in self._socket_index

    @property
    def output_node(self) -> Node | None:
        """The first OUTPUT node, or None."""
        return next((n for n in self.nodes if n.type == OUTPUT), None)

    @property
    def action_nodes(self) -> tuple[Node, ...]:
        """Side-effecting nodes, in authoring order."""
        return tuple(n for n in self.nodes if n.type in ACTION_KINDS)

    @functools.cached_property
    def nx_graph(self) -> nx.DiGraph:
        """Structural view as a NetworkX DiGraph.

        Edges carry a ``sockets`` list of the target sockets they feed.
        Connections whose endpoints are missing are left out.
        """
        g = nx.DiGraph()
        for node in self.nodes:
            if node.id not in g:
                g.add_node(node.id, type=node.type)
        for conn in self.connections:
            if conn.source not in g or conn.target not in g:
                continue
            if g.has_edge(conn.source, conn.target):
                g.edges[conn.source, conn.target]["sockets"].append(conn.socket)
            else:
                g.add_edge(conn.source, conn.target, sockets=[conn.socket])
        return g

    @classmethod
    def from_dict(cls, raw: Any, path: str = "graph") -> Graph:
        """Build a graph from the editor's ``{nodes, connections}`` schema."""
        if not isinstance(raw, dict):
            raise SnapshotError(path, f"expected an object, got {type(raw).__name__}")
        raw_nodes = raw.get("nodes", [])
        raw_conns = raw.get("connections", [])
        if not isinstance(raw_nodes, list):
            raise SnapshotError(f"{path}.nodes", "nodes must be a list")
        if not isinstance(raw_conns, list):
            raise SnapshotError(f"{path}.connections", "connections must be a list")
        return cls(
            nodes=tuple(
                Node.from_dict(n, f"{path}.nodes[{i}]") for i, n in enumerate(raw_nodes)
            ),
            connections=tuple(
                Connection.from_dict(c, f"{path}.connections[{i}]")
                for i, c in enumerate(raw_conns)
            ),
            id=raw.get("id"),
            name=raw.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "nodes": [n.to_dict() for n in self.nodes],
            "connections": [c.to_dict() for c in self.connections],
        }
        if self.id is not None:
            result["id"] = self.id
        if self.name is not None:
            result["name"] = self.name
        return result


def build_graph(
    nodes: Iterable[Node | tuple[str, str] | tuple[str, str, Any]],
    connections: Iterable[Connection | tuple[str, str, str]] = (),
    **kwargs: Any,
) -> Graph:
    """Convenience constructor accepting tuples.

    Nodes are ``(id, type)`` or ``(id, type, value)``; connections are
    ``(source, target, socket)``.

    Example:
        >>> g = build_graph([("n", "NUMBER", 2), ("neg", "NEGATE")],
        ...                 [("n", "neg", "in-a")])
        >>> g.node("n").value
        2
    """
    built_nodes = []
    for item in nodes:
        if isinstance(item, Node):
            built_nodes.append(item)
            continue
        node_id, node_type, *rest = item
        data: Mapping[str, Any] = {"value": rest[0]} if rest else {}
        built_nodes.append(Node(node_id, canonical_type(node_type), dict(data)))
    built_conns = [c if isinstance(c, Connection) else Connection(*c) for c in connections]
    return Graph(nodes=tuple(built_nodes), connections=tuple(built_conns), **kwargs)
