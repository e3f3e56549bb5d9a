"""Closed catalog of built-in node kinds.

Node kinds are plain strings on the wire. This module names them, groups
them by category and lists the input sockets each kind reads, so that
validation, inspection and the embedded runtime can all agree on one
catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeCategory(Enum):
    """Category of a node kind (used by inspection and validation)."""

    LITERAL = "literal"
    COMPARISON = "comparison"
    BOOLEAN = "boolean"
    ARITHMETIC = "arithmetic"
    TRIG = "trig"
    STRING = "string"
    CONTEXT = "context"
    CONTROL = "control"
    STYLE = "style"
    ACTION = "action"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class NodeKind:
    """A built-in node kind.

    Attributes:
        name: Wire name of the kind (e.g. ``"GREATER_THAN"``)
        category: Category the kind belongs to
        sockets: Input socket ids the kind reads
    """

    name: str
    category: NodeCategory
    sockets: tuple[str, ...] = ()


_AB = ("in-a", "in-b")
_A = ("in-a",)

_KINDS = [
    # Literals
    NodeKind("TEXT", NodeCategory.LITERAL),
    NodeKind("COLOR", NodeCategory.LITERAL),
    NodeKind("NUMBER", NodeCategory.LITERAL),
    NodeKind("TOGGLE", NodeCategory.LITERAL),
    # Comparison
    NodeKind("EQUAL", NodeCategory.COMPARISON, _AB),
    NodeKind("NOT_EQUAL", NodeCategory.COMPARISON, _AB),
    NodeKind("GREATER_THAN", NodeCategory.COMPARISON, _AB),
    NodeKind("LESS_THAN", NodeCategory.COMPARISON, _AB),
    NodeKind("GREATER_EQUAL", NodeCategory.COMPARISON, _AB),
    NodeKind("LESS_EQUAL", NodeCategory.COMPARISON, _AB),
    # Boolean
    NodeKind("AND", NodeCategory.BOOLEAN, _AB),
    NodeKind("OR", NodeCategory.BOOLEAN, _AB),
    NodeKind("NOT", NodeCategory.BOOLEAN, _A),
    # Arithmetic
    NodeKind("ADD", NodeCategory.ARITHMETIC, _AB),
    NodeKind("SUBTRACT", NodeCategory.ARITHMETIC, _AB),
    NodeKind("MULTIPLY", NodeCategory.ARITHMETIC, _AB),
    NodeKind("DIVIDE", NodeCategory.ARITHMETIC, _AB),
    NodeKind("MODULO", NodeCategory.ARITHMETIC, _AB),
    NodeKind("POWER", NodeCategory.ARITHMETIC, _AB),
    NodeKind("NEGATE", NodeCategory.ARITHMETIC, _A),
    NodeKind("ABS", NodeCategory.ARITHMETIC, _A),
    NodeKind("ROUND", NodeCategory.ARITHMETIC, _A),
    NodeKind("FLOOR", NodeCategory.ARITHMETIC, _A),
    NodeKind("CEIL", NodeCategory.ARITHMETIC, _A),
    NodeKind("MIN", NodeCategory.ARITHMETIC, _AB),
    NodeKind("MAX", NodeCategory.ARITHMETIC, _AB),
    NodeKind("CLAMP", NodeCategory.ARITHMETIC, ("in-value", "in-min", "in-max")),
    NodeKind(
        "MAP_RANGE",
        NodeCategory.ARITHMETIC,
        ("in-value", "in-in-min", "in-in-max", "in-out-min", "in-out-max"),
    ),
    NodeKind("RANDOM", NodeCategory.ARITHMETIC),
    # Trig
    NodeKind("SIN", NodeCategory.TRIG, _A),
    NodeKind("COS", NodeCategory.TRIG, _A),
    # String
    NodeKind("CONCAT", NodeCategory.STRING, _AB),
    # Context readers
    NodeKind("INTERACTION_HOVER", NodeCategory.CONTEXT),
    NodeKind("INTERACTION_CLICK", NodeCategory.CONTEXT),
    NodeKind("TIMER", NodeCategory.CONTEXT, ("in-speed",)),
    # Control
    NodeKind("IF_ELSE", NodeCategory.CONTROL, ("in-condition", "in-true", "in-false")),
    # Style producers
    NodeKind("STYLE", NodeCategory.STYLE, ("in-bg", "in-text", "in-size")),
    NodeKind("ANIMATION", NodeCategory.STYLE, ("in-trigger", "in-duration", "in-delay")),
    NodeKind("TRANSITION", NodeCategory.STYLE, ("in-duration", "in-delay")),
    NodeKind("MERGE", NodeCategory.STYLE, ("in-style-a", "in-style-b")),
    # Trigger/actions
    NodeKind("NAVIGATE", NodeCategory.ACTION, ("in-trigger",)),
    NodeKind("LINK", NodeCategory.ACTION, ("in-trigger", "in-url", "in-new-tab")),
    NodeKind("ALERT", NodeCategory.ACTION, ("in-trigger", "in-message")),
    # Terminal
    NodeKind("OUTPUT", NodeCategory.TERMINAL, ("in-style", "in-content")),
]

NODE_KINDS: dict[str, NodeKind] = {kind.name: kind for kind in _KINDS}

# Short names accepted on load and normalized to the wire name.
ALIASES: dict[str, str] = {
    "GT": "GREATER_THAN",
    "LT": "LESS_THAN",
    "GTE": "GREATER_EQUAL",
    "LTE": "LESS_EQUAL",
    "SUB": "SUBTRACT",
    "MUL": "MULTIPLY",
    "HOVER": "INTERACTION_HOVER",
    "CLICK": "INTERACTION_CLICK",
}

OUTPUT = "OUTPUT"
ACTION_KINDS = frozenset({"NAVIGATE", "LINK", "ALERT"})
LITERAL_KINDS = frozenset({"TEXT", "COLOR", "NUMBER", "TOGGLE"})

# Animation kinds that loop forever; every other kind plays once.
LOOPING_ANIMATIONS = frozenset({"spin", "pulse", "shake", "bounce"})


def canonical_type(node_type: str) -> str:
    """Resolve an alias to its wire name; unknown names pass through.

    Examples:
        >>> canonical_type("GT")
        'GREATER_THAN'
        >>> canonical_type("ADD")
        'ADD'
    """
    return ALIASES.get(node_type, node_type)


def is_known(node_type: str) -> bool:
    """True if the (canonical) type is part of the built-in catalog."""
    return canonical_type(node_type) in NODE_KINDS
