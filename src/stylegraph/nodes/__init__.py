"""Built-in node kinds."""

from stylegraph.nodes.catalog import (
    ACTION_KINDS,
    ALIASES,
    LITERAL_KINDS,
    LOOPING_ANIMATIONS,
    NODE_KINDS,
    OUTPUT,
    NodeCategory,
    NodeKind,
    canonical_type,
    is_known,
)

__all__ = [
    "ACTION_KINDS",
    "ALIASES",
    "LITERAL_KINDS",
    "LOOPING_ANIMATIONS",
    "NODE_KINDS",
    "OUTPUT",
    "NodeCategory",
    "NodeKind",
    "canonical_type",
    "is_known",
]
