"""Runtime loop and the live document it drives."""

from stylegraph.runtime.document import (
    InMemoryDocument,
    InMemoryElement,
    LiveDocument,
    LiveElement,
)
from stylegraph.runtime.loop import SIMPLE_STYLE_KEYS, RuntimeLoop
from stylegraph.runtime.state import RuntimeState

__all__ = [
    "InMemoryDocument",
    "InMemoryElement",
    "LiveDocument",
    "LiveElement",
    "RuntimeLoop",
    "RuntimeState",
    "SIMPLE_STYLE_KEYS",
]
