"""Value types passed into and out of an evaluation call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EvaluationContext:
    """Per-call environment visible to context-reading nodes.

    Attributes:
        is_hovered: Pointer is over the element
        is_clicked: Element's click toggle is on
        time: Elapsed seconds since the runtime started
    """

    is_hovered: bool = False
    is_clicked: bool = False
    time: float = 0.0


@dataclass
class EvaluationResult:
    """Final style/content of one graph evaluation.

    Attributes:
        style: Style object from the OUTPUT node's style socket ({} if unwired)
        content: Content string, or None when the content socket is unwired
    """

    style: dict[str, Any] = field(default_factory=dict)
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"style": dict(self.style), "content": self.content}
