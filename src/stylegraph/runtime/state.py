"""Mutable state owned by one runtime loop instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stylegraph.evaluator.types import EvaluationContext


@dataclass
class RuntimeState:
    """Per-session state store, keyed by element id.

    Everything the runtime mutates between ticks lives here, so two loops
    (two previews, two exported documents) never share state.

    Attributes:
        active_page_id: Page currently shown
        time: Seconds since the loop started
        hovers: Element id -> pointer is over the element
        clicks: Element id -> click toggle
        triggers: Element id -> (action node id -> last trigger value)
        animations: Element id -> animation descriptor currently applied
    """

    active_page_id: str | None = None
    time: float = 0.0
    hovers: dict[str, bool] = field(default_factory=dict)
    clicks: dict[str, bool] = field(default_factory=dict)
    triggers: dict[str, dict[str, Any]] = field(default_factory=dict)
    animations: dict[str, str] = field(default_factory=dict)

    def context_for(self, element_id: str) -> EvaluationContext:
        return EvaluationContext(
            is_hovered=bool(self.hovers.get(element_id)),
            is_clicked=bool(self.clicks.get(element_id)),
            time=self.time,
        )

    def triggers_for(self, element_id: str) -> dict[str, Any]:
        """Trigger state of one element (created on first use)."""
        return self.triggers.setdefault(element_id, {})

    def forget(self, element_id: str) -> None:
        """Reset an element leaving the active page.

        Hover and click go back to False, trigger history and the tracked
        animation are dropped so returning to the page starts clean.
        """
        self.hovers[element_id] = False
        self.clicks[element_id] = False
        self.triggers.pop(element_id, None)
        self.animations.pop(element_id, None)
