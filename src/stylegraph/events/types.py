"""Event types emitted by action nodes and the runtime loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


def _now() -> float:
    """Current timestamp."""
    return time.time()


@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events.

    Attributes:
        timestamp: Unix timestamp when the event was created.
    """

    timestamp: float = field(default_factory=_now, compare=False)


@dataclass(frozen=True)
class ActionEvent(BaseEvent):
    """Base class for events fired by trigger/action nodes.

    Attributes:
        node_id: Id of the action node that fired.
        graph_id: Library id of the graph containing the node, if any.
        element_id: Element whose evaluation fired the action, if known.
    """

    node_id: str = ""
    graph_id: str | None = None
    element_id: str | None = None

    @property
    def kind(self) -> str:
        """Node kind that produced the event (``NAVIGATE``, ``LINK``, ``ALERT``)."""
        return _KIND_BY_CLASS.get(type(self).__name__, "")

    def payload(self) -> dict[str, Any]:
        """Event-specific fields, for display and JSON output."""
        return {}


@dataclass(frozen=True)
class NavigateEvent(ActionEvent):
    """NAVIGATE fired: switch the active page.

    Attributes:
        page_id: Target page id.
    """

    page_id: str = ""

    def payload(self) -> dict[str, Any]:
        return {"page_id": self.page_id}


@dataclass(frozen=True)
class LinkEvent(ActionEvent):
    """LINK fired: open a URL.

    Attributes:
        url: URL to open.
        new_tab: Open in a new browsing context instead of the current one.
    """

    url: str = ""
    new_tab: bool = False

    def payload(self) -> dict[str, Any]:
        return {"url": self.url, "new_tab": self.new_tab}


@dataclass(frozen=True)
class AlertEvent(ActionEvent):
    """ALERT fired: surface a message to the user.

    Delivered after the synchronous evaluation pass, never during it.

    Attributes:
        message: Message text.
    """

    message: str = ""

    def payload(self) -> dict[str, Any]:
        return {"message": self.message}


@dataclass(frozen=True)
class PageChangedEvent(BaseEvent):
    """Emitted by the runtime loop after the active page changes.

    Attributes:
        previous_page_id: Page that was active before.
        page_id: Page that is active now.
    """

    previous_page_id: str | None = None
    page_id: str = ""


_KIND_BY_CLASS = {
    "NavigateEvent": "NAVIGATE",
    "LinkEvent": "LINK",
    "AlertEvent": "ALERT",
}


Event = NavigateEvent | LinkEvent | AlertEvent | PageChangedEvent
