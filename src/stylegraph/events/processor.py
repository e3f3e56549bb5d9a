"""Event processor base classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stylegraph.events.types import (
        AlertEvent,
        Event,
        LinkEvent,
        NavigateEvent,
        PageChangedEvent,
    )


# Mapping from event class name to handler method name.
_EVENT_METHOD_MAP: dict[str, str] = {
    "NavigateEvent": "on_navigate",
    "LinkEvent": "on_link",
    "AlertEvent": "on_alert",
    "PageChangedEvent": "on_page_changed",
}


class EventProcessor:
    """Base class for event consumers.

    Subclass and override ``on_event`` to receive all events,
    or use ``TypedEventProcessor`` for per-type dispatch.
    """

    def on_event(self, event: Event) -> None:
        """Called for every event. Override in subclasses."""

    def shutdown(self) -> None:
        """Called once when the runtime stops. Override to flush buffers."""


class TypedEventProcessor(EventProcessor):
    """Dispatches ``on_event`` to typed handler methods automatically.

    Override any of the ``on_*`` methods below to handle specific event types.
    Unhandled event types are silently ignored.
    """

    def on_event(self, event: Event) -> None:
        method_name = _EVENT_METHOD_MAP.get(type(event).__name__)
        if method_name is not None:
            method = getattr(self, method_name, None)
            if method is not None:
                method(event)

    def on_navigate(self, event: NavigateEvent) -> None: ...
    def on_link(self, event: LinkEvent) -> None: ...
    def on_alert(self, event: AlertEvent) -> None: ...
    def on_page_changed(self, event: PageChangedEvent) -> None: ...
