"""Trigger/action dispatch.

Action nodes (NAVIGATE, LINK, ALERT) fire on the rising edge of their
trigger input. The last observed trigger value per node lives in a
caller-owned mapping, so the edge is detected across evaluation calls:
a trigger that stays ``True`` fires exactly once.

Fired actions become events. Navigate and link events go straight to the
registered processors; alert events wait in a queue until ``flush()``,
which callers run after the synchronous evaluation pass.
"""

from __future__ import annotations

import dataclasses
import logging
import webbrowser
from collections.abc import MutableMapping
from typing import Any, TYPE_CHECKING

from stylegraph.events.dispatcher import EventDispatcher
from stylegraph.events.processor import EventProcessor, TypedEventProcessor
from stylegraph.events.types import ActionEvent, AlertEvent

if TYPE_CHECKING:
    from stylegraph.events.types import LinkEvent

logger = logging.getLogger(__name__)

TriggerState = MutableMapping[str, Any]


def rising_edge(trigger_state: TriggerState, node_id: str, value: Any) -> bool:
    """Record ``value`` for ``node_id`` and report a false -> true transition.

    The recorded value is updated whether or not the action fires.

    Examples:
        >>> state = {}
        >>> [rising_edge(state, "n", v) for v in (False, True, True, False, True)]
        [False, True, False, False, True]
    """
    previous = trigger_state.get(node_id)
    trigger_state[node_id] = value
    return value is True and previous is not True


class ActionDispatcher:
    """Delivers fired action events to processors.

    Args:
        processors: Event processors receiving action events
        strict: Propagate processor failures instead of logging them

    Example:
        >>> recorder = ActionRecorder()
        >>> actions = ActionDispatcher([recorder])
        >>> actions.emit(AlertEvent(node_id="a", message="hi"))
        >>> recorder.events
        []
        >>> actions.flush()
        1
        >>> recorder.events[0].message
        'hi'
    """

    def __init__(
        self,
        processors: list[EventProcessor] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._events = EventDispatcher(processors, strict=strict)
        self._pending: list[AlertEvent] = []
        self._element_id: str | None = None

    @property
    def events(self) -> EventDispatcher:
        """Underlying event dispatcher (shared by scoped views)."""
        return self._events

    @property
    def pending(self) -> int:
        """Number of alerts waiting for ``flush()``."""
        return len(self._pending)

    def scoped(self, element_id: str) -> ActionDispatcher:
        """View that stamps ``element_id`` on events and shares the queue."""
        view = ActionDispatcher.__new__(ActionDispatcher)
        view._events = self._events
        view._pending = self._pending
        view._element_id = element_id
        return view

    def emit(self, event: ActionEvent) -> None:
        """Deliver a fired action (alerts are queued until ``flush()``)."""
        if self._element_id is not None and event.element_id is None:
            event = dataclasses.replace(event, element_id=self._element_id)
        logger.debug("Action %s fired by node %s (%s)", event.kind, event.node_id, event.payload())
        if isinstance(event, AlertEvent):
            self._pending.append(event)
            return
        self._events.emit(event)

    def flush(self) -> int:
        """Deliver queued alerts. Returns how many were delivered."""
        pending = list(self._pending)
        self._pending.clear()
        for event in pending:
            self._events.emit(event)
        return len(pending)


class ActionRecorder(EventProcessor):
    """Collects every event it receives (tests, CLI preview)."""

    def __init__(self) -> None:
        self.events: list[Any] = []

    def on_event(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, cls: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, cls)]

    def clear(self) -> None:
        self.events.clear()


class BrowserProcessor(TypedEventProcessor):
    """Opens LINK urls in the system browser.

    ``new_tab`` maps to ``webbrowser.open(url, new=2)``; otherwise the
    url is opened reusing the current window where the browser allows it.
    """

    def __init__(self, opener: Any = None) -> None:
        self._open = opener or webbrowser.open

    def on_link(self, event: LinkEvent) -> None:
        self._open(event.url, new=2 if event.new_tab else 0)
