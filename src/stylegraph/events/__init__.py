"""Event system for observing fired actions and page changes."""

from stylegraph.events.dispatcher import EventDispatcher
from stylegraph.events.processor import EventProcessor, TypedEventProcessor
from stylegraph.events.types import (
    ActionEvent,
    AlertEvent,
    BaseEvent,
    Event,
    LinkEvent,
    NavigateEvent,
    PageChangedEvent,
)

__all__ = [
    # Event types
    "ActionEvent",
    "AlertEvent",
    "BaseEvent",
    "Event",
    "LinkEvent",
    "NavigateEvent",
    "PageChangedEvent",
    # Processor interfaces
    "EventProcessor",
    "TypedEventProcessor",
    # Dispatcher
    "EventDispatcher",
]
