"""Frame-paced runtime loop driving composition against a live document."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TYPE_CHECKING

from stylegraph.actions import ActionDispatcher
from stylegraph.composition import compose
from stylegraph.evaluator.coercion import format_number, is_number, truthy
from stylegraph.events.processor import TypedEventProcessor
from stylegraph.events.types import PageChangedEvent
from stylegraph.project import TEXT_ELEMENT_TYPES
from stylegraph.runtime.state import RuntimeState

if TYPE_CHECKING:
    from stylegraph.composition import Composition
    from stylegraph.events.processor import EventProcessor
    from stylegraph.events.types import NavigateEvent
    from stylegraph.project import Element, Project
    from stylegraph.runtime.document import LiveDocument, LiveElement

logger = logging.getLogger(__name__)

# Style keys copied from computed style to the live element on every tick.
SIMPLE_STYLE_KEYS = ("backgroundColor", "color", "fontSize", "transform", "opacity", "transition")


class _NavigationRequests(TypedEventProcessor):
    """Routes NAVIGATE events back into the owning loop."""

    def __init__(self, loop: RuntimeLoop) -> None:
        self._loop = loop

    def on_navigate(self, event: NavigateEvent) -> None:
        self._loop.request_navigation(event.page_id)


class RuntimeLoop:
    """Re-evaluates every element of the active page once per tick.

    Each tick builds a context per element from live hover/click state and
    elapsed time, composes the element and diff-applies the result:

    - content is written only when it differs from the displayed text
    - simple style keys are written whenever the graphs produce them
    - the animation descriptor is tracked per element; an unchanged value
      is left alone, a changed one is cleared, reflowed and re-applied so
      the animation restarts from its beginning

    Elements on inactive pages are neither evaluated nor able to fire
    actions. Alerts are delivered after the pass and a NAVIGATE fired
    during the pass takes effect at the end of the tick.

    Args:
        project: Project to run
        document: Live document to write into
        processors: Extra processors receiving action and page events
        clock: Monotonic seconds source
        sleep: Used by ``run`` to wait for the next frame
        rng: Source for RANDOM nodes
        strict: Propagate processor failures instead of logging them

    Example:
        >>> from stylegraph.project import Project
        >>> from stylegraph.runtime.document import InMemoryDocument
        >>> project = Project()
        >>> loop = RuntimeLoop(project, InMemoryDocument.from_project(project))
        >>> loop.tick()
        >>> loop.frame
        1
    """

    def __init__(
        self,
        project: Project,
        document: LiveDocument,
        *,
        processors: list[EventProcessor] | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = time.sleep,
        rng: Callable[[], float] | None = None,
        strict: bool = False,
    ) -> None:
        self.project = project
        self.document = document
        self.state = RuntimeState(active_page_id=project.first_page_id)
        self.actions = ActionDispatcher(
            [_NavigationRequests(self), *(processors or [])],
            strict=strict,
        )
        self.frame = 0
        self._clock = clock
        self._sleep = sleep
        self._rng = rng
        self._start: float | None = None
        self._pending_page: str | None = None
        self._running = False
        self._closed = False

    # === Lifecycle ===

    def mount(self) -> None:
        """Fix the start instant and adopt inline animations already playing."""
        self._start = self._clock()
        for element in self.project.elements:
            live = self.document.element(element.id)
            if live is None:
                continue
            animation = live.style.get("animation")
            if animation and animation != "none" and str(animation).strip():
                self.state.animations[element.id] = animation

    def run(self, frames: int | None = None, fps: float = 60) -> int:
        """Tick once per frame until ``stop()`` (or ``frames`` ticks).

        Returns:
            Number of ticks performed
        """
        interval = 1.0 / fps
        count = 0
        self._running = True
        try:
            while self._running and (frames is None or count < frames):
                started = self._clock()
                self.tick()
                count += 1
                remaining = interval - (self._clock() - started)
                if remaining > 0:
                    self._sleep(remaining)
        finally:
            self._running = False
        return count

    def stop(self) -> None:
        """Ask ``run`` to return after the current tick."""
        self._running = False

    def close(self) -> None:
        """Stop running and shut the event processors down.

        ``run`` may be called any number of times before ``close``; calling
        ``close`` again does nothing.
        """
        self._running = False
        if self._closed:
            return
        self._closed = True
        self.actions.events.shutdown()

    # === Pointer input ===

    def pointer_enter(self, element_id: str) -> None:
        self.state.hovers[element_id] = True

    def pointer_leave(self, element_id: str) -> None:
        self.state.hovers[element_id] = False

    def click(self, element_id: str) -> None:
        """Toggle the element's click state."""
        self.state.clicks[element_id] = not self.state.clicks.get(element_id, False)

    # === Ticking ===

    def tick(self) -> None:
        """Run one evaluate-and-apply pass over the active page."""
        if self._start is None:
            self.mount()
        self.state.time = self._clock() - self._start

        for element in self.project.elements_on(self.state.active_page_id):
            live = self.document.element(element.id)
            if live is None or not live.mounted:
                continue
            composition = compose(
                element,
                self.project,
                self.state.context_for(element.id),
                trigger_state=self.state.triggers_for(element.id),
                actions=self.actions,
                rng=self._rng,
            )
            if not composition.dynamic:
                continue
            self._apply(element, live, composition)

        self.actions.flush()
        self.frame += 1

        if self._pending_page is not None:
            target, self._pending_page = self._pending_page, None
            self.navigate_to(target)

    def _apply(self, element: Element, live: LiveElement, composition: Composition) -> None:
        if composition.computed_content is not None and element.type in TEXT_ELEMENT_TYPES:
            if live.text != composition.content:
                live.text = composition.content

        computed = composition.computed_style
        for key in SIMPLE_STYLE_KEYS:
            if key not in computed:
                continue
            value = computed[key]
            if key == "fontSize" and is_number(value):
                value = f"{format_number(float(value))}px"
            live.style[key] = value

        if "animation" in computed:
            self._apply_animation(element.id, live, computed["animation"])

    def _apply_animation(self, element_id: str, live: LiveElement, desired: Any) -> None:
        if self.state.animations.get(element_id) == desired:
            return
        self.state.animations[element_id] = desired
        if not truthy(desired) or desired == "none":
            live.style["animation"] = "none"
            return
        live.style["animation"] = "none"
        live.reflow()
        live.style["animation"] = desired

    # === Navigation ===

    def request_navigation(self, page_id: str) -> None:
        """Navigate at the end of the current tick (used by NAVIGATE actions)."""
        self._pending_page = page_id

    def navigate_to(self, page_id: str) -> None:
        """Switch the active page now.

        Elements leaving the page lose hover, click, trigger and animation
        state. Elements of the new page carrying an inline animation get a
        reflow-restart so they replay from the start.
        """
        previous = self.state.active_page_id
        if previous == page_id:
            return

        for element in self.project.elements_on(previous):
            self.state.forget(element.id)

        if previous is not None:
            self.document.hide_page(previous)
        self.document.show_page(page_id)
        self.state.active_page_id = page_id
        logger.debug("Navigated from page %s to %s", previous, page_id)

        for element in self.project.elements_on(page_id):
            live = self.document.element(element.id)
            if live is None:
                continue
            animation = live.style.get("animation")
            if animation and animation != "none":
                live.style["animation"] = "none"
                live.reflow()
                live.style["animation"] = animation
                self.state.animations[element.id] = animation

        self.actions.events.emit(PageChangedEvent(previous_page_id=previous, page_id=page_id))
