"""Live document interface the runtime loop writes into.

A host (browser bridge, GUI toolkit, test harness) exposes its elements
through ``LiveDocument``. ``InMemoryDocument`` is the headless host used
by the CLI preview and the tests; it counts writes and reflows so the
diff-before-write behaviour is observable.
"""

from __future__ import annotations

from typing import Any, Protocol, TYPE_CHECKING

from stylegraph.composition import compose

if TYPE_CHECKING:
    from stylegraph.project import Project


class LiveElement(Protocol):
    """One rendered element."""

    text: str
    style: dict[str, Any]
    mounted: bool

    def reflow(self) -> None:
        """Force a synchronous layout read (restarts a cleared animation)."""
        ...


class LiveDocument(Protocol):
    """The rendered project."""

    def element(self, element_id: str) -> LiveElement | None: ...

    def show_page(self, page_id: str) -> None: ...

    def hide_page(self, page_id: str) -> None: ...


class InMemoryElement:
    """Headless element recording how often it was written and reflowed."""

    def __init__(self, element_id: str, text: str = "", style: dict[str, Any] | None = None) -> None:
        self.id = element_id
        self._text = text
        self.style: dict[str, Any] = dict(style or {})
        self.mounted = True
        self.text_writes = 0
        self.reflows = 0

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self.text_writes += 1
        self._text = value

    def reflow(self) -> None:
        self.reflows += 1

    def __repr__(self) -> str:
        return f"InMemoryElement({self.id!r}, text={self._text!r})"


class InMemoryDocument:
    """Headless document holding one InMemoryElement per project element."""

    def __init__(self, elements: dict[str, InMemoryElement] | None = None, visible_page: str | None = None) -> None:
        self.elements: dict[str, InMemoryElement] = dict(elements or {})
        self.visible_pages: set[str] = {visible_page} if visible_page else set()

    @classmethod
    def from_project(cls, project: Project) -> InMemoryDocument:
        """Render the initial state, as the exported document's markup would.

        Each element starts with its context-free composition: text is the
        effective content and the inline style carries the effective style
        (including any static animation).
        """
        elements = {}
        for element in project.elements:
            composition = compose(element, project)
            elements[element.id] = InMemoryElement(element.id, composition.content, composition.style)
        return cls(elements, project.first_page_id)

    def element(self, element_id: str) -> InMemoryElement | None:
        return self.elements.get(element_id)

    def show_page(self, page_id: str) -> None:
        self.visible_pages.add(page_id)

    def hide_page(self, page_id: str) -> None:
        self.visible_pages.discard(page_id)
