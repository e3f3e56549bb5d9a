"""Project snapshot: elements, pages and the component/script libraries.

This is the editor's JSON snapshot as typed, read-only values. Loading is
the only place a malformed snapshot is fatal (SnapshotError); everything
downstream treats the model as trusted.
"""

from __future__ import annotations

import functools
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from stylegraph.exceptions import SnapshotError
from stylegraph.graph.core import Graph


class ElementType:
    """Element kinds known to the renderer and runtime loop."""

    BUTTON = "BUTTON"
    BADGE = "BADGE"
    HEADING = "HEADING"
    PARAGRAPH = "PARAGRAPH"
    CARD = "CARD"
    INPUT = "INPUT"
    IMAGE_PLACEHOLDER = "IMAGE_PLACEHOLDER"
    VIDEO_PLACEHOLDER = "VIDEO_PLACEHOLDER"
    AVATAR = "AVATAR"
    DIVIDER = "DIVIDER"
    CONTAINER = "CONTAINER"
    CUSTOM = "CUSTOM"


# Kinds whose displayed text the runtime loop rewrites from computed content.
TEXT_ELEMENT_TYPES = frozenset(
    {
        ElementType.BUTTON,
        ElementType.HEADING,
        ElementType.PARAGRAPH,
        ElementType.BADGE,
        ElementType.CUSTOM,
    }
)


def _require(raw: dict[str, Any], key: str, kind: type | tuple[type, ...], path: str) -> Any:
    value = raw.get(key)
    if not isinstance(value, kind) or isinstance(value, bool) and kind is not bool:
        expected = kind.__name__ if isinstance(kind, type) else " or ".join(k.__name__ for k in kind)
        raise SnapshotError(f"{path}.{key}", f"expected {expected}, got {type(value).__name__}")
    return value


def _optional(raw: dict[str, Any], key: str, kind: type | tuple[type, ...], path: str) -> Any:
    if raw.get(key) is None:
        return None
    return _require(raw, key, kind, path)


_NUMBER = (int, float)


@dataclass(frozen=True)
class Page:
    """A page of the project; exactly one page is active at a time."""

    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, raw: Any, path: str = "page") -> Page:
        if not isinstance(raw, dict):
            raise SnapshotError(path, f"expected an object, got {type(raw).__name__}")
        return cls(id=_require(raw, "id", str, path), name=raw.get("name") or "")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Element:
    """A placed element: geometry, static appearance and graph bindings.

    Attributes:
        id: Element id
        type: Element kind (see ElementType)
        page_id: Page the element belongs to
        parent_id: Containing element, or None for page-level elements
        x, y, width, height: Geometry in canvas pixels, relative to the parent
        style: Static style object
        content: Static content
        custom_component_id: Shared component graph (CUSTOM elements)
        custom_node_group: Inline graph owned by the element
        is_detached: Use ``custom_node_group`` instead of the shared component
        scripts: Attached script ids, in evaluation order
        prop_overrides: Node id -> literal overrides for every graph of the element
        src, alt, video_options: Media attributes
    """

    id: str
    type: str
    page_id: str | None = None
    parent_id: str | None = None
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    style: dict[str, Any] = field(default_factory=dict, hash=False)
    content: str | None = None
    custom_component_id: str | None = None
    custom_node_group: Graph | None = None
    is_detached: bool = False
    scripts: tuple[str, ...] = ()
    prop_overrides: dict[str, Any] = field(default_factory=dict, hash=False)
    src: str | None = None
    alt: str | None = None
    video_options: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_custom(self) -> bool:
        return self.type == ElementType.CUSTOM

    @property
    def has_graphs(self) -> bool:
        """True if the element references a component or any scripts."""
        return self.is_custom or bool(self.scripts)

    @classmethod
    def from_dict(cls, raw: Any, path: str = "element") -> Element:
        if not isinstance(raw, dict):
            raise SnapshotError(path, f"expected an object, got {type(raw).__name__}")
        scripts = raw.get("scripts") or []
        if not isinstance(scripts, list) or not all(isinstance(s, str) for s in scripts):
            raise SnapshotError(f"{path}.scripts", "scripts must be a list of ids")
        group = raw.get("customNodeGroup")
        style = raw.get("style") or {}
        if not isinstance(style, dict):
            raise SnapshotError(f"{path}.style", "style must be an object")
        overrides = raw.get("propOverrides") or {}
        if not isinstance(overrides, dict):
            raise SnapshotError(f"{path}.propOverrides", "propOverrides must be an object")
        content = raw.get("content")
        return cls(
            id=_require(raw, "id", str, path),
            type=_require(raw, "type", str, path),
            page_id=_optional(raw, "pageId", str, path),
            parent_id=_optional(raw, "parentId", str, path),
            x=_optional(raw, "x", _NUMBER, path) or 0,
            y=_optional(raw, "y", _NUMBER, path) or 0,
            width=_optional(raw, "width", _NUMBER, path) or 0,
            height=_optional(raw, "height", _NUMBER, path) or 0,
            style=dict(style),
            content=None if content is None else str(content),
            custom_component_id=_optional(raw, "customComponentId", str, path),
            custom_node_group=(
                Graph.from_dict(group, f"{path}.customNodeGroup") if group is not None else None
            ),
            is_detached=bool(raw.get("isDetached")),
            scripts=tuple(scripts),
            prop_overrides=dict(overrides),
            src=_optional(raw, "src", str, path),
            alt=_optional(raw, "alt", str, path),
            video_options=dict(raw.get("videoOptions") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "pageId": self.page_id,
            "parentId": self.parent_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "style": dict(self.style),
            "content": self.content,
            "scripts": list(self.scripts),
            "propOverrides": dict(self.prop_overrides),
            "isDetached": self.is_detached,
        }
        if self.custom_component_id is not None:
            result["customComponentId"] = self.custom_component_id
        if self.custom_node_group is not None:
            result["customNodeGroup"] = self.custom_node_group.to_dict()
        if self.src is not None:
            result["src"] = self.src
        if self.alt is not None:
            result["alt"] = self.alt
        if self.video_options:
            result["videoOptions"] = dict(self.video_options)
        return result


@dataclass(frozen=True)
class Project:
    """Everything the evaluator, runtime loop and exporter need.

    Attributes:
        elements: Elements in authoring order
        pages: Pages in order; the first one is shown initially
        width, height: Canvas size in pixels (the scale basis for export)
        components: Shared component graphs, looked up by id
        scripts: Script graphs, looked up by id
    """

    elements: tuple[Element, ...] = ()
    pages: tuple[Page, ...] = ()
    width: float = 1440
    height: float = 900
    components: tuple[Graph, ...] = ()
    scripts: tuple[Graph, ...] = ()

    @functools.cached_property
    def _components(self) -> dict[str, Graph]:
        index: dict[str, Graph] = {}
        for graph in self.components:
            if graph.id is not None:
                index.setdefault(graph.id, graph)
        return index

    @functools.cached_property
    def _scripts(self) -> dict[str, Graph]:
        index: dict[str, Graph] = {}
        for graph in self.scripts:
            if graph.id is not None:
                index.setdefault(graph.id, graph)
        return index

    @functools.cached_property
    def _elements(self) -> dict[str, Element]:
        index: dict[str, Element] = {}
        for element in self.elements:
            index.setdefault(element.id, element)
        return index

    def component(self, component_id: str | None) -> Graph | None:
        if component_id is None:
            return None
        return self._components.get(component_id)

    def script(self, script_id: str) -> Graph | None:
        return self._scripts.get(script_id)

    def element(self, element_id: str) -> Element | None:
        return self._elements.get(element_id)

    def children_of(self, parent_id: str) -> list[Element]:
        return [e for e in self.elements if e.parent_id == parent_id]

    def elements_on(self, page_id: str | None) -> list[Element]:
        """Every element (nested ones included) belonging to a page."""
        return [e for e in self.elements if e.page_id == page_id]

    def roots_on(self, page_id: str | None) -> list[Element]:
        """Page-level elements (no parent) of a page."""
        return [e for e in self.elements if e.page_id == page_id and not e.parent_id]

    @property
    def first_page_id(self) -> str | None:
        return self.pages[0].id if self.pages else None

    @classmethod
    def from_dict(cls, raw: Any) -> Project:
        """Load the editor's project snapshot.

        Raises:
            SnapshotError: When the snapshot is structurally invalid.
        """
        if not isinstance(raw, dict):
            raise SnapshotError("project", f"expected an object, got {type(raw).__name__}")
        for key in ("elements", "pages", "components", "scripts"):
            if key in raw and not isinstance(raw[key], list):
                raise SnapshotError(key, f"'{key}' must be a list")
        width = _optional(raw, "width", _NUMBER, "project") or 1440
        height = _optional(raw, "height", _NUMBER, "project") or 900
        if width <= 0 or height <= 0:
            raise SnapshotError("project.width", "canvas width and height must be positive")
        return cls(
            elements=tuple(
                Element.from_dict(e, f"elements[{i}]") for i, e in enumerate(raw.get("elements", []))
            ),
            pages=tuple(Page.from_dict(p, f"pages[{i}]") for i, p in enumerate(raw.get("pages", []))),
            width=width,
            height=height,
            components=tuple(
                Graph.from_dict(c, f"components[{i}]") for i, c in enumerate(raw.get("components", []))
            ),
            scripts=tuple(
                Graph.from_dict(s, f"scripts[{i}]") for i, s in enumerate(raw.get("scripts", []))
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "elements": [e.to_dict() for e in self.elements],
            "pages": [p.to_dict() for p in self.pages],
            "width": self.width,
            "height": self.height,
            "components": [c.to_dict() for c in self.components],
            "scripts": [s.to_dict() for s in self.scripts],
        }


def load_project(path: str | Path) -> Project:
    """Read a project snapshot from a JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(str(path), f"not valid JSON: {e}") from e
    return Project.from_dict(raw)
