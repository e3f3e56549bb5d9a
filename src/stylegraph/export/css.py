"""Style-object to CSS conversion for exported markup.

Geometry is expressed as percentages of the parent element (4 decimal
places); pixel-based style values are expressed in ``vw`` relative to
the canvas width, so the whole design scales with the viewport.
"""

from __future__ import annotations

import math
import re
from typing import Any

from stylegraph.evaluator.coercion import format_number, to_number
from stylegraph.project import ElementType

_PX_RE = re.compile(r"(-?\d+(\.\d+)?)px")

# Style keys copied verbatim, in output order, with their CSS property names.
_PLAIN_PROPERTIES = (
    ("backgroundColor", "background-color"),
    ("backgroundImage", "background-image"),
    ("color", "color"),
    ("fontWeight", "font-weight"),
)
_LAYOUT_PROPERTIES = (
    ("display", "display"),
    ("alignItems", "align-items"),
    ("justifyContent", "justify-content"),
    ("transform", "transform"),
    ("textAlign", "text-align"),
    ("transition", "transition"),
    ("animation", "animation"),
    ("flexDirection", "flex-direction"),
    ("lineHeight", "line-height"),
    ("letterSpacing", "letter-spacing"),
)
_SCALED_SPACING = (
    ("marginTop", "margin-top"),
    ("marginLeft", "margin-left"),
    ("gap", "gap"),
)


def percent(value: float, basis: float) -> str:
    """``value`` as a percentage of ``basis`` with 4 decimals.

    Examples:
        >>> percent(50, 200)
        '25.0000%'
    """
    if not basis:
        return "0.0000%"
    return f"{value / basis * 100:.4f}%"


def px_to_vw(px: Any, canvas_width: float) -> str:
    """Pixels relative to the canvas width, as ``vw``.

    Values that are not numeric (``"auto"``, ``"1rem"``) are returned as-is.

    Examples:
        >>> px_to_vw(144, 1440)
        '10vw'
    """
    value = to_number(px)
    if math.isnan(value):
        return str(px)
    return f"{format_number(value / canvas_width * 100)}vw"


def wrapper_css(x: float, y: float, width: float, height: float, parent_width: float, parent_height: float) -> str:
    """Absolute position/size of an element wrapper inside its parent."""
    return (
        f"position: absolute; "
        f"left: {percent(x, parent_width)}; "
        f"top: {percent(y, parent_height)}; "
        f"width: {percent(width, parent_width)}; "
        f"height: {percent(height, parent_height)};"
    )


def auto_font_size(width: float, height: float, content: str) -> int:
    """Font size that fits ``content`` on one line of a width x height box."""
    height_limit = _round_half_up(height * 0.6)
    chars = max(1, len(content or ""))
    width_limit = _round_half_up((width / chars) * 1.8)
    return max(10, min(height_limit, width_limit))


def _round_half_up(x: float) -> int:
    floor = int(x // 1)
    return floor + 1 if x - floor >= 0.5 else floor


def element_css(style: dict[str, Any], width: float, height: float, content: str, canvas_width: float) -> str:
    """Inline CSS for an element's content tag from its effective style."""
    parts: list[str] = []

    def add(prop: str, value: Any) -> None:
        parts.append(f"{prop}: {value}; ")

    def vw(px: Any) -> str:
        return px_to_vw(px, canvas_width)

    for key, prop in _PLAIN_PROPERTIES:
        if style.get(key):
            add(prop, style[key])
    if style.get("fontFamily"):
        add("font-family", f"'{style['fontFamily']}', sans-serif")
    if style.get("opacity") is not None:
        opacity = style["opacity"]
        add("opacity", format_number(float(opacity)) if isinstance(opacity, (int, float)) else opacity)
    for key, prop in _LAYOUT_PROPERTIES:
        if style.get(key):
            add(prop, style[key])
    for key, prop in _SCALED_SPACING:
        if style.get(key):
            add(prop, vw(style[key]))
    if style.get("textShadow"):
        add("text-shadow", style["textShadow"])
    if style.get("objectFit"):
        add("object-fit", style["objectFit"])
    if style.get("borderRadius"):
        add("border-radius", vw(style["borderRadius"]))
    if style.get("padding"):
        add("padding", vw(style["padding"]))

    if style.get("borderWidth") or style.get("borderBottomWidth") or style.get("borderTopWidth"):
        for key, prop in (
            ("borderWidth", "border-width"),
            ("borderBottomWidth", "border-bottom-width"),
            ("borderTopWidth", "border-top-width"),
        ):
            if style.get(key):
                add(prop, vw(style[key]))
        add("border-style", "solid")
        if style.get("borderColor"):
            add("border-color", style["borderColor"])

    if style.get("boxShadow"):
        shadow = _PX_RE.sub(lambda m: vw(float(m.group(1))), str(style["boxShadow"]))
        add("box-shadow", shadow)

    font_size = style.get("fontSize")
    if style.get("autoFontSize"):
        font_size = auto_font_size(width, height, content)
        add("line-height", 1)
        add("white-space", "nowrap")
        add("text-overflow", "ellipsis")
    if font_size:
        add("font-size", vw(font_size))

    return "".join(parts)


def tailwind_classes(element_type: str, style: dict[str, Any]) -> str:
    """Utility classes for the content tag of an element kind."""
    if element_type in (ElementType.BUTTON, ElementType.BADGE):
        justify = "justify-center"
        if style.get("textAlign") == "left":
            justify = "justify-start px-4"
        elif style.get("textAlign") == "right":
            justify = "justify-end px-4"
        return f"w-full h-full flex items-center {justify} transition-opacity hover:opacity-90 overflow-hidden"
    return _CLASSES.get(element_type, "w-full h-full")


_CLASSES = {
    ElementType.HEADING: "w-full h-full overflow-hidden leading-tight flex flex-col justify-center",
    ElementType.PARAGRAPH: "w-full h-full overflow-hidden leading-relaxed",
    ElementType.CARD: "w-full h-full bg-white",
    ElementType.INPUT: (
        "w-full h-full px-3 text-sm rounded focus:outline-none focus:ring-2 "
        "focus:ring-blue-500 bg-transparent"
    ),
    ElementType.IMAGE_PLACEHOLDER: "w-full h-full overflow-hidden",
    ElementType.VIDEO_PLACEHOLDER: "w-full h-full overflow-hidden",
    ElementType.AVATAR: "w-full h-full overflow-hidden",
    ElementType.DIVIDER: "w-full h-full flex items-center",
}
