"""Standalone HTML export.

The exported document is self-contained: the markup is the project's
context-free composition (what the page looks like before any pointer
input or time has passed) and an embedded runtime re-evaluates the graphs
in the browser once per animation frame.
"""

from __future__ import annotations

import html
import json
import logging
import re
from importlib.resources import files
from pathlib import Path
from typing import Any

from stylegraph.composition import compose
from stylegraph.evaluator.types import EvaluationContext
from stylegraph.export.css import element_css, percent, tailwind_classes, wrapper_css
from stylegraph.project import Element, ElementType, Project

logger = logging.getLogger(__name__)

# Font families served from Google Fonts; anything else is left to the browser.
GOOGLE_FONTS = (
    "Inter",
    "Roboto",
    "Open Sans",
    "Lato",
    "Montserrat",
    "Poppins",
    "Playfair Display",
    "Merriweather",
    "Oswald",
    "Raleway",
    "Nunito",
    "Source Sans Pro",
    "Space Grotesk",
    "DM Sans",
)

_YOUTUBE_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")

_IMAGE_ICON = (
    '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round"><rect x="3" y="3" width="18" height="18" rx="2" ry="2">'
    '</rect><circle cx="8.5" cy="8.5" r="1.5"></circle><polyline points="21 15 16 10 5 21"></polyline></svg>'
)
_VIDEO_ICON = (
    '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round"><circle cx="12" cy="12" r="10"></circle>'
    '<polygon points="10 8 16 12 10 16 10 8"></polygon></svg>'
)
_AVATAR_ICON = (
    '<svg width="50%" height="50%" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round" style="opacity:0.5"><path d="M20 21v-2a4 4 0 0 0-4-4H8'
    'a4 4 0 0 0-4 4v2"></path><circle cx="12" cy="7" r="4"></circle></svg>'
)
_PLACEHOLDER = (
    '<div style="display:flex; flex-direction:column; align-items:center; justify-content:center; '
    'color:#9ca3af; height:100%;">{icon}</div>'
)

_KEYFRAMES = """\
        @keyframes fadeIn { from { opacity: 0; } to { opacity: 1; } }
        @keyframes fadeOut { from { opacity: 1; } to { opacity: 0; } }
        @keyframes slideInUp { from { transform: translateY(50px); opacity: 0; } to { transform: translateY(0); opacity: 1; } }
        @keyframes slideInDown { from { transform: translateY(-50px); opacity: 0; } to { transform: translateY(0); opacity: 1; } }
        @keyframes slideInLeft { from { transform: translateX(-50px); opacity: 0; } to { transform: translateX(0); opacity: 1; } }
        @keyframes slideInRight { from { transform: translateX(50px); opacity: 0; } to { transform: translateX(0); opacity: 1; } }
        @keyframes zoomIn { from { transform: scale(0.5); opacity: 0; } to { transform: scale(1); opacity: 1; } }
        @keyframes zoomOut { from { transform: scale(1); opacity: 1; } to { transform: scale(0.5); opacity: 0; } }
        @keyframes bounce { 0%, 20%, 50%, 80%, 100% { transform: translateY(0); } 40% { transform: translateY(-20px); } 60% { transform: translateY(-10px); } }
        @keyframes pulse { 0% { transform: scale(1); } 50% { transform: scale(1.05); } 100% { transform: scale(1); } }
        @keyframes shake { 0%, 100% { transform: translateX(0); } 10%, 30%, 50%, 70%, 90% { transform: translateX(-5px); } 20%, 40%, 60%, 80% { transform: translateX(5px); } }
        @keyframes spin { 100% { transform: rotate(360deg); } }"""


def _read_runtime() -> str:
    """Load the browser runtime bundled with the package."""
    try:
        return (files("stylegraph.export.assets") / "runtime.js").read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError) as e:
        raise RuntimeError(
            "The export runtime asset (stylegraph/export/assets/runtime.js) is missing. "
            "Reinstall stylegraph to restore it."
        ) from e


def youtube_id(url: str) -> str | None:
    """Video id of a YouTube URL, or None for anything else.

    Examples:
        >>> youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> youtube_id("https://example.com/clip.mp4") is None
        True
    """
    match = _YOUTUBE_RE.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def _attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


class _Renderer:
    """Renders a project's elements to positioned markup."""

    def __init__(self, project: Project) -> None:
        self.project = project
        self._context = EvaluationContext()

    def element(self, el: Element, parent_width: float, parent_height: float) -> str:
        children = "".join(self.element(child, el.width, el.height) for child in self.project.children_of(el.id))
        wrapper = wrapper_css(el.x, el.y, el.width, el.height, parent_width, parent_height)

        composition = compose(el, self.project, self._context)
        style = composition.style
        content = composition.content
        css = element_css(style, el.width, el.height, content, self.project.width)
        classes = tailwind_classes(el.type, style)

        if el.type == ElementType.INPUT:
            return (
                f'<div id="{_attr(el.id)}-wrapper" style="{wrapper}">'
                f'<input data-el-id="{_attr(el.id)}" type="text" value="{_attr(content)}" '
                f'class="{classes}" style="{_attr(css)}" readonly />{children}</div>'
            )

        tag, attrs, inner = self._content_tag(el, style, content)
        return (
            f'<div id="{_attr(el.id)}-wrapper" style="{wrapper}">'
            f'<{tag} data-el-id="{_attr(el.id)}" class="{classes}" style="{_attr(css)}"{attrs}>'
            f"{inner}{children}</{tag}></div>"
        )

    def _content_tag(self, el: Element, style: dict[str, Any], content: str) -> tuple[str, str, str]:
        """Tag name, extra attributes and inner markup for an element kind."""
        text = html.escape(content)
        if style.get("autoFontSize"):
            text = f'<span class="truncate max-w-full block">{text}</span>'

        if el.type == ElementType.BUTTON:
            return "button", "", text
        if el.type == ElementType.BADGE:
            return "div", "", text
        if el.type in (ElementType.IMAGE_PLACEHOLDER, ElementType.AVATAR):
            if el.src:
                return "img", f' src="{_attr(el.src)}" alt="{_attr(el.alt or "")}"', ""
            if el.type == ElementType.AVATAR:
                return "div", "", _AVATAR_ICON
            return "div", "", _PLACEHOLDER.format(icon=_IMAGE_ICON)
        if el.type == ElementType.VIDEO_PLACEHOLDER:
            if not el.src:
                return "div", "", _PLACEHOLDER.format(icon=_VIDEO_ICON)
            return self._video(el)
        if el.type == ElementType.DIVIDER:
            color = style.get("backgroundColor") or "#d1d5db"
            return "div", "", f'<div style="width:100%; height:1px; background-color:{_attr(color)};"></div>'
        return "div", "", text

    def _video(self, el: Element) -> tuple[str, str, str]:
        options = el.video_options
        video_id = youtube_id(el.src or "")
        if video_id:
            loop = 1 if options.get("loop") else 0
            src = (
                f"https://www.youtube.com/embed/{video_id}"
                f"?autoplay={1 if options.get('autoplay') else 0}"
                f"&controls={0 if options.get('controls') is False else 1}"
                f"&loop={loop}&playlist={video_id if loop else ''}"
                f"&mute={1 if options.get('muted') else 0}"
            )
            iframe = (
                f'<iframe width="100%" height="100%" src="{_attr(src)}" frameborder="0" '
                'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
                'style="border-radius: inherit; pointer-events: auto;"></iframe>'
            )
            return "div", "", iframe

        flags = [flag for flag in ("autoplay", "loop", "muted") if options.get(flag)]
        if options.get("controls") is not False:
            flags.append("controls")
        flags.append("playsinline")
        return "video", f' src="{_attr(el.src)}" ' + " ".join(flags), ""

    def pages(self) -> str:
        rendered = []
        for index, page in enumerate(self.project.pages):
            body = "\n".join(
                self.element(el, self.project.width, self.project.height) for el in self.project.roots_on(page.id)
            )
            hidden = "" if index == 0 else " hidden"
            rendered.append(
                f'<div id="page-{_attr(page.id)}" class="page-container absolute inset-0 w-full h-full{hidden}">'
                f"\n{body}\n</div>"
            )
        return "\n".join(rendered)


def project_data(project: Project) -> dict[str, Any]:
    """The data blob the embedded runtime works from."""
    return {
        "elements": [
            {
                "id": el.id,
                "type": el.type,
                "pageId": el.page_id,
                "content": el.content,
                "scripts": list(el.scripts),
                "propOverrides": dict(el.prop_overrides),
                "customComponentId": el.custom_component_id,
                "customNodeGroup": el.custom_node_group.to_dict() if el.custom_node_group else None,
                "isDetached": el.is_detached,
            }
            for el in project.elements
        ],
        "components": [c.to_dict() for c in project.components],
        "scripts": [s.to_dict() for s in project.scripts],
        "pages": [p.to_dict() for p in project.pages],
    }


def serialize_data(data: dict[str, Any]) -> str:
    """JSON for embedding inside a <script> element.

    ``</`` is escaped so no string in the project can close the script
    early; U+2028/U+2029 are escaped because they end a JS line.
    """
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return text.replace("</", "<\\/").replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def _font_link(project: Project) -> str:
    families: list[str] = []
    for el in project.elements:
        family = el.style.get("fontFamily")
        if family in GOOGLE_FONTS and family not in families:
            families.append(family)
    if not families:
        return ""
    query = "&".join(f"family={f.replace(' ', '+')}:wght@400;700" for f in families)
    return f'<link href="https://fonts.googleapis.com/css2?{query}&display=swap" rel="stylesheet">'


def generate_html(project: Project, title: str = "Exported Project") -> str:
    """Render a project to a standalone HTML document.

    Args:
        project: Project to export
        title: Document title

    Returns:
        The complete document as a string

    Raises:
        RuntimeError: If the bundled runtime asset cannot be read
    """
    runtime_js = _read_runtime()
    renderer = _Renderer(project)
    pages_html = renderer.pages()
    height_vw = percent(project.height, project.width).rstrip("%")
    logger.debug(
        "Rendered %d element(s) on %d page(s) for export", len(project.elements), len(project.pages)
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0, maximum-scale=5.0, user-scalable=yes">
    <title>{html.escape(title)}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    {_font_link(project)}
    <style>
        * {{ box-sizing: border-box; }}
        body {{ margin: 0; padding: 0; overflow-x: hidden; background-color: #ffffff; font-family: sans-serif; }}
        #app-root {{ position: relative; width: 100vw; max-width: 100%; height: {height_vw}vw; min-height: 100vh; overflow-x: hidden; overflow-y: auto; }}
        .hidden {{ display: none !important; }}
        @media (max-width: 768px) {{
            #app-root {{ height: auto; min-height: 100vh; width: 100%; }}
            button[data-el-id] {{ min-height: 44px; min-width: 44px; }}
        }}
        img, video, iframe {{ max-width: 100%; height: auto; object-fit: contain; }}
        .page-container {{ max-width: 100%; overflow-x: hidden; }}
{_KEYFRAMES}
    </style>
</head>
<body>
    <div id="app-root">
{pages_html}
    </div>
    <script>
        const PROJECT_DATA = {serialize_data(project_data(project))};
{runtime_js}
        const RUNTIME = createRuntime(PROJECT_DATA);
        RUNTIME.init();
    </script>
</body>
</html>
"""


def export_html(project: Project, path: str | Path, title: str = "Exported Project") -> Path:
    """Write the exported document to ``path`` (``.html`` is appended if missing)."""
    path = Path(path)
    if path.suffix != ".html":
        path = path.with_name(path.name + ".html")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_html(project, title), encoding="utf-8")
    logger.info("Exported project to %s", path)
    return path
