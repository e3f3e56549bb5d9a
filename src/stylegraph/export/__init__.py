"""Standalone HTML export of a project."""

from stylegraph.export.css import element_css, percent, px_to_vw, wrapper_css
from stylegraph.export.generator import export_html, generate_html, project_data, serialize_data, youtube_id

__all__ = [
    "element_css",
    "export_html",
    "generate_html",
    "percent",
    "project_data",
    "px_to_vw",
    "serialize_data",
    "wrapper_css",
    "youtube_id",
]
