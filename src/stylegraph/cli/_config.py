"""Project-level configuration from pyproject.toml.

Reads the [tool.stylegraph] section for CLI defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StylegraphConfig:
    """Configuration from [tool.stylegraph] in pyproject.toml.

    Attributes:
        fps: Frame rate used by ``preview``
        output: Default path for ``export``
    """

    fps: float = 60.0
    output: str | None = None


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> StylegraphConfig:
    """Load [tool.stylegraph] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.stylegraph] section.
    """
    path = find_pyproject(start)
    if path is None:
        return StylegraphConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        try:
            import tomli as tomllib
        except ImportError:
            return StylegraphConfig()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("stylegraph", {})
    if not section:
        return StylegraphConfig()

    return StylegraphConfig(
        fps=float(section.get("fps", 60.0)),
        output=section.get("output"),
    )
