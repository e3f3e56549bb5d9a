"""Exceptions for stylegraph loading and validation."""

from __future__ import annotations


class SnapshotError(Exception):
    """Project or graph snapshot is structurally invalid.

    Raised while loading the editor's JSON snapshot, never during
    evaluation. A malformed graph evaluates best-effort; a snapshot that
    cannot be turned into a graph at all is a load-time failure.

    Attributes:
        path: Dotted location of the offending value (e.g. ``elements[3].x``)
        reason: What is wrong with it
        message: Human-readable error message
    """

    def __init__(self, path: str, reason: str, message: str | None = None) -> None:
        self.path = path
        self.reason = reason
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        return (
            f"Invalid snapshot at '{self.path}'\n\n"
            f"  -> {self.reason}\n\n"
            f"How to fix:\n"
            f"  Re-export the project from the editor, or correct the value by hand"
        )
