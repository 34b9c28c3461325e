"""Custom exception hierarchy for pyretain."""

from __future__ import annotations

from pathlib import Path


class RetainError(Exception):
    """Base exception for all pyretain errors."""


class RetainConfigError(RetainError):
    """Invalid or missing configuration."""


class SaveFileError(RetainError):
    """Save file could not be used."""

    def __init__(self, message: str, *, path: Path | str = "") -> None:
        self.path = Path(path) if path else None
        super().__init__(message)


class SaveFileMissingError(SaveFileError):
    """No save file exists at the configured path."""


class SaveFileMalformedError(SaveFileError):
    """Save file is not valid JSON or does not match the expected shape.

    The top level must be an object of screen ids, each mapping decimal
    tag positions to ``{"name": ..., "layout": ...}`` objects.
    """


class UnresolvedLayoutError(RetainError):
    """A persisted layout name matches no registered layout."""

    def __init__(
        self,
        message: str,
        *,
        screen_id: int,
        position: int,
        layout_name: str,
    ) -> None:
        self.screen_id = screen_id
        self.position = position
        self.layout_name = layout_name
        super().__init__(message)
