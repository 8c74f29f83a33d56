"""Build error taxonomy."""

from __future__ import annotations

from pathlib import Path


class PressmarkError(Exception):
    """Base class for every fatal build error."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigError(PressmarkError):
    """Raised when configuration cannot be loaded or validated."""


class SourceMissingError(PressmarkError):
    """Raised when the content directory does not exist."""


class DataParseError(PressmarkError):
    """Raised when a global data file cannot be read or parsed."""


class FrontMatterParseError(PressmarkError):
    """Raised when a document's front-matter block is malformed."""


class MarkdownError(PressmarkError):
    """Raised when a document cannot be decoded or converted to HTML."""


class TemplateResolutionError(PressmarkError):
    """Raised when a template is missing or fails to render."""


class FilesystemError(PressmarkError):
    """Raised when a read, write, copy or remove operation fails."""
