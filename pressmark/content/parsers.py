"""Markdown and structured-data capabilities used by the content pipeline."""

from __future__ import annotations

from typing import Any, Protocol

import markdown
import yaml

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


class MarkdownConverter(Protocol):
    def convert(self, text: str) -> str:
        """Convert Markdown text to an HTML string; raise ValueError when malformed."""
        ...


class StructuredDataParser(Protocol):
    def parse(self, text: str) -> Any:
        """Parse a structured document; raise ValueError when malformed."""
        ...


class PythonMarkdownConverter:
    """Markdown converter backed by Python-Markdown."""

    def __init__(self, extensions: list[str] | None = None) -> None:
        self._md = markdown.Markdown(extensions=extensions or MARKDOWN_EXTENSIONS)

    def convert(self, text: str) -> str:
        try:
            return self._md.convert(text)
        finally:
            self._md.reset()


class YamlParser:
    """Structured data parser backed by PyYAML's safe loader."""

    def parse(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e
