"""Front-matter extraction and Markdown body rendering."""

from __future__ import annotations

import logging
import re

from ..core.errors import FrontMatterParseError, MarkdownError
from ..core.models import RenderedDocument
from .parsers import MarkdownConverter, StructuredDataParser

logger = logging.getLogger(__name__)

# Leading "---" line, YAML, closing "---" line
_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split a document into its raw front-matter block and its body.

    Args:
        text: Decoded document text

    Returns:
        Tuple of (front-matter source or None when absent, body text)
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return None, text
    return match.group("meta"), text[match.end() :]


class FrontMatterExtractor:
    """Turns raw document bytes into rendered HTML plus front matter."""

    def __init__(
        self, converter: MarkdownConverter, parser: StructuredDataParser
    ) -> None:
        self.converter = converter
        self.parser = parser

    def extract(self, raw: bytes) -> RenderedDocument:
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MarkdownError(f"Document is not valid UTF-8: {e}") from e

        meta_source, body = split_front_matter(text)

        front_matter: dict = {}
        if meta_source is not None:
            try:
                parsed = self.parser.parse(meta_source)
            except ValueError as e:
                raise FrontMatterParseError(f"Invalid front matter: {e}") from e
            if parsed is not None and not isinstance(parsed, dict):
                raise FrontMatterParseError(
                    f"Front matter must be a mapping, got {type(parsed).__name__}"
                )
            front_matter = {str(key): value for key, value in (parsed or {}).items()}

        try:
            html = self.converter.convert(body)
        except ValueError as e:
            raise MarkdownError(f"Cannot convert Markdown: {e}") from e

        logger.debug(f"Extracted {len(front_matter)} front-matter key(s)")
        return RenderedDocument(body=html, front_matter=front_matter)
