"""Per-document content pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..content import paths
from ..content.frontmatter import FrontMatterExtractor
from ..core.errors import (
    FilesystemError,
    FrontMatterParseError,
    PressmarkError,
    TemplateResolutionError,
)
from ..core.models import DEFAULT_TEMPLATE, BuildContext, PageData, ProcessedPage
from ..rendering.engine import Renderer
from .filesystem import write_page

logger = logging.getLogger(__name__)


class ContentPipeline:
    """Renders one document at a time into the output tree.

    Steps: read, extract front matter, merge page data over the computed
    defaults, merge the page into the global scope, render, write.
    """

    def __init__(
        self,
        context: BuildContext,
        extractor: FrontMatterExtractor,
        renderer: Renderer,
    ) -> None:
        self.context = context
        self.extractor = extractor
        self.renderer = renderer

    def default_page_data(self, relative_path: str, body: str) -> dict[str, Any]:
        return {
            "title": paths.page_title(relative_path),
            "content": body,
            "url": paths.page_url(relative_path),
            "date": self.context.build_date,
            "template": DEFAULT_TEMPLATE,
        }

    def page_data(
        self, relative_path: str, body: str, front_matter: dict[str, Any]
    ) -> PageData:
        try:
            return PageData.merged(
                self.default_page_data(relative_path, body), front_matter
            )
        except ValidationError as e:
            raise FrontMatterParseError(
                f"Front matter of {relative_path} has invalid page fields: {e}"
            ) from e

    def template_scope(self, page: PageData, body: str) -> dict[str, Any]:
        scope = dict(self.context.global_data)
        scope["page"] = page.as_scope()
        scope["content"] = body
        return scope

    def process(self, source: Path, relative_path: str) -> ProcessedPage:
        """Render a single document and write it to its output path.

        Args:
            source: Absolute or working-directory path of the document
            relative_path: Document identity relative to the source directory

        Returns:
            Progress record of the written page
        """
        try:
            raw = source.read_bytes()
        except OSError as e:
            raise FilesystemError(f"Cannot read {source}: {e}", path=source) from e

        try:
            document = self.extractor.extract(raw)
        except PressmarkError as e:
            if e.path is None:
                e.path = source
            raise

        page = self.page_data(relative_path, document.body, document.front_matter)
        scope = self.template_scope(page, document.body)
        try:
            rendered = self.renderer.render(page.template, scope)
        except TemplateResolutionError as e:
            raise TemplateResolutionError(f"{relative_path}: {e}", path=source) from e

        output = paths.output_path(relative_path, self.context.config.output_dir)
        try:
            write_page(output, rendered)
        except OSError as e:
            raise FilesystemError(f"Cannot write {output}: {e}", path=output) from e

        logger.info(f"Processed: {relative_path} -> {output.as_posix()}")
        return ProcessedPage(source=source, relative_path=relative_path, output=output)
