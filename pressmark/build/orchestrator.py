"""Build orchestration: clean, mirror assets, process content."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Callable

from ..config import SiteConfig
from ..content.data import load_global_data
from ..content.frontmatter import FrontMatterExtractor
from ..content.parsers import (
    MarkdownConverter,
    PythonMarkdownConverter,
    StructuredDataParser,
    YamlParser,
)
from ..core.errors import ConfigError, FilesystemError, SourceMissingError
from ..core.models import BuildContext, BuildReport, BuildStage
from ..rendering.engine import JinjaRenderer, Renderer
from .filesystem import mirror_directory, reset_directory
from .pipeline import ContentPipeline

logger = logging.getLogger(__name__)

ASSETS_SUBDIR = "assets"


def discover_documents(source_dir: Path) -> list[tuple[Path, str]]:
    """Find every Markdown document under the source directory.

    Args:
        source_dir: Root of the content tree

    Returns:
        (path, relative path) pairs sorted by relative path
    """
    documents = [
        (path, path.relative_to(source_dir).as_posix())
        for path in source_dir.rglob("*.md")
        if path.is_file()
    ]
    documents.sort(key=lambda item: item[1])
    logger.debug(f"Discovered {len(documents)} document(s) under {source_dir}")
    return documents


def validate_output_dir(config: SiteConfig) -> None:
    """Refuse output directories whose deletion would destroy inputs or the project.

    Args:
        config: Site configuration

    Raises:
        ConfigError: When `output_dir` is the working directory, a filesystem root,
            or equal to or an ancestor of an input directory
    """
    output_dir = config.output_dir.resolve()

    if output_dir == Path.cwd().resolve():
        raise ConfigError(
            f"Refusing to use the working directory as output_dir ({config.output_dir})",
            path=config.output_dir,
        )
    if output_dir == Path(output_dir.anchor):
        raise ConfigError(
            f"Refusing to use a filesystem root as output_dir ({output_dir})",
            path=config.output_dir,
        )

    inputs = {
        "source_dir": config.source_dir,
        "templates_dir": config.templates_dir,
        "data_dir": config.data_dir,
        "assets_dir": config.assets_dir,
    }
    for name, directory in inputs.items():
        resolved = directory.resolve()
        if resolved == output_dir or output_dir in resolved.parents:
            raise ConfigError(
                f"output_dir {config.output_dir} would delete {name} {directory}",
                path=config.output_dir,
            )


class SiteBuilder:
    """Runs a full build: INIT -> CLEAN_OUTPUT -> MIRROR_ASSETS -> PROCESS_CONTENT -> DONE.

    Any failure moves the builder to FAILED and re-raises; no rollback is attempted.
    """

    def __init__(
        self,
        config: SiteConfig,
        *,
        converter: MarkdownConverter | None = None,
        parser: StructuredDataParser | None = None,
        renderer: Renderer | None = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self.config = config
        self.parser = parser or YamlParser()
        self.extractor = FrontMatterExtractor(
            converter or PythonMarkdownConverter(), self.parser
        )
        self.renderer = renderer or JinjaRenderer(config.templates_dir, config.base_url)
        self.clock = clock
        self.stage = BuildStage.INIT

    def _enter(self, stage: BuildStage) -> None:
        logger.debug(f"Build stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def build(self) -> BuildReport:
        report = BuildReport(output_dir=self.config.output_dir)
        self.stage = BuildStage.INIT
        try:
            validate_output_dir(self.config)
            context = self.init_context()

            self._enter(BuildStage.CLEAN_OUTPUT)
            self.clean_output()

            self._enter(BuildStage.MIRROR_ASSETS)
            self.mirror_assets()

            self._enter(BuildStage.PROCESS_CONTENT)
            pipeline = ContentPipeline(context, self.extractor, self.renderer)
            for source, relative_path in self.content_documents():
                report.pages.append(pipeline.process(source, relative_path))

            self._enter(BuildStage.DONE)
        except Exception:
            logger.debug(f"Build failed during stage {self.stage.value}")
            self.stage = BuildStage.FAILED
            report.stage = self.stage
            raise

        report.stage = self.stage
        logger.info(f"Successfully generated site at: {self.config.output_dir}")
        return report

    def init_context(self) -> BuildContext:
        global_data = load_global_data(self.config, self.parser)
        return BuildContext(
            config=self.config, global_data=global_data, build_time=self.clock()
        )

    def clean_output(self) -> None:
        output_dir = self.config.output_dir
        try:
            reset_directory(output_dir)
        except OSError as e:
            raise FilesystemError(
                f"Cannot reset output directory {output_dir}: {e}", path=output_dir
            ) from e

    def mirror_assets(self) -> None:
        assets_dir = self.config.assets_dir
        if not assets_dir.is_dir():
            logger.debug(f"No assets directory at {assets_dir}; skipping")
            return

        destination = self.config.output_dir / ASSETS_SUBDIR
        try:
            count = mirror_directory(assets_dir, destination)
        except OSError as e:
            raise FilesystemError(
                f"Cannot copy assets from {assets_dir}: {e}", path=assets_dir
            ) from e
        logger.info(f"Copied {count} asset file(s) to {destination}")

    def content_documents(self) -> list[tuple[Path, str]]:
        source_dir = self.config.source_dir
        if not source_dir.is_dir():
            raise SourceMissingError(
                f"The content directory '{source_dir}' does not exist", path=source_dir
            )
        return discover_documents(source_dir)


def build_site(config: SiteConfig) -> BuildReport:
    """Build the site described by ``config`` with the default collaborators."""
    return SiteBuilder(config).build()
