"""Domain models for documents, pages and build results."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..config import SiteConfig

DEFAULT_TEMPLATE = "page.html"


class RenderedDocument(BaseModel):
    """Converted body of a document plus its declared front matter."""

    body: str = Field(..., description="Rendered HTML body")
    front_matter: dict[str, Any] = Field(
        default_factory=dict, description="Front-matter mapping (possibly empty)"
    )


class PageData(BaseModel):
    """Per-document data handed to templates as ``page``.

    Known fields are typed; any other front-matter key is kept as a model extra.
    """

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    title: str = Field(..., description="Page title")
    content: str = Field(..., description="Rendered HTML body")
    url: str = Field(..., description="Site-relative URL")
    date: dt.datetime | dt.date | str = Field(..., description="Page date")
    template: str = Field(default=DEFAULT_TEMPLATE, description="Template name")

    @classmethod
    def merged(
        cls, defaults: Mapping[str, Any], front_matter: Mapping[str, Any]
    ) -> PageData:
        """Build page data from computed defaults overridden by front matter.

        Front matter wins on every key, including known fields. A null value
        for a known field keeps the default.
        """
        data = dict(defaults)
        for key, value in front_matter.items():
            key = str(key)
            if value is None and key in cls.model_fields:
                continue
            data[key] = value
        return cls.model_validate(data)

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def as_scope(self) -> dict[str, Any]:
        return self.model_dump()


class BuildStage(str, Enum):
    INIT = "init"
    CLEAN_OUTPUT = "clean_output"
    MIRROR_ASSETS = "mirror_assets"
    PROCESS_CONTENT = "process_content"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildContext:
    """Read-only state shared by every document of a single build."""

    config: SiteConfig
    global_data: Mapping[str, Any]
    build_time: dt.datetime

    @property
    def build_date(self) -> str:
        return self.build_time.strftime(self.config.date_format)


@dataclass(frozen=True)
class ProcessedPage:
    """Progress record for one rendered document."""

    source: Path
    relative_path: str
    output: Path


@dataclass
class BuildReport:
    """Outcome of a complete build."""

    output_dir: Path
    pages: list[ProcessedPage] = field(default_factory=list)
    stage: BuildStage = BuildStage.INIT
