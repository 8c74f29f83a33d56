import datetime as dt
import os
from pathlib import Path
from typing import Any, Mapping

import pytest

from pressmark.config import SiteConfig

FIXED_TIME = dt.datetime(2024, 5, 1, 12, 30, 0)

PAGE_TEMPLATE = """<title>{{ page.title }} | {{ site_title }}</title>
<p class="url">{{ page.url }}</p>
<p class="date">{{ page.date }}</p>
{{ content }}
"""


class FakeConverter:
    """Wraps the body in a marker instead of running a Markdown engine."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def convert(self, text: str) -> str:
        self.calls.append(text)
        return f"<converted>{text.strip()}</converted>"


class FakeRenderer:
    """Records render calls and returns a predictable string."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, template_name: str, data: Mapping[str, Any]) -> str:
        self.calls.append((template_name, dict(data)))
        return f"{template_name}:{data['page']['title']}"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("PRESSMARK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A minimal site tree with an empty content dir and a page template."""
    root = tmp_path / "site"
    (root / "content").mkdir(parents=True)
    (root / "templates").mkdir()
    (root / "templates" / "page.html").write_text(PAGE_TEMPLATE, encoding="utf-8")
    return root


@pytest.fixture
def make_config(site: Path):
    def _make(**overrides: Any) -> SiteConfig:
        values: dict[str, Any] = {
            "source_dir": site / "content",
            "output_dir": site / "dist",
            "templates_dir": site / "templates",
            "data_dir": site / "data",
            "assets_dir": site / "assets",
        }
        values.update(overrides)
        return SiteConfig(**values)

    return _make


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def fake_converter() -> FakeConverter:
    return FakeConverter()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()
