"""Template rendering engine."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Any, Mapping, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from ..core.errors import TemplateResolutionError

logger = logging.getLogger(__name__)

HELPER_NAMES = ("asset", "url")


class Renderer(Protocol):
    def render(self, template_name: str, data: Mapping[str, Any]) -> str:
        """Render a named template with the given data."""
        ...


def asset_url(base_url: str, path: str) -> str:
    """URL of a file under the mirrored assets directory."""
    return base_url.rstrip("/") + "/assets/" + path.lstrip("/")


def site_url(base_url: str, path: str) -> str:
    """URL of a site-relative path."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def create_environment(templates_dir: Path, base_url: str) -> Environment:
    """Create the Jinja2 environment used for every page.

    Args:
        templates_dir: Template search root
        base_url: Prefix for the ``asset`` and ``url`` helpers

    Returns:
        Configured Jinja2 environment
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals["asset"] = partial(asset_url, base_url)
    env.globals["url"] = partial(site_url, base_url)
    return env


class JinjaRenderer:
    """Renders templates resolved by name under a templates directory."""

    def __init__(self, templates_dir: Path, base_url: str = "") -> None:
        self.templates_dir = templates_dir
        self.env = create_environment(templates_dir, base_url)
        self._shadowed: set[str] = set()

    def with_helpers(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Render scope in which the helper functions win over same-named data keys."""
        scope = dict(data)
        for name in HELPER_NAMES:
            if name in scope and name not in self._shadowed:
                logger.warning(
                    f"Data key '{name}' is hidden by the {name}() template helper"
                )
                self._shadowed.add(name)
            scope[name] = self.env.globals[name]
        return scope

    def render(self, template_name: str, data: Mapping[str, Any]) -> str:
        logger.debug(f"Rendering template: {template_name}")

        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateResolutionError(
                f"Template not found: {template_name} (searched {self.templates_dir})"
            ) from e
        except Exception as e:
            raise TemplateResolutionError(
                f"Cannot load template {template_name}: {e}"
            ) from e

        try:
            return template.render(self.with_helpers(data))
        except Exception as e:
            raise TemplateResolutionError(
                f"Failed to render template {template_name}: {e}"
            ) from e
