"""Site configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("pressmark.yml")


class SiteConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PRESSMARK_",
        case_sensitive=False,
        frozen=True,
        extra="forbid",
    )

    source_dir: Path = Path("content")
    output_dir: Path = Path("dist")
    templates_dir: Path = Path("templates")
    data_dir: Path = Path("data")
    assets_dir: Path = Path("assets")
    base_url: str = ""
    site_title: str = "My Static Site"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    def as_scope(self) -> dict[str, Any]:
        """Configuration as a JSON-compatible template mapping."""
        return self.model_dump(mode="json")


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML configuration file into a mapping.

    Args:
        path: Path to the YAML file

    Returns:
        Mapping of option names to values (empty for an empty file)
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping", path=path)
    return data


def load_config(
    config_file: Path | None = None, overrides: Mapping[str, Any] | None = None
) -> SiteConfig:
    """Load site configuration.

    Precedence, highest first: overrides, config file, PRESSMARK_* environment
    variables, defaults. Without an explicit config file, ``pressmark.yml`` in the
    working directory is used when present.

    Args:
        config_file: Optional YAML configuration file
        overrides: Caller-supplied option values

    Returns:
        Validated, immutable configuration
    """
    if config_file is None and DEFAULT_CONFIG_FILE.is_file():
        config_file = DEFAULT_CONFIG_FILE

    values: dict[str, Any] = {}
    if config_file is not None:
        logger.debug(f"Loading config file: {config_file}")
        values.update(read_config_file(config_file))
    values.update(overrides or {})

    try:
        return SiteConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
