"""Global data scope loading."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ..config import SiteConfig
from ..core.errors import DataParseError
from .parsers import StructuredDataParser

logger = logging.getLogger(__name__)

DATA_SUFFIXES = (".yml", ".yaml")


def discover_data_files(data_dir: Path) -> list[Path]:
    """Find every YAML data file under a directory.

    Args:
        data_dir: Root of the data tree

    Returns:
        Data files sorted by their path relative to ``data_dir``
    """
    files = [
        path
        for path in data_dir.rglob("*")
        if path.is_file() and path.suffix in DATA_SUFFIXES
    ]
    return sorted(files, key=lambda p: p.relative_to(data_dir).as_posix())


def load_data_file(path: Path, parser: StructuredDataParser) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataParseError(f"Cannot read data file {path}: {e}", path=path) from e
    try:
        return parser.parse(text)
    except ValueError as e:
        raise DataParseError(f"Invalid data file {path}: {e}", path=path) from e


def load_global_data(
    config: SiteConfig, parser: StructuredDataParser
) -> Mapping[str, Any]:
    """Build the read-only data scope shared by every page.

    The scope starts from the configuration; each data file adds one entry keyed
    by its base name. Colliding names are last-write-wins in sorted path order.

    Args:
        config: Site configuration
        parser: Parser for data files

    Returns:
        Read-only global data mapping
    """
    data: dict[str, Any] = config.as_scope()

    data_dir = config.data_dir
    if not data_dir.is_dir():
        logger.debug(f"No data directory at {data_dir}; using configuration only")
        return MappingProxyType(data)

    loaded: dict[str, Path] = {}
    for path in discover_data_files(data_dir):
        key = path.stem
        if key in loaded:
            logger.warning(
                f"Data file {path} overrides {loaded[key]} for key '{key}'"
            )
        data[key] = load_data_file(path, parser)
        loaded[key] = path
        logger.debug(f"Loaded data file {path} as '{key}'")

    logger.info(f"Loaded {len(loaded)} data file(s) from {data_dir}")
    return MappingProxyType(data)
