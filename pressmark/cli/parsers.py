"""CLI argument parsers and validators."""

from __future__ import annotations

import typer

from ..config import SiteConfig


def parse_override(value: str) -> tuple[str, str]:
    """Parse a configuration override in format KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    key = key.strip().lower()
    if key not in SiteConfig.model_fields:
        known = ", ".join(sorted(SiteConfig.model_fields))
        raise typer.BadParameter(f"Unknown option {key!r} (expected one of: {known})")
    return key, raw


def parse_overrides(values: list[str]) -> dict[str, str]:
    return dict(map(parse_override, values))
