"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..build.orchestrator import build_site
from ..config import SiteConfig, load_config
from ..core.errors import PressmarkError
from .parsers import parse_overrides

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pressmark",
    help="Build a static HTML site from Markdown, YAML data and Jinja2 templates.",
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file (default: ./pressmark.yml when present).",
        metavar="FILE",
    ),
]
SetOption = Annotated[
    list[str],
    typer.Option(
        "--set",
        help="Override a configuration option (format: KEY=VALUE). Repeatable.",
        metavar="KEY=VALUE",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_config(config_file: Path | None, overrides: list[str]) -> SiteConfig:
    config = load_config(config_file, parse_overrides(overrides))
    logger.debug(f"Config: {config.model_dump(mode='json')}")
    return config


@app.command()
def build(
    config_file: ConfigOption = None,
    overrides: SetOption = [],
    verbose: VerboseOption = False,
) -> None:
    """Build the site. The output directory is deleted and recreated."""
    configure_logging(verbose)

    try:
        config = resolve_config(config_file, overrides)
        report = build_site(config)
    except PressmarkError as e:
        typer.echo(f"[ERROR] {e}", err=True)
        raise typer.Exit(code=1) from e

    logger.debug(f"Completed: {len(report.pages)} page(s) rendered")


@app.command()
def serve(
    config_file: ConfigOption = None,
    overrides: SetOption = [],
    host: Annotated[
        str,
        typer.Option("--host", help="Interface to bind.", metavar="HOST"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind.", metavar="PORT"),
    ] = 8000,
    verbose: VerboseOption = False,
) -> None:
    """Serve the built site, building it first if the output directory is missing."""
    configure_logging(verbose)

    from ..server.app import serve as run_server

    try:
        config = resolve_config(config_file, overrides)
        run_server(config, host=host, port=port)
    except PressmarkError as e:
        typer.echo(f"[ERROR] {e}", err=True)
        raise typer.Exit(code=1) from e


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
