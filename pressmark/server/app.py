"""Development file server for a built site."""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ..build.orchestrator import build_site
from ..config import SiteConfig

logger = logging.getLogger(__name__)


def create_app(output_dir: Path) -> FastAPI:
    """Serve ``output_dir`` as static files, resolving ``index.html`` for directories."""
    app = FastAPI(title="Pressmark development server", version="0.1.0")
    app.mount("/", StaticFiles(directory=str(output_dir), html=True), name="site")
    return app


def serve(config: SiteConfig, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the built site, building it first when the output directory is missing.

    Args:
        config: Site configuration
        host: Interface to bind
        port: Port to bind
    """
    if not config.output_dir.exists():
        logger.info(f"Output directory {config.output_dir} missing; building first")
        build_site(config)

    logger.info(f"Server started at http://{host}:{port}")
    logger.info("Press Ctrl+C to stop the server")
    uvicorn.run(create_app(config.output_dir), host=host, port=port, workers=1)


__all__ = ["create_app", "serve"]
