"""Filesystem operations for the build: destructive reset, mirroring, writes."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def reset_directory(path: Path) -> None:
    """Delete ``path`` recursively if present, then recreate it empty.

    Destructive and irreversible. Callers validate ``path`` beforehand
    (the build does so with ``validate_output_dir``).

    Args:
        path: Directory to wipe
    """
    if path.exists():
        logger.warning(f"Removing output directory {path}")
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    path.mkdir(parents=True, exist_ok=True)


def mirror_directory(source: Path, destination: Path) -> int:
    """Copy the whole tree under ``source`` into ``destination``, overwriting.

    Args:
        source: Directory to copy
        destination: Target directory (created when missing)

    Returns:
        Number of files copied
    """
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return sum(1 for p in source.rglob("*") if p.is_file())


def write_page(path: Path, text: str, mode: int = 0o644) -> None:
    """Write a rendered page through a sibling temp file and an atomic rename.

    Args:
        path: Destination file path
        text: Rendered content
        mode: File permissions (octal)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(tmp_name)
