"""Derivation of titles, URLs and output paths from document paths."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

SOURCE_SUFFIX = ".md"
OUTPUT_SUFFIX = ".html"


def normalize(relative_path: str) -> str:
    """Normalize separators to ``/`` and swap the Markdown extension for HTML."""
    posix = relative_path.replace("\\", "/")
    if posix.endswith(SOURCE_SUFFIX):
        posix = posix[: -len(SOURCE_SUFFIX)] + OUTPUT_SUFFIX
    return posix


def page_title(relative_path: str) -> str:
    """Human-readable title from a file name: ``my-post.md`` -> ``My post``."""
    stem = PurePosixPath(relative_path.replace("\\", "/")).name
    if stem.endswith(SOURCE_SUFFIX):
        stem = stem[: -len(SOURCE_SUFFIX)]
    title = stem.replace("-", " ").replace("_", " ")
    return title[:1].upper() + title[1:]


def page_url(relative_path: str) -> str:
    return "/" + normalize(relative_path)


def output_path(relative_path: str, output_dir: Path) -> Path:
    # Distinct sources that normalize alike share an output path; last write wins
    return Path(output_dir).joinpath(*normalize(relative_path).split("/"))
