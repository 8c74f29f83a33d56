"""Pressmark - Markdown to static HTML site generator.

Front matter, global YAML data and Jinja2 templates in, a mirrored HTML tree out.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
