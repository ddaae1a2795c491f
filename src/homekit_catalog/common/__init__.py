"""Shared helpers: logging setup and crash-safe writes."""

from homekit_catalog.common.fileio import replace_directory, write_text_atomic
from homekit_catalog.common.logging import configure_logging

__all__ = [
    "configure_logging",
    "replace_directory",
    "write_text_atomic",
]
