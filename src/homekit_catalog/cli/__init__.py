"""CLI module for homekit-catalog."""

from homekit_catalog.cli.error_formatter import DiagnosticsFormatter, DiagnosticsTable
from homekit_catalog.cli.exception_handler import handle_exceptions
from homekit_catalog.cli_main import extract_app, generate_app

__all__ = [
    "extract_app",
    "generate_app",
    "DiagnosticsFormatter",
    "DiagnosticsTable",
    "handle_exceptions",
]
