"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from rich.console import Console
from rich.panel import Panel

from homekit_catalog.errors import (
    CatalogEncodeError,
    CatalogError,
    CatalogReadError,
    ExtractionError,
    GenerationError,
    MetadataError,
)

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Every handled exception is printed as a Rich panel and turned into
    ``typer.Exit(1)``.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except CatalogError as e:
                _handle_catalog_error(e, verbose)
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _handle_file_error(e, verbose)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, verbose)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _title_for(error: CatalogError) -> str:
    # Most specific first: MetadataError is also an ExtractionError
    for error_type, title in (
        (MetadataError, "Metadata Error"),
        (ExtractionError, "Extraction Error"),
        (CatalogEncodeError, "Catalog Error"),
        (CatalogReadError, "Catalog Error"),
        (GenerationError, "Generation Error"),
    ):
        if isinstance(error, error_type):
            return title
    return "Error"


def _handle_catalog_error(error: CatalogError, verbose: bool) -> None:
    """Handle errors raised by the extraction, catalog and generation stages."""
    body = f"[red]{error.message}[/red]"
    if error.path is not None:
        body += f"\n\n[dim]{error.path}[/dim]"
    console.print(Panel(body, title=_title_for(error), border_style="red"))

    if verbose and error.__cause__ is not None:
        console.print(f"[dim]Caused by: {error.__cause__!r}[/dim]")


def _handle_file_error(error: FileNotFoundError, verbose: bool) -> None:
    """Handle file not found errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]File not found: {filename}[/red]\n\n"
            "Please check that the file path is correct.",
            title="Error",
            border_style="red",
        )
    )


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\nCheck file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{error}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
