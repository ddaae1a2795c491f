"""Command-line interface for the catalog extractor and service generator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from homekit_catalog import __version__
from homekit_catalog.config import (
    CATALOG_OUTPUT_ENV,
    DEFAULT_CATALOG_PATH,
    DEFAULT_SWIFT_OUTPUT,
    DEFAULT_TYPESCRIPT_OUTPUT,
    METADATA_PATH_ENV,
    SDKLayout,
    default_metadata_path,
)
from homekit_catalog.diagnostics import DiagnosticsReport

# Create Typer apps, one per installed command
extract_app = typer.Typer(
    name="homekit-catalog-extract",
    help="Extract the HomeKit service/characteristic catalog from an iOS SDK.",
    add_completion=False,
)
generate_app = typer.Typer(
    name="homekit-service-generate",
    help="Generate Swift and TypeScript bindings from a HomeKit catalog file.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True)

DIAGNOSTIC_FORMATS = ("table", "text")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"homekit-catalog version {__version__}")
        raise typer.Exit()


VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-V",
        help="Show progress logging and every diagnostic.",
    ),
]
FormatOption = Annotated[
    str,
    typer.Option(
        "--format",
        "-f",
        help="Diagnostics format with --verbose: table, text.",
    ),
]


def _setup(verbose: bool, output_format: str) -> None:
    from homekit_catalog.common.logging import configure_logging

    if output_format not in DIAGNOSTIC_FORMATS:
        error_console.print(
            f"\n[bold red]✗ Invalid format: {output_format}[/bold red]\n"
            f"Supported: {', '.join(DIAGNOSTIC_FORMATS)}"
        )
        raise typer.Exit(code=1)
    configure_logging(
        level=logging.INFO if verbose else logging.WARNING,
        console=error_console,
        force=True,
    )


def _print_diagnostics(
    report: DiagnosticsReport, verbose: bool, output_format: str, source_path: Path
) -> None:
    from homekit_catalog.cli.error_formatter import DiagnosticsFormatter, DiagnosticsTable

    if not report.issues:
        return
    if not verbose:
        DiagnosticsFormatter(error_console).print_counts(report)
    elif output_format == "table":
        DiagnosticsTable(error_console).print_report(report)
    else:
        DiagnosticsFormatter(error_console, max_issues=len(report.issues)).format_report(
            report, source_path
        )


@extract_app.command()
def extract(
    sdk_path: Annotated[
        Path,
        typer.Argument(
            help="iOS SDK root (e.g. .../iPhoneOS.platform/Developer/SDKs/iPhoneOS.sdk).",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Catalog file to write.",
            envvar=CATALOG_OUTPUT_ENV,
            dir_okay=False,
        ),
    ] = DEFAULT_CATALOG_PATH,
    metadata: Annotated[
        Path | None,
        typer.Option(
            "--metadata",
            "-m",
            help="HomeKit metadata plist. Defaults to the system copy when present.",
            envvar=METADATA_PATH_ENV,
            dir_okay=False,
        ),
    ] = None,
    framework_path: Annotated[
        Path | None,
        typer.Option(
            "--framework-path",
            help="Explicit HomeKit.framework directory, overriding the SDK layout.",
            file_okay=False,
        ),
    ] = None,
    verbose: VerboseOption = False,
    output_format: FormatOption = "table",
    version: VersionOption = None,
) -> None:
    """Extract services and characteristics from SDK headers into a catalog file.

    Examples
    --------
        homekit-catalog-extract "$(xcrun --sdk iphoneos --show-sdk-path)"
        homekit-catalog-extract iPhoneOS.sdk --output Resources/homekit-services.yaml
        homekit-catalog-extract iPhoneOS.sdk --metadata plain-metadata.config

    """
    from homekit_catalog.cli.exception_handler import handle_exceptions

    _setup(verbose, output_format)
    layout = SDKLayout(framework_path) if framework_path else SDKLayout.from_sdk(sdk_path)
    metadata_path = metadata or default_metadata_path()
    diagnostics = DiagnosticsReport()

    console.print("[bold]Extracting HomeKit catalog[/bold]")
    console.print(f"  [dim]Framework: {layout.framework_path}[/dim]")
    console.print(f"  [dim]Metadata: {metadata_path or 'none (fallback mappings)'}[/dim]")

    handle_exceptions(verbose)(_run_extract)(layout, metadata_path, output, diagnostics)
    _print_diagnostics(diagnostics, verbose, output_format, layout.framework_path)


def _run_extract(
    layout: SDKLayout,
    metadata_path: Path | None,
    output: Path,
    diagnostics: DiagnosticsReport,
) -> None:
    from homekit_catalog.converters import CatalogWriter
    from homekit_catalog.extract import CatalogExtractor

    extractor = CatalogExtractor(layout, metadata_path=metadata_path, diagnostics=diagnostics)
    catalog = extractor.extract()
    CatalogWriter().write(catalog, output)

    console.print(
        f"\n[bold green]✓ Extracted {len(catalog.services)} services and "
        f"{len(catalog.characteristics)} characteristics[/bold green]"
    )
    console.print(f"  Output written to: {output}")
    if extractor.last_summary is not None:
        console.print(f"  [dim]Relationships: {extractor.last_summary.strategy}[/dim]")


@generate_app.command()
def generate(
    catalog_path: Annotated[
        Path,
        typer.Argument(
            help="Catalog file produced by homekit-catalog-extract.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for generated Swift files.",
            file_okay=False,
        ),
    ] = DEFAULT_SWIFT_OUTPUT,
    typescript: Annotated[
        Path,
        typer.Option(
            "--typescript",
            "-t",
            help="Output directory for generated TypeScript files.",
            file_okay=False,
        ),
    ] = DEFAULT_TYPESCRIPT_OUTPUT,
    skip_swift: Annotated[
        bool,
        typer.Option("--skip-swift", help="Do not generate Swift sources."),
    ] = False,
    skip_typescript: Annotated[
        bool,
        typer.Option("--skip-typescript", help="Do not generate TypeScript sources."),
    ] = False,
    verbose: VerboseOption = False,
    output_format: FormatOption = "table",
    version: VersionOption = None,
) -> None:
    """Generate Swift wrappers and TypeScript definitions from a catalog file.

    Existing output directories are replaced.

    Examples
    --------
        homekit-service-generate Resources/homekit-services.yaml
        homekit-service-generate catalog.yaml --output Generated --skip-typescript

    """
    from homekit_catalog.cli.exception_handler import handle_exceptions

    _setup(verbose, output_format)
    diagnostics = DiagnosticsReport()

    console.print("[bold]Generating HomeKit bindings[/bold]")
    console.print(f"  [dim]Catalog: {catalog_path}[/dim]")

    targets: list[tuple[str, Path]] = []
    if not skip_swift:
        targets.append(("Swift", output))
    if not skip_typescript:
        targets.append(("TypeScript", typescript))

    handle_exceptions(verbose)(_run_generate)(catalog_path, targets, diagnostics)
    _print_diagnostics(diagnostics, verbose, output_format, catalog_path)


def _run_generate(
    catalog_path: Path,
    targets: list[tuple[str, Path]],
    diagnostics: DiagnosticsReport,
) -> None:
    from homekit_catalog.converters import CatalogReader
    from homekit_catalog.generators import CodeGenerator, SwiftGenerator, TypeScriptGenerator

    reader = CatalogReader()
    catalog = reader.read(catalog_path)

    generators: dict[str, type[CodeGenerator]] = {
        "Swift": SwiftGenerator,
        "TypeScript": TypeScriptGenerator,
    }
    table = Table(title="Generated Output", show_header=True)
    table.add_column("Target", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("Directory")

    for target, directory in targets:
        files = generators[target](diagnostics).generate(catalog, directory)
        table.add_row(target, str(len(files)), str(directory))

    console.print(
        f"\n[bold green]✓ Generated bindings for {len(catalog.services)} services and "
        f"{len(catalog.characteristics)} characteristics[/bold green]"
    )
    if targets:
        console.print(table)
    if reader.skipped_records:
        console.print(f"  [dim]Skipped {reader.skipped_records} incomplete catalog records[/dim]")


def extract_main() -> None:
    """Entry point for ``homekit-catalog-extract``."""
    extract_app()


def generate_main() -> None:
    """Entry point for ``homekit-service-generate``."""
    generate_app()
