"""Parse text-based stub (TBD) files for exported symbol names.

TBD files are YAML-like. Exported symbols appear under ``exports:`` ->
``symbols:`` either as block entries::

    exports:
      - archs: [ armv7, arm64 ]
        symbols:
          - _HMServiceTypeLightbulb
          - [ 'armv7', 'arm64' ]: _HMServiceTypeSwitch

or as flow lists (TBD v3/v4)::

    exports:
      - targets: [ arm64-ios ]
        symbols: [ _HMServiceTypeLightbulb, _HMServiceTypeSwitch,
                   _HMCharacteristicTypeBrightness ]

The symbol set is only used for best-effort cross-checking, so the parser is
a small line scanner rather than a YAML loader.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from homekit_catalog.diagnostics import DiagnosticCodes, DiagnosticsReport

if TYPE_CHECKING:
    from homekit_catalog.config import SDKLayout
    from homekit_catalog.models.catalog import CharacteristicEntry, ServiceEntry


def _collect_flow_symbols(text: str, symbols: set[str]) -> bool:
    """Add the comma-separated symbols in ``text`` up to ``]``.

    Returns True once the closing bracket has been seen.
    """
    closed = "]" in text
    for token in text.split("]", 1)[0].split(","):
        symbol = token.strip().strip("'\"")
        if symbol:
            symbols.add(symbol)
    return closed


def _block_symbol(entry: str) -> str:
    """Reduce a block list entry to its bare symbol name."""
    if "]:" in entry:
        # [ 'armv7', 'arm64' ]: _Symbol
        entry = entry[entry.index("]") + 1 :].strip(": \t")
    return entry.strip("'\"")


def parse_exported_symbols(content: str) -> set[str]:
    """Return the exported symbol names listed in a TBD document."""
    symbols: set[str] = set()
    in_exports = False
    in_symbols = False
    in_flow = False

    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        if in_flow:
            in_flow = not _collect_flow_symbols(trimmed, symbols)
            continue

        if trimmed.startswith("exports:"):
            in_exports = True
            in_symbols = False
            continue

        key_text = trimmed[2:].lstrip() if trimmed.startswith("- ") else trimmed
        if in_exports and key_text.startswith("symbols:"):
            rest = key_text[len("symbols:") :].strip()
            if rest.startswith("["):
                in_flow = not _collect_flow_symbols(rest[1:], symbols)
                in_symbols = False
            else:
                in_symbols = True
            continue

        if in_symbols:
            if trimmed.startswith("-"):
                symbol = _block_symbol(trimmed[1:].strip())
                if symbol:
                    symbols.add(symbol)
            elif not trimmed.startswith("#") and not trimmed.endswith(":"):
                in_symbols = False

        # A new section key ends the exports block
        if (
            not trimmed.startswith(("-", "#"))
            and trimmed.endswith(":")
            and trimmed not in ("exports:", "symbols:")
        ):
            in_exports = False
            in_symbols = False

    return symbols


def symbol_name(identifier: str) -> str:
    """Return the linker-mangled symbol name for a C constant."""
    return f"_{identifier}"


def validate_symbols(
    services: Iterable[ServiceEntry],
    characteristics: Iterable[CharacteristicEntry],
    exported_symbols: set[str],
    diagnostics: DiagnosticsReport,
) -> int:
    """Warn about catalog identifiers that the TBD does not export.

    Validation is skipped entirely when ``exported_symbols`` is empty.

    Returns
    -------
        Number of identifiers not found among the exported symbols.

    """
    if not exported_symbols:
        return 0

    missing = 0
    for kind, entries in (("Service", services), ("Characteristic", characteristics)):
        for entry in entries:
            symbol = symbol_name(entry.identifier)
            if symbol not in exported_symbols:
                missing += 1
                diagnostics.add_warning(
                    DiagnosticCodes.W001_SYMBOL_NOT_EXPORTED,
                    f"{kind} symbol not found in TBD: {symbol}",
                    symbol=symbol,
                )
    return missing


class TBDParser:
    """Load the exported symbols of the HomeKit framework.

    Usage:
        symbols = TBDParser(layout, diagnostics).parse_symbols()
    """

    def __init__(self, layout: SDKLayout, diagnostics: DiagnosticsReport | None = None) -> None:
        """Initialize the parser.

        Args:
        ----
            layout: Locations of the framework files.
            diagnostics: Sink for the "TBD missing" notice.

        """
        self._layout = layout
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticsReport()

    def parse_symbols(self) -> set[str]:
        """Parse the framework TBD.

        Returns an empty set when the file does not exist, which disables
        symbol validation.

        Raises
        ------
            OSError: If the file exists but cannot be read.

        """
        path = self._layout.tbd_path
        if not path.is_file():
            self._diagnostics.add_info(
                DiagnosticCodes.I001_TBD_MISSING,
                f"TBD file not found, skipping symbol validation: {path}",
                path=str(path),
            )
            return set()
        return parse_exported_symbols(path.read_text(encoding="utf-8"))
