"""Parse HomeKit SDK headers into catalog entries.

The headers declare one string constant per service or characteristic type:

    // Lightbulb service.
    HM_EXTERN NSString * const HMServiceTypeLightbulb API_AVAILABLE(ios(8.0));

Every declaration matching that idiom becomes one catalog entry, in
declaration order.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from homekit_catalog.errors import HeaderNotFoundError
from homekit_catalog.models.catalog import (
    CharacteristicEntry,
    ServiceEntry,
    ValueKind,
    lower_first,
)

if TYPE_CHECKING:
    from homekit_catalog.config import SDKLayout

SERVICE_PREFIX = "HMServiceType"
CHARACTERISTIC_PREFIX = "HMCharacteristicType"

# Substring heuristics on the lower-cased name, checked in order
_VALUE_KIND_HINTS: tuple[tuple[tuple[str, ...], ValueKind], ...] = (
    (("on", "active", "enabled", "detected", "muted"), ValueKind.BOOLEAN),
    (("brightness", "hue", "saturation", "level"), ValueKind.INTEGER),
    (("temperature", "humidity", "pressure"), ValueKind.FLOATING),
)


def declaration_pattern(prefix: str) -> re.Pattern[str]:
    """Build the declaration regex for a constant prefix.

    Group 1 is the type name after the prefix. Group 2 is a lookahead capture
    of the trailing annotations up to the terminating ``;``.
    """
    return re.compile(
        rf"HM_EXTERN\s+NSString\s*\*\s*const\s+{re.escape(prefix)}(\w+)(?=([^;]*))"
    )


_SERVICE_PATTERN = declaration_pattern(SERVICE_PREFIX)
_CHARACTERISTIC_PATTERN = declaration_pattern(CHARACTERISTIC_PREFIX)


def extract_documentation(content: str, offset: int) -> str | None:
    """Collect the line comments directly above a declaration.

    Walks backward from ``offset`` gathering ``//`` comment lines and skipping
    blank lines. Stops at a block comment marker or at any other line.

    Args:
    ----
        content: Full header text.
        offset: Start offset of the declaration.

    Returns:
    -------
        The comment bodies joined with spaces in source order, or None.

    """
    doc_lines: list[str] = []
    for line in reversed(content[:offset].split("\n")):
        trimmed = line.strip()
        if trimmed.startswith("//"):
            body = trimmed.lstrip("/").strip()
            if body:
                doc_lines.append(body)
        elif trimmed.startswith("/*") or "*/" in trimmed:
            break
        elif trimmed:
            break
    if not doc_lines:
        return None
    return " ".join(reversed(doc_lines))


def infer_value_kind(name: str) -> ValueKind:
    """Guess a characteristic's value kind from its name.

    Authoritative format hints from the metadata document override this.

    Examples:
    --------
        >>> infer_value_kind("CurrentTemperature")
        <ValueKind.FLOATING: 'Double'>
        >>> infer_value_kind("PM2_5Density")
        <ValueKind.TEXT: 'String'>

    """
    lower_name = name.lower()
    for needles, kind in _VALUE_KIND_HINTS:
        if any(needle in lower_name for needle in needles):
            return kind
    return ValueKind.TEXT


def _is_deprecated(annotations: str) -> bool:
    return "DEPRECATED" in annotations


def parse_service_definitions(content: str) -> list[ServiceEntry]:
    """Extract service entries from the text of ``HMServiceTypes.h``."""
    services: list[ServiceEntry] = []
    for match in _SERVICE_PATTERN.finditer(content):
        name = match.group(1)
        services.append(
            ServiceEntry(
                identifier=f"{SERVICE_PREFIX}{name}",
                name=name,
                swift_name=lower_first(name),
                documentation=extract_documentation(content, match.start()),
                deprecated=_is_deprecated(match.group(2)),
            )
        )
    return services


def parse_characteristic_definitions(content: str) -> list[CharacteristicEntry]:
    """Extract characteristic entries from the text of ``HMCharacteristicTypes.h``."""
    characteristics: list[CharacteristicEntry] = []
    for match in _CHARACTERISTIC_PATTERN.finditer(content):
        name = match.group(1)
        characteristics.append(
            CharacteristicEntry(
                identifier=f"{CHARACTERISTIC_PREFIX}{name}",
                name=name,
                swift_name=lower_first(name),
                value_kind=infer_value_kind(name),
                documentation=extract_documentation(content, match.start()),
                deprecated=_is_deprecated(match.group(2)),
            )
        )
    return characteristics


class HeaderParser:
    """Parse the HomeKit framework's type headers.

    Usage:
        parser = HeaderParser(SDKLayout.from_sdk(sdk_path))
        services = parser.parse_services()
        characteristics = parser.parse_characteristics()
    """

    def __init__(self, layout: SDKLayout) -> None:
        """Initialize the parser with the framework layout."""
        self._layout = layout

    def parse_services(self) -> list[ServiceEntry]:
        """Parse service definitions.

        Raises
        ------
            HeaderNotFoundError: If the service header does not exist.

        """
        return parse_service_definitions(self._read(self._layout.service_header))

    def parse_characteristics(self) -> list[CharacteristicEntry]:
        """Parse characteristic definitions.

        Raises
        ------
            HeaderNotFoundError: If the characteristic header does not exist.

        """
        return parse_characteristic_definitions(self._read(self._layout.characteristic_header))

    def _read(self, path: Path) -> str:
        if not path.is_file():
            raise HeaderNotFoundError(path)
        return path.read_text(encoding="utf-8")
