"""Write the catalog interchange file.

The file is a small, fixed subset of YAML that :class:`CatalogReader`
parses without a YAML library:

    # HomeKit Services and Characteristics Catalog
    # Auto-generated from iOS SDK headers
    # Generated: 2024-05-01T12:00:00Z

    services:
      - identifier: HMServiceTypeLightbulb
        name: Lightbulb
        swiftName: lightbulb
        documentation: "Lightbulb service."
        requiredCharacteristics:
          - PowerState

    characteristics:
      - identifier: HMCharacteristicTypeBrightness
        name: Brightness
        swiftName: brightness
        valueType: Int
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from homekit_catalog.common.fileio import write_text_atomic
from homekit_catalog.errors import CatalogEncodeError
from homekit_catalog.models.catalog import Catalog, CharacteristicEntry, ServiceEntry

HEADER_TITLE = "# HomeKit Services and Characteristics Catalog"
HEADER_SOURCE = "# Auto-generated from iOS SDK headers"
TIMESTAMP_PREFIX = "# Generated: "


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with second precision."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def quote(value: str) -> str:
    """Double-quote a scalar, escaping backslashes, quotes and newlines."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _require(kind: str, label: str, /, **fields: str) -> None:
    for key, value in fields.items():
        if not value:
            name = label or "<unnamed>"
            raise CatalogEncodeError(f"{kind} '{name}' has an empty {key}")


class CatalogWriter:
    """Serialize a :class:`Catalog` to the interchange format.

    Usage:
        writer = CatalogWriter()
        writer.write(catalog, Path("Resources/homekit-services.yaml"))

    Or to get the text without touching the filesystem:
        text = writer.write_text(catalog)
    """

    def write_text(self, catalog: Catalog, generated_at: datetime | None = None) -> str:
        """Render the catalog file contents.

        Args:
        ----
            catalog: Catalog to serialize. Entries are sorted by display name;
                characteristic lists keep their order.
            generated_at: Timestamp for the header. Defaults to now (UTC).

        Returns:
        -------
            The file text, ending with a newline.

        Raises:
        ------
            CatalogEncodeError: If an entry lacks an identifier, name or swiftName.

        """
        moment = generated_at or datetime.now(timezone.utc)
        lines = [
            HEADER_TITLE,
            HEADER_SOURCE,
            f"{TIMESTAMP_PREFIX}{format_timestamp(moment)}",
            "",
            "services:",
        ]
        for service in catalog.sorted_services():
            lines.extend(self._service_lines(service))

        lines.append("characteristics:")
        for characteristic in catalog.sorted_characteristics():
            lines.extend(self._characteristic_lines(characteristic))

        return "\n".join(lines) + "\n"

    def write(self, catalog: Catalog, path: Path, generated_at: datetime | None = None) -> None:
        """Write the catalog file, replacing ``path`` atomically.

        Raises
        ------
            CatalogEncodeError: If an entry cannot be encoded.
            OSError: If the file cannot be written.

        """
        text = self.write_text(catalog, generated_at)
        write_text_atomic(path, text)

    @staticmethod
    def _common_lines(entry: ServiceEntry | CharacteristicEntry, kind: str) -> list[str]:
        _require(
            kind,
            entry.identifier,
            identifier=entry.identifier,
            name=entry.name,
            swiftName=entry.swift_name,
        )
        return [
            f"  - identifier: {entry.identifier}",
            f"    name: {entry.name}",
            f"    swiftName: {entry.swift_name}",
        ]

    @staticmethod
    def _trailer_lines(entry: ServiceEntry | CharacteristicEntry) -> list[str]:
        lines = []
        if entry.documentation is not None:
            lines.append(f"    documentation: {quote(entry.documentation)}")
        if entry.deprecated:
            lines.append("    deprecated: true")
        return lines

    def _service_lines(self, service: ServiceEntry) -> list[str]:
        lines = self._common_lines(service, "Service")
        lines.extend(self._trailer_lines(service))
        for key, names in (
            ("requiredCharacteristics", service.required_characteristics),
            ("optionalCharacteristics", service.optional_characteristics),
        ):
            # An empty list is written by omitting the key
            if names:
                lines.append(f"    {key}:")
                lines.extend(f"      - {name}" for name in names)
        lines.append("")
        return lines

    def _characteristic_lines(self, characteristic: CharacteristicEntry) -> list[str]:
        lines = self._common_lines(characteristic, "Characteristic")
        lines.append(f"    valueType: {characteristic.value_kind.value}")
        lines.extend(self._trailer_lines(characteristic))
        lines.append("")
        return lines
