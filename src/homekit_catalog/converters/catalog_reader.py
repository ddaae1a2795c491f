"""Read the catalog interchange file written by :class:`CatalogWriter`.

The reader is a line scanner for exactly the subset the writer produces, not
a general YAML parser. It is lenient: a record missing ``identifier``,
``name``, ``swiftName`` (or ``valueType`` for characteristics) is dropped
without a warning. Existing catalog files rely on that behaviour, so dropped
records are only counted in :attr:`CatalogReader.skipped_records`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from homekit_catalog.errors import CatalogReadError
from homekit_catalog.models.catalog import Catalog, CharacteristicEntry, ServiceEntry, ValueKind

SECTION_SERVICES = "services"
SECTION_CHARACTERISTICS = "characteristics"

_ESCAPE = re.compile(r"\\(.)")
_UNESCAPED = {"\\": "\\", '"': '"', "n": "\n"}


def unquote(value: str) -> str:
    """Strip surrounding double quotes and undo the writer's escapes."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return _ESCAPE.sub(lambda m: _UNESCAPED.get(m.group(1), m.group(0)), value[1:-1])
    return value


@dataclass
class _PendingRecord:
    """Fields collected for the entry currently being scanned."""

    scalars: dict[str, str] = field(default_factory=dict)
    lists: dict[str, list[str]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.scalars and not self.lists


def _build_service(record: _PendingRecord) -> ServiceEntry | None:
    scalars = record.scalars
    if not all(scalars.get(key) for key in ("identifier", "name", "swiftName")):
        return None
    return ServiceEntry(
        identifier=scalars["identifier"],
        name=scalars["name"],
        swift_name=scalars["swiftName"],
        documentation=scalars.get("documentation"),
        deprecated=scalars.get("deprecated") == "true",
        required_characteristics=record.lists.get("requiredCharacteristics", []),
        optional_characteristics=record.lists.get("optionalCharacteristics", []),
    )


def _build_characteristic(record: _PendingRecord) -> CharacteristicEntry | None:
    scalars = record.scalars
    if not all(scalars.get(key) for key in ("identifier", "name", "swiftName", "valueType")):
        return None
    return CharacteristicEntry(
        identifier=scalars["identifier"],
        name=scalars["name"],
        swift_name=scalars["swiftName"],
        value_kind=ValueKind.parse(scalars["valueType"]),
        documentation=scalars.get("documentation"),
        deprecated=scalars.get("deprecated") == "true",
    )


class CatalogReader:
    """Parse catalog files back into a :class:`Catalog`.

    Usage:
        reader = CatalogReader()
        catalog = reader.read(Path("Resources/homekit-services.yaml"))
        print(reader.skipped_records)
    """

    def __init__(self) -> None:
        """Initialize the reader."""
        self.skipped_records = 0

    def read(self, path: Path) -> Catalog:
        """Read and parse a catalog file.

        Raises
        ------
            CatalogReadError: If the file does not exist or cannot be read.

        """
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CatalogReadError("Catalog file not found", path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogReadError(f"Cannot read catalog file: {e}", path) from e
        return self.parse(content)

    def parse(self, content: str) -> Catalog:
        """Parse catalog text.

        Args:
        ----
            content: Text in the catalog interchange format.

        Returns:
        -------
            Catalog with entries in file order.

        """
        self.skipped_records = 0
        catalog = Catalog()
        section: str | None = None
        record = _PendingRecord()
        active_list: str | None = None

        def flush() -> None:
            nonlocal record
            if section is not None and not record.is_empty():
                self._append(catalog, section, record)
            record = _PendingRecord()

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            if line in (f"{SECTION_SERVICES}:", f"{SECTION_CHARACTERISTICS}:"):
                flush()
                section = line[:-1]
                active_list = None
                continue

            if line.startswith("- identifier:"):
                flush()

            # Bare list item, e.g. "- PowerState"
            if line.startswith("- ") and ":" not in line:
                if active_list is not None:
                    record.lists[active_list].append(line[2:].strip())
                continue

            key, sep, value = line.partition(":")
            if not sep:
                continue
            key = key.strip()
            value = value.strip()
            if key.startswith("- "):
                key = key[2:].strip()

            if not value:
                active_list = key
                record.lists.setdefault(key, [])
                continue

            active_list = None
            if section is not None:
                record.scalars[key] = unquote(value)

        flush()
        return catalog

    def _append(self, catalog: Catalog, section: str, record: _PendingRecord) -> None:
        if section == SECTION_SERVICES:
            service = _build_service(record)
            if service is not None:
                catalog.services.append(service)
                return
        else:
            characteristic = _build_characteristic(record)
            if characteristic is not None:
                catalog.characteristics.append(characteristic)
                return
        self.skipped_records += 1
