"""Load service/characteristic relationships from the HomeKit metadata document.

The HomeKit daemon ships ``plain-metadata.config``, a property list whose
``PlistDictionary -> HAP`` section lists every HAP service with its required
and optional characteristic ids, and every characteristic with its ids and
value format. Services and characteristics are keyed by ids there, while the
SDK headers use names; both sides are joined through
:func:`canonical_identifier`.
"""

from __future__ import annotations

import plistlib
from collections.abc import Iterable
from pathlib import Path
from typing import Any
from xml.parsers.expat import ExpatError

import yaml
from pydantic import ValidationError

from homekit_catalog.errors import (
    InvalidRootStructureError,
    MetadataFileMissingError,
    MissingHAPSectionError,
)
from homekit_catalog.models.metadata import HAPCharacteristicRecord, HAPServiceRecord
from homekit_catalog.models.relationships import RelationshipResult, ServiceRelationship

# Key path from the document root to the HAP section
HAP_SECTION_PATH = ("PlistDictionary", "HAP")

_STRUCTURED_TEXT_SUFFIXES = {".json", ".yaml", ".yml"}


def canonical_identifier(description: str) -> str:
    """Turn a human-readable description into the canonical join name.

    Each space-separated word gets its first letter upper-cased (the rest is
    kept), words are concatenated, hyphens are removed, dots become
    underscores and any other non-alphanumeric character is dropped.

    Examples:
    --------
        >>> canonical_identifier("Carbon dioxide Level")
        'CarbonDioxideLevel'
        >>> canonical_identifier("PM2.5 Density")
        'PM2_5Density'
        >>> canonical_identifier("Wi-Fi Satellite")
        'WiFiSatellite'

    """
    trimmed = description.strip()
    if not trimmed:
        return ""

    joined = "".join(word[:1].upper() + word[1:] for word in trimmed.split(" "))
    result: list[str] = []
    for character in joined.replace("-", ""):
        if character == ".":
            result.append("_")
        elif character.isalnum() or character == "_":
            result.append(character)
    return "".join(result)


def unique_preserving_order(values: Iterable[str]) -> list[str]:
    """Drop empty strings and duplicates, keeping first occurrences."""
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _load_document(path: Path) -> Any:
    """Parse the metadata file as a plist, or as JSON/YAML by extension."""
    try:
        if path.suffix.lower() in _STRUCTURED_TEXT_SUFFIXES:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        with path.open("rb") as f:
            return plistlib.load(f)
    except (plistlib.InvalidFileException, ExpatError, yaml.YAMLError, ValueError) as e:
        raise InvalidRootStructureError(f"Unexpected metadata structure: {e}", path) from e


def _hap_section(root: dict[str, Any], path: Path) -> tuple[dict[str, Any], dict[str, Any]]:
    """Navigate to the sibling ``Services`` and ``Characteristics`` mappings."""
    node: Any = root
    for key in HAP_SECTION_PATH:
        node = node.get(key) if isinstance(node, dict) else None
    services = node.get("Services") if isinstance(node, dict) else None
    characteristics = node.get("Characteristics") if isinstance(node, dict) else None
    if not isinstance(services, dict) or not isinstance(characteristics, dict):
        raise MissingHAPSectionError("Metadata plist missing HAP definitions", path)
    return services, characteristics


class MetadataParser:
    """Parse the metadata document into a :class:`RelationshipResult`.

    Usage:
        result = MetadataParser(Path("plain-metadata.config")).load()
        for relationship in result.relationships:
            print(relationship.service_name, relationship.required)
    """

    def __init__(self, metadata_path: Path) -> None:
        """Initialize the parser.

        Args:
        ----
            metadata_path: Path to the plist (or JSON/YAML export) document.

        """
        self._path = metadata_path

    def load(self) -> RelationshipResult:
        """Load relationships and characteristic formats.

        Raises
        ------
            MetadataFileMissingError: If the document does not exist.
            InvalidRootStructureError: If it cannot be parsed into a mapping.
            MissingHAPSectionError: If the HAP services/characteristics are absent.
            OSError: If the file exists but cannot be read.

        """
        if not self._path.is_file():
            raise MetadataFileMissingError(self._path)

        root = _load_document(self._path)
        if not isinstance(root, dict):
            raise InvalidRootStructureError("Unexpected metadata plist structure", self._path)

        services, characteristics = _hap_section(root, self._path)
        return self.parse_sections(services, characteristics)

    @staticmethod
    def parse_sections(
        services: dict[str, Any],
        characteristics: dict[str, Any],
    ) -> RelationshipResult:
        """Build the relationship result from the two HAP mappings."""
        aliases, formats = _build_characteristic_lookup(characteristics)

        relationships: list[ServiceRelationship] = []
        for value in services.values():
            try:
                record = HAPServiceRecord.model_validate(value)
            except ValidationError:
                continue

            required = _resolve_names(record.characteristics.required, aliases)
            optional = _resolve_names(record.characteristics.optional, aliases)
            relationships.append(
                ServiceRelationship(
                    service_name=canonical_identifier(record.default_description),
                    raw_description=record.default_description,
                    required=tuple(required),
                    optional=tuple(optional),
                )
            )

        return RelationshipResult(
            relationships=relationships,
            characteristic_formats=formats,
            characteristic_aliases=aliases,
        )


def _resolve_names(ids: Iterable[str], aliases: dict[str, str]) -> list[str]:
    """Translate characteristic ids to canonical names, dropping unknown ids."""
    return unique_preserving_order(
        aliases[key] for key in (i.upper() for i in ids) if key in aliases
    )


def _build_characteristic_lookup(
    characteristics: dict[str, Any],
) -> tuple[dict[str, str], dict[str, str]]:
    """Map every characteristic id variant to its canonical name.

    Returns
    -------
        ``(aliases, formats)`` where ``aliases`` maps upper-cased record key,
        short UUID and long UUID to the canonical name, and ``formats`` maps
        the canonical name to its lower-cased format token.

    """
    aliases: dict[str, str] = {}
    formats: dict[str, str] = {}

    for key, value in characteristics.items():
        try:
            record = HAPCharacteristicRecord.model_validate(value)
        except ValidationError:
            continue

        identifier = canonical_identifier(record.default_description)
        if record.format is not None:
            formats[identifier] = record.format.lower()
        if record.short_uuid is not None:
            aliases[record.short_uuid.upper()] = identifier
        aliases[str(key).upper()] = identifier
        if record.uuid is not None:
            aliases[record.uuid.upper()] = identifier

    return aliases, formats
