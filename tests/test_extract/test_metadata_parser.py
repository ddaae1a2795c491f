"""Tests for the metadata relationship loader."""

from __future__ import annotations

import json
import plistlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml
from homekit_catalog.errors import (
    InvalidRootStructureError,
    MetadataFileMissingError,
    MissingHAPSectionError,
)
from homekit_catalog.extract import MetadataParser, canonical_identifier
from homekit_catalog.extract.metadata_parser import unique_preserving_order


class TestCanonicalIdentifier:
    """Tests for canonical_identifier."""

    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("Carbon dioxide Level", "CarbonDioxideLevel"),
            ("PM2.5 Density", "PM2_5Density"),
            ("Wi-Fi Satellite", "WiFiSatellite"),
            ("Accessory Information", "AccessoryInformation"),
            ("Lightbulb", "Lightbulb"),
            ("Power  State", "PowerState"),
            ("Target Position (%)", "TargetPosition"),
        ],
    )
    def test_descriptions(self, description: str, expected: str) -> None:
        """Test word capitalization and punctuation handling."""
        assert canonical_identifier(description) == expected

    def test_blank(self) -> None:
        """Test that blank descriptions yield an empty name."""
        assert canonical_identifier("   ") == ""

    def test_rest_of_word_is_kept(self) -> None:
        """Test that only the first letter of each word changes."""
        assert canonical_identifier("iOS mode") == "IOSMode"


class TestUniquePreservingOrder:
    """Tests for unique_preserving_order."""

    def test_drops_duplicates_and_empty(self) -> None:
        """Test first occurrences are kept."""
        assert unique_preserving_order(["B", "", "A", "B"]) == ["B", "A"]


class TestMetadataParser:
    """Tests for MetadataParser.load."""

    def test_relationships(self, write_metadata: Callable[..., Path]) -> None:
        """Test services resolved through short ids."""
        result = MetadataParser(write_metadata()).load()
        by_name = {r.service_name: r for r in result.relationships}

        assert list(by_name) == ["Lightbulb", "Fan", "AccessoryInformation", "WiFiRouter"]
        lightbulb = by_name["Lightbulb"]
        assert lightbulb.required == ("PowerState",)
        assert lightbulb.optional == ("Brightness", "Hue", "Saturation", "ColorTemperature", "Name")
        assert by_name["WiFiRouter"].raw_description == "Wi-Fi Router"
        assert by_name["AccessoryInformation"].required == ("Name", "FirmwareRevision")

    def test_formats_and_aliases(self, write_metadata: Callable[..., Path]) -> None:
        """Test lower-cased formats and every alias form."""
        result = MetadataParser(write_metadata()).load()

        assert result.characteristic_formats["PowerState"] == "bool"
        assert result.characteristic_formats["ColorTemperature"] == "uint32"
        assert result.characteristic_formats["PM2_5Density"] == "float"
        aliases = result.characteristic_aliases
        assert aliases["25"] == "PowerState"
        assert aliases["00000025"] == "PowerState"
        assert aliases["00000025-0000-1000-8000-0026BB765291"] == "PowerState"
        assert aliases["2F"] == "Saturation"

    def test_ids_are_case_insensitive_and_deduplicated(
        self,
        write_metadata: Callable[..., Path],
        metadata_data: dict[str, Any],
    ) -> None:
        """Test id matching ignores case and repeated ids collapse."""
        services = metadata_data["PlistDictionary"]["HAP"]["Services"]
        services["00000043"]["Characteristics"] = {
            "Required": ["25", "00000025"],
            "Optional": ["2f", "ffff"],
        }
        result = MetadataParser(write_metadata(metadata_data)).load()
        lightbulb = next(r for r in result.relationships if r.service_name == "Lightbulb")
        assert lightbulb.required == ("PowerState",)
        assert lightbulb.optional == ("Saturation",)

    def test_sorted_plist_keys(self, tmp_path: Path, metadata_data: dict[str, Any]) -> None:
        """Test that relationships follow the document's key order."""
        path = tmp_path / "sorted.config"
        path.write_bytes(plistlib.dumps(metadata_data))
        result = MetadataParser(path).load()

        names = [r.service_name for r in result.relationships]
        assert names == ["AccessoryInformation", "Fan", "Lightbulb", "WiFiRouter"]
        by_name = {r.service_name: r for r in result.relationships}
        assert by_name["Lightbulb"].required == ("PowerState",)
        assert by_name["AccessoryInformation"].required == ("Name", "FirmwareRevision")

    def test_malformed_records_are_skipped(
        self,
        write_metadata: Callable[..., Path],
        metadata_data: dict[str, Any],
    ) -> None:
        """Test that records without a description are ignored."""
        hap = metadata_data["PlistDictionary"]["HAP"]
        hap["Services"]["broken"] = {"Characteristics": {"Required": ["25"]}}
        hap["Characteristics"]["broken"] = {"ShortUUID": "99"}
        result = MetadataParser(write_metadata(metadata_data)).load()
        assert len(result.relationships) == 4
        assert "99" not in result.characteristic_aliases

    def test_json_document(self, tmp_path: Path, metadata_data: dict[str, Any]) -> None:
        """Test loading a JSON export of the document."""
        path = tmp_path / "metadata.json"
        path.write_text(json.dumps(metadata_data))
        result = MetadataParser(path).load()
        assert result.relationships[1].service_name == "Fan"

    def test_yaml_document(self, tmp_path: Path, metadata_data: dict[str, Any]) -> None:
        """Test loading a YAML export of the document."""
        path = tmp_path / "metadata.yaml"
        path.write_text(yaml.safe_dump(metadata_data))
        result = MetadataParser(path).load()
        assert result.characteristic_formats["Hue"] == "float"


class TestMetadataErrors:
    """Tests for metadata loading failures."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a nonexistent document."""
        with pytest.raises(MetadataFileMissingError):
            MetadataParser(tmp_path / "missing.config").load()

    def test_not_a_plist(self, tmp_path: Path) -> None:
        """Test a document that cannot be parsed."""
        path = tmp_path / "plain-metadata.config"
        path.write_bytes(b"definitely not a property list")
        with pytest.raises(InvalidRootStructureError):
            MetadataParser(path).load()

    def test_root_not_a_dictionary(self, tmp_path: Path) -> None:
        """Test a plist whose root is an array."""
        path = tmp_path / "plain-metadata.config"
        path.write_bytes(plistlib.dumps(["HAP"]))
        with pytest.raises(InvalidRootStructureError, match="Unexpected metadata plist structure"):
            MetadataParser(path).load()

    def test_missing_hap_section(self, write_metadata: Callable[..., Path]) -> None:
        """Test a plist without the HAP services and characteristics."""
        path = write_metadata({"PlistDictionary": {"HAP": {"Services": {}}}})
        with pytest.raises(MissingHAPSectionError, match="missing HAP definitions"):
            MetadataParser(path).load()
