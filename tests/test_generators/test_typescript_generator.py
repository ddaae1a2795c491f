"""Tests for the TypeScript generator."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from homekit_catalog.diagnostics import DiagnosticsReport
from homekit_catalog.generators import TypeScriptGenerator
from homekit_catalog.generators.typescript_generator import assign_names, ts_string
from homekit_catalog.models import Catalog, CharacteristicEntry, ServiceEntry, ValueKind

GENERATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def ts_files(sample_catalog: Catalog) -> dict[str, str]:
    """Rendered TypeScript tree for the sample catalog."""
    return TypeScriptGenerator(generated_at=GENERATED_AT).render(sample_catalog)


class TestTypeScriptLayout:
    """Tests for the generated file set."""

    def test_file_names(self, ts_files: dict[str, str]) -> None:
        """Test enums, one alias per characteristic, interfaces and the index."""
        assert sorted(ts_files) == [
            "characteristicTypes.ts",
            "characteristics/ActiveCharacteristic.ts",
            "characteristics/BrightnessCharacteristic.ts",
            "characteristics/NameCharacteristic.ts",
            "characteristics/PowerStateCharacteristic.ts",
            "characteristics/RotationSpeedCharacteristic.ts",
            "index.ts",
            "serviceTypes.ts",
            "services/FanService.ts",
            "services/LightbulbService.ts",
        ]

    def test_file_header(self, ts_files: dict[str, str]) -> None:
        """Test the banner at the top of every file."""
        for content in ts_files.values():
            assert content.startswith(
                "// This file is auto-generated. Do not edit manually.\n"
                "// Generated: 2024-05-01T12:00:00Z\n"
                "// Generator: HomeKitServiceGenerator (TypeScript)\n"
            )


class TestTypeScriptEnums:
    """Tests for the type identifier enums."""

    def test_service_enum(self, ts_files: dict[str, str]) -> None:
        """Test keys, values and separators."""
        content = ts_files["serviceTypes.ts"]
        assert "export enum ServiceTypes {\n" in content
        assert "  FAN = 'HMServiceTypeFan',\n" in content
        assert "  LIGHTBULB = 'HMServiceTypeLightbulb'\n}\n" in content

    def test_characteristic_enum(self, ts_files: dict[str, str]) -> None:
        """Test screaming snake keys."""
        content = ts_files["characteristicTypes.ts"]
        assert "  POWER_STATE = 'HMCharacteristicTypePowerState',\n" in content
        assert "  ROTATION_SPEED = 'HMCharacteristicTypeRotationSpeed'\n}\n" in content
        assert "  /** Type for power state characteristic. */\n" in content

    def test_deprecated_member(self, ts_files: dict[str, str]) -> None:
        """Test the deprecation tag on enum members."""
        content = ts_files["serviceTypes.ts"]
        assert "  /** @deprecated HomeKit marks this service as deprecated */\n  FAN" in content

    def test_leading_digit_key(self) -> None:
        """Test that enum keys never start with a digit."""
        printer = ServiceEntry("HMServiceType3DPrinter", "3DPrinter", "3DPrinter")
        names = assign_names(Catalog(services=[printer]))
        assert names.service_keys["HMServiceType3DPrinter"].startswith("_3")

    def test_duplicate_display_names(self) -> None:
        """Test that each identifier gets its own enum key and alias file."""
        catalog = Catalog(
            characteristics=[
                CharacteristicEntry("HMCharacteristicTypeLevelOld", "Level", "level"),
                CharacteristicEntry("HMCharacteristicTypeLevelNew", "Level", "level"),
            ]
        )
        files = TypeScriptGenerator(generated_at=GENERATED_AT).render(catalog)

        content = files["characteristicTypes.ts"]
        assert "  LEVEL = 'HMCharacteristicTypeLevelNew',\n" in content
        assert "  LEVEL2 = 'HMCharacteristicTypeLevelOld'\n" in content
        assert "characteristics/LevelCharacteristic.ts" in files
        assert "characteristics/LevelCharacteristic2.ts" in files


class TestTypeScriptAliases:
    """Tests for characteristic alias files."""

    def test_value_types(self, ts_files: dict[str, str]) -> None:
        """Test value kind mapping."""
        assert (
            "export type PowerStateCharacteristic = Characteristic<boolean>;\n"
            in ts_files["characteristics/PowerStateCharacteristic.ts"]
        )
        assert "Characteristic<number>" in ts_files["characteristics/BrightnessCharacteristic.ts"]
        assert "Characteristic<string>" in ts_files["characteristics/NameCharacteristic.ts"]

    def test_import_path(self, ts_files: dict[str, str]) -> None:
        """Test the base type import."""
        assert (
            "import { Characteristic } from '../../types/characteristic';\n"
            in ts_files["characteristics/ActiveCharacteristic.ts"]
        )

    def test_data_is_string(self) -> None:
        """Test that binary values travel as strings."""
        catalog = Catalog(
            characteristics=[
                CharacteristicEntry(
                    "HMCharacteristicTypeSetupData", "SetupData", "setupData", ValueKind.DATA
                )
            ]
        )
        files = TypeScriptGenerator(generated_at=GENERATED_AT).render(catalog)
        assert "Characteristic<string>" in files["characteristics/SetupDataCharacteristic.ts"]


class TestTypeScriptInterfaces:
    """Tests for service interface files."""

    def test_interface(self, ts_files: dict[str, str]) -> None:
        """Test the interface declaration and properties."""
        content = ts_files["services/LightbulbService.ts"]
        assert "import { Service, Characteristic } from '../../types/service';\n" in content
        assert "export interface LightbulbService extends Service {\n" in content
        assert "  readonly type: 'HMServiceTypeLightbulb';\n" in content
        assert "  readonly characteristics: Characteristic[];\n" in content
        assert "  readonly powerState: PowerStateCharacteristic;\n" in content
        assert "  readonly brightness?: BrightnessCharacteristic;\n" in content

    def test_reserved_property(self, ts_files: dict[str, str]) -> None:
        """Test that base interface members are not shadowed."""
        content = ts_files["services/LightbulbService.ts"]
        assert "  readonly nameCharacteristic?: NameCharacteristic;\n" in content
        assert "  readonly name?" not in content

    def test_type_imports(self, ts_files: dict[str, str]) -> None:
        """Test one sorted type import per referenced alias."""
        content = ts_files["services/LightbulbService.ts"]
        brightness = (
            "import type { BrightnessCharacteristic } from '../characteristics/BrightnessCharacteristic';\n"
        )
        power = (
            "import type { PowerStateCharacteristic } from '../characteristics/PowerStateCharacteristic';\n"
        )
        assert brightness in content
        assert power in content
        assert content.index(brightness) < content.index(power)
        assert "ActiveCharacteristic" not in content

    def test_deprecated_service(self, ts_files: dict[str, str]) -> None:
        """Test the deprecation tag and documentation of a service."""
        content = ts_files["services/FanService.ts"]
        assert ' * Service type for "fan".\n * @deprecated' in content

    def test_unknown_characteristic_skipped(self, sample_catalog: Catalog) -> None:
        """Test that dangling references are skipped with a warning."""
        sample_catalog.services[1].required_characteristics.append("CurrentFanState")
        report = DiagnosticsReport()
        files = TypeScriptGenerator(report, GENERATED_AT).render(sample_catalog)
        assert "CurrentFanState" not in files["services/FanService.ts"]
        assert report.codes() == ["W010"]


class TestTypeScriptIndex:
    """Tests for index.ts."""

    def test_exports(self, ts_files: dict[str, str]) -> None:
        """Test that every generated type is re-exported."""
        content = ts_files["index.ts"]
        assert "export { ServiceTypes } from './serviceTypes';\n" in content
        assert "export { CharacteristicTypes } from './characteristicTypes';\n" in content
        assert (
            "export type { PowerStateCharacteristic } from "
            "'./characteristics/PowerStateCharacteristic';\n"
        ) in content
        assert "export type { FanService } from './services/FanService';\n" in content


class TestTsString:
    """Tests for ts_string."""

    def test_escapes(self) -> None:
        """Test quote and backslash escaping."""
        assert ts_string("it's") == "'it\\'s'"
        assert ts_string("a\\b") == "'a\\\\b'"
