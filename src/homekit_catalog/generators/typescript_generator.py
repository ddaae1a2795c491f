"""TypeScript backend: type enums, characteristic aliases and service interfaces.

Output tree::

    serviceTypes.ts
    characteristicTypes.ts
    characteristics/<Name>Characteristic.ts
    services/<Name>Service.ts
    index.ts

The generated tree lives next to the package's hand-written ``types``
directory, which provides the ``Service`` and ``Characteristic`` base types.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from homekit_catalog.generators.base import CodeGenerator
from homekit_catalog.generators.naming import (
    IdentifierAllocator,
    doc_text,
    screaming_snake_identifier,
    type_name,
)
from homekit_catalog.models.catalog import Catalog, CharacteristicEntry, ServiceEntry, ValueKind

# Members of the base Service interface
RESERVED_PROPERTY_NAMES = frozenset({"id", "type", "name", "isPrimary", "characteristics"})

# DATA travels over the bridge as a base64 string
TS_VALUE_TYPES = {
    ValueKind.BOOLEAN: "boolean",
    ValueKind.INTEGER: "number",
    ValueKind.FLOATING: "number",
    ValueKind.TEXT: "string",
    ValueKind.DATA: "string",
}
TS_FALLBACK_TYPE = "any"


def ts_value_type(kind: ValueKind) -> str:
    """TypeScript type for a characteristic value kind."""
    return TS_VALUE_TYPES.get(kind, TS_FALLBACK_TYPE)


def ts_string(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


@dataclass
class TypeScriptNames:
    """Identifiers assigned to catalog entries, keyed by type identifier."""

    service_keys: dict[str, str] = field(default_factory=dict)
    characteristic_keys: dict[str, str] = field(default_factory=dict)
    service_interfaces: dict[str, str] = field(default_factory=dict)
    characteristic_aliases: dict[str, str] = field(default_factory=dict)


def assign_names(catalog: Catalog) -> TypeScriptNames:
    """Allocate enum keys and type names in sorted catalog order."""
    names = TypeScriptNames()
    service_keys = IdentifierAllocator(normalize=screaming_snake_identifier)
    characteristic_keys = IdentifierAllocator(normalize=screaming_snake_identifier)
    service_interfaces = IdentifierAllocator(normalize=lambda raw: type_name(raw, "Service"))
    characteristic_aliases = IdentifierAllocator(
        normalize=lambda raw: type_name(raw, "Characteristic")
    )

    for service in catalog.sorted_services():
        key = service.identifier
        names.service_keys[key] = service_keys.allocate(service.swift_name, service.name)
        names.service_interfaces[key] = service_interfaces.allocate(
            service.name, service.swift_name
        )

    for characteristic in catalog.sorted_characteristics():
        key = characteristic.identifier
        names.characteristic_keys[key] = characteristic_keys.allocate(
            characteristic.swift_name, characteristic.name
        )
        names.characteristic_aliases[key] = characteristic_aliases.allocate(
            characteristic.swift_name, characteristic.name
        )
    return names


class TypeScriptGenerator(CodeGenerator):
    """Generate the TypeScript definitions for the React Native package.

    Usage:
        generator = TypeScriptGenerator(diagnostics)
        generator.generate(catalog, Path("packages/react-native-homeatlas/src/generated"))
    """

    target = "TypeScript"

    def render(self, catalog: Catalog) -> dict[str, str]:
        """Render the TypeScript tree (see module docstring for the layout)."""
        header = self._file_header()
        names = assign_names(catalog)
        by_name = catalog.characteristics_by_name()
        services = catalog.sorted_services()
        characteristics = catalog.sorted_characteristics()

        files = {
            "serviceTypes.ts": self._render_enum(
                header,
                "ServiceTypes",
                "Service",
                [(names.service_keys[s.identifier], s) for s in services],
            ),
            "characteristicTypes.ts": self._render_enum(
                header,
                "CharacteristicTypes",
                "Characteristic",
                [(names.characteristic_keys[c.identifier], c) for c in characteristics],
            ),
        }

        for characteristic in characteristics:
            alias = names.characteristic_aliases[characteristic.identifier]
            files[f"characteristics/{alias}.ts"] = self._render_alias(header, characteristic, alias)

        for service in services:
            interface = names.service_interfaces[service.identifier]
            files[f"services/{interface}.ts"] = self._render_interface(
                header, service, interface, names, by_name
            )

        files["index.ts"] = self._render_index(header, services, characteristics, names)
        return files

    def _file_header(self) -> str:
        return (
            "// This file is auto-generated. Do not edit manually.\n"
            f"// Generated: {self.timestamp()}\n"
            "// Generator: HomeKitServiceGenerator (TypeScript)\n"
            "\n"
        )

    @staticmethod
    def _render_enum(
        header: str,
        enum_name: str,
        kind: str,
        entries: list[tuple[str, ServiceEntry | CharacteristicEntry]],
    ) -> str:
        lines = [
            header,
            f"/**\n * HomeKit {kind} Type identifiers\n * Auto-generated from HomeKit catalog\n */\n",
            f"export enum {enum_name} {{\n",
        ]
        for index, (key, entry) in enumerate(entries):
            doc = doc_text(entry.documentation, f"{kind} type: {entry.name}")
            lines.append(f"  /** {doc} */\n")
            if entry.deprecated:
                lines.append(f"  /** @deprecated HomeKit marks this {kind.lower()} as deprecated */\n")
            separator = "," if index < len(entries) - 1 else ""
            lines.append(f"  {key} = {ts_string(entry.identifier)}{separator}\n")
        lines.append("}\n")
        return "".join(lines)

    @staticmethod
    def _render_alias(header: str, characteristic: CharacteristicEntry, alias: str) -> str:
        doc = doc_text(
            characteristic.documentation, f"Type-safe characteristic for {characteristic.name}"
        )
        lines = [
            header,
            "import { Characteristic } from '../../types/characteristic';\n",
            "\n",
            f"/**\n * {doc}\n",
        ]
        if characteristic.deprecated:
            lines.append(" * @deprecated HomeKit marks this characteristic as deprecated\n")
        lines.append(" */\n")
        lines.append(
            f"export type {alias} = Characteristic<{ts_value_type(characteristic.value_kind)}>;\n"
        )
        return "".join(lines)

    def _render_interface(
        self,
        header: str,
        service: ServiceEntry,
        interface: str,
        names: TypeScriptNames,
        characteristics_by_name: dict[str, CharacteristicEntry],
    ) -> str:
        resolved = self.resolve_characteristics(service, characteristics_by_name)
        aliases = sorted({names.characteristic_aliases[c.identifier] for c, _ in resolved})

        lines = [
            header,
            f"/**\n * {interface} interface\n * Auto-generated from HomeKit catalog\n */\n\n",
            "import { Service, Characteristic } from '../../types/service';\n",
        ]
        lines.extend(
            f"import type {{ {alias} }} from '../characteristics/{alias}';\n" for alias in aliases
        )
        lines.append("\n")

        doc = doc_text(service.documentation, f"Service interface for {service.name}")
        lines.append(f"/**\n * {doc}\n")
        if service.deprecated:
            lines.append(" * @deprecated HomeKit marks this service as deprecated\n")
        lines.append(" */\n")
        lines.append(
            f"export interface {interface} extends Service {{\n"
            "  /** Service type identifier */\n"
            f"  readonly type: {ts_string(service.identifier)};\n"
            "  /** Service characteristics */\n"
            "  readonly characteristics: Characteristic[];\n"
        )

        properties = IdentifierAllocator(RESERVED_PROPERTY_NAMES, "Characteristic")
        for characteristic, required in resolved:
            property_name = properties.allocate(characteristic.swift_name, characteristic.name)
            marker = "" if required else "?"
            label = "Required" if required else "Optional"
            lines.append(f"\n  /**\n   * {label} characteristic: {characteristic.name}\n")
            if characteristic.deprecated:
                lines.append("   * @deprecated HomeKit marks this characteristic as deprecated\n")
            lines.append("   */\n")
            alias = names.characteristic_aliases[characteristic.identifier]
            lines.append(f"  readonly {property_name}{marker}: {alias};\n")

        lines.append("}\n")
        return "".join(lines)

    @staticmethod
    def _render_index(
        header: str,
        services: list[ServiceEntry],
        characteristics: list[CharacteristicEntry],
        names: TypeScriptNames,
    ) -> str:
        lines = [
            header,
            "/**\n * Generated HomeKit Type Definitions\n"
            " * Re-exports all generated types, enums, and interfaces\n */\n\n",
            "// Type enums\n",
            "export { ServiceTypes } from './serviceTypes';\n",
            "export { CharacteristicTypes } from './characteristicTypes';\n",
            "\n// Characteristic type definitions\n",
        ]
        for characteristic in characteristics:
            alias = names.characteristic_aliases[characteristic.identifier]
            lines.append(f"export type {{ {alias} }} from './characteristics/{alias}';\n")
        lines.append("\n// Service interfaces\n")
        for service in services:
            interface = names.service_interfaces[service.identifier]
            lines.append(f"export type {{ {interface} }} from './services/{interface}';\n")
        return "".join(lines)
