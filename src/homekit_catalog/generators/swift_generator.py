"""Swift backend: type constants, characteristic wrappers and service classes.

Output tree::

    ServiceType+Generated.swift
    CharacteristicType+Generated.swift
    Characteristics/<Name>Characteristic.swift
    Services/<Name>Service.swift

Each file compiles with and without HomeKit available: the constants refer
to the SDK symbols under ``#if canImport(HomeKit)`` and fall back to string
literals otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from homekit_catalog.generators.base import CodeGenerator
from homekit_catalog.generators.naming import (
    IdentifierAllocator,
    doc_text,
    type_name,
)
from homekit_catalog.models.catalog import Catalog, CharacteristicEntry, ServiceEntry, ValueKind

SWIFT_KEYWORDS = frozenset(
    {
        "associatedtype", "class", "deinit", "enum", "extension", "fileprivate", "func",
        "import", "init", "inout", "internal", "let", "operator", "private", "protocol",
        "public", "static", "struct", "subscript", "typealias", "var", "break", "case",
        "continue", "default", "defer", "do", "else", "fallthrough", "for", "guard", "if",
        "in", "repeat", "return", "switch", "where", "while", "as", "any", "catch", "false",
        "is", "nil", "rethrows", "super", "self", "throw", "throws", "true", "try", "_",
        "associativity", "convenience", "dynamic", "didset", "final", "get", "infix",
        "indirect", "lazy", "left", "mutating", "none", "nonmutating", "optional",
        "override", "postfix", "precedence", "prefix", "Protocol", "required", "right",
        "set", "some", "type", "unowned", "weak", "willset",
    }
)  # fmt: skip

# Members of the ServiceType/CharacteristicType namespaces
RESERVED_CONSTANT_NAMES = SWIFT_KEYWORDS | {"serviceType", "characteristicType"}

# Members inherited from the Service base class
RESERVED_PROPERTY_NAMES = SWIFT_KEYWORDS | {
    "serviceType",
    "name",
    "accessory",
    "isPrimaryService",
    "isUserInteractive",
    "uniqueIdentifier",
    "allCharacteristics",
    "characteristic",
    "description",
    "hashValue",
}

SWIFT_VALUE_TYPES = {
    ValueKind.BOOLEAN: "Bool",
    ValueKind.INTEGER: "Int",
    ValueKind.FLOATING: "Double",
    ValueKind.TEXT: "String",
    ValueKind.DATA: "Data",
}

HOMEKIT_IMPORT = "#if canImport(HomeKit)\nimport HomeKit\n#endif\n\n"


@dataclass
class SwiftNames:
    """Identifiers assigned to catalog entries, keyed by type identifier."""

    service_constants: dict[str, str] = field(default_factory=dict)
    characteristic_constants: dict[str, str] = field(default_factory=dict)
    service_types: dict[str, str] = field(default_factory=dict)
    characteristic_types: dict[str, str] = field(default_factory=dict)


def assign_names(catalog: Catalog) -> SwiftNames:
    """Allocate every namespace-level identifier in sorted catalog order."""
    names = SwiftNames()
    service_constants = IdentifierAllocator(RESERVED_CONSTANT_NAMES, "Service")
    characteristic_constants = IdentifierAllocator(RESERVED_CONSTANT_NAMES, "Characteristic")
    service_types = IdentifierAllocator(normalize=lambda raw: type_name(raw, "Service"))
    characteristic_types = IdentifierAllocator(
        normalize=lambda raw: type_name(raw, "Characteristic")
    )

    for service in catalog.sorted_services():
        key = service.identifier
        names.service_constants[key] = service_constants.allocate(service.swift_name, service.name)
        names.service_types[key] = service_types.allocate(service.name, service.swift_name)

    for characteristic in catalog.sorted_characteristics():
        key = characteristic.identifier
        names.characteristic_constants[key] = characteristic_constants.allocate(
            characteristic.swift_name, characteristic.name
        )
        names.characteristic_types[key] = characteristic_types.allocate(
            characteristic.swift_name, characteristic.name
        )
    return names


class SwiftGenerator(CodeGenerator):
    """Generate the Swift wrapper sources.

    Usage:
        generator = SwiftGenerator(diagnostics)
        generator.generate(catalog, Path("Sources/HomeAtlas/Generated"))
    """

    target = "Swift"

    def render(self, catalog: Catalog) -> dict[str, str]:
        """Render the Swift tree (see module docstring for the layout)."""
        header = self._file_header()
        names = assign_names(catalog)
        by_name = catalog.characteristics_by_name()

        service_entries = [
            (
                names.service_constants[s.identifier],
                s.identifier,
                doc_text(s.documentation, f"Service type identifier for {s.name}."),
            )
            for s in catalog.sorted_services()
        ]
        characteristic_entries = [
            (
                names.characteristic_constants[c.identifier],
                c.identifier,
                doc_text(c.documentation, f"Characteristic type identifier for {c.name}."),
            )
            for c in catalog.sorted_characteristics()
        ]
        files = {
            "ServiceType+Generated.swift": self._render_constants(
                header, "ServiceType", service_entries
            ),
            "CharacteristicType+Generated.swift": self._render_constants(
                header, "CharacteristicType", characteristic_entries
            ),
        }

        for characteristic in catalog.sorted_characteristics():
            type_name_ = names.characteristic_types[characteristic.identifier]
            files[f"Characteristics/{type_name_}.swift"] = self._render_wrapper(
                header, characteristic, type_name_, names
            )

        for service in catalog.sorted_services():
            type_name_ = names.service_types[service.identifier]
            files[f"Services/{type_name_}.swift"] = self._render_service(
                header, service, type_name_, names, by_name
            )
        return files

    def _file_header(self) -> str:
        return (
            "// AUTO-GENERATED BY HomeKitServiceGenerator -- DO NOT EDIT\n"
            f"// Generated on {self.timestamp()}\n"
            "\n"
            "import Foundation\n"
            "\n"
        )

    @staticmethod
    def _render_constants(
        header: str,
        namespace: str,
        entries: list[tuple[str, str, str]],
    ) -> str:
        homekit_lines = []
        fallback_lines = []
        for constant, identifier, doc in entries:
            homekit_lines.append(f"    /// {doc}\n    static let {constant}: String = {identifier}")
            fallback_lines.append(
                f'    /// {doc}\n    static let {constant}: String = "{identifier}"'
            )

        return (
            header
            + HOMEKIT_IMPORT
            + f"#if canImport(HomeKit)\npublic extension {namespace} {{\n"
            + "\n\n".join(homekit_lines)
            + f"\n}}\n#else\npublic extension {namespace} {{\n"
            + "\n\n".join(fallback_lines)
            + "\n}\n#endif\n"
        )

    @staticmethod
    def _render_wrapper(
        header: str,
        characteristic: CharacteristicEntry,
        wrapper_type: str,
        names: SwiftNames,
    ) -> str:
        value_type = SWIFT_VALUE_TYPES[characteristic.value_kind]
        constant = names.characteristic_constants[characteristic.identifier]
        doc = doc_text(
            characteristic.documentation,
            f"Strongly-typed wrapper for {characteristic.name} characteristic.",
        )

        lines = [f"#if canImport(HomeKit)\n/// {doc}\n"]
        if characteristic.deprecated:
            lines.append(
                '@available(*, deprecated, message: "HomeKit marks this characteristic '
                'as deprecated.")\n'
            )
        lines.append(
            "@MainActor\n"
            f"public final class {wrapper_type}: Characteristic<{value_type}>, "
            "GeneratedCharacteristic {\n"
            f"    public typealias WrappedValue = {value_type}\n"
            f"    public static let characteristicType: String = CharacteristicType.{constant}\n"
            "\n"
            "    public override init(underlying: HMCharacteristic) {\n"
            "        super.init(underlying: underlying)\n"
            "    }\n"
            "}\n"
            "#else\n"
            f"public typealias {wrapper_type} = Characteristic<{value_type}>\n"
            "#endif\n"
        )
        return header + HOMEKIT_IMPORT + "".join(lines)

    def _render_service(
        self,
        header: str,
        service: ServiceEntry,
        service_type: str,
        names: SwiftNames,
        characteristics_by_name: dict[str, CharacteristicEntry],
    ) -> str:
        resolved = self.resolve_characteristics(service, characteristics_by_name)
        doc = doc_text(service.documentation, f"Generated wrapper for the {service.name} service.")

        parts = [header, HOMEKIT_IMPORT, f"/// {doc}\n"]
        if service.deprecated:
            parts.append(
                '@available(*, deprecated, message: "HomeKit marks this service as deprecated.")\n'
            )
        parts.append(
            f"@MainActor\npublic final class {service_type}: Service, GeneratedService {{\n"
            "    public static let serviceType: String = "
            f"ServiceType.{names.service_constants[service.identifier]}\n"
        )

        for label, required in (
            ("requiredCharacteristicTypes", True),
            ("optionalCharacteristicTypes", False),
        ):
            constants = [
                names.characteristic_constants[c.identifier]
                for c, is_required in resolved
                if is_required is required
            ]
            if constants:
                joined = ",\n".join(f"        CharacteristicType.{c}" for c in constants)
                parts.append(f"\n    public static let {label}: [String] = [\n{joined}\n    ]\n")

        parts.append(
            "\n#if canImport(HomeKit)\n"
            "    public init(underlying: HMService) {\n"
            "        super.init(underlying: underlying)\n"
            "    }\n"
            "\n"
            "    public convenience init?(service: Service) {\n"
            "        guard service.serviceType == Self.serviceType else { return nil }\n"
            "        self.init(underlying: service.underlying)\n"
            "    }\n"
            "#endif\n"
        )

        properties = IdentifierAllocator(RESERVED_PROPERTY_NAMES, "Characteristic")
        for characteristic, required in resolved:
            prefix = "Required" if required else "Optional"
            property_name = properties.allocate(characteristic.swift_name, characteristic.name)
            wrapper_type = names.characteristic_types[characteristic.identifier]
            constant = names.characteristic_constants[characteristic.identifier]
            property_doc = doc_text(
                characteristic.documentation, f"{prefix} characteristic: {characteristic.name}."
            )
            parts.append(
                f"\n    /// {property_doc}\n"
                f"    public var {property_name}: {wrapper_type}? {{\n"
                "#if canImport(HomeKit)\n"
                f"        characteristic({wrapper_type}.self)\n"
                "#else\n"
                f"        characteristic(ofType: CharacteristicType.{constant})\n"
                "#endif\n"
                "    }\n"
            )

        parts.append("}\n")
        return "".join(parts)
