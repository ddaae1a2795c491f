"""Catalog models for HomeKit services and characteristics.

The catalog is the canonical schema produced by extraction and consumed by
the code generators. Entries are plain dataclasses: the reconciler fills in
service characteristic lists and upgrades value kinds in place, everything
downstream treats a catalog as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ValueKind(Enum):
    """Primitive category of a characteristic value.

    Values are the tokens written to the catalog file.
    """

    BOOLEAN = "Bool"
    INTEGER = "Int"
    FLOATING = "Double"
    TEXT = "String"
    DATA = "Data"

    @classmethod
    def parse(cls, token: str) -> ValueKind:
        """Parse a catalog ``valueType`` token, case-insensitively.

        Unknown tokens map to ``TEXT``.

        Examples:
        --------
            >>> ValueKind.parse("Bool")
            <ValueKind.BOOLEAN: 'Bool'>
            >>> ValueKind.parse("float")
            <ValueKind.FLOATING: 'Double'>

        """
        return _TOKEN_TO_KIND.get(token.strip().lower(), cls.TEXT)


_TOKEN_TO_KIND = {
    "bool": ValueKind.BOOLEAN,
    "int": ValueKind.INTEGER,
    "double": ValueKind.FLOATING,
    "float": ValueKind.FLOATING,
    "data": ValueKind.DATA,
    "string": ValueKind.TEXT,
}


def lower_first(name: str) -> str:
    """Lower-case only the first character of ``name``.

    The rest of the string is kept verbatim, so embedded acronyms keep their
    casing (``PM10Density`` becomes ``pM10Density``). Generated accessor
    names depend on this exact rule.
    """
    return name[:1].lower() + name[1:]


@dataclass
class ServiceEntry:
    """A HomeKit service definition.

    Attributes
    ----------
        identifier: SDK constant name (e.g., ``HMServiceTypeLightbulb``).
        name: Display name (e.g., ``Lightbulb``).
        swift_name: Generated-identifier-safe name (e.g., ``lightbulb``).
        documentation: Documentation collected from the header, if any.
        deprecated: Whether the SDK marks the service as deprecated.
        required_characteristics: Ordered required characteristic names.
        optional_characteristics: Ordered optional characteristic names.

    """

    identifier: str
    name: str
    swift_name: str
    documentation: str | None = None
    deprecated: bool = False
    required_characteristics: list[str] = field(default_factory=list)
    optional_characteristics: list[str] = field(default_factory=list)


@dataclass
class CharacteristicEntry:
    """A HomeKit characteristic definition.

    Attributes
    ----------
        identifier: SDK constant name (e.g., ``HMCharacteristicTypeBrightness``).
        name: Display name (e.g., ``Brightness``).
        swift_name: Generated-identifier-safe name (e.g., ``brightness``).
        value_kind: Primitive category used for generated typing.
        documentation: Documentation collected from the header, if any.
        deprecated: Whether the SDK marks the characteristic as deprecated.

    """

    identifier: str
    name: str
    swift_name: str
    value_kind: ValueKind = ValueKind.TEXT
    documentation: str | None = None
    deprecated: bool = False


@dataclass
class Catalog:
    """Complete catalog of services and characteristics."""

    services: list[ServiceEntry] = field(default_factory=list)
    characteristics: list[CharacteristicEntry] = field(default_factory=list)

    def characteristic_names(self) -> set[str]:
        """Return the display names of all characteristics."""
        return {c.name for c in self.characteristics}

    def characteristics_by_name(self) -> dict[str, CharacteristicEntry]:
        """Index characteristics by display name (last definition wins)."""
        return {c.name: c for c in self.characteristics}

    def get_service(self, name: str) -> ServiceEntry | None:
        """Get a service by display name."""
        for service in self.services:
            if service.name == name:
                return service
        return None

    def get_characteristic(self, name: str) -> CharacteristicEntry | None:
        """Get a characteristic by display name."""
        for characteristic in self.characteristics:
            if characteristic.name == name:
                return characteristic
        return None

    def sorted_services(self) -> list[ServiceEntry]:
        """Services ordered by display name, then identifier."""
        return sorted(self.services, key=lambda s: (s.name, s.identifier))

    def sorted_characteristics(self) -> list[CharacteristicEntry]:
        """Characteristics ordered by display name, then identifier."""
        return sorted(self.characteristics, key=lambda c: (c.name, c.identifier))

    def dangling_references(self) -> dict[str, list[str]]:
        """Map service name to referenced characteristics missing from the catalog.

        Dangling references are tolerated everywhere; this is only used to
        report them.
        """
        known = self.characteristic_names()
        dangling: dict[str, list[str]] = {}
        for service in self.services:
            missing = [
                name
                for name in (*service.required_characteristics, *service.optional_characteristics)
                if name not in known
            ]
            if missing:
                dangling[service.name] = missing
        return dangling
