"""Pydantic models for records in the HomeKit metadata document.

The metadata document (``plain-metadata.config``) is a property list with a
``PlistDictionary -> HAP -> Services / Characteristics`` layout. Only the
fields the relationship loader needs are modelled; everything else is
ignored.

Example:
-------
    ```xml
    <key>Characteristics</key>
    <dict>
      <key>brightness</key>
      <dict>
        <key>DefaultDescription</key><string>Brightness</string>
        <key>ShortUUID</key><string>8</string>
        <key>UUID</key><string>00000008-0000-1000-8000-0026BB765291</string>
        <key>Format</key><string>int</string>
      </dict>
    </dict>
    ```

"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def coerce_string_list(value: Any) -> list[str]:
    """Coerce a plist array of identifiers to strings.

    Strings are kept, numbers are converted with ``str``; anything else is
    dropped. A non-list value yields an empty list.

    Examples:
    --------
        >>> coerce_string_list(["25", 8, None])
        ['25', '8']
        >>> coerce_string_list("25")
        []

    """
    if not isinstance(value, list):
        return []
    result: list[str] = []
    for element in value:
        if isinstance(element, bool):
            continue
        if isinstance(element, str):
            result.append(element)
        elif isinstance(element, int | float):
            result.append(str(element))
    return result


def string_or_none(value: Any) -> str | None:
    """Keep string values, discard anything else."""
    return value if isinstance(value, str) else None


StringList = Annotated[list[str], BeforeValidator(coerce_string_list)]
OptionalString = Annotated[str | None, BeforeValidator(string_or_none)]


class _MetadataRecord(BaseModel):
    """Base configuration for metadata records."""

    model_config = ConfigDict(
        populate_by_name=True,
        # The metadata document carries many fields we do not model
        extra="ignore",
        frozen=True,
    )


class HAPCharacteristicRecord(_MetadataRecord):
    """A characteristic record under ``HAP.Characteristics``."""

    default_description: Annotated[
        str,
        Field(alias="DefaultDescription", description="Human-readable characteristic name"),
    ]
    short_uuid: Annotated[
        OptionalString,
        Field(default=None, alias="ShortUUID", description="Short HAP type identifier"),
    ]
    uuid: Annotated[
        OptionalString,
        Field(default=None, alias="UUID", description="Full HAP type UUID"),
    ]
    format: Annotated[
        OptionalString,
        Field(default=None, alias="Format", description="Value format token (bool, uint8, ...)"),
    ]


class HAPServiceCharacteristics(_MetadataRecord):
    """The ``Characteristics`` block of a service record."""

    required: Annotated[StringList, Field(default_factory=list, alias="Required")]
    optional: Annotated[StringList, Field(default_factory=list, alias="Optional")]


class HAPServiceRecord(_MetadataRecord):
    """A service record under ``HAP.Services``."""

    default_description: Annotated[
        str,
        Field(alias="DefaultDescription", description="Human-readable service name"),
    ]
    characteristics: Annotated[
        HAPServiceCharacteristics,
        Field(alias="Characteristics", description="Required and optional characteristic ids"),
    ]
