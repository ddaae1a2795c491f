"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import plistlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from homekit_catalog.config import FRAMEWORK_RELATIVE_PATH, SDKLayout
from homekit_catalog.models import Catalog, CharacteristicEntry, ServiceEntry, ValueKind

SERVICE_HEADER_TEXT = """\
//
//  HMServiceTypes.h
//  HomeKit
//
//  Copyright (c) 2013-2015 Apple Inc. All rights reserved.
//

#import <Foundation/Foundation.h>
#import <HomeKit/HMDefines.h>

NS_ASSUME_NONNULL_BEGIN

HM_EXTERN NSString * const HMServiceTypeLightbulb API_AVAILABLE(ios(8.0), watchos(2.0));

// Service type for fan.
// Controls fan speed.
HM_EXTERN NSString * const HMServiceTypeFan API_DEPRECATED("No longer supported", ios(8.0, 10.0));

/*!
 * @brief Service type for switch.
 */
HM_EXTERN NSString * const HMServiceTypeSwitch API_AVAILABLE(ios(8.0));

// Service type for accessory information.
HM_EXTERN NSString * const HMServiceTypeAccessoryInformation API_AVAILABLE(ios(8.0));

// Vendor specific widget.
HM_EXTERN NSString * const HMServiceTypeCustomWidget API_AVAILABLE(ios(18.0));

NS_ASSUME_NONNULL_END
"""

CHARACTERISTIC_HEADER_TEXT = """\
//
//  HMCharacteristicTypes.h
//  HomeKit
//

NS_ASSUME_NONNULL_BEGIN

// Type for power state characteristic.
HM_EXTERN NSString * const HMCharacteristicTypePowerState API_AVAILABLE(ios(8.0));
// Type for brightness characteristic.
HM_EXTERN NSString * const HMCharacteristicTypeBrightness API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypeHue API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypeSaturation API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypeColorTemperature API_AVAILABLE(ios(10.0));
// Type for name characteristic.
HM_EXTERN NSString * const HMCharacteristicTypeName API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypeCurrentTemperature API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypePM2_5Density API_AVAILABLE(ios(10.0));
HM_EXTERN NSString * const HMCharacteristicTypeActive API_AVAILABLE(ios(10.2));
HM_EXTERN NSString * const HMCharacteristicTypeRotationSpeed API_AVAILABLE(ios(8.0));
HM_EXTERN NSString * const HMCharacteristicTypeBatteryLevel API_AVAILABLE(ios(8.0));

NS_ASSUME_NONNULL_END
"""

TBD_TEXT = """\
--- !tapi-tbd-v3
archs:           [ armv7, armv7s, arm64, arm64e ]
platform:        ios
install-name:    /System/Library/Frameworks/HomeKit.framework/HomeKit
exports:
  - archs:           [ armv7, armv7s, arm64, arm64e ]
    symbols:
      - _HMServiceTypeLightbulb
      - _HMServiceTypeFan
      - [ 'armv7', 'arm64' ]: _HMServiceTypeSwitch
      - _HMServiceTypeAccessoryInformation
      - _HMCharacteristicTypePowerState
      - _HMCharacteristicTypeBrightness
      - _HMCharacteristicTypeHue
      - _HMCharacteristicTypeSaturation
      - _HMCharacteristicTypeColorTemperature
      - _HMCharacteristicTypeName
      - _HMCharacteristicTypeCurrentTemperature
      - _HMCharacteristicTypePM2_5Density
      - _HMCharacteristicTypeActive
      - _HMCharacteristicTypeRotationSpeed
      - _HMCharacteristicTypeBatteryLevel
    objc-classes:    [ HMHome, HMAccessory ]
undefineds:
  - _objc_msgSend
...
"""


def metadata_document() -> dict[str, Any]:
    """Metadata plist content matching the sample headers.

    Lightbulb, Fan and Accessory Information match header services. Wi-Fi
    Router does not, and Firmware Revision is not declared in the headers.
    """
    return {
        "PlistDictionary": {
            "HAP": {
                "Services": {
                    "00000043": {
                        "DefaultDescription": "Lightbulb",
                        "Characteristics": {
                            "Required": ["25"],
                            "Optional": ["8", "13", "2F", "CE", "23"],
                        },
                    },
                    "00000040": {
                        "DefaultDescription": "Fan",
                        "Characteristics": {"Required": ["25"], "Optional": ["29", "23"]},
                    },
                    "0000003E": {
                        "DefaultDescription": "Accessory Information",
                        "Characteristics": {"Required": ["23", "52"], "Optional": []},
                    },
                    "000000AA": {
                        "DefaultDescription": "Wi-Fi Router",
                        "Characteristics": {"Required": ["23"]},
                    },
                },
                "Characteristics": {
                    "00000025": {
                        "DefaultDescription": "Power State",
                        "ShortUUID": "25",
                        "UUID": "00000025-0000-1000-8000-0026BB765291",
                        "Format": "bool",
                    },
                    "00000008": {
                        "DefaultDescription": "Brightness",
                        "ShortUUID": "8",
                        "Format": "int",
                    },
                    "00000013": {"DefaultDescription": "Hue", "ShortUUID": "13", "Format": "float"},
                    "0000002F": {
                        "DefaultDescription": "Saturation",
                        "ShortUUID": "2F",
                        "Format": "float",
                    },
                    "000000CE": {
                        "DefaultDescription": "Color Temperature",
                        "ShortUUID": "CE",
                        "Format": "uint32",
                    },
                    "00000023": {"DefaultDescription": "Name", "ShortUUID": "23", "Format": "string"},
                    "00000029": {
                        "DefaultDescription": "Rotation Speed",
                        "ShortUUID": "29",
                        "Format": "float",
                    },
                    "000000C6": {
                        "DefaultDescription": "PM2.5 Density",
                        "ShortUUID": "C6",
                        "Format": "float",
                    },
                    "00000052": {
                        "DefaultDescription": "Firmware Revision",
                        "ShortUUID": "52",
                        "Format": "string",
                    },
                },
            }
        }
    }


@pytest.fixture
def service_header_text() -> str:
    """Return sample HMServiceTypes.h content."""
    return SERVICE_HEADER_TEXT


@pytest.fixture
def characteristic_header_text() -> str:
    """Return sample HMCharacteristicTypes.h content."""
    return CHARACTERISTIC_HEADER_TEXT


@pytest.fixture
def tbd_text() -> str:
    """Return sample HomeKit.tbd content."""
    return TBD_TEXT


@pytest.fixture
def metadata_data() -> dict[str, Any]:
    """Return sample metadata document content."""
    return metadata_document()


@pytest.fixture
def write_metadata(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a metadata plist and returns its path."""

    def _write(data: dict[str, Any] | None = None, name: str = "plain-metadata.config") -> Path:
        path = tmp_path / name
        with path.open("wb") as f:
            plistlib.dump(metadata_document() if data is None else data, f, sort_keys=False)
        return path

    return _write


@pytest.fixture
def sdk_root(tmp_path: Path) -> Path:
    """Create a fake SDK with both headers and the TBD stub."""
    sdk = tmp_path / "iPhoneOS.sdk"
    layout = SDKLayout.from_sdk(sdk)
    layout.headers_dir.mkdir(parents=True)
    layout.service_header.write_text(SERVICE_HEADER_TEXT)
    layout.characteristic_header.write_text(CHARACTERISTIC_HEADER_TEXT)
    layout.tbd_path.write_text(TBD_TEXT)
    return sdk


@pytest.fixture
def sdk_layout(sdk_root: Path) -> SDKLayout:
    """Return the layout of the fake SDK."""
    return SDKLayout(sdk_root / FRAMEWORK_RELATIVE_PATH)


@pytest.fixture
def sample_catalog() -> Catalog:
    """Return a small reconciled catalog."""
    return Catalog(
        services=[
            ServiceEntry(
                identifier="HMServiceTypeLightbulb",
                name="Lightbulb",
                swift_name="lightbulb",
                required_characteristics=["PowerState"],
                optional_characteristics=["Brightness", "Name"],
            ),
            ServiceEntry(
                identifier="HMServiceTypeFan",
                name="Fan",
                swift_name="fan",
                documentation='Service type for "fan".',
                deprecated=True,
                required_characteristics=["Active"],
                optional_characteristics=["RotationSpeed"],
            ),
        ],
        characteristics=[
            CharacteristicEntry(
                identifier="HMCharacteristicTypePowerState",
                name="PowerState",
                swift_name="powerState",
                value_kind=ValueKind.BOOLEAN,
                documentation="Type for power state characteristic.",
            ),
            CharacteristicEntry(
                identifier="HMCharacteristicTypeBrightness",
                name="Brightness",
                swift_name="brightness",
                value_kind=ValueKind.INTEGER,
            ),
            CharacteristicEntry(
                identifier="HMCharacteristicTypeName",
                name="Name",
                swift_name="name",
                value_kind=ValueKind.TEXT,
            ),
            CharacteristicEntry(
                identifier="HMCharacteristicTypeActive",
                name="Active",
                swift_name="active",
                value_kind=ValueKind.BOOLEAN,
            ),
            CharacteristicEntry(
                identifier="HMCharacteristicTypeRotationSpeed",
                name="RotationSpeed",
                swift_name="rotationSpeed",
                value_kind=ValueKind.FLOATING,
                deprecated=True,
            ),
        ],
    )
