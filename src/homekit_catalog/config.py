"""Paths and defaults for the extractor and generator tools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

FRAMEWORK_RELATIVE_PATH = Path("System/Library/Frameworks/HomeKit.framework")
SERVICE_HEADER = "HMServiceTypes.h"
CHARACTERISTIC_HEADER = "HMCharacteristicTypes.h"

DEFAULT_CATALOG_PATH = Path("Resources/homekit-services.yaml")
DEFAULT_METADATA_PATH = Path(
    "/System/Library/PrivateFrameworks/HomeKitDaemon.framework/Resources/plain-metadata.config"
)
DEFAULT_SWIFT_OUTPUT = Path("Sources/HomeAtlas/Generated")
DEFAULT_TYPESCRIPT_OUTPUT = Path("packages/react-native-homeatlas/src/generated")

# Environment variables honoured by the CLI
METADATA_PATH_ENV = "HOMEKIT_METADATA_PATH"
CATALOG_OUTPUT_ENV = "HOMEKIT_CATALOG_OUTPUT"


@dataclass(frozen=True)
class SDKLayout:
    """Locations of the HomeKit framework files inside an SDK.

    Usage:
        layout = SDKLayout.from_sdk(Path("iPhoneOS.sdk"))
        layout.service_header  # .../HomeKit.framework/Headers/HMServiceTypes.h
    """

    framework_path: Path

    @classmethod
    def from_sdk(cls, sdk_path: Path) -> SDKLayout:
        """Derive the layout from an SDK root directory."""
        return cls(framework_path=sdk_path / FRAMEWORK_RELATIVE_PATH)

    @property
    def headers_dir(self) -> Path:
        """Directory holding the framework's public headers."""
        return self.framework_path / "Headers"

    @property
    def service_header(self) -> Path:
        """Header declaring the service type constants."""
        return self.headers_dir / SERVICE_HEADER

    @property
    def characteristic_header(self) -> Path:
        """Header declaring the characteristic type constants."""
        return self.headers_dir / CHARACTERISTIC_HEADER

    @property
    def tbd_path(self) -> Path:
        """Text-based stub that lists the framework's exported symbols."""
        return self.framework_path.with_name(self.framework_path.name + ".tbd")


def default_metadata_path() -> Path | None:
    """Return the system metadata document if it exists on this machine."""
    return DEFAULT_METADATA_PATH if DEFAULT_METADATA_PATH.is_file() else None
