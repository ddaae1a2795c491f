"""Exception hierarchy for catalog extraction, serialization and generation."""

from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    """Base class for all homekit-catalog errors."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize CatalogError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ExtractionError(CatalogError):
    """Error while extracting the catalog from SDK sources."""


class HeaderNotFoundError(ExtractionError):
    """A required SDK header file does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialize with the missing header path."""
        super().__init__("Header file not found", path)


class MetadataError(ExtractionError):
    """Error while loading service/characteristic relationship metadata."""


class MetadataFileMissingError(MetadataError):
    """The metadata document does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialize with the missing metadata path."""
        super().__init__("Metadata file not found", path)


class InvalidRootStructureError(MetadataError):
    """The metadata document could not be parsed into a mapping."""


class MissingHAPSectionError(MetadataError):
    """The metadata document lacks the HAP services/characteristics section."""


class CatalogEncodeError(CatalogError):
    """A catalog entry is missing a field the catalog file requires."""


class CatalogReadError(CatalogError):
    """The catalog file could not be read."""


class GenerationError(CatalogError):
    """A generator could not create or write its output tree."""
