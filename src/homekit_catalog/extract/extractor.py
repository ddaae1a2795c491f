"""Run the full extraction pipeline for one SDK."""

from __future__ import annotations

import logging
from pathlib import Path

from homekit_catalog.config import SDKLayout
from homekit_catalog.diagnostics import DiagnosticCodes, DiagnosticsReport
from homekit_catalog.errors import MetadataError
from homekit_catalog.extract.header_parser import HeaderParser
from homekit_catalog.extract.metadata_parser import MetadataParser
from homekit_catalog.extract.reconciler import CatalogReconciler
from homekit_catalog.extract.tbd_parser import TBDParser, validate_symbols
from homekit_catalog.models.catalog import Catalog
from homekit_catalog.models.relationships import ReconciliationSummary, RelationshipResult

logger = logging.getLogger(__name__)


class CatalogExtractor:
    """Extract a reconciled catalog from the HomeKit SDK sources.

    Headers are mandatory; the TBD stub and the metadata document are
    optional and only degrade the result when absent.

    Usage:
        extractor = CatalogExtractor(Path("iPhoneOS.sdk"), metadata_path=plist)
        catalog = extractor.extract()
        print(extractor.last_summary.strategy)
    """

    def __init__(
        self,
        sdk_path: Path | SDKLayout,
        metadata_path: Path | None = None,
        diagnostics: DiagnosticsReport | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
        ----
            sdk_path: SDK root directory, or an explicit framework layout.
            metadata_path: Optional relationship metadata document.
            diagnostics: Sink shared by every pipeline stage.

        """
        self.layout = sdk_path if isinstance(sdk_path, SDKLayout) else SDKLayout.from_sdk(sdk_path)
        self.metadata_path = metadata_path
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsReport()
        self.last_summary: ReconciliationSummary | None = None

    def extract(self) -> Catalog:
        """Build the catalog.

        Returns:
        -------
            Catalog with services and characteristics in header order.

        Raises:
        ------
            HeaderNotFoundError: If either SDK header is missing.
            OSError: If a header or the TBD exists but cannot be read.

        """
        header_parser = HeaderParser(self.layout)
        services = header_parser.parse_services()
        characteristics = header_parser.parse_characteristics()
        logger.info(
            "Parsed %d services and %d characteristics from %s",
            len(services),
            len(characteristics),
            self.layout.headers_dir,
        )

        symbols = TBDParser(self.layout, self.diagnostics).parse_symbols()
        validate_symbols(services, characteristics, symbols, self.diagnostics)

        catalog = Catalog(services=services, characteristics=characteristics)
        reconciler = CatalogReconciler(self.diagnostics)
        self.last_summary = reconciler.reconcile(catalog, self._load_relationships())
        logger.info("Reconciled characteristics using %s mappings", self.last_summary.strategy)
        return catalog

    def _load_relationships(self) -> RelationshipResult | None:
        if self.metadata_path is None:
            return None
        try:
            return MetadataParser(self.metadata_path).load()
        except (MetadataError, OSError) as e:
            self.diagnostics.add_warning(
                DiagnosticCodes.W005_METADATA_UNAVAILABLE,
                f"Metadata parsing failed, using fallback mappings: {e}",
                path=str(self.metadata_path),
            )
            return None
