"""Extraction of the HomeKit catalog from SDK sources.

Primary Entry Points:
    CatalogExtractor: Runs headers -> TBD -> metadata -> reconciliation
    HeaderParser: Service/characteristic declarations from SDK headers
    TBDParser: Exported symbols for best-effort validation
    MetadataParser: Service -> characteristic relationships and formats
    CatalogReconciler: Applies metadata or the HAP fallback table
"""

from homekit_catalog.extract.extractor import CatalogExtractor
from homekit_catalog.extract.fallback import FALLBACK_MAPPINGS, fallback_mapping
from homekit_catalog.extract.header_parser import (
    HeaderParser,
    extract_documentation,
    infer_value_kind,
    parse_characteristic_definitions,
    parse_service_definitions,
)
from homekit_catalog.extract.metadata_parser import MetadataParser, canonical_identifier
from homekit_catalog.extract.reconciler import CatalogReconciler, value_kind_from_format
from homekit_catalog.extract.tbd_parser import TBDParser, parse_exported_symbols, validate_symbols

__all__ = [
    "CatalogExtractor",
    "CatalogReconciler",
    "FALLBACK_MAPPINGS",
    "HeaderParser",
    "MetadataParser",
    "TBDParser",
    "canonical_identifier",
    "extract_documentation",
    "fallback_mapping",
    "infer_value_kind",
    "parse_characteristic_definitions",
    "parse_exported_symbols",
    "parse_service_definitions",
    "validate_symbols",
    "value_kind_from_format",
]
