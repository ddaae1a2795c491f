"""Merge relationship metadata into the header-derived catalog.

Policy, first success wins:

1. Metadata relationships, when at least one of them gives a catalog
   service a non-empty characteristic list.
2. The static HAP fallback table, applied by exact service name.

Independently of the branch taken, metadata format hints overwrite the
heuristic value kind of every characteristic they name.

The reconciler performs no I/O. A metadata document that failed to load is
passed in as ``None`` by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable

from homekit_catalog.diagnostics import DiagnosticCodes, DiagnosticsReport, sample
from homekit_catalog.extract.fallback import fallback_mapping
from homekit_catalog.extract.metadata_parser import unique_preserving_order
from homekit_catalog.models.catalog import Catalog, ServiceEntry, ValueKind
from homekit_catalog.models.relationships import (
    ReconciliationSummary,
    RelationshipResult,
    ServiceRelationship,
)

_FORMAT_TO_KIND: dict[str, ValueKind] = {
    "bool": ValueKind.BOOLEAN,
    "int": ValueKind.INTEGER,
    "uint": ValueKind.INTEGER,
    "uint8": ValueKind.INTEGER,
    "uint16": ValueKind.INTEGER,
    "uint32": ValueKind.INTEGER,
    "uint64": ValueKind.INTEGER,
    "float": ValueKind.FLOATING,
    "double": ValueKind.FLOATING,
    "percent": ValueKind.FLOATING,
    "temperature": ValueKind.FLOATING,
    "pressure": ValueKind.FLOATING,
    "data": ValueKind.DATA,
    "tlv8": ValueKind.DATA,
}


def value_kind_from_format(format_token: str) -> ValueKind:
    """Map a metadata format token to a value kind (unknown tokens are text)."""
    return _FORMAT_TO_KIND.get(format_token.lower(), ValueKind.TEXT)


class CatalogReconciler:
    """Populate service characteristic lists and upgrade value kinds.

    Usage:
        reconciler = CatalogReconciler(diagnostics)
        summary = reconciler.reconcile(catalog, relationships)
    """

    def __init__(self, diagnostics: DiagnosticsReport | None = None) -> None:
        """Initialize the reconciler.

        Args:
        ----
            diagnostics: Sink for the reconciliation summary.

        """
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticsReport()

    def reconcile(
        self,
        catalog: Catalog,
        relationships: RelationshipResult | None,
    ) -> ReconciliationSummary:
        """Reconcile ``catalog`` in place.

        Args:
        ----
            catalog: Header-derived catalog; mutated in place.
            relationships: Parsed metadata, or None when unavailable.

        Returns:
        -------
            Summary of what was applied, for diagnostics only.

        """
        summary = ReconciliationSummary()

        if relationships is not None:
            self._apply_formats(catalog, relationships.characteristic_formats, summary)
            if self._apply_relationships(catalog, relationships.relationships, summary):
                summary.strategy = "metadata"
                self._report_metadata(summary)
                return summary
            self._diagnostics.add_warning(
                DiagnosticCodes.W005_METADATA_UNAVAILABLE,
                "Metadata parsing produced no service relationships; "
                "falling back to HAP specification mappings",
            )

        summary.strategy = "fallback"
        summary.applied_services = self._apply_fallback(catalog.services)
        self._diagnostics.add_info(
            DiagnosticCodes.I002_FALLBACK_MAPPINGS,
            f"Applied HAP specification mappings to {summary.applied_services} services",
            applied=summary.applied_services,
        )
        return summary

    def _apply_formats(
        self,
        catalog: Catalog,
        formats: dict[str, str],
        summary: ReconciliationSummary,
    ) -> None:
        by_name = catalog.characteristics_by_name()
        unmatched: list[str] = []
        for name, format_token in formats.items():
            characteristic = by_name.get(name)
            if characteristic is None:
                unmatched.append(name)
                continue
            kind = value_kind_from_format(format_token)
            if characteristic.value_kind != kind:
                characteristic.value_kind = kind
                summary.upgraded_value_kinds += 1

        summary.unmatched_format_hints = sorted(unmatched)
        if summary.upgraded_value_kinds:
            self._diagnostics.add_info(
                DiagnosticCodes.I004_FORMATS_APPLIED,
                f"Updated value types for {summary.upgraded_value_kinds} characteristics "
                "using metadata formats",
                updated=summary.upgraded_value_kinds,
            )
        if unmatched:
            self._diagnostics.add_warning(
                DiagnosticCodes.W004_UNMATCHED_FORMAT_HINT,
                f"Skipped format updates for {len(unmatched)} metadata characteristics not "
                f"present in headers (e.g. {sample(summary.unmatched_format_hints)})",
                names=summary.unmatched_format_hints,
            )

    def _apply_relationships(
        self,
        catalog: Catalog,
        relationships: Iterable[ServiceRelationship],
        summary: ReconciliationSummary,
    ) -> bool:
        """Stage metadata lists and commit them if any service gains a list.

        Nothing is written to the catalog when no relationship applies, so
        the fallback branch starts from the untouched header lists.
        """
        index_by_name = {service.name: service for service in catalog.services}
        known = catalog.characteristic_names()
        staged: dict[str, tuple[list[str], list[str]]] = {}
        unmatched: list[str] = []
        missing: set[str] = set()

        for relationship in relationships:
            service = index_by_name.get(relationship.service_name)
            if service is None:
                unmatched.append(relationship.raw_description)
                continue

            required = unique_preserving_order(n for n in relationship.required if n in known)
            required_set = set(required)
            optional = unique_preserving_order(
                n for n in relationship.optional if n in known and n not in required_set
            )
            missing.update(
                n for n in (*relationship.required, *relationship.optional) if n not in known
            )
            staged[service.name] = (required, optional)

        summary.unmatched_services = sorted(unmatched)
        summary.missing_characteristics = sorted(missing)
        summary.applied_services = sum(1 for req, opt in staged.values() if req or opt)

        if summary.applied_services == 0:
            return False

        for name, (required, optional) in staged.items():
            index_by_name[name].required_characteristics = required
            index_by_name[name].optional_characteristics = optional
        return True

    def _report_metadata(self, summary: ReconciliationSummary) -> None:
        self._diagnostics.add_info(
            DiagnosticCodes.I003_METADATA_APPLIED,
            f"Applied metadata-based mappings to {summary.applied_services} services",
            applied=summary.applied_services,
        )
        if summary.unmatched_services:
            self._diagnostics.add_warning(
                DiagnosticCodes.W002_UNMATCHED_SERVICE,
                f"Skipped {len(summary.unmatched_services)} metadata services not present "
                f"in headers (e.g. {sample(summary.unmatched_services)})",
                services=summary.unmatched_services,
            )
        if summary.missing_characteristics:
            self._diagnostics.add_warning(
                DiagnosticCodes.W003_MISSING_CHARACTERISTIC,
                f"Encountered {len(summary.missing_characteristics)} characteristics missing "
                f"from parsed headers (e.g. {sample(summary.missing_characteristics)})",
                characteristics=summary.missing_characteristics,
            )

    @staticmethod
    def _apply_fallback(services: list[ServiceEntry]) -> int:
        applied = 0
        for service in services:
            mapping = fallback_mapping(service.name)
            if mapping is None:
                continue
            service.required_characteristics, service.optional_characteristics = mapping
            if service.required_characteristics or service.optional_characteristics:
                applied += 1
        return applied
