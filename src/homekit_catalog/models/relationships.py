"""Transient relationship data produced by the metadata parser.

These objects live only between the metadata parser and the reconciler;
they are never written to the catalog file.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceRelationship:
    """Required/optional characteristic names declared for one service.

    Attributes
    ----------
        service_name: Canonical service name (the join key into the catalog).
        raw_description: Description as written in the metadata document.
        required: Canonical required characteristic names, deduplicated.
        optional: Canonical optional characteristic names, deduplicated.

    """

    service_name: str
    raw_description: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()


@dataclass
class RelationshipResult:
    """Everything the reconciler needs from the metadata document."""

    relationships: list[ServiceRelationship] = field(default_factory=list)
    characteristic_formats: dict[str, str] = field(default_factory=dict)
    """Canonical characteristic name -> lower-cased format token."""

    characteristic_aliases: dict[str, str] = field(default_factory=dict)
    """Upper-cased key/short UUID/long UUID -> canonical characteristic name."""


@dataclass
class ReconciliationSummary:
    """Outcome of a reconciliation run, for diagnostics only."""

    strategy: str = "fallback"
    """Either ``"metadata"`` or ``"fallback"``."""

    applied_services: int = 0
    unmatched_services: list[str] = field(default_factory=list)
    missing_characteristics: list[str] = field(default_factory=list)
    upgraded_value_kinds: int = 0
    unmatched_format_hints: list[str] = field(default_factory=list)
