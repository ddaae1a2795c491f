"""Diagnostics sink shared by the extraction and generation pipelines.

Components never print or keep global state for non-fatal findings. They
receive a ``DiagnosticsReport`` and record issues on it; the CLI decides how
to render them. Every recorded issue is also traced to the
``homekit_catalog`` logger at DEBUG level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger("homekit_catalog")


class DiagnosticSeverity(Enum):
    """Severity level for diagnostics."""

    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal finding."""

    code: str
    """Unique code (e.g., 'W001', 'I001')."""

    message: str
    """Human-readable message."""

    severity: DiagnosticSeverity
    """Severity level."""

    context: dict[str, Any] = field(default_factory=dict)
    """Additional context for debugging."""

    def __str__(self) -> str:
        """Format diagnostic as string."""
        return f"[{self.code}] {self.severity.value.upper()} {self.message}"


@dataclass
class DiagnosticsReport:
    """Collects diagnostics produced during a pipeline run."""

    issues: list[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> list[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [i for i in self.issues if i.severity == DiagnosticSeverity.WARNING]

    @property
    def infos(self) -> list[Diagnostic]:
        """Get only info-level diagnostics."""
        return [i for i in self.issues if i.severity == DiagnosticSeverity.INFO]

    def codes(self) -> list[str]:
        """Return the codes of all recorded diagnostics in order."""
        return [i.code for i in self.issues]

    def add(self, issue: Diagnostic) -> None:
        """Add a diagnostic to the report."""
        self.issues.append(issue)
        logger.debug("%s", issue)

    def add_warning(self, code: str, message: str, **context: Any) -> None:
        """Add a warning diagnostic."""
        self.add(Diagnostic(code, message, DiagnosticSeverity.WARNING, context))

    def add_info(self, code: str, message: str, **context: Any) -> None:
        """Add an info diagnostic."""
        self.add(Diagnostic(code, message, DiagnosticSeverity.INFO, context))

    def merge(self, other: DiagnosticsReport) -> None:
        """Merge another report into this one."""
        self.issues.extend(other.issues)


def sample(values: list[str], limit: int = 3) -> str:
    """Join the first few values for inclusion in a diagnostic message."""
    return ", ".join(values[:limit])


class DiagnosticCodes:
    """Standard diagnostic codes."""

    # W0xx - Extraction warnings
    W001_SYMBOL_NOT_EXPORTED = "W001"
    W002_UNMATCHED_SERVICE = "W002"
    W003_MISSING_CHARACTERISTIC = "W003"
    W004_UNMATCHED_FORMAT_HINT = "W004"
    W005_METADATA_UNAVAILABLE = "W005"

    # W01x - Generation warnings
    W010_UNKNOWN_CHARACTERISTIC = "W010"
    W011_OUTPUT_REPLACED = "W011"

    # I0xx - Informational
    I001_TBD_MISSING = "I001"
    I002_FALLBACK_MAPPINGS = "I002"
    I003_METADATA_APPLIED = "I003"
    I004_FORMATS_APPLIED = "I004"
