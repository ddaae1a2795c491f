"""Tests for the diagnostics report and error types."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from homekit_catalog.diagnostics import (
    DiagnosticCodes,
    DiagnosticSeverity,
    DiagnosticsReport,
    sample,
)
from homekit_catalog.errors import CatalogError, HeaderNotFoundError, MetadataFileMissingError


class TestDiagnosticsReport:
    """Tests for DiagnosticsReport."""

    def test_add_warning_and_info(self) -> None:
        """Test that issues keep order and severity."""
        report = DiagnosticsReport()
        report.add_info(DiagnosticCodes.I001_TBD_MISSING, "TBD file not found")
        report.add_warning(DiagnosticCodes.W001_SYMBOL_NOT_EXPORTED, "missing", symbol="_X")

        assert report.codes() == ["I001", "W001"]
        assert [i.code for i in report.warnings] == ["W001"]
        assert [i.code for i in report.infos] == ["I001"]
        assert report.warnings[0].context == {"symbol": "_X"}
        assert report.warnings[0].severity is DiagnosticSeverity.WARNING

    def test_str(self) -> None:
        """Test the string form of a diagnostic."""
        report = DiagnosticsReport()
        report.add_warning("W002", "Skipped 1 metadata services")
        assert str(report.issues[0]) == "[W002] WARNING Skipped 1 metadata services"

    def test_merge(self) -> None:
        """Test merging two reports."""
        first = DiagnosticsReport()
        first.add_info("I002", "fallback")
        second = DiagnosticsReport()
        second.add_warning("W010", "unknown")
        first.merge(second)
        assert first.codes() == ["I002", "W010"]

    def test_issues_are_traced(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that each recorded issue is logged at DEBUG."""
        report = DiagnosticsReport()
        with caplog.at_level(logging.DEBUG, logger="homekit_catalog"):
            report.add_info("I003", "Applied metadata-based mappings to 2 services")
        assert "Applied metadata-based mappings" in caplog.text


class TestSample:
    """Tests for the sample helper."""

    def test_limits_values(self) -> None:
        """Test that only the first values are joined."""
        assert sample(["A", "B", "C", "D"]) == "A, B, C"
        assert sample(["A"]) == "A"


class TestErrors:
    """Tests for the error hierarchy."""

    def test_message_includes_path(self) -> None:
        """Test that the path prefixes the string form."""
        error = HeaderNotFoundError(Path("Headers/HMServiceTypes.h"))
        assert error.message == "Header file not found"
        assert str(error) == "Headers/HMServiceTypes.h: Header file not found"

    def test_without_path(self) -> None:
        """Test an error without a path."""
        error = CatalogError("boom")
        assert error.path is None
        assert str(error) == "boom"

    def test_metadata_missing_is_catalog_error(self) -> None:
        """Test the hierarchy used by the CLI handler."""
        assert isinstance(MetadataFileMissingError(Path("x.plist")), CatalogError)
