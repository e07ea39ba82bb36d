"""Tests for recovery and diagnostic types."""

import pytest

from markup_tree.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    Recovery,
    RecoveryKind,
)


class TestRecovery:
    """Test recovery records."""

    def test_recovery_fields(self):
        """Test recovery creation."""
        recovery = Recovery(RecoveryKind.MISSING_CLOSING_TAG, "no closing tag", 12, "p")

        assert recovery.kind is RecoveryKind.MISSING_CLOSING_TAG
        assert recovery.offset == 12
        assert recovery.tag_name == "p"

    def test_duplicate_attribute_is_informational(self):
        """Test that a harmless repair maps to INFO."""
        recovery = Recovery(RecoveryKind.DUPLICATE_ATTRIBUTE, "repeated", 0, "a")

        assert recovery.severity is DiagnosticSeverity.INFO

    @pytest.mark.parametrize("kind", [
        kind for kind in RecoveryKind if kind is not RecoveryKind.DUPLICATE_ATTRIBUTE
    ])
    def test_other_recoveries_are_warnings(self, kind):
        """Test that structural repairs map to WARNING."""
        assert Recovery(kind, "repair", 0).severity is DiagnosticSeverity.WARNING

    def test_recovery_is_immutable(self):
        """Test that recoveries cannot be modified."""
        recovery = Recovery(RecoveryKind.TRAILING_BRACKET, "end", 4)

        with pytest.raises(AttributeError):
            recovery.offset = 5  # type: ignore[misc]


class TestDiagnosticEntry:
    """Test diagnostic entries."""

    def test_valid_entry(self):
        """Test entry creation and dictionary form."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="repaired",
            component="scanner",
            position={"offset": 3},
            details={"kind": "MISSING_CLOSING_TAG"}
        )

        assert entry.timestamp > 0
        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "repaired",
            "component": "scanner",
            "position": {"offset": 3},
            "details": {"kind": "MISSING_CLOSING_TAG"},
        }

    def test_empty_message_raises_error(self):
        """Test message validation."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "scanner")

    def test_empty_component_raises_error(self):
        """Test component validation."""
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "message", "")


class TestPerformanceMetrics:
    """Test performance figures."""

    def test_defaults(self):
        """Test default metric values."""
        metrics = PerformanceMetrics()

        assert metrics.processing_time_ms == 0.0
        assert metrics.characters_per_second == 0.0

    def test_characters_per_second(self):
        """Test throughput calculation."""
        metrics = PerformanceMetrics(processing_time_ms=500.0, characters_processed=1000)

        assert metrics.characters_per_second == 2000.0
