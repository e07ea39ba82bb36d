"""Diagnostic and recovery types shared by the scanner and the API layer.

The scanner never raises on malformed markup. Instead, each best-effort
decision it takes is described by a ``Recovery`` value; the API layer turns
those into ``DiagnosticEntry`` records on a parse result.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Input was malformed and a recovery was applied
    ERROR = auto()      # Operation failed but a result was still returned
    CRITICAL = auto()   # Nothing could be parsed (missing file, bad input type)


class RecoveryKind(Enum):
    """Malformed-input situations the scanner degrades through."""

    UNTERMINATED_COMMENT = auto()   # "<!--" without "-->": comment dropped
    UNTERMINATED_TAG = auto()       # "<tag" without ">": rest of input dropped
    NAMELESS_TAG = auto()           # "<" not followed by a tag name: "<" skipped
    MISSING_CLOSING_TAG = auto()    # no "</tag>": element treated as self-closing
    STRAY_CLOSING_TAG = auto()      # "</" at this level: "<" skipped
    DUPLICATE_ATTRIBUTE = auto()    # repeated attribute name: last one wins
    DEPTH_LIMIT = auto()            # nesting too deep: inner span kept as text
    TRAILING_BRACKET = auto()       # "<" as the final character: scan ends


@dataclass(frozen=True)
class Recovery:
    """A single best-effort decision taken while scanning malformed input.

    ``offset`` is measured from the start of the top-level document, also for
    recoveries that happen inside nested element content.
    """

    kind: RecoveryKind
    message: str
    offset: int
    tag_name: Optional[str] = None

    @property
    def severity(self) -> DiagnosticSeverity:
        """Diagnostic severity this recovery maps to."""
        if self.kind is RecoveryKind.DUPLICATE_ATTRIBUTE:
            return DiagnosticSeverity.INFO
        return DiagnosticSeverity.WARNING


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class PerformanceMetrics:
    """Timing and volume figures for one parse or render operation."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    nodes_created: int = 0
    recovery_operations: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms
