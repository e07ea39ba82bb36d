"""Result objects returned by the markup-tree API layer."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from markup_tree.api.interchange import nodes_to_dicts
from markup_tree.serialization import serialize
from markup_tree.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    Recovery,
)
from markup_tree.tree.nodes import Node, NodeType, count_nodes, max_depth


@dataclass
class ParseResult:
    """Parsed nodes together with diagnostics and performance figures.

    ``success`` is False only when no markup could be read at all, for example
    a missing file. Malformed markup still parses successfully; what was
    repaired is listed in ``recoveries`` and ``diagnostics``.
    """

    nodes: List[Node] = field(default_factory=list)
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    recoveries: List[Recovery] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None
    source: Optional[str] = None

    @property
    def node_count(self) -> int:
        """Total number of nodes at all depths."""
        return sum(count_nodes(self.nodes).values())

    @property
    def element_count(self) -> int:
        return count_nodes(self.nodes)[NodeType.ELEMENT]

    @property
    def recovery_count(self) -> int:
        return len(self.recoveries)

    @property
    def has_recoveries(self) -> bool:
        return len(self.recoveries) > 0

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Compact overview suitable for logs and CLI output."""
        counts = count_nodes(self.nodes)
        return {
            "success": self.success,
            "source": self.source,
            "top_level_nodes": len(self.nodes),
            "elements": counts[NodeType.ELEMENT],
            "text_nodes": counts[NodeType.TEXT],
            "comments": counts[NodeType.COMMENT],
            "max_depth": max_depth(self.nodes),
            "recoveries": self.recovery_count,
            "processing_time_ms": round(self.performance.processing_time_ms, 3),
        }

    def to_html(self, void_elements: Optional[FrozenSet[str]] = None) -> str:
        """Serialize the parsed nodes back into markup."""
        return serialize(self.nodes, void_elements)

    def to_dict(self, include_diagnostics: bool = True) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data: Dict[str, Any] = {
            "success": self.success,
            "nodes": nodes_to_dicts(self.nodes),
        }
        if include_diagnostics:
            data["summary"] = self.summary()
            data["diagnostics"] = [diag.to_dict() for diag in self.diagnostics]
        return data


@dataclass
class RoundTripResult:
    """Outcome of parsing a document and serializing it again."""

    original: str
    rendered: str
    matches: bool
    parse_result: ParseResult
