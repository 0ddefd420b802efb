"""Result object returned by the conversion API."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..readers import SourceFormat
from ..shared import (
    ConversionError,
    ConversionErrorKind,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from ..tree import Node, render_listing


@dataclass
class ConversionResult:
    """Outcome of converting one buffer.

    On success ``tree`` holds the unnamed root. On failure ``tree`` is None,
    ``error`` holds the reader failure (None for unrecognized input) and the
    diagnostics explain what happened.
    """

    tree: Optional[Node] = None
    format: SourceFormat = SourceFormat.UNKNOWN
    success: bool = True
    error: Optional[ConversionError] = None

    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    correlation_id: Optional[str] = None
    source: Optional[str] = None

    @property
    def node_count(self) -> int:
        """Number of nodes in the tree, not counting the synthetic root."""
        if self.tree is None:
            return 0
        return sum(1 for _ in self.tree.iter_nodes()) - 1

    @property
    def error_kind(self) -> Optional[ConversionErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def render(self) -> str:
        """Listing rendering of the tree, empty when there is no tree."""
        if self.tree is None:
            return ""
        return render_listing(self.tree)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def to_dict(self, include_tree: bool = True) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        result: Dict[str, Any] = {
            "source": self.source,
            "format": self.format.value,
            "success": self.success,
            "node_count": self.node_count,
            "error": None,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "performance": self.performance.to_dict(),
        }
        if self.error is not None:
            result["error"] = {
                "kind": self.error.kind.value,
                "message": self.error.message,
                "position": self.error.position,
            }
        if include_tree and self.tree is not None:
            result["tree"] = self.tree.to_dict()
        return result
