"""Stable value types exchanged between the truss core and its renderers.

Treat these exports as the authoritative boundary: renderers and callers of
``run_check`` only see these records.
"""

from contract.models import (
    DependencyEdge,
    ImportKind,
    Report,
    ReportSummary,
    SuppressedViolation,
    Violation,
)

__all__ = [
    "DependencyEdge",
    "ImportKind",
    "Report",
    "ReportSummary",
    "SuppressedViolation",
    "Violation",
]
