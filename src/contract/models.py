"""Value records shared by the truss analysis pipeline.

Records serialize with camelCase aliases (``fromFile``, ``ruleName``, ...)
so the machine-readable report keeps its documented shape while Python code
uses snake_case attributes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ImportKind = Literal["internal", "external"]


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DependencyEdge(_Record):
    """A directed dependency from one source file to another."""

    from_file: str
    to_file: str
    import_text: str
    line: int = Field(ge=1)
    import_kind: ImportKind = "internal"

    def sort_key(self) -> tuple[str, int, str]:
        return (self.from_file, self.line, self.to_file)


class Violation(_Record):
    """An edge that matched a rule's disallowed layer pairing."""

    rule_name: str
    from_layer: str
    to_layer: str
    edge: DependencyEdge
    reason: str

    @property
    def from_file(self) -> str:
        return self.edge.from_file

    @property
    def line(self) -> int:
        return self.edge.line


class SuppressedViolation(Violation):
    """A violation silenced by a configured suppression entry."""

    suppression_reason: str

    @classmethod
    def from_violation(
        cls, violation: Violation, suppression_reason: str
    ) -> SuppressedViolation:
        return cls(
            **violation.model_dump(),
            suppression_reason=suppression_reason,
        )


class ReportSummary(_Record):
    unsuppressed_count: int = 0
    suppressed_count: int = 0
    total_count: int = 0


class Report(_Record):
    """Final result of one check run, consumed verbatim by renderers."""

    checked_files: int = 0
    edges: int = 0
    unsuppressed: tuple[Violation, ...] = ()
    suppressed: tuple[SuppressedViolation, ...] = ()
    summary: ReportSummary = Field(default_factory=ReportSummary)

    @classmethod
    def build(
        cls,
        *,
        checked_files: int,
        edges: int,
        unsuppressed: list[Violation],
        suppressed: list[SuppressedViolation],
    ) -> Report:
        """Assemble a report, deriving the summary counts from the partitions."""
        return cls(
            checked_files=checked_files,
            edges=edges,
            unsuppressed=tuple(unsuppressed),
            suppressed=tuple(suppressed),
            summary=ReportSummary(
                unsuppressed_count=len(unsuppressed),
                suppressed_count=len(suppressed),
                total_count=len(unsuppressed) + len(suppressed),
            ),
        )

    @classmethod
    def empty(cls) -> Report:
        return cls()


__all__ = [
    "DependencyEdge",
    "ImportKind",
    "Report",
    "ReportSummary",
    "SuppressedViolation",
    "Violation",
]
