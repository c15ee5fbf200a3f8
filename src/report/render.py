"""Human-readable and JSON renderings of a check report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from contract.models import Report, SuppressedViolation, Violation


def _violation_lines(violation: Violation) -> list[str]:
    return [
        violation.rule_name,
        f"Layers: {violation.from_layer} -> {violation.to_layer}",
        f"{violation.from_file}:{violation.line}",
        violation.edge.import_text,
        f"Reason: {violation.reason}",
    ]


def _suppressed_lines(violation: SuppressedViolation) -> list[str]:
    lines = _violation_lines(violation)
    lines[0] = f"{violation.rule_name} (suppressed)"
    lines.append(f"Suppression: {violation.suppression_reason}")
    return lines


def render_human(report: Report, *, show_suppressed: bool = False) -> str:
    """Render unsuppressed violations in detail followed by a summary.

    Suppressed violations are only counted unless ``show_suppressed`` is set.
    """
    unsuppressed = len(report.unsuppressed)
    suppressed = len(report.suppressed)

    if unsuppressed == 0:
        lines = [
            "truss: no architectural violations found",
            f"Checked {report.checked_files} files",
        ]
        if suppressed:
            lines.append(f"Suppressed violations: {suppressed}")
        return "\n".join(lines)

    lines = [f"truss: architectural violations found ({unsuppressed})", ""]
    for violation in report.unsuppressed:
        lines.extend(_violation_lines(violation))
        lines.append("")

    if suppressed:
        lines.append(
            f"Suppressed violations: {suppressed} (intentional, still reported)"
        )
        if show_suppressed:
            lines.append("")
            for suppressed_violation in report.suppressed:
                lines.extend(_suppressed_lines(suppressed_violation))
                lines.append("")

    lines.extend(
        [
            "Summary:",
            f"Unsuppressed: {report.summary.unsuppressed_count}",
            f"Suppressed: {report.summary.suppressed_count}",
            f"Total: {report.summary.total_count}",
        ]
    )
    return "\n".join(lines)


def render_json(report: Report) -> str:
    """Serialize the report with camelCase keys and 2-space indentation."""
    payload = report.model_dump(mode="json", by_alias=True)
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


__all__ = ["render_human", "render_json"]
