"""Partition violations into suppressed and unsuppressed sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.models import SuppressedViolation, Violation

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rules.config import Suppression


@dataclass(frozen=True)
class SuppressionOutcome:
    unsuppressed: list[Violation] = field(default_factory=list)
    suppressed: list[SuppressedViolation] = field(default_factory=list)


def find_suppression(
    violation: Violation, suppressions: Sequence[Suppression]
) -> Suppression | None:
    """Return the first suppression keyed by the violation's (file, rule).

    The line of the triggering import is not part of the key: one entry
    silences every violation of that rule originating in that file.
    """
    for suppression in suppressions:
        if (
            suppression.file == violation.from_file
            and suppression.rule == violation.rule_name
        ):
            return suppression
    return None


def _position(violation: Violation) -> tuple[str, int]:
    return (violation.from_file, violation.line)


def apply_suppressions(
    violations: Iterable[Violation],
    suppressions: Sequence[Suppression],
) -> SuppressionOutcome:
    """Split violations using the configured suppressions.

    Both resulting lists are sorted by (source file, line); the sort is
    stable so violations on the same line keep their evaluation order.
    """
    unsuppressed: list[Violation] = []
    suppressed: list[SuppressedViolation] = []

    for violation in violations:
        match = find_suppression(violation, suppressions)
        if match is None:
            unsuppressed.append(violation)
        else:
            suppressed.append(
                SuppressedViolation.from_violation(violation, match.reason)
            )

    unsuppressed.sort(key=_position)
    suppressed.sort(key=_position)

    return SuppressionOutcome(unsuppressed=unsuppressed, suppressed=suppressed)


__all__ = ["SuppressionOutcome", "apply_suppressions", "find_suppression"]
