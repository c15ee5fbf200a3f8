"""Rule evaluation over the aggregated dependency edges."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import Violation
from rules.layers import LayerMatcher

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import DependencyEdge
    from rules.config import Rule, TrussConfig

logger = logging.getLogger(__name__)


def default_reason(from_layer: str, to_layer: str) -> str:
    return f"{from_layer} layer must not depend on {to_layer} layer."


def _violation_for(
    rule: Rule, edge: DependencyEdge, from_layer: str, to_layer: str
) -> Violation:
    return Violation(
        rule_name=rule.name,
        from_layer=from_layer,
        to_layer=to_layer,
        edge=edge,
        reason=(
            rule.message
            if rule.message is not None
            else default_reason(from_layer, to_layer)
        ),
    )


def evaluate_rules(
    edges: Iterable[DependencyEdge],
    config: TrussConfig,
    matcher: LayerMatcher | None = None,
) -> list[Violation]:
    """Check every edge against every rule and collect all violations.

    Edges whose source or target maps to no layer are skipped. Every rule
    (in declared order) whose ``from`` layer is the edge's source layer and
    whose ``disallow`` list contains the target layer produces its own
    violation, so one edge may yield several.
    """
    if matcher is None:
        matcher = LayerMatcher(config.layers)

    violations: list[Violation] = []

    for edge in edges:
        from_layer = matcher.match(edge.from_file)
        to_layer = matcher.match(edge.to_file)
        if from_layer is None or to_layer is None:
            continue

        for rule in config.rules:
            if rule.from_layer != from_layer:
                continue
            if to_layer not in rule.disallow:
                continue
            violations.append(_violation_for(rule, edge, from_layer, to_layer))

    logger.debug(
        "Evaluated %d rules: %d violations, %d files classified",
        len(config.rules),
        len(violations),
        len(matcher),
    )
    return violations


__all__ = ["default_reason", "evaluate_rules"]
