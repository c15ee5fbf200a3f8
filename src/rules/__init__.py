"""Layer rules, suppressions and their configuration."""

from rules.config import (
    CONFIG_FILENAME,
    Rule,
    Suppression,
    TrussConfig,
    load_config,
)
from rules.evaluate import default_reason, evaluate_rules
from rules.layers import LayerMatcher, classify_layer, normalize_pattern
from rules.suppressions import SuppressionOutcome, apply_suppressions

__all__ = [
    "CONFIG_FILENAME",
    "LayerMatcher",
    "Rule",
    "Suppression",
    "SuppressionOutcome",
    "TrussConfig",
    "apply_suppressions",
    "classify_layer",
    "default_reason",
    "evaluate_rules",
    "load_config",
    "normalize_pattern",
]
