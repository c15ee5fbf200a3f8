from __future__ import annotations

from rules.layers import LayerMatcher, classify_layer, normalize_pattern


def test_normalize_pattern_strips_trailing_double_star() -> None:
    assert normalize_pattern("src/ui/**") == "src/ui/"
    assert normalize_pattern("src/ui/") == "src/ui/"
    assert normalize_pattern("src/**/ui") == "src/**/ui"


def test_classify_layer_first_match_wins_with_overlapping_patterns() -> None:
    layers = {
        "A": ["src/**"],
        "B": ["src/core/**"],
    }

    assert classify_layer("src/core/x.ts", layers) == "A"


def test_classify_layer_checks_every_pattern_of_a_layer() -> None:
    layers = {
        "ui": ["src/ui/**", "src/components/**"],
        "data": ["src/data/**"],
    }

    assert classify_layer("src/components/button.tsx", layers) == "ui"
    assert classify_layer("src/data/store.ts", layers) == "data"


def test_classify_layer_is_a_literal_prefix_test() -> None:
    layers = {"ui": ["src/ui"]}

    # No trailing separator means sibling directories sharing the prefix match.
    assert classify_layer("src/uikit/button.ts", layers) == "ui"
    assert classify_layer("lib/src/ui/button.ts", layers) is None


def test_classify_layer_returns_none_when_no_pattern_matches() -> None:
    layers = {"core": ["src/core/**"]}

    assert classify_layer("tests/layers.test.ts", layers) is None


def test_layer_matcher_caches_results_consistently() -> None:
    layers = {"ui": ["src/ui/**"]}
    matcher = LayerMatcher(layers)

    assert matcher.match("src/ui/a.ts") == "ui"
    assert matcher.match("scripts/build.js") is None
    assert len(matcher) == 2

    assert matcher.match("src/ui/a.ts") == "ui"
    assert matcher.match("scripts/build.js") is None
    assert len(matcher) == 2


def test_layer_matchers_do_not_share_state() -> None:
    first = LayerMatcher({"ui": ["src/ui/**"]})
    second = LayerMatcher({"data": ["src/ui/**"]})

    assert first.match("src/ui/a.ts") == "ui"
    assert second.match("src/ui/a.ts") == "data"
