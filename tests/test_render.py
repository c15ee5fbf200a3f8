from __future__ import annotations

import json

from contract.models import DependencyEdge, Report, SuppressedViolation, Violation
from report.render import render_human, render_json


def _violation() -> Violation:
    return Violation(
        rule_name="no-data-to-ui",
        from_layer="data",
        to_layer="ui",
        edge=DependencyEdge(
            from_file="src/data/x.ts",
            to_file="src/ui/y.ts",
            import_text='import { Y } from "../ui/y";',
            line=4,
        ),
        reason="data layer must not depend on ui layer.",
    )


def _report(*, suppressed: bool = False) -> Report:
    violation = _violation()
    if suppressed:
        return Report.build(
            checked_files=2,
            edges=1,
            unsuppressed=[],
            suppressed=[SuppressedViolation.from_violation(violation, "legacy")],
        )
    return Report.build(
        checked_files=2, edges=1, unsuppressed=[violation], suppressed=[]
    )


def test_render_human_lists_violation_details() -> None:
    text = render_human(_report())

    assert text.splitlines() == [
        "truss: architectural violations found (1)",
        "",
        "no-data-to-ui",
        "Layers: data -> ui",
        "src/data/x.ts:4",
        'import { Y } from "../ui/y";',
        "Reason: data layer must not depend on ui layer.",
        "",
        "Summary:",
        "Unsuppressed: 1",
        "Suppressed: 0",
        "Total: 1",
    ]


def test_render_human_without_unsuppressed_violations() -> None:
    assert render_human(Report.empty()).splitlines() == [
        "truss: no architectural violations found",
        "Checked 0 files",
    ]
    assert render_human(_report(suppressed=True)).splitlines()[-1] == (
        "Suppressed violations: 1"
    )


def test_render_json_uses_camel_case_keys() -> None:
    payload = json.loads(render_json(_report(suppressed=True)))

    assert list(payload) == [
        "checkedFiles",
        "edges",
        "unsuppressed",
        "suppressed",
        "summary",
    ]
    assert payload["suppressed"][0] == {
        "ruleName": "no-data-to-ui",
        "fromLayer": "data",
        "toLayer": "ui",
        "edge": {
            "fromFile": "src/data/x.ts",
            "toFile": "src/ui/y.ts",
            "importText": 'import { Y } from "../ui/y";',
            "line": 4,
            "importKind": "internal",
        },
        "reason": "data layer must not depend on ui layer.",
        "suppressionReason": "legacy",
    }
    assert payload["summary"] == {
        "unsuppressedCount": 0,
        "suppressedCount": 1,
        "totalCount": 1,
    }


def test_report_build_keeps_total_consistent() -> None:
    report = _report()

    assert report.summary.total_count == (
        report.summary.unsuppressed_count + report.summary.suppressed_count
    )
