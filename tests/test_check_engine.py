from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

import check.engine as engine
from check.engine import ExitCode, exit_code_for, run_check
from contract.models import Report
from report.render import render_json

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "mini_repo"

_CONFIG = """
[layers]
ui = ["src/ui/**"]
data = ["src/data/**"]

[[rules]]
name = "no-data-to-ui"
from = "data"
disallow = ["ui"]
""".strip()


def _copy_fixture(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, root)
    return root


def _write(root: Path, relative_path: str, content: str) -> None:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _write_scenario_repo(root: Path, *, suppressions: str = "") -> None:
    _write(root, "truss.toml", _CONFIG + "\n" + suppressions)
    _write(root, "src/data/x.ts", 'import { Y } from "../ui/y";\n')
    _write(root, "src/ui/y.ts", "export const Y = 1;\n")


def test_fixture_run_reports_violations(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)

    outcome = run_check(root)

    assert outcome.exit_code is ExitCode.VIOLATIONS
    report = outcome.report
    assert report.checked_files == 5
    assert report.edges == 5
    assert [
        (v.rule_name, v.from_file, v.line, v.to_layer) for v in report.unsuppressed
    ] == [
        ("data-isolation", "src/data/legacy.js", 1, "ui"),
        ("no-data-to-ui", "src/data/store.ts", 1, "ui"),
        ("data-isolation", "src/data/store.ts", 1, "ui"),
    ]
    assert [(v.rule_name, v.suppression_reason) for v in report.suppressed] == [
        ("no-data-to-ui", "legacy widget bridge"),
    ]
    assert report.unsuppressed[0].reason == "data must not reach into ui or net."
    assert report.summary.unsuppressed_count == 3
    assert report.summary.suppressed_count == 1
    assert report.summary.total_count == 4


def test_single_violation_fails_the_check(tmp_path: Path) -> None:
    _write_scenario_repo(tmp_path)

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.VIOLATIONS
    assert [v.reason for v in outcome.report.unsuppressed] == [
        "data layer must not depend on ui layer."
    ]


def test_suppressed_violations_do_not_fail_the_check(tmp_path: Path) -> None:
    _write_scenario_repo(
        tmp_path,
        suppressions=(
            '[[suppressions]]\nfile = "src/data/x.ts"\n'
            'rule = "no-data-to-ui"\nreason = "legacy"\n'
        ),
    )

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.OK
    assert outcome.report.summary.unsuppressed_count == 0
    assert outcome.report.summary.suppressed_count == 1
    assert outcome.report.suppressed[0].suppression_reason == "legacy"


def test_clean_repo_exits_ok(tmp_path: Path) -> None:
    _write(tmp_path, "truss.toml", _CONFIG)
    _write(tmp_path, "src/ui/y.ts", 'import { X } from "../data/x";\n')
    _write(tmp_path, "src/data/x.ts", "export const X = 1;\n")

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.OK
    assert outcome.report.edges == 1
    assert outcome.error is None


def test_no_source_files_is_config_error(tmp_path: Path) -> None:
    _write(tmp_path, "truss.toml", _CONFIG)
    _write(tmp_path, "README.md", "nothing to check\n")

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.CONFIG_ERROR
    assert outcome.report == Report.empty()
    assert outcome.report.checked_files == 0
    assert outcome.report.edges == 0
    assert outcome.error is not None


def test_missing_config_is_config_error(tmp_path: Path) -> None:
    _write(tmp_path, "src/a.ts", "export {};\n")

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.CONFIG_ERROR
    assert outcome.report == Report.empty()


def test_config_path_is_relative_to_root(tmp_path: Path) -> None:
    _write_scenario_repo(tmp_path)
    (tmp_path / "truss.toml").rename(tmp_path / "arch.toml")

    assert run_check(tmp_path).exit_code is ExitCode.CONFIG_ERROR
    assert run_check(tmp_path, "arch.toml").exit_code is ExitCode.VIOLATIONS


def test_config_ignore_patterns_limit_discovery(tmp_path: Path) -> None:
    _write_scenario_repo(tmp_path)
    config = (tmp_path / "truss.toml").read_text(encoding="utf-8")
    (tmp_path / "truss.toml").write_text(
        'ignore = ["src/data/**"]\n' + config, encoding="utf-8"
    )

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.OK
    assert outcome.report.checked_files == 1


def test_unexpected_failure_is_internal_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_scenario_repo(tmp_path)

    def _boom(*args: object, **kwargs: object) -> list[object]:
        raise RuntimeError("unexpected")

    monkeypatch.setattr(engine, "build_dependency_edges", _boom)

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.INTERNAL_ERROR
    assert outcome.report == Report.empty()
    assert outcome.error is not None
    assert "unexpected" in outcome.error


def test_one_malformed_file_does_not_hide_other_violations(tmp_path: Path) -> None:
    _write_scenario_repo(tmp_path)
    _write(tmp_path, "src/data/broken.ts", "import {{{ from '../ui/y'")

    outcome = run_check(tmp_path)

    assert outcome.exit_code is ExitCode.VIOLATIONS
    assert "src/data/x.ts" in {v.from_file for v in outcome.report.unsuppressed}


def test_two_runs_produce_identical_json(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)

    first = render_json(run_check(root).report)
    second = render_json(run_check(root, jobs=3).report)

    assert first == second


def test_exit_code_ignores_suppressed_count() -> None:
    assert exit_code_for(Report.empty()) is ExitCode.OK
    assert ExitCode.OK == 0
    assert ExitCode.VIOLATIONS == 1
    assert ExitCode.CONFIG_ERROR == 2
    assert ExitCode.INTERNAL_ERROR == 3


def test_import_cycles_are_logged_without_changing_outcome(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root = _copy_fixture(tmp_path)

    with caplog.at_level(logging.INFO, logger="check.engine"):
        outcome = run_check(root)

    assert outcome.exit_code is ExitCode.VIOLATIONS
    assert (
        "Import cycle: src/data/store.ts <-> src/ui/index.ts <-> src/ui/view.tsx"
        in caplog.messages
    )
