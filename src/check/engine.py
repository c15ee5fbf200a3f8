"""Orchestration of a single truss check run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

from check.results import ErrorKind, Failure
from contract.models import Report
from graph.dependency_graph import DependencyGraph, build_dependency_edges
from rules.config import default_config_path, load_config
from rules.evaluate import evaluate_rules
from rules.layers import LayerMatcher
from rules.suppressions import apply_suppressions
from scan.files import discover_source_files

if TYPE_CHECKING:
    from contract.models import DependencyEdge

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit signal derived from a check run."""

    OK = 0
    VIOLATIONS = 1
    CONFIG_ERROR = 2
    INTERNAL_ERROR = 3


_EXIT_FOR_KIND = {
    ErrorKind.CONFIG: ExitCode.CONFIG_ERROR,
    ErrorKind.INTERNAL: ExitCode.INTERNAL_ERROR,
}


@dataclass(frozen=True)
class CheckOutcome:
    exit_code: ExitCode
    report: Report = field(default_factory=Report.empty)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code is ExitCode.OK


def exit_code_for(report: Report) -> ExitCode:
    """Suppressed violations never affect the exit status."""
    if report.summary.unsuppressed_count > 0:
        return ExitCode.VIOLATIONS
    return ExitCode.OK


def _failed(failure: Failure) -> CheckOutcome:
    logger.info("Check aborted (%s): %s", failure.kind.value, failure.message)
    return CheckOutcome(
        exit_code=_EXIT_FOR_KIND[failure.kind],
        report=Report.empty(),
        error=failure.message,
    )


def _log_cycles(edges: list[DependencyEdge]) -> None:
    """Import cycles are informational; they never affect the exit code."""
    for cycle in DependencyGraph.from_edges(edges).find_cycles():
        logger.info("Import cycle: %s", " <-> ".join(cycle))


def _run_pipeline(root: Path, config_path: Path, jobs: int) -> CheckOutcome:
    loaded = load_config(config_path)
    if isinstance(loaded, Failure):
        return _failed(loaded)
    config = loaded.value

    discovered = discover_source_files(
        root,
        extra_ignores=config.ignore,
        nested_gitignore=config.nested_gitignore,
    )
    if isinstance(discovered, Failure):
        return _failed(discovered)
    files = discovered.value

    edges = build_dependency_edges(root, files, jobs=jobs)
    _log_cycles(edges)
    violations = evaluate_rules(edges, config, LayerMatcher(config.layers))
    outcome = apply_suppressions(violations, config.suppressions)

    report = Report.build(
        checked_files=len(files),
        edges=len(edges),
        unsuppressed=outcome.unsuppressed,
        suppressed=outcome.suppressed,
    )
    logger.info(
        "Checked %d files, %d edges: %d unsuppressed, %d suppressed",
        report.checked_files,
        report.edges,
        report.summary.unsuppressed_count,
        report.summary.suppressed_count,
    )
    return CheckOutcome(exit_code=exit_code_for(report), report=report)


def run_check(
    root: Path | str,
    config_path: Path | str | None = None,
    *,
    jobs: int = 1,
) -> CheckOutcome:
    """Run the full analysis pipeline once.

    Loads the configuration, discovers source files, extracts and sorts
    dependency edges, evaluates the rules, applies suppressions and builds
    the report.

    Args:
        root: Repository root; made absolute before use
        config_path: Config file; relative paths are taken from the root.
            Defaults to ``truss.toml`` in the root.
        jobs: Worker threads for per-file import extraction

    Returns:
        A ``CheckOutcome``. Configuration problems and an empty file set give
        ``CONFIG_ERROR``; anything unexpected gives ``INTERNAL_ERROR``. Both
        come with an empty report. This function does not raise.
    """
    try:
        resolved_root = Path(root).expanduser().resolve()
        if config_path is None:
            resolved_config = default_config_path(resolved_root)
        else:
            resolved_config = resolved_root / Path(config_path).expanduser()
        return _run_pipeline(resolved_root, resolved_config, jobs)
    except Exception as exc:
        logger.exception("Internal error during check")
        return CheckOutcome(
            exit_code=ExitCode.INTERNAL_ERROR,
            report=Report.empty(),
            error=f"Internal error: {exc}",
        )


__all__ = ["CheckOutcome", "ExitCode", "exit_code_for", "run_check"]
