"""Command-line interface for truss."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from check.engine import run_check
from report.render import render_human, render_json

LOG_LEVEL_ENV = "TRUSS_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "truss-stderr"


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if raw:
        return getattr(logging, raw, logging.WARNING)
    return logging.WARNING


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send diagnostics to the current stderr; flags override ``TRUSS_LOG_LEVEL``.

    Each call detaches the handler installed by the previous one without
    flushing it, since the stream it wrote to may already be closed.
    """
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.name == HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(_resolve_level(verbose=verbose, quiet=quiet))


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be at least 1, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="truss")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug diagnostics"
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log warnings and errors"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check layer boundaries in a repository"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--config",
        default=None,
        help="Config file, relative to the root (default: truss.toml)",
    )
    check_parser.add_argument(
        "--format",
        choices=("human", "json"),
        default="human",
        help="Report format (default: human)",
    )
    check_parser.add_argument(
        "--show-suppressed",
        action="store_true",
        help="Include suppressed violations in the human report",
    )
    check_parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=1,
        help="Worker threads for import extraction (default: 1)",
    )

    return parser


def _handle_check(
    root: str,
    config: str | None,
    output_format: str,
    *,
    show_suppressed: bool,
    jobs: int,
) -> int:
    outcome = run_check(root, config, jobs=jobs)

    if outcome.error is not None:
        sys.stderr.write(f"error: {outcome.error}\n")

    if output_format == "json":
        # JSON consumers always get a well-formed document, empty on errors.
        sys.stdout.write(render_json(outcome.report) + "\n")
    elif outcome.error is None:
        rendered = render_human(outcome.report, show_suppressed=show_suppressed)
        sys.stdout.write(rendered + "\n")

    return int(outcome.exit_code)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.command == "check":
        return _handle_check(
            args.root,
            args.config,
            args.format,
            show_suppressed=args.show_suppressed,
            jobs=args.jobs,
        )

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
