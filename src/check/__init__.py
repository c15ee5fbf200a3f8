"""Check orchestration surface for truss."""

from check.results import ErrorKind, Failure, Result, Success


def __getattr__(name: str) -> object:
    # The engine imports rules/scan, which import check.results; load lazily.
    if name in {"CheckOutcome", "ExitCode", "exit_code_for", "run_check"}:
        from check import engine

        return getattr(engine, name)

    msg = f"module 'check' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "CheckOutcome",
    "ErrorKind",
    "ExitCode",
    "Failure",
    "Result",
    "Success",
    "exit_code_for",
    "run_check",
]
