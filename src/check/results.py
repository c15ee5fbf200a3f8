"""Tagged results returned by configuration loading and file discovery."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Classification of a failed pipeline step."""

    CONFIG = "config"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


Result = Union[Success[T], Failure]


__all__ = ["ErrorKind", "Failure", "Result", "Success"]
