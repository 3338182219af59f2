"""Success-or-failure envelope returned by every public service operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    REMOTE_FAILURE = "remote_failure"
    VALIDATION_FAILURE = "validation_failure"
    PERSISTENCE_CORRUPTION = "persistence_corruption"
    SUPERSEDED = "superseded"
    INTERNAL = "internal"


class ResultError(Exception):
    """Raised by :meth:`Result.unwrap` on a failed result."""

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, kind: ErrorKind = ErrorKind.INTERNAL) -> "Result[T]":
        return cls(error_message=message, error_kind=kind)

    @property
    def success(self) -> bool:
        return self.error_kind is None

    def unwrap(self) -> T:
        if not self.success:
            raise ResultError(self.error_message or "Unknown error", self.error_kind)
        return self.value
