"""
Result taxonomy returned by every application use-case.
Zero external dependencies, pure Python dataclass only.

The boundary layer (HTTP router, CLI) decides how each kind is rendered;
use-cases never raise for caller mistakes, they return an Outcome instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    COMPUTATION_FAILURE = "computation_failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    payload: Optional[T] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, payload: T) -> "Outcome[T]":
        return cls(OutcomeKind.SUCCESS, payload=payload)

    @classmethod
    def validation_error(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeKind.VALIDATION_ERROR, message=message)

    @classmethod
    def not_found(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def computation_failure(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeKind.COMPUTATION_FAILURE, message=message)
