"""Operation Results — tagged success/failure values for business outcomes.

Invariants:
    - success=True  => error_code is None
    - success=False => payload is None
    - Expected business failures are returned as results; faults are raised
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    success: bool
    error_code: str | None = None
    payload: T | None = None

    @classmethod
    def ok(cls, payload: T | None = None) -> "OperationResult[T]":
        return cls(True, None, payload)

    @classmethod
    def fail(cls, error_code: "str | Enum") -> "OperationResult[T]":
        code = error_code.value if isinstance(error_code, Enum) else error_code
        return cls(False, code, None)
