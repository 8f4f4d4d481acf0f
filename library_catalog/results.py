from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Failure(str, Enum):
    """Named reasons an operation can fail."""

    NOT_FOUND = "not_found"
    ALREADY_ISSUED = "already_issued"
    NOT_ISSUED = "not_issued"
    INVALID_INPUT = "invalid_input"
    PERSISTENCE_FAILURE = "persistence_failure"


@dataclass
class Result:
    """Outcome of a catalog or store operation.

    ``value`` holds the success payload (a title, an id, a catalog...). A failed
    load still carries the empty catalog the caller should continue with.
    """

    ok: bool
    value: Any = None
    failure: Optional[Failure] = None
    detail: str = ""

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def fail(cls, failure: Failure, detail: str = "", value: Any = None) -> "Result":
        return cls(ok=False, value=value, failure=failure, detail=detail)

    def __bool__(self) -> bool:
        return self.ok
