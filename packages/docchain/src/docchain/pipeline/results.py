from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class ResultStatus(str, Enum):
    """Outcome of a pipeline operation.

    Statuses:
        FOUND: GET produced a payload
        NOT_FOUND: the store reported the key absent (not yet normalized)
        EMPTY: absence after normalization, "no such document"
        SUCCESS: PUT or DELETE completed
    """
    FOUND = "found"
    NOT_FOUND = "not_found"
    EMPTY = "empty"
    SUCCESS = "success"


@dataclass(frozen=True)
class OperationResult:
    """Result flowing back up the pipeline."""
    status: ResultStatus
    payload: Any = None

    @classmethod
    def found(cls, payload: Any) -> "OperationResult":
        return cls(status=ResultStatus.FOUND, payload=payload)

    @classmethod
    def not_found(cls) -> "OperationResult":
        return cls(status=ResultStatus.NOT_FOUND)

    @classmethod
    def empty(cls) -> "OperationResult":
        return cls(status=ResultStatus.EMPTY)

    @classmethod
    def success(cls) -> "OperationResult":
        return cls(status=ResultStatus.SUCCESS)

    @property
    def has_payload(self) -> bool:
        return self.status is ResultStatus.FOUND

    def with_payload(self, payload: Any) -> "OperationResult":
        return replace(self, payload=payload)
