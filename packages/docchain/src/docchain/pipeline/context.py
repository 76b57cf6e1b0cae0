from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..errors import InvalidArgumentError


class OperationKind(str, Enum):
    """Document operations a pipeline can carry."""
    GET = "get"
    PUT = "put"
    DELETE = "delete"


@dataclass(frozen=True)
class OperationRequest:
    """One document operation flowing down the pipeline.

    The payload is untyped at this layer: above the serialization stage it is the
    caller's value, below it a byte string. ``value_type`` tells the serialization
    stage what to decode into on GET (or what the PUT value was declared as).
    """
    key: str
    kind: OperationKind
    namespace: str
    payload: Any = None
    value_type: Any = None

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise InvalidArgumentError("key", "Document key must be a non-empty string")

    def with_payload(self, payload: Any) -> "OperationRequest":
        """Return a copy of this request carrying ``payload``."""
        return replace(self, payload=payload)
