"""Data models for HTTP uptime monitors"""

from datetime import datetime
from http import HTTPStatus
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, HttpUrl
from pydantic_core import core_schema

from ..errors import InvalidArgumentError


class HttpMonitorId:
    """Identifier of an HttpMonitor.

    Wraps a UUID explicitly: build one with ``HttpMonitorId(uuid)``,
    ``HttpMonitorId.parse(text)`` or ``HttpMonitorId.create()`` and read it back
    with ``value`` or ``str()``. The nil UUID is rejected.
    """

    __slots__ = ("_value",)

    def __init__(self, value: UUID):
        if not isinstance(value, UUID):
            raise InvalidArgumentError("value", f"Expected a UUID, got {type(value).__name__}")
        if value.int == 0:
            raise InvalidArgumentError("value", "Empty guid not a valid value.")
        self._value = value

    @classmethod
    def create(cls) -> "HttpMonitorId":
        """Generate a new random identifier."""
        return cls(uuid4())

    @classmethod
    def parse(cls, text: str) -> "HttpMonitorId":
        """Parse an identifier from its string form."""
        try:
            value = UUID(text)
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidArgumentError("text", f"Not a valid monitor id: {text!r}") from e
        return cls(value)

    @property
    def value(self) -> UUID:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"HttpMonitorId('{self._value}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HttpMonitorId) and self._value == other._value

    def __hash__(self) -> int:
        return hash((HttpMonitorId, self._value))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls._coerce,
            core_schema.json_or_python_schema(
                json_schema=core_schema.uuid_schema(),
                python_schema=core_schema.union_schema([
                    core_schema.is_instance_schema(cls),
                    core_schema.uuid_schema(),
                ]),
            ),
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def _coerce(cls, value: Any) -> "HttpMonitorId":
        if isinstance(value, cls):
            return value
        return cls(value)


class HttpMonitor(BaseModel):
    """A URL watched for availability"""
    model_config = ConfigDict(validate_assignment=True)

    id: HttpMonitorId = Field(..., description="Monitor identifier")
    url: HttpUrl = Field(..., description="URL to check")


class HttpMonitorCheckResult(BaseModel):
    """Outcome of one availability check"""
    http_monitor_id: HttpMonitorId
    http_status_code: HTTPStatus
    created: datetime
