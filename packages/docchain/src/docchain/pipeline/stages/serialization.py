"""JSON serialization stage - bridges structured values and byte payloads"""

import functools
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ...errors import SerializationError
from ..base import CallNext, Stage
from ..context import OperationKind, OperationRequest
from ..results import OperationResult, ResultStatus

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=256)
def _cached_adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def get_type_adapter(value_type: Any) -> TypeAdapter:
    """Return a (cached where possible) TypeAdapter for ``value_type``."""
    if value_type is None:
        value_type = Any
    try:
        return _cached_adapter(value_type)
    except TypeError:
        # Unhashable type expressions cannot be cached
        return TypeAdapter(value_type)


class JsonSerializationStage(Stage):
    """Encodes PUT payloads to JSON bytes and decodes GET payloads back.

    Uses pydantic TypeAdapters, so any type pydantic understands works as a
    document type: BaseModel subclasses, dataclasses, TypedDicts, plain dicts.
    Field names follow the value's schema (aliases are honoured).

    DELETE requests and every non-FOUND result pass through untouched, which
    lets this stage sit on either side of NotFoundSuppressionStage.
    """

    def __init__(self, indent: int | None = None):
        self.indent = indent

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        if request.kind is OperationKind.PUT:
            return await call_next(request.with_payload(self.encode(request)))

        result = await call_next(request)

        if request.kind is OperationKind.GET and result.status is ResultStatus.FOUND:
            return result.with_payload(self.decode(request, result.payload))
        return result

    def encode(self, request: OperationRequest) -> bytes:
        value = request.payload
        value_type = request.value_type if request.value_type is not None else type(value)
        try:
            return get_type_adapter(value_type).dump_json(
                value, indent=self.indent, by_alias=True, warnings="error"
            )
        except (PydanticSerializationError, ValueError, TypeError) as e:
            logger.error(f"Failed to encode {request.namespace}/{request.key}: {e}")
            raise SerializationError(request.key, str(e)) from e

    def decode(self, request: OperationRequest, payload: Any) -> Any:
        if not isinstance(payload, (bytes, bytearray, str)):
            raise SerializationError(
                request.key, f"expected a bytes payload, got {type(payload).__name__}"
            )
        try:
            return get_type_adapter(request.value_type).validate_json(payload)
        except ValidationError as e:
            logger.error(f"Failed to decode {request.namespace}/{request.key}: {e}")
            raise SerializationError(request.key, str(e)) from e
