"""Generic document collection - typed CRUD over one pipeline and namespace"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from .errors import DocumentNotFoundError, InvalidArgumentError, StageContractError
from .pipeline.chain import Pipeline
from .pipeline.context import OperationKind, OperationRequest
from .pipeline.results import ResultStatus

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DocumentCollection(Generic[T]):
    """Typed get/put/delete for one document type in one namespace.

    The collection only builds requests and reads results; decoding into
    ``value_type`` happens in the pipeline's serialization stage. Each call
    makes exactly one pipeline invocation and never retries.

    Usage:
        monitors = DocumentCollection("monitors", pipeline, HttpMonitor)
        await monitors.put("m1", monitor)
        monitor = await monitors.get("m1")  # None if absent
    """

    def __init__(self, namespace: str, pipeline: Pipeline, value_type: Any = Any):
        if not namespace:
            raise InvalidArgumentError("namespace", "Namespace must be a non-empty string")
        self.namespace = namespace
        self.pipeline = pipeline
        self.value_type = value_type

    async def get(self, key: str) -> T | None:
        """Get the document stored under ``key``, or None if there is none

        Raises:
            DocumentNotFoundError: If the pipeline has no not-found suppression
            SerializationError: If the stored payload cannot be decoded
        """
        result = await self.pipeline.invoke(self._request(key, OperationKind.GET))

        if result.status is ResultStatus.FOUND:
            return result.payload
        if result.status is ResultStatus.EMPTY:
            return None
        if result.status is ResultStatus.NOT_FOUND:
            raise DocumentNotFoundError(self.namespace, key)
        # The outermost stage is the one that handed this result back
        raise StageContractError(
            type(self.pipeline.stages[0]).__name__,
            f"get returned unexpected status {result.status.value}",
        )

    async def put(self, key: str, value: T) -> None:
        """Insert or replace the document stored under ``key``

        Raises:
            InvalidArgumentError: If ``value`` is None (nothing reaches the store)
        """
        if value is None:
            raise InvalidArgumentError("value", "Cannot put a None document")

        request = self._request(key, OperationKind.PUT, payload=value)
        result = await self.pipeline.invoke(request)

        if result.status is ResultStatus.NOT_FOUND:
            raise DocumentNotFoundError(self.namespace, key)
        logger.debug(f"Put document {self.namespace}/{key}")

    async def delete(self, key: str) -> None:
        """Delete the document stored under ``key``

        Deleting an absent document succeeds when the pipeline suppresses
        not-found; otherwise it raises DocumentNotFoundError.
        """
        result = await self.pipeline.invoke(self._request(key, OperationKind.DELETE))

        if result.status is ResultStatus.NOT_FOUND:
            raise DocumentNotFoundError(self.namespace, key)
        logger.debug(f"Deleted document {self.namespace}/{key}")

    def _request(self, key: str, kind: OperationKind, payload: Any = None) -> OperationRequest:
        value_type = None if self.value_type is Any else self.value_type
        return OperationRequest(
            key=key,
            kind=kind,
            namespace=self.namespace,
            payload=payload,
            value_type=value_type,
        )

    def __repr__(self) -> str:
        type_name = getattr(self.value_type, "__name__", repr(self.value_type))
        return f"DocumentCollection(namespace={self.namespace!r}, value_type={type_name})"
