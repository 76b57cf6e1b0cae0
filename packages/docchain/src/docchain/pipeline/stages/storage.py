"""Terminal storage stage - performs the blob store round trip"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...errors import PipelineConfigurationError
from ..base import CallNext, Stage
from ..context import OperationKind, OperationRequest
from ..results import OperationResult

if TYPE_CHECKING:
    from ...config import Settings
    from ...storage.base import BlobStore

logger = logging.getLogger(__name__)


class StorageStage(Stage):
    """Reads, writes and deletes byte payloads in a BlobStore.

    Absence is reported as ``OperationResult.not_found()`` rather than raised,
    both for GET and for DELETE of a missing key. Never calls ``call_next``.
    """

    terminal = True

    def __init__(self, store: "BlobStore", timeout_seconds: float | None = None):
        self.store = store
        if timeout_seconds is not None:
            self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: "Settings", store: "BlobStore") -> "StorageStage":
        return cls(store, timeout_seconds=settings.storage_timeout_seconds)

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        if request.kind is OperationKind.GET:
            data = await self.store.read_bytes(request.namespace, request.key)
            if data is None:
                return OperationResult.not_found()
            return OperationResult.found(data)

        if request.kind is OperationKind.PUT:
            payload = request.payload
            if not isinstance(payload, (bytes, bytearray, memoryview)):
                raise PipelineConfigurationError(
                    f"{self.__class__.__name__} received a {type(payload).__name__} payload; "
                    "register a serialization stage ahead of storage"
                )
            await self.store.write_bytes(request.namespace, request.key, bytes(payload))
            return OperationResult.success()

        if request.kind is OperationKind.DELETE:
            deleted = await self.store.delete_by_key(request.namespace, request.key)
            if not deleted:
                logger.debug(f"Nothing to delete at {request.namespace}/{request.key}")
                return OperationResult.not_found()
            return OperationResult.success()

        raise PipelineConfigurationError(f"Unsupported operation kind: {request.kind!r}")
