from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import Settings
    from ..storage.base import BlobStore
    from .context import OperationRequest
    from .results import OperationResult

CallNext = Callable[["OperationRequest"], Awaitable["OperationResult"]]


class Stage(ABC):
    """Base class for all pipeline stages.

    A stage receives the request and a ``call_next`` capability for the rest of
    the chain. It may rewrite the request before delegating, rewrite or replace
    the result afterwards, or answer directly without delegating at all.
    ``call_next`` may be awaited at most once per invocation.

    Attributes:
        terminal: True for the stage that performs backend I/O. A pipeline holds
            exactly one terminal stage and it must be registered last.
        timeout_seconds: Per-stage timeout enforced by the pipeline (None = no
            timeout). The timeout covers the stage and everything it delegates to.

    Example:
        class AuditStage(Stage):
            async def invoke(self, request, call_next):
                logger.info("audit", extra={"key": request.key})
                return await call_next(request)
    """

    terminal: ClassVar[bool] = False
    timeout_seconds: ClassVar[float | None] = None

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return stage metadata for introspection."""
        return {
            "name": cls.__name__,
            "description": cls.__doc__,
            "terminal": cls.terminal,
            "timeout_seconds": cls.timeout_seconds,
        }

    @classmethod
    def from_settings(cls, settings: "Settings", store: "BlobStore") -> "Stage":
        """Build the stage for a configuration-driven pipeline.

        Stages needing the blob store or settings override this. Default
        calls the no-argument constructor.
        """
        return cls()

    @abstractmethod
    async def invoke(
        self,
        request: "OperationRequest",
        call_next: CallNext
    ) -> "OperationResult":
        """Handle one operation.

        Args:
            request: The operation travelling down the chain
            call_next: Continues with the remaining stages

        Returns:
            OperationResult travelling back up the chain

        Raises:
            Any failure; it propagates to enclosing stages unless one of them
            translates it.
        """
        pass
