from __future__ import annotations

from typing import Any

from .base import CallNext, Stage
from .context import OperationRequest
from .results import OperationResult


class RecordingStage(Stage):
    """Records the downward and upward pass for assertion in tests.

    Pass a shared ``journal`` list to several instances to verify call order.
    """

    def __init__(self, name: str = "RecordingStage", journal: list[tuple[str, str, Any]] | None = None):
        self._name = name
        self.journal = journal if journal is not None else []
        self.requests: list[OperationRequest] = []
        self.results: list[OperationResult] = []

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        self.requests.append(request)
        self.journal.append(("down", self._name, request.kind))
        result = await call_next(request)
        self.results.append(result)
        self.journal.append(("up", self._name, result.status))
        return result


class StaticResultStage(Stage):
    """Terminal stage that answers every request with a fixed result or error."""

    terminal = True

    def __init__(
        self,
        result: OperationResult | None = None,
        should_raise: Exception | None = None
    ):
        self._result = result or OperationResult.success()
        self._should_raise = should_raise
        self.call_count = 0
        self.last_request: OperationRequest | None = None

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        self.call_count += 1
        self.last_request = request

        if self._should_raise:
            raise self._should_raise

        return self._result


class RaisingStage(Stage):
    """Non-terminal stage that raises before (or instead of) delegating."""

    def __init__(self, error: Exception):
        self._error = error
        self.call_count = 0

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        self.call_count += 1
        raise self._error


class ShortCircuitStage(Stage):
    """Answers with a fixed result without delegating, e.g. a cache hit."""

    def __init__(self, result: OperationResult):
        self._result = result
        self.call_count = 0

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        self.call_count += 1
        return self._result


class DoubleCallStage(Stage):
    """Breaks the contract by awaiting ``call_next`` twice."""

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        await call_next(request)
        return await call_next(request)
