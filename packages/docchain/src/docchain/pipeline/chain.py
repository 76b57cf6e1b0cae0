from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import PipelineConfigurationError, StageContractError
from .base import Stage
from .context import OperationRequest
from .results import OperationResult
from .stages.serialization import JsonSerializationStage

logger = logging.getLogger(__name__)

StageFactory = Callable[[], Stage]
Handler = Callable[[OperationRequest], Awaitable[OperationResult]]


class Pipeline:
    """An immutable, composed chain of stages.

    Built once by PipelineBuilder and then shared: the pipeline holds no
    per-operation state, so concurrent ``invoke`` calls are safe.
    """

    def __init__(self, stages: tuple[Stage, ...], handler: Handler):
        self._stages = stages
        self._handler = handler

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def describe(self) -> list[dict[str, Any]]:
        """Return metadata for each stage in execution order.

        Instance-level settings (a configured timeout) override the class defaults.
        """
        return [
            {**stage.get_metadata(), "timeout_seconds": stage.timeout_seconds}
            for stage in self._stages
        ]

    async def invoke(self, request: OperationRequest) -> OperationResult:
        """Run ``request`` through every stage and return the final result."""
        start_time = time.monotonic()
        try:
            result = await self._handler(request)
        except Exception as e:
            logger.warning(
                "pipeline_failed",
                extra={
                    "kind": request.kind.value,
                    "namespace": request.namespace,
                    "key": request.key,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(
            "pipeline_executed",
            extra={
                "kind": request.kind.value,
                "namespace": request.namespace,
                "key": request.key,
                "status": result.status.value,
                "duration_ms": round(elapsed_ms, 2),
            }
        )
        return result

    def __repr__(self) -> str:
        names = " -> ".join(stage.__class__.__name__ for stage in self._stages)
        return f"Pipeline({names})"


class PipelineBuilder:
    """Accumulates stage factories and links them into a Pipeline.

    Registration order is execution order on the way down; each stage wraps
    every stage registered after it, so results unwind in reverse.

    Usage:
        pipeline = (
            PipelineBuilder()
            .register(NotFoundSuppressionStage)
            .use_json()
            .register(lambda: StorageStage(store))
            .build()
        )
    """

    def __init__(self):
        self._factories: list[StageFactory] = []

    def register(self, factory: StageFactory) -> "PipelineBuilder":
        """Append a stage factory. Returns the builder for chaining."""
        if not callable(factory):
            raise PipelineConfigurationError(
                f"Stage factory must be callable, got {type(factory).__name__}"
            )
        self._factories.append(factory)
        return self

    def use_json(self) -> "PipelineBuilder":
        """Register the JSON serialization stage."""
        return self.register(JsonSerializationStage)

    def build(self) -> Pipeline:
        """Instantiate the registered stages and compose them.

        Raises:
            PipelineConfigurationError: If the stages do not form a valid chain
        """
        if not self._factories:
            raise PipelineConfigurationError("Pipeline has no stages")

        stages: list[Stage] = []
        for factory in self._factories:
            stage = factory()
            if not isinstance(stage, Stage):
                raise PipelineConfigurationError(
                    f"Stage factory {factory!r} returned {type(stage).__name__}, not a Stage"
                )
            stages.append(stage)

        self._validate_terminal(stages)

        terminal_name = stages[-1].__class__.__name__

        async def end_of_chain(request: OperationRequest) -> OperationResult:
            raise StageContractError(
                terminal_name, "terminal stage delegated past the end of the pipeline"
            )

        # Fold right-to-left so the first registered stage is outermost
        handler: Handler = end_of_chain
        for stage in reversed(stages):
            handler = self._link(stage, handler)

        pipeline = Pipeline(tuple(stages), handler)
        logger.info(f"Built {pipeline!r}")
        return pipeline

    @staticmethod
    def _validate_terminal(stages: list[Stage]) -> None:
        terminal = [s.__class__.__name__ for s in stages if s.terminal]
        if not terminal:
            raise PipelineConfigurationError(
                "Pipeline has no terminal stage; register a storage stage last"
            )
        if len(terminal) > 1:
            raise PipelineConfigurationError(
                f"Pipeline has more than one terminal stage: {terminal}"
            )
        if not stages[-1].terminal:
            raise PipelineConfigurationError(
                f"Terminal stage {terminal[0]} must be registered last, "
                f"found {stages[-1].__class__.__name__} after it"
            )

    @staticmethod
    def _link(stage: Stage, downstream: Handler) -> Handler:
        """Bind ``stage`` to the handler for the remaining chain."""
        name = stage.__class__.__name__

        async def handle(request: OperationRequest) -> OperationResult:
            called = False

            async def call_next(next_request: OperationRequest) -> OperationResult:
                nonlocal called
                if called:
                    raise StageContractError(name, "call_next awaited more than once")
                called = True
                return await downstream(next_request)

            if stage.timeout_seconds:
                try:
                    result = await asyncio.wait_for(
                        stage.invoke(request, call_next), timeout=stage.timeout_seconds
                    )
                except asyncio.TimeoutError:
                    logger.error(
                        "stage_timeout",
                        extra={
                            "stage": name,
                            "timeout_seconds": stage.timeout_seconds,
                            "key": request.key,
                        }
                    )
                    raise
            else:
                result = await stage.invoke(request, call_next)

            if not isinstance(result, OperationResult):
                raise StageContractError(
                    name, f"returned {type(result).__name__} instead of OperationResult"
                )
            return result

        return handle
