"""Middleware pipeline for docchain document operations.

A pipeline is an ordered chain of stages ending in exactly one terminal
(storage) stage:
- JsonSerializationStage: structured values <-> JSON bytes
- NotFoundSuppressionStage: absence -> empty result / no-op delete
- StorageStage: blob store round trip (terminal)
"""

from .context import (
    OperationKind,
    OperationRequest,
)
from .results import (
    OperationResult,
    ResultStatus,
)
from .base import (
    CallNext,
    Stage,
)
from .stages import (
    JsonSerializationStage,
    NotFoundSuppressionStage,
    StorageStage,
)
from .chain import (
    Pipeline,
    PipelineBuilder,
    StageFactory,
)

__all__ = [
    # Context
    "OperationKind",
    "OperationRequest",
    # Results
    "OperationResult",
    "ResultStatus",
    # Base classes
    "CallNext",
    "Stage",
    # Built-in stages
    "JsonSerializationStage",
    "NotFoundSuppressionStage",
    "StorageStage",
    # Chain
    "Pipeline",
    "PipelineBuilder",
    "StageFactory",
]
