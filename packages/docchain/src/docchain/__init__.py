"""docchain - typed document persistence over a composable stage pipeline"""

from .collection import DocumentCollection
from .errors import (
    DocChainError,
    DocumentNotFoundError,
    InvalidArgumentError,
    PipelineConfigurationError,
    SerializationError,
    StageContractError,
)
from .pipeline import (
    JsonSerializationStage,
    NotFoundSuppressionStage,
    OperationKind,
    OperationRequest,
    OperationResult,
    Pipeline,
    PipelineBuilder,
    ResultStatus,
    Stage,
    StorageStage,
)
from .storage import BlobStore, InMemoryBlobStore

__version__ = "0.1.0"

__all__ = [
    "DocumentCollection",
    # Errors
    "DocChainError",
    "DocumentNotFoundError",
    "InvalidArgumentError",
    "PipelineConfigurationError",
    "SerializationError",
    "StageContractError",
    # Pipeline
    "JsonSerializationStage",
    "NotFoundSuppressionStage",
    "OperationKind",
    "OperationRequest",
    "OperationResult",
    "Pipeline",
    "PipelineBuilder",
    "ResultStatus",
    "Stage",
    "StorageStage",
    # Storage
    "BlobStore",
    "InMemoryBlobStore",
]
