"""Built-in pipeline stages."""

from .not_found import NotFoundSuppressionStage
from .serialization import JsonSerializationStage
from .storage import StorageStage

__all__ = [
    "JsonSerializationStage",
    "NotFoundSuppressionStage",
    "StorageStage",
]
