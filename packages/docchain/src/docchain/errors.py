"""Error types raised by docchain pipelines and collections.

Backend failures (botocore ``ClientError``, ``asyncio.TimeoutError`` and the like)
are deliberately not part of this module: they propagate unchanged.
"""


class DocChainError(Exception):
    """Base class for all docchain errors."""


class DocumentNotFoundError(DocChainError):
    """Raised when a key is absent and nothing in the pipeline normalized it."""
    def __init__(self, namespace: str, key: str):
        self.namespace = namespace
        self.key = key
        super().__init__(f"Document not found: {namespace}/{key}")


class SerializationError(DocChainError):
    """Raised when a payload cannot be encoded or decoded."""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Serialization failed for '{key}': {reason}")


class InvalidArgumentError(DocChainError, ValueError):
    """Raised when a caller passes an absent or invalid argument."""
    def __init__(self, param_name: str, message: str | None = None):
        self.param_name = param_name
        super().__init__(message or f"Invalid value for parameter '{param_name}'")


class PipelineConfigurationError(DocChainError):
    """Raised when stages are wired into an invalid pipeline."""


class StageContractError(DocChainError):
    """Raised when a stage breaks the stage contract at runtime."""
    def __init__(self, stage_name: str, reason: str):
        self.stage_name = stage_name
        self.reason = reason
        super().__init__(f"Stage {stage_name} violated the contract: {reason}")
