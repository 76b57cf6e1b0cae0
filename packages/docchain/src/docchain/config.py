"""Configuration management for docchain - pipeline and storage provider settings"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings for document pipelines.

    Provider Selection:
        Storage provider names map to entry points in the ``docchain.storage``
        group. Core provides:
        - memory: in-process dict store

    Install additional providers:
        pip install docchain-s3  # Adds the s3 blob store

    Pipeline Stages:
        ``pipeline_stages`` lists stage names (``docchain.stages`` entry points)
        in execution order. The storage stage must come last.
    """

    # ===== Storage Provider =====
    storage_provider: str = Field(
        default="memory",
        description="Blob store provider name (discovered via docchain.storage entry points)"
    )
    default_namespace: str = Field(
        default="documents",
        min_length=1,
        description="Namespace collections bind to when none is given"
    )
    storage_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for each storage round trip (None = no timeout)"
    )

    # ===== Pipeline Configuration =====
    pipeline_stages: list[str] = Field(
        default_factory=lambda: ["not_found", "json", "storage"],
        description="Stage names in execution order (discovered via docchain.stages entry points)"
    )

    # ===== AWS / S3 Configuration =====
    aws_region: str = "us-east-1"
    s3_endpoint_url: str | None = None  # For MinIO, LocalStack, etc.
    s3_key_prefix: str = ""  # Prepended to every document key
    s3_content_type: str = "application/json"
    s3_max_retries: int = Field(default=5, ge=0, description="Retries on S3 throttling")
    s3_retry_base_delay: float = 0.5  # Doubles each attempt

    # ===== Application Settings =====
    log_level: str = "info"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def validate_storage_config(self) -> None:
        """Validate storage-specific configuration for the selected provider

        Raises:
            ValueError: If required settings are missing for the selected provider
        """
        errors = []

        if not self.pipeline_stages:
            errors.append("PIPELINE_STAGES must name at least the storage stage")

        if self.storage_provider == "s3":
            if not self.aws_region and not self.s3_endpoint_url:
                errors.append(
                    "AWS_REGION or S3_ENDPOINT_URL is required when storage_provider='s3'"
                )

        if errors:
            raise ValueError(
                "Storage configuration validation failed:\n  - " + "\n  - ".join(errors)
            )


def configure_logging(settings: "Settings") -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Global settings instance
settings = Settings()
