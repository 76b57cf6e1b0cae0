"""Provider factories - Factory pattern with entry point discovery

Blob stores and pipeline stages are both resolved by name through the
plugin_loader, so built-in and external implementations are wired the same way.
"""

import functools
import logging
from typing import Any

from ..collection import DocumentCollection
from ..config import Settings
from ..config import settings as default_settings
from ..pipeline.base import Stage
from ..pipeline.chain import Pipeline, PipelineBuilder, StageFactory as StageFactoryCallable
from ..storage.base import BlobStore
from . import plugin_loader

logger = logging.getLogger(__name__)


class BlobStoreFactory:
    """Factory for creating blob stores

    Providers are discovered via entry points in the 'docchain.storage' group.

    Available providers (when dependencies installed):
        - memory: In-process dict store
        - s3: Amazon S3 (docchain-s3)
    """

    @classmethod
    def create(cls, settings: Settings) -> BlobStore:
        """Create blob store based on settings

        Args:
            settings: Application settings with storage_provider configured

        Returns:
            BlobStore instance

        Raises:
            ValueError: If provider not found or dependencies missing
        """
        provider_name = settings.storage_provider
        provider_class = plugin_loader.get_provider_class('storage', provider_name)

        if not provider_class:
            available = ', '.join(cls.get_available_providers())
            raise ValueError(
                f"Unknown storage provider: {provider_name}. "
                f"Available: {available or 'none (check dependencies)'}"
            )

        logger.info(f"Creating storage provider: {provider_name}")
        return provider_class(settings)

    @classmethod
    def get_available_providers(cls) -> list[str]:
        """Get list of available storage providers"""
        return plugin_loader.get_available_providers('storage')

    @classmethod
    def register(cls, name: str, provider_class: type[BlobStore]) -> None:
        """Manually register a provider (for testing)"""
        plugin_loader.register_provider('storage', name, provider_class)


class StageFactory:
    """Factory for resolving named pipeline stages

    Stages are discovered via entry points in the 'docchain.stages' group.

    Built-in stages:
        - not_found: NotFoundSuppressionStage
        - json: JsonSerializationStage
        - storage: StorageStage (terminal)
    """

    @classmethod
    def factory_for(cls, name: str, settings: Settings, store: BlobStore) -> StageFactoryCallable:
        """Return a zero-argument factory building the named stage

        Raises:
            ValueError: If no stage is registered under ``name``
        """
        stage_class = plugin_loader.get_provider_class('stages', name)

        if not stage_class:
            available = ', '.join(cls.get_available_stages())
            raise ValueError(
                f"Unknown pipeline stage: {name}. "
                f"Available: {available or 'none (check installation)'}"
            )

        return functools.partial(stage_class.from_settings, settings, store)

    @classmethod
    def get_available_stages(cls) -> list[str]:
        """Get list of available stage names"""
        return plugin_loader.get_available_providers('stages')

    @classmethod
    def register(cls, name: str, stage_class: type[Stage]) -> None:
        """Manually register a stage (for testing)"""
        plugin_loader.register_provider('stages', name, stage_class)


def create_pipeline(settings: Settings | None = None, store: BlobStore | None = None) -> Pipeline:
    """Build the pipeline described by ``settings.pipeline_stages``

    Args:
        settings: Settings to use (defaults to the global settings)
        store: Blob store for the storage stage (defaults to the configured provider)
    """
    settings = settings or default_settings
    settings.validate_storage_config()
    store = store or BlobStoreFactory.create(settings)

    builder = PipelineBuilder()
    for name in settings.pipeline_stages:
        builder.register(StageFactory.factory_for(name, settings, store))
    return builder.build()


def create_collection(
    value_type: Any = Any,
    namespace: str | None = None,
    settings: Settings | None = None,
    pipeline: Pipeline | None = None,
) -> DocumentCollection:
    """Create a DocumentCollection bound to the configured pipeline

    Args:
        value_type: Document type the collection reads and writes
        namespace: Storage namespace (defaults to settings.default_namespace)
        settings: Settings to use (defaults to the global settings)
        pipeline: Pre-built pipeline to share (built from settings if omitted)
    """
    settings = settings or default_settings
    pipeline = pipeline or create_pipeline(settings)
    return DocumentCollection(namespace or settings.default_namespace, pipeline, value_type)
