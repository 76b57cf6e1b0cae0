"""Plugin loader for docchain - Entry point based discovery

Discovers blob stores and pipeline stages from entry points. Built-in
providers (from the docchain package) and external plugins (e.g. docchain-s3)
are discovered the same way.

Entry Point Groups:
    - docchain.storage: BlobStore implementations
    - docchain.stages: Stage implementations

Usage:
    # Get all providers of a type
    stores = get_providers('storage')  # {'memory': InMemoryBlobStore, 's3': S3BlobStore}

    # Get a specific provider class
    store_class = get_provider_class('storage', 's3')
"""

import importlib.metadata
import logging
from typing import Union

from ..pipeline.base import Stage
from ..storage.base import BlobStore

logger = logging.getLogger(__name__)

ProviderType = Union[type[BlobStore], type[Stage]]

PROVIDER_GROUPS = {
    'storage': 'docchain.storage',
    'stages': 'docchain.stages',
}

# Cache for loaded providers: {provider_type: {name: class}}
_provider_cache: dict[str, dict[str, ProviderType]] = {}


def discover_providers(group: str) -> dict[str, ProviderType]:
    """Discover providers for a specific entry point group

    Args:
        group: Entry point group name (e.g., 'docchain.storage')

    Returns:
        Dictionary mapping provider names to provider classes

    Note:
        Providers with missing dependencies are skipped. Not every
        installation carries every optional backend.
    """
    providers = {}

    for ep in importlib.metadata.entry_points(group=group):
        try:
            providers[ep.name] = ep.load()
            logger.debug(f"Discovered provider: {group}.{ep.name}")
        except ImportError as e:
            logger.debug(f"Skipping {group}.{ep.name}: missing dependency - {e}")

    return providers


def get_providers(provider_type: str) -> dict[str, ProviderType]:
    """Get all discovered providers for a type

    Args:
        provider_type: Provider type ('storage' or 'stages')

    Returns:
        Dictionary mapping provider names to provider classes
    """
    if provider_type not in _provider_cache:
        group = PROVIDER_GROUPS.get(provider_type)
        if group is None:
            raise ValueError(
                f"Unknown provider type: {provider_type}. "
                f"Known types: {', '.join(PROVIDER_GROUPS)}"
            )
        _provider_cache[provider_type] = discover_providers(group)

    return _provider_cache[provider_type]


def get_provider_class(provider_type: str, name: str) -> ProviderType | None:
    """Get a specific provider class, or None if not found"""
    return get_providers(provider_type).get(name)


def get_available_providers(provider_type: str) -> list[str]:
    """Get sorted list of available provider names for a type"""
    return sorted(get_providers(provider_type))


def reset() -> None:
    """Reset plugin loader cache

    For testing purposes only. Clears all cached providers
    so they will be rediscovered on next access.
    """
    _provider_cache.clear()
    logger.debug("Plugin loader cache reset")


def register_provider(provider_type: str, name: str, provider_class: ProviderType) -> None:
    """Manually register a provider

    For testing and runtime registration. Providers registered this way
    take precedence over entry point discovered providers.

    Example:
        >>> register_provider('stages', 'audit', AuditStage)
    """
    get_providers(provider_type)[name] = provider_class
    logger.debug(f"Manually registered provider: {provider_type}.{name}")
