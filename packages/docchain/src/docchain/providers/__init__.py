"""Provider package - Entry point based wiring for docchain

Blob stores and pipeline stages are discovered via Python entry points,
allowing external packages to add their own:

    [project.entry-points."docchain.storage"]
    my_store = "my_package.store:MyBlobStore"

    [project.entry-points."docchain.stages"]
    audit = "my_package.stages:AuditStage"

Usage:
    from docchain.providers import create_collection
    monitors = create_collection(HttpMonitor, namespace="monitors")
"""

from . import plugin_loader
from .factories import (
    BlobStoreFactory,
    StageFactory,
    create_collection,
    create_pipeline,
)

__all__ = [
    'BlobStoreFactory',
    'StageFactory',
    'create_collection',
    'create_pipeline',
    # Plugin loader (for advanced usage)
    'plugin_loader',
]
