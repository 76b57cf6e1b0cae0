"""Pytest fixtures and configuration for docchain tests"""

import os

import pytest

# Set up test environment variables before importing modules
os.environ.setdefault("STORAGE_PROVIDER", "memory")
os.environ.setdefault("AWS_REGION", "us-east-1")

from docchain.pipeline import (
    NotFoundSuppressionStage,
    PipelineBuilder,
    StorageStage,
)
from docchain.storage import InMemoryBlobStore


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only"""
    return "asyncio"


@pytest.fixture
def memory_store():
    """Fresh in-memory blob store"""
    return InMemoryBlobStore()


@pytest.fixture
def standard_pipeline(memory_store):
    """Suppression -> JSON -> storage, the usual production ordering"""
    return (
        PipelineBuilder()
        .register(NotFoundSuppressionStage)
        .use_json()
        .register(lambda: StorageStage(memory_store))
        .build()
    )


@pytest.fixture
def sample_document():
    """Sample structured document"""
    return {"url": "https://example.com", "tags": ["prod", "eu"], "interval": 60}
