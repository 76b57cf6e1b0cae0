"""Blob store contract and built-in stores."""

from .base import BlobStore
from .memory import InMemoryBlobStore

__all__ = [
    "BlobStore",
    "InMemoryBlobStore",
]
