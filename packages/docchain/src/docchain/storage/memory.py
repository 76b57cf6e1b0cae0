"""In-memory blob store - for tests and single-process use"""

import logging
import threading
from collections import defaultdict

from ..config import Settings
from .base import BlobStore

logger = logging.getLogger(__name__)


class InMemoryBlobStore(BlobStore):
    """Dict-backed BlobStore. Contents live for the lifetime of the instance."""

    def __init__(self, settings: Settings | None = None):
        self._namespaces: dict[str, dict[str, bytes]] = defaultdict(dict)
        self._lock = threading.Lock()
        logger.debug("In-memory blob store initialized")

    async def read_bytes(self, namespace: str, key: str) -> bytes | None:
        with self._lock:
            return self._namespaces.get(namespace, {}).get(key)

    async def write_bytes(self, namespace: str, key: str, data: bytes) -> None:
        with self._lock:
            self._namespaces[namespace][key] = bytes(data)

    async def delete_by_key(self, namespace: str, key: str) -> bool:
        with self._lock:
            return self._namespaces.get(namespace, {}).pop(key, None) is not None

    def keys(self, namespace: str) -> list[str]:
        """List stored keys in a namespace (sorted)."""
        with self._lock:
            return sorted(self._namespaces.get(namespace, {}))
