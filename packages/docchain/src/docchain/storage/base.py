"""Blob store interface - the narrow key/value contract the storage stage needs"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base class for byte-level key/value stores

    A namespace is the store's unit of grouping (a bucket, a container, a
    table). Keys are opaque strings. Implementations must be safe to call
    concurrently; connection management belongs to the implementation.
    """

    @abstractmethod
    async def read_bytes(self, namespace: str, key: str) -> bytes | None:
        """
        Read the payload stored under a key

        Args:
            namespace: Storage namespace
            key: Document key

        Returns:
            The stored bytes, or None if the key does not exist
        """
        pass

    @abstractmethod
    async def write_bytes(self, namespace: str, key: str, data: bytes) -> None:
        """
        Write a payload under a key, replacing any existing value

        Args:
            namespace: Storage namespace
            key: Document key
            data: Payload to store
        """
        pass

    @abstractmethod
    async def delete_by_key(self, namespace: str, key: str) -> bool:
        """
        Delete the payload stored under a key

        Args:
            namespace: Storage namespace
            key: Document key

        Returns:
            False if nothing was stored under the key. Stores that cannot
            tell (e.g. S3) return True.
        """
        pass

    def get_name(self) -> str:
        """Get provider name"""
        return self.__class__.__name__
