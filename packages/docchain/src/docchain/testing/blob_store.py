"""Blob store contract tests."""

import uuid
from abc import ABC, abstractmethod

import pytest


class BlobStoreContractTest(ABC):
    """Base class for BlobStore contract tests.

    Subclasses provide the ``store`` fixture. Tests are async and run on the
    anyio plugin's asyncio backend.
    """

    pytestmark = pytest.mark.anyio

    @pytest.fixture
    def anyio_backend(self):
        return "asyncio"

    @pytest.fixture
    @abstractmethod
    def store(self):
        """Create the store instance under test."""
        pass

    @pytest.fixture
    def namespace(self) -> str:
        return "contract-ns"

    @pytest.fixture
    def test_key(self) -> str:
        return f"test-key-{uuid.uuid4().hex[:8]}"

    async def test_read_missing_returns_none(self, store, namespace, test_key):
        """read_bytes() must return None for a key never written."""
        assert await store.read_bytes(namespace, test_key) is None

    async def test_write_then_read_returns_bytes(self, store, namespace, test_key):
        """read_bytes() must return exactly what write_bytes() stored."""
        await store.write_bytes(namespace, test_key, b'{"url": "https://example.com"}')

        data = await store.read_bytes(namespace, test_key)

        assert isinstance(data, bytes)
        assert data == b'{"url": "https://example.com"}'

    async def test_write_overwrites(self, store, namespace, test_key):
        """write_bytes() must replace an existing value."""
        await store.write_bytes(namespace, test_key, b"first")
        await store.write_bytes(namespace, test_key, b"second")

        assert await store.read_bytes(namespace, test_key) == b"second"

    async def test_delete_removes_value(self, store, namespace, test_key):
        """delete_by_key() must remove a stored value and report it."""
        await store.write_bytes(namespace, test_key, b"data")

        deleted = await store.delete_by_key(namespace, test_key)

        assert deleted is True
        assert await store.read_bytes(namespace, test_key) is None

    async def test_delete_missing_does_not_raise(self, store, namespace, test_key):
        """delete_by_key() must not raise for a key never written."""
        result = await store.delete_by_key(namespace, test_key)

        assert isinstance(result, bool)

    async def test_namespaces_are_isolated(self, store, test_key):
        """The same key in two namespaces must hold independent values."""
        await store.write_bytes("ns-a", test_key, b"a")
        await store.write_bytes("ns-b", test_key, b"b")

        assert await store.read_bytes("ns-a", test_key) == b"a"
        assert await store.read_bytes("ns-b", test_key) == b"b"

    def test_get_name_returns_string(self, store):
        """get_name() must return a non-empty string."""
        name = store.get_name()

        assert isinstance(name, str)
        assert name
