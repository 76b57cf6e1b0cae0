"""Contract test base classes for docchain blob stores.

These abstract test classes define the behavioral contract that every
BlobStore implementation must satisfy. Plugin packages subclass them and
implement the ``store`` fixture.

Usage in plugin package:
    # packages/docchain-s3/tests/test_contract.py
    from docchain.testing import BlobStoreContractTest

    class TestS3Contract(BlobStoreContractTest):
        @pytest.fixture
        def store(self):
            return S3BlobStore(test_settings)
"""

from .blob_store import BlobStoreContractTest

__all__ = [
    'BlobStoreContractTest',
]
