"""docchain-s3: Amazon S3 blob store for docchain

Registered under the ``docchain.storage`` entry point group as ``s3``.
"""

from .store import S3BlobStore

__version__ = "0.1.0"

__all__ = ["S3BlobStore"]
