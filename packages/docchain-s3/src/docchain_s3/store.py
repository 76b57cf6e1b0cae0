"""Amazon S3 blob store"""

import asyncio
import logging
import random
import time

import boto3
from botocore.exceptions import ClientError

from docchain.config import Settings
from docchain.storage.base import BlobStore

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({'NoSuchKey', '404', 'NotFound'})
THROTTLING_CODES = frozenset({
    'SlowDown',
    'ThrottlingException',
    'TooManyRequestsException',
    'RequestLimitExceeded',
})


class S3BlobStore(BlobStore):
    """S3-backed blob store. The namespace is the bucket name.

    Buckets must be pre-provisioned (Terraform/CDK); the store never creates
    them. Throttling is retried with exponential backoff; every other
    ClientError propagates unchanged.

    Required IAM permissions:
    - s3:GetObject
    - s3:PutObject
    - s3:DeleteObject
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client = boto3.client(
            's3',
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        self.key_prefix = settings.s3_key_prefix
        self.content_type = settings.s3_content_type
        self.max_retries = settings.s3_max_retries
        self.base_delay = settings.s3_retry_base_delay
        logger.info(
            f"S3 blob store initialized (region={settings.aws_region}, "
            f"endpoint={settings.s3_endpoint_url or 'default'})"
        )

    def _object_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _with_retry(self, operation, **kwargs):
        """Execute an S3 operation with exponential backoff on throttling

        Raises:
            ClientError: If the operation fails with a non-throttling error or
                retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                return operation(**kwargs)
            except ClientError as e:
                error_code = e.response['Error']['Code']
                if error_code not in THROTTLING_CODES or attempt == self.max_retries:
                    raise

                delay = self.base_delay * (2 ** attempt)
                sleep_time = delay + random.uniform(0, delay * 0.1)
                logger.warning(
                    f"S3 throttled ({error_code}), retrying in {sleep_time:.2f}s "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                time.sleep(sleep_time)

    def _read(self, namespace: str, key: str) -> bytes | None:
        try:
            response = self._with_retry(
                self.client.get_object,
                Bucket=namespace,
                Key=self._object_key(key),
            )
        except ClientError as e:
            if e.response['Error']['Code'] in NOT_FOUND_CODES:
                return None
            logger.error(f"Error reading s3://{namespace}/{self._object_key(key)}: {e}")
            raise
        return response['Body'].read()

    def _write(self, namespace: str, key: str, data: bytes) -> None:
        self._with_retry(
            self.client.put_object,
            Bucket=namespace,
            Key=self._object_key(key),
            Body=data,
            ContentType=self.content_type,
        )

    def _delete(self, namespace: str, key: str) -> bool:
        # S3 reports success whether or not the object existed
        self._with_retry(
            self.client.delete_object,
            Bucket=namespace,
            Key=self._object_key(key),
        )
        return True

    async def read_bytes(self, namespace: str, key: str) -> bytes | None:
        return await asyncio.to_thread(self._read, namespace, key)

    async def write_bytes(self, namespace: str, key: str, data: bytes) -> None:
        await asyncio.to_thread(self._write, namespace, key, data)
        logger.debug(f"Wrote {len(data)} bytes to s3://{namespace}/{self._object_key(key)}")

    async def delete_by_key(self, namespace: str, key: str) -> bool:
        return await asyncio.to_thread(self._delete, namespace, key)
