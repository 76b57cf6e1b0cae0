"""Tests for S3BlobStore"""

import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from docchain import DocumentCollection, PipelineBuilder, NotFoundSuppressionStage, StorageStage
from docchain.config import Settings
from docchain.testing import BlobStoreContractTest


def make_client_error(code: str, message: str = "Error") -> ClientError:
    """Helper to create ClientError exceptions"""
    return ClientError(
        {"Error": {"Code": code, "Message": message}},
        "TestOperation"
    )


class FakeS3Client:
    """Dict-backed stand-in for the subset of the S3 client the store uses"""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.put_calls: list[dict] = []

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise make_client_error("NoSuchKey", "The specified key does not exist.")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}

    def put_object(self, Bucket, Key, Body, ContentType):
        self.put_calls.append({"Bucket": Bucket, "Key": Key, "ContentType": ContentType})
        self.objects[(Bucket, Key)] = bytes(Body)
        return {}

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)
        return {}


@pytest.fixture
def s3_settings():
    return Settings(
        storage_provider="s3",
        aws_region="us-east-1",
        s3_key_prefix="docs/",
        s3_retry_base_delay=0.0,
        s3_max_retries=3,
    )


@pytest.fixture
def fake_client():
    return FakeS3Client()


@pytest.fixture
def s3_store(s3_settings, fake_client):
    from docchain_s3.store import S3BlobStore

    with patch("boto3.client", return_value=fake_client):
        return S3BlobStore(s3_settings)


class TestS3Contract(BlobStoreContractTest):

    @pytest.fixture
    def store(self, s3_store):
        return s3_store


class TestS3BlobStore:

    pytestmark = pytest.mark.anyio

    @pytest.fixture
    def anyio_backend(self):
        return "asyncio"

    @pytest.fixture
    def mock_boto_client(self):
        """Create a mock boto3 client"""
        with patch("boto3.client") as mock_client:
            client_instance = MagicMock()
            mock_client.return_value = client_instance
            yield client_instance

    def test_init_uses_settings(self, s3_settings):
        from docchain_s3.store import S3BlobStore

        with patch("boto3.client") as mock_client:
            S3BlobStore(s3_settings.model_copy(update={"s3_endpoint_url": "http://localhost:9000"}))

        mock_client.assert_called_once_with(
            "s3", region_name="us-east-1", endpoint_url="http://localhost:9000"
        )

    async def test_write_applies_prefix_and_content_type(self, s3_store, fake_client):
        await s3_store.write_bytes("uptime", "m1", b"{}")

        assert fake_client.put_calls == [
            {"Bucket": "uptime", "Key": "docs/m1", "ContentType": "application/json"}
        ]

    async def test_read_maps_404_to_none(self, s3_settings, mock_boto_client):
        from docchain_s3.store import S3BlobStore

        mock_boto_client.get_object.side_effect = make_client_error("404")
        store = S3BlobStore(s3_settings)

        assert await store.read_bytes("uptime", "m1") is None

    async def test_read_propagates_access_denied(self, s3_settings, mock_boto_client):
        from docchain_s3.store import S3BlobStore

        mock_boto_client.get_object.side_effect = make_client_error("AccessDenied")
        store = S3BlobStore(s3_settings)

        with pytest.raises(ClientError) as exc_info:
            await store.read_bytes("uptime", "m1")

        assert exc_info.value.response["Error"]["Code"] == "AccessDenied"
        assert mock_boto_client.get_object.call_count == 1

    async def test_retries_throttling_then_succeeds(self, s3_settings, mock_boto_client):
        from docchain_s3.store import S3BlobStore

        mock_boto_client.put_object.side_effect = [
            make_client_error("SlowDown"),
            make_client_error("SlowDown"),
            {},
        ]
        store = S3BlobStore(s3_settings)

        with patch("docchain_s3.store.time.sleep") as mock_sleep:
            await store.write_bytes("uptime", "m1", b"{}")

        assert mock_boto_client.put_object.call_count == 3
        assert mock_sleep.call_count == 2

    async def test_gives_up_after_max_retries(self, s3_settings, mock_boto_client):
        from docchain_s3.store import S3BlobStore

        mock_boto_client.put_object.side_effect = make_client_error("SlowDown")
        store = S3BlobStore(s3_settings)

        with patch("docchain_s3.store.time.sleep"):
            with pytest.raises(ClientError):
                await store.write_bytes("uptime", "m1", b"{}")

        assert mock_boto_client.put_object.call_count == s3_settings.s3_max_retries + 1

    async def test_delete_always_reports_deleted(self, s3_store):
        assert await s3_store.delete_by_key("uptime", "never-written") is True


class TestS3Collection:
    """End-to-end through a pipeline backed by S3BlobStore"""

    pytestmark = pytest.mark.anyio

    @pytest.fixture
    def anyio_backend(self):
        return "asyncio"

    async def test_put_get_delete(self, s3_store, fake_client):
        pipeline = (
            PipelineBuilder()
            .register(NotFoundSuppressionStage)
            .use_json()
            .register(lambda: StorageStage(s3_store))
            .build()
        )
        monitors = DocumentCollection("uptime", pipeline)

        await monitors.put("m1", {"url": "https://example.com"})
        assert fake_client.objects[("uptime", "docs/m1")] == b'{"url":"https://example.com"}'
        assert await monitors.get("m1") == {"url": "https://example.com"}

        await monitors.delete("m1")
        await monitors.delete("m1")
        assert await monitors.get("m1") is None
