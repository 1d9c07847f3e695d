"""Tests for the S3 object store gateway."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from storefront.domain.exceptions import StorageReadFailedError, StorageWriteFailedError
from storefront.storage.s3 import S3ObjectStore


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def client() -> MagicMock:
    mock_client = MagicMock()
    mock_client.generate_presigned_url.return_value = "https://bucket.s3.amazonaws.com/key?X-Amz-Signature=abc"
    return mock_client


@pytest.fixture
def store(client) -> S3ObjectStore:
    return S3ObjectStore("product-images", client=client)


class TestPutObject:
    """Tests for S3ObjectStore.put_object."""

    @pytest.mark.asyncio
    async def test_conditional_write(self, store, client) -> None:
        """Writes refuse to overwrite and carry the content type."""
        await store.put_object("img_1", b"data", "image/png")

        client.put_object.assert_called_once_with(
            Bucket="product-images",
            Key="img_1",
            Body=b"data",
            IfNoneMatch="*",
            ContentType="image/png",
        )

    @pytest.mark.asyncio
    async def test_without_content_type(self, store, client) -> None:
        await store.put_object("img_1", b"data")
        assert "ContentType" not in client.put_object.call_args.kwargs

    @pytest.mark.asyncio
    async def test_client_error(self, store, client) -> None:
        """Rejected writes surface as StorageWriteFailedError."""
        client.put_object.side_effect = client_error("PreconditionFailed", "PutObject")

        with pytest.raises(StorageWriteFailedError) as exc_info:
            await store.put_object("img_1", b"data")
        assert exc_info.value.details["key"] == "img_1"
        assert client.put_object.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error(self, store, client) -> None:
        """Connection failures surface as StorageWriteFailedError."""
        client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")

        with pytest.raises(StorageWriteFailedError):
            await store.put_object("img_1", b"data")


class TestObjectExists:
    """Tests for S3ObjectStore.object_exists."""

    @pytest.mark.asyncio
    async def test_exists(self, store, client) -> None:
        assert await store.object_exists("img_1")
        client.head_object.assert_called_once_with(Bucket="product-images", Key="img_1")

    @pytest.mark.asyncio
    async def test_missing(self, store, client) -> None:
        client.head_object.side_effect = client_error("404", "HeadObject")
        assert not await store.object_exists("img_1")

    @pytest.mark.asyncio
    async def test_other_error(self, store, client) -> None:
        """Errors other than not-found are not reported as a missing object."""
        client.head_object.side_effect = client_error("403", "HeadObject")
        with pytest.raises(StorageReadFailedError):
            await store.object_exists("img_1")


class TestLinks:
    """Tests for presigned links."""

    @pytest.mark.asyncio
    async def test_upload_link(self, store, client) -> None:
        link = await store.create_upload_link("asset_1", 900)

        client.generate_presigned_url.assert_called_once_with(
            ClientMethod="put_object",
            Params={"Bucket": "product-images", "Key": "asset_1"},
            ExpiresIn=900,
        )
        assert link.key == "asset_1"
        assert link.url.startswith("https://")

    @pytest.mark.asyncio
    async def test_download_link(self, store, client) -> None:
        link = await store.create_download_link("asset_1", 300)

        client.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={"Bucket": "product-images", "Key": "asset_1"},
            ExpiresIn=300,
        )
        assert link.key == "asset_1"

    @pytest.mark.asyncio
    async def test_signing_failure(self, store, client) -> None:
        client.generate_presigned_url.side_effect = client_error("InvalidRequest", "GetObject")
        with pytest.raises(StorageReadFailedError):
            await store.create_download_link("asset_1", 300)
