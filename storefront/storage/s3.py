"""S3-backed object store gateway.

boto3 is synchronous, so network calls run in a worker thread and the
request handler awaits them before moving on. Presigned URLs are signed
locally and need no round trip.
"""

import asyncio
from typing import Any

import boto3
import structlog
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from storefront.domain.entities import DownloadLink, UploadLink
from storefront.domain.exceptions import StorageReadFailedError, StorageWriteFailedError
from storefront.storage.gateway import ObjectStore, expiry_from_now

logger = structlog.get_logger()

# Status codes S3 uses for a missing object on HEAD
_MISSING_STATUS = {"404", "NoSuchKey", "NotFound"}


class S3ObjectStore(ObjectStore):
    """Object store backed by one S3 (or S3-compatible) bucket.

    Attributes:
        bucket: Bucket name.
    """

    def __init__(
        self,
        bucket: str,
        client: Any | None = None,
        endpoint_url: str | None = None,
        region_name: str | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            bucket: Bucket holding the objects.
            client: Pre-built boto3 S3 client (tests inject a stub here).
            endpoint_url: Optional endpoint for S3-compatible stores.
            region_name: Optional AWS region.
        """
        self.bucket = bucket
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
            # A single attempt: retries are the caller's policy
            config=BotoConfig(
                signature_version="s3v4",
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        )

    async def put_object(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            # Write-once: S3 rejects the put if the key already exists
            "IfNoneMatch": "*",
        }
        if content_type:
            params["ContentType"] = content_type

        try:
            await asyncio.to_thread(self._client.put_object, **params)
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Object write failed",
                bucket=self.bucket,
                key=key,
                error=str(e),
            )
            raise StorageWriteFailedError(key, str(e)) from e

        logger.info("Object written", bucket=self.bucket, key=key, size=len(data))

    async def object_exists(self, key: str) -> bool:
        try:
            await asyncio.to_thread(self._client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_STATUS:
                return False
            logger.error("Object lookup failed", bucket=self.bucket, key=key, error=str(e))
            raise StorageReadFailedError(key, str(e)) from e
        except BotoCoreError as e:
            logger.error("Object lookup failed", bucket=self.bucket, key=key, error=str(e))
            raise StorageReadFailedError(key, str(e)) from e
        return True

    async def create_upload_link(self, key: str, expires_in: int) -> UploadLink:
        try:
            url = self._client.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Upload link signing failed", bucket=self.bucket, key=key, error=str(e))
            raise StorageWriteFailedError(key, str(e)) from e
        return UploadLink(key=key, url=url, expires_at=expiry_from_now(expires_in))

    async def create_download_link(self, key: str, expires_in: int) -> DownloadLink:
        try:
            url = self._client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Download link signing failed", bucket=self.bucket, key=key, error=str(e))
            raise StorageReadFailedError(key, str(e)) from e
        return DownloadLink(key=key, url=url, expires_at=expiry_from_now(expires_in))
