"""Object store gateway interface.

Hides the physical blob store behind four operations. Implementations
must report every failure as a StorageError subclass and must never
retry silently or report a failed write as a success.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from storefront.domain.entities import DownloadLink, UploadLink


class ObjectStore(ABC):
    """Write-once, key-addressed binary store.

    Example usage:
        store = S3ObjectStore(bucket="product-images")
        await store.put_object("img_0a1b2c3d4e5f", data, "image/png")
        link = await store.create_download_link("img_0a1b2c3d4e5f", 300)
    """

    @abstractmethod
    async def put_object(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        """Durably write bytes under a new key.

        Args:
            key: Object key. Must not already exist.
            data: Object bytes.
            content_type: Optional MIME type stored with the object.

        Raises:
            StorageWriteFailedError: If the write did not complete, or the
                key already exists.
        """

    @abstractmethod
    async def object_exists(self, key: str) -> bool:
        """Check whether an object exists.

        Raises:
            StorageReadFailedError: If the store could not be queried.
        """

    @abstractmethod
    async def create_upload_link(self, key: str, expires_in: int) -> UploadLink:
        """Create a pre-authorized upload link for a key.

        Args:
            key: Object key the holder may upload to.
            expires_in: Link lifetime in seconds.

        Raises:
            StorageWriteFailedError: If the link could not be minted.
        """

    @abstractmethod
    async def create_download_link(self, key: str, expires_in: int) -> DownloadLink:
        """Create a pre-authorized download link for a key.

        Args:
            key: Object key the holder may read.
            expires_in: Link lifetime in seconds.

        Raises:
            StorageReadFailedError: If the link could not be minted.
        """


def expiry_from_now(expires_in: int, now: datetime | None = None) -> datetime:
    """Compute the absolute expiry of a link."""
    return (now or datetime.now(timezone.utc)) + timedelta(seconds=expires_in)
