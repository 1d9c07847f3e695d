"""In-memory object store.

Keeps objects in a dict and issues HMAC-signed links that expire against
an injectable clock, so link lifetimes can be exercised deterministically.
Used for local development and as the storage double in tests.
"""

import hashlib
import hmac
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import parse_qs, quote, unquote, urlsplit

import structlog

from storefront.domain.entities import DownloadLink, UploadLink
from storefront.domain.exceptions import (
    InvalidLinkError,
    LinkExpiredError,
    StorageReadFailedError,
    StorageWriteFailedError,
)
from storefront.storage.gateway import ObjectStore, expiry_from_now

logger = structlog.get_logger()

UPLOAD = "put"
DOWNLOAD = "get"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoredObject:
    """Bytes stored under a key."""

    data: bytes
    content_type: str | None = None


class InMemoryObjectStore(ObjectStore):
    """Dict-backed object store with signed, expiring links.

    Example usage:
        store = InMemoryObjectStore("assets", signing_key="secret")
        link = await store.create_upload_link("asset_0a1b2c3d4e5f", 60)
        store.upload_with_link(link.url, b"...")
    """

    def __init__(
        self,
        bucket: str = "memory",
        signing_key: str = "memory-store",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.bucket = bucket
        self._signing_key = signing_key.encode("utf-8")
        self._clock = clock
        self._objects: dict[str, StoredObject] = {}

    # ------------------------------------------------------------------
    # Gateway operations
    # ------------------------------------------------------------------

    async def put_object(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        self._write(key, data, content_type)

    async def object_exists(self, key: str) -> bool:
        return key in self._objects

    async def create_upload_link(self, key: str, expires_in: int) -> UploadLink:
        expires_at = expiry_from_now(expires_in, self._clock())
        return UploadLink(key=key, url=self._sign(UPLOAD, key, expires_at), expires_at=expires_at)

    async def create_download_link(self, key: str, expires_in: int) -> DownloadLink:
        expires_at = expiry_from_now(expires_in, self._clock())
        return DownloadLink(key=key, url=self._sign(DOWNLOAD, key, expires_at), expires_at=expires_at)

    # ------------------------------------------------------------------
    # Link redemption (what an external client does with a link)
    # ------------------------------------------------------------------

    def upload_with_link(self, url: str, data: bytes, content_type: str | None = None) -> str:
        """Upload bytes through a pre-authorized upload link.

        Returns:
            The key the bytes were stored under.

        Raises:
            LinkExpiredError: If the link's window has elapsed.
            InvalidLinkError: If the link is tampered or not an upload link.
            StorageWriteFailedError: If the key was already written.
        """
        key = self._verify(url, UPLOAD)
        self._write(key, data, content_type)
        return key

    def download_with_link(self, url: str) -> bytes:
        """Read bytes through a pre-authorized download link.

        Raises:
            LinkExpiredError: If the link's window has elapsed.
            InvalidLinkError: If the link is tampered or not a download link.
            StorageReadFailedError: If the object does not exist.
        """
        key = self._verify(url, DOWNLOAD)
        stored = self._objects.get(key)
        if stored is None:
            raise StorageReadFailedError(key, "object does not exist")
        return stored.data

    def get_object(self, key: str) -> StoredObject | None:
        """Get a stored object directly (inspection helper)."""
        return self._objects.get(key)

    def keys(self) -> list[str]:
        """List stored keys in write order."""
        return list(self._objects)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write(self, key: str, data: bytes, content_type: str | None) -> None:
        if key in self._objects:
            raise StorageWriteFailedError(key, "object already exists")
        self._objects[key] = StoredObject(data=bytes(data), content_type=content_type)
        logger.debug("Object written", bucket=self.bucket, key=key, size=len(data))

    def _signature(self, operation: str, key: str, expires: int) -> str:
        message = f"{operation}\n{self.bucket}\n{key}\n{expires}".encode("utf-8")
        return hmac.new(self._signing_key, message, hashlib.sha256).hexdigest()

    def _sign(self, operation: str, key: str, expires_at: datetime) -> str:
        expires = int(expires_at.timestamp())
        signature = self._signature(operation, key, expires)
        return (
            f"memory://{self.bucket}/{quote(key)}"
            f"?op={operation}&expires={expires}&signature={signature}"
        )

    def _verify(self, url: str, operation: str) -> str:
        parts = urlsplit(url)
        if parts.scheme != "memory" or parts.netloc != self.bucket:
            raise InvalidLinkError("link was not issued by this store")

        key = unquote(parts.path.lstrip("/"))
        query = parse_qs(parts.query)
        try:
            op = query["op"][0]
            expires = int(query["expires"][0])
            signature = query["signature"][0]
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidLinkError("missing or malformed link parameters") from e

        if op != operation:
            raise InvalidLinkError(f"link does not permit '{operation}'")

        expected = self._signature(op, key, expires)
        if not hmac.compare_digest(expected, signature):
            raise InvalidLinkError("signature mismatch")

        if self._clock().timestamp() >= expires:
            raise LinkExpiredError(key)

        return key


# Global in-memory instances, one per bucket
_memory_stores: dict[str, InMemoryObjectStore] = {}


def get_memory_object_store(bucket: str, signing_key: str = "memory-store") -> InMemoryObjectStore:
    """Get the in-memory object store for a bucket."""
    if bucket not in _memory_stores:
        _memory_stores[bucket] = InMemoryObjectStore(bucket, signing_key=signing_key)
    return _memory_stores[bucket]


def reset_memory_object_stores() -> None:
    """Drop all in-memory object stores (for testing)."""
    _memory_stores.clear()
