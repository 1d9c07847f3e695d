"""Object storage module.

Provides the object store gateway interface and its S3 and in-memory
implementations.
"""

from storefront.storage.gateway import ObjectStore
from storefront.storage.memory import InMemoryObjectStore
from storefront.storage.s3 import S3ObjectStore

__all__ = [
    "InMemoryObjectStore",
    "ObjectStore",
    "S3ObjectStore",
]
