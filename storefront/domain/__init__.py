"""Domain layer module.

Contains the catalog entities, link value objects and the error
taxonomy shared by the storage, catalog and API layers.
"""

from storefront.domain.entities import (
    DownloadLink,
    Product,
    SubscriptionEntry,
    UploadLink,
)
from storefront.domain.exceptions import (
    AssetNotFoundError,
    ConfigurationError,
    DomainError,
    InvalidInputError,
    InvalidLinkError,
    LinkExpiredError,
    NotFoundError,
    PersistenceError,
    PersistenceFailedError,
    PersistenceUnavailableError,
    ProductNotFoundError,
    StorageError,
    StorageReadFailedError,
    StorageWriteFailedError,
)

__all__ = [
    # Entities
    "DownloadLink",
    "Product",
    "SubscriptionEntry",
    "UploadLink",
    # Exceptions
    "AssetNotFoundError",
    "ConfigurationError",
    "DomainError",
    "InvalidInputError",
    "InvalidLinkError",
    "LinkExpiredError",
    "NotFoundError",
    "PersistenceError",
    "PersistenceFailedError",
    "PersistenceUnavailableError",
    "ProductNotFoundError",
    "StorageError",
    "StorageReadFailedError",
    "StorageWriteFailedError",
]
