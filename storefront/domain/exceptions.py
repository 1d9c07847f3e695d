"""Domain exceptions.

All errors raised by the lifecycle service and its collaborators.
Storage and catalog adapters translate transport errors into these types
so callers never see driver-specific exceptions.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Raised when a request field is missing or malformed.

    User-correctable; raised before any external call is made.
    """

    error_code = "INVALID_INPUT"

    def __init__(self, field: str, reason: str) -> None:
        """Initialize invalid input error.

        Args:
            field: Name of the offending field.
            reason: Explanation of what is wrong with it.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for missing ids and missing bound assets."""

    error_code = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Raised when no product exists for an id."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class AssetNotFoundError(NotFoundError):
    """Raised when a product has no downloadable asset, or its bytes are gone."""

    error_code = "ASSET_NOT_FOUND"

    def __init__(self, product_id: str, key: str | None = None) -> None:
        message = (
            f"Asset {key} for product {product_id} does not exist"
            if key
            else f"Product {product_id} has no downloadable asset"
        )
        super().__init__(message, details={"product_id": product_id, "key": key})


# ============================================================================
# Object Store Errors
# ============================================================================


class StorageError(DomainError):
    """Base class for object store failures."""

    error_code = "STORAGE_ERROR"


class StorageWriteFailedError(StorageError):
    """Raised when the object store rejects or fails a write."""

    error_code = "STORAGE_WRITE_FAILED"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to write object {key}: {reason}",
            details={"key": key, "reason": reason},
        )


class StorageReadFailedError(StorageError):
    """Raised when the object store cannot be read or cannot mint a link."""

    error_code = "STORAGE_READ_FAILED"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to read object {key}: {reason}",
            details={"key": key, "reason": reason},
        )


class InvalidLinkError(StorageError):
    """Raised when a pre-authorized link is malformed or its signature is wrong."""

    error_code = "INVALID_LINK"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid link: {reason}", details={"reason": reason})


class LinkExpiredError(InvalidLinkError):
    """Raised when a pre-authorized link is used after its expiry."""

    error_code = "LINK_EXPIRED"

    def __init__(self, key: str) -> None:
        DomainError.__init__(
            self,
            f"Link for object {key} has expired",
            details={"key": key},
        )


# ============================================================================
# Catalog Store Errors
# ============================================================================


class PersistenceError(DomainError):
    """Base class for catalog store failures."""

    error_code = "PERSISTENCE_ERROR"


class PersistenceFailedError(PersistenceError):
    """Raised when a record could not be written."""

    error_code = "PERSISTENCE_FAILED"

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Failed to persist record: {reason}", details=details)


class PersistenceUnavailableError(PersistenceError):
    """Raised when the catalog store cannot be reached for reads."""

    error_code = "PERSISTENCE_UNAVAILABLE"

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Catalog store unavailable: {reason}",
            details={"reason": reason},
        )


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(DomainError):
    """Raised when a deployment-level setting is missing."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting: str) -> None:
        super().__init__(
            f"{setting} is not set",
            details={"setting": setting},
        )
