"""Domain entities and value objects for the storefront catalog.

Products are created once, in full, and never mutated afterwards, so
they are modelled as frozen dataclasses just like the link values.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Product:
    """A catalog product.

    Attributes:
        id: Opaque identifier, assigned at creation.
        name: Display name.
        description: Display description.
        price: Positive price in the storefront currency.
        image_key: Object key of the cover image in the image store.
        asset_keys: Object keys of purchasable downloads in the asset store.
            The first key is the primary downloadable asset.
        created_at: Creation timestamp.
    """

    id: str
    name: str
    description: str
    price: Decimal
    image_key: str
    asset_keys: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utcnow)

    REQUIRED_FIELDS = ("id", "name", "description", "price", "image_key")

    @property
    def primary_asset_key(self) -> str | None:
        """Get the key of the main downloadable asset, if any."""
        return self.asset_keys[0] if self.asset_keys else None

    def missing_fields(self) -> list[str]:
        """List required fields that are empty.

        Returns:
            Names of required fields with no value.
        """
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]


@dataclass(frozen=True)
class SubscriptionEntry:
    """An email address recorded for the newsletter."""

    email: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class UploadLink:
    """Pre-authorized upload link for a freshly minted object key."""

    key: str
    url: str
    expires_at: datetime


@dataclass(frozen=True)
class DownloadLink:
    """Pre-authorized, time-limited download link for an existing object."""

    key: str
    url: str
    expires_at: datetime
