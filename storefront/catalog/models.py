"""SQLAlchemy models for the catalog store.

Defines the products and subscriptions tables.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.domain.entities import Product, SubscriptionEntry
from storefront.infrastructure.database import Base


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to timestamps read back without a zone (SQLite)."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class ProductModel(Base):
    """Product row.

    Attributes:
        seq: Surrogate key giving rows a stable insertion order.
        id: Opaque product identifier.
        name: Product name.
        description: Product description.
        price: Positive price, two decimal places.
        image_key: Cover image object key (unique).
        asset_keys: Downloadable asset object keys, primary first.
        created_at: Creation timestamp.
    """

    __tablename__ = "products"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    image_key: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    asset_keys: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name[:30]})>"

    @classmethod
    def from_domain(cls, product: Product) -> "ProductModel":
        """Build a row from a domain product."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_key=product.image_key,
            asset_keys=list(product.asset_keys),
            created_at=product.created_at,
        )

    def to_domain(self) -> Product:
        """Convert the row to a domain product."""
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            price=Decimal(self.price),
            image_key=self.image_key,
            asset_keys=tuple(self.asset_keys or ()),
            created_at=_as_utc(self.created_at),
        )


class SubscriptionModel(Base):
    """Newsletter subscription row (append-only)."""

    __tablename__ = "subscriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def from_domain(cls, entry: SubscriptionEntry) -> "SubscriptionModel":
        return cls(email=entry.email, created_at=entry.created_at)

    def to_domain(self) -> SubscriptionEntry:
        return SubscriptionEntry(email=self.email, created_at=_as_utc(self.created_at))
