"""SQLAlchemy models for the commerce catalog.

Defines Product and ProductVariation tables. Values of declared fields
(body, tags, images, ...) are stored per entity in a JSON map keyed by
field name.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce_generate.infrastructure.database import Base

DEFAULT_BUNDLE = "default"


@dataclass(frozen=True)
class Price:
    """Price of a variation.

    Attributes:
        amount: Whole amount in the currency's major unit.
        currency_code: ISO 4217 currency code.
    """

    amount: int
    currency_code: str


class FieldValuesMixin:
    """Accessors for the JSON map of declared field values."""

    def get_field_values(self, field_name: str) -> list[Any]:
        """Get the values stored for a declared field.

        Args:
            field_name: Field name.

        Returns:
            List of values (empty if the field was never populated).
        """
        return list((self.field_values or {}).get(field_name, []))

    def set_field_values(self, field_name: str, values: list[Any]) -> None:
        """Replace the values of a declared field.

        A new dict is assigned so SQLAlchemy sees the change.

        Args:
            field_name: Field name.
            values: New values.
        """
        self.field_values = {**(self.field_values or {}), field_name: list(values)}


class Product(FieldValuesMixin, Base):
    """Commerce product.

    Attributes:
        id: Identifier assigned by storage on save.
        type: Product bundle.
        langcode: Language code chosen when the product was created.
        title: Product title.
        generated: Whether the record was created by the generator.
        field_values: Values of declared fields by field name.
        created_at: Creation timestamp.
        variations: Variations referenced by this product, in creation order.
    """

    __tablename__ = "commerce_product"
    __table_args__ = {"sqlite_autoincrement": True}

    entity_type_id: ClassVar[str] = "commerce_product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_BUNDLE)
    langcode: Mapped[str] = mapped_column(String(12), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    field_values: Mapped[dict[str, list[Any]]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Deleting a product detaches its variations (product_id = NULL)
    variations: Mapped[list["ProductVariation"]] = relationship(
        "ProductVariation",
        back_populates="product",
        order_by="ProductVariation.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, langcode={self.langcode}, title={self.title})>"

    @property
    def bundle(self) -> str:
        """Bundle of the product (its type)."""
        return self.type

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "type": self.type,
            "langcode": self.langcode,
            "title": self.title,
            "generated": self.generated,
            "fields": dict(self.field_values or {}),
            "variations": [v.to_dict() for v in self.variations],
        }


class ProductVariation(FieldValuesMixin, Base):
    """Priced, SKU-bearing variation of a product.

    Attributes:
        id: Identifier assigned by storage on save.
        type: Variation bundle.
        langcode: Language code chosen when the variation was created.
        sku: Stock Keeping Unit.
        title: Variation title (same random word as the SKU).
        price_amount: Price amount.
        price_currency_code: Price currency.
        generated: Whether the record was created by the generator.
        field_values: Values of declared fields by field name.
        product_id: Owning product, NULL once the product is deleted.
    """

    __tablename__ = "commerce_product_variation"
    __table_args__ = {"sqlite_autoincrement": True}

    entity_type_id: ClassVar[str] = "commerce_product_variation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_BUNDLE)
    langcode: Mapped[str] = mapped_column(String(12), nullable=False)
    sku: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    price_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    price_currency_code: Mapped[str] = mapped_column(String(3), nullable=False)
    generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    field_values: Mapped[dict[str, list[Any]]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    product_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("commerce_product.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    product: Mapped[Product | None] = relationship(
        "Product", back_populates="variations"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductVariation(id={self.id}, sku={self.sku})>"

    @property
    def bundle(self) -> str:
        """Bundle of the variation (its type)."""
        return self.type

    @property
    def price(self) -> Price:
        """Get the variation price.

        Returns:
            Price value.
        """
        return Price(amount=self.price_amount, currency_code=self.price_currency_code)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "type": self.type,
            "langcode": self.langcode,
            "sku": self.sku,
            "title": self.title,
            "price": {
                "amount": self.price_amount,
                "currency_code": self.price_currency_code,
            },
            "generated": self.generated,
            "fields": dict(self.field_values or {}),
        }
