"""Entity storage for products and variations.

Saving an entity persists it immediately: a generation run that fails
half-way leaves the entities it already saved in place.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commerce_generate.catalog.models import Product, ProductVariation

EntityT = TypeVar("EntityT", Product, ProductVariation)


class EntityRepository(Generic[EntityT]):
    """Storage operations for one entity type.

    Example usage:
        async with async_session_factory() as session:
            products = ProductRepository(session)
            product = products.create(type="default", langcode="en", title="abc")
            await products.save(product)
    """

    model: type[EntityT]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    def create(self, **values: Any) -> EntityT:
        """Build an unsaved entity.

        Args:
            values: Attribute values.

        Returns:
            New entity without an id.
        """
        values.setdefault("field_values", {})
        return self.model(**values)

    async def save(self, entity: EntityT) -> EntityT:
        """Persist an entity.

        Args:
            entity: Entity to save.

        Returns:
            Saved entity carrying its assigned id.
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.commit()
        return entity

    async def query_ids(self) -> list[int]:
        """Get ids of all stored entities.

        Returns:
            List of ids in ascending order.
        """
        result = await self.session.execute(select(self.model.id).order_by(self.model.id))
        return list(result.scalars().all())

    async def load_multiple(self, ids: Iterable[int]) -> Sequence[EntityT]:
        """Load entities by id.

        Args:
            ids: Entity ids.

        Returns:
            Sequence of found entities.
        """
        ids = list(ids)
        if not ids:
            return []
        query = (
            select(self.model)
            .where(self.model.id.in_(ids))
            .options(*self.load_options())
            .order_by(self.model.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, entities: Iterable[EntityT]) -> int:
        """Delete entities.

        Args:
            entities: Entities to delete.

        Returns:
            Number of deleted entities.
        """
        deleted = 0
        for entity in entities:
            await self.session.delete(entity)
            deleted += 1

        await self.session.flush()
        await self.session.commit()
        return deleted

    async def count(self) -> int:
        """Count stored entities.

        Returns:
            Number of entities.
        """
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar_one()

    def load_options(self) -> list[Any]:
        """Loader options applied by load_multiple."""
        return []


class ProductRepository(EntityRepository[Product]):
    """Storage for products."""

    model = Product

    def load_options(self) -> list[Any]:
        return [selectinload(Product.variations)]

    async def delete(
        self,
        entities: Iterable[Product],
        variations: Iterable[ProductVariation] = (),
    ) -> int:
        """Delete products, optionally together with variations.

        Variations passed in are deleted in the same flush as their
        products; any other variation keeps its row with a NULL product.

        Args:
            entities: Products to delete.
            variations: Variations to delete alongside.

        Returns:
            Number of deleted products.
        """
        for variation in variations:
            await self.session.delete(variation)
        return await super().delete(entities)


class VariationRepository(EntityRepository[ProductVariation]):
    """Storage for product variations."""

    model = ProductVariation

    async def find_by_products(self, product_ids: Iterable[int]) -> Sequence[ProductVariation]:
        """Find variations referenced by the given products.

        Args:
            product_ids: Product ids.

        Returns:
            Sequence of variations.
        """
        product_ids = list(product_ids)
        if not product_ids:
            return []
        query = (
            select(ProductVariation)
            .where(ProductVariation.product_id.in_(product_ids))
            .order_by(ProductVariation.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()
