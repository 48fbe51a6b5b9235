"""Commerce product generator.

Creates synthetic products and variations, populates their declared
fields and persists them one at a time. Optionally deletes every existing
product first. Runs are strictly sequential: a product is saved only
after all of its variations are saved, and the first storage error ends
the run.
"""

import random
from dataclasses import dataclass, field
from typing import Any

import structlog

from commerce_generate.catalog.fields import (
    FieldDefinition,
    FieldDefinitionProvider,
    FieldHandlerRegistry,
)
from commerce_generate.catalog.languages import LanguageManager
from commerce_generate.catalog.models import DEFAULT_BUNDLE, Product, ProductVariation
from commerce_generate.catalog.repository import ProductRepository, VariationRepository
from commerce_generate.catalog.samples import RandomData

logger = structlog.get_logger()

VARIATIONS_FIELD = "variations"

# Sample count range for fields with unlimited cardinality
UNLIMITED_SAMPLE_RANGE = (1, 3)


def format_plural(count: int, singular: str, plural: str) -> str:
    """Pick the singular or plural form of a message.

    Args:
        count: Item count.
        singular: Message used when count is 1.
        plural: Message used otherwise; "@count" is replaced by the count.

    Returns:
        Formatted message.
    """
    if count == 1:
        return singular
    return plural.replace("@count", str(count))


def parse_skip_fields(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated list of field names.

    Args:
        raw: Option value, e.g. "body,tags".

    Returns:
        Set of field names (empty for None or "").
    """
    if not raw:
        return frozenset()
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for a generation run.

    Attributes:
        count: Number of products to create.
        title_length: Maximum length of product title words.
        variation_count: Variations per product.
        variation_title_length: Maximum length of variation SKU words
            (falls back to title_length).
        price_min: Lowest variation price (inclusive).
        price_max: Highest variation price (inclusive).
        currency_code: Currency of variation prices.
        languages: Langcodes to pick from; empty uses the default language.
        kill: Delete all existing products before creating new ones.
        skip_fields: Field names that are never populated.
        cascade_variations: Also delete the variations of killed products.
            Variations already detached by an earlier kill are not touched.
        seed: Random seed for reproducible runs.
    """

    count: int = 50
    title_length: int = 10
    variation_count: int = 1
    variation_title_length: int | None = None
    price_min: int = 10
    price_max: int = 1000
    currency_code: str = "USD"
    languages: tuple[str, ...] = ()
    kill: bool = False
    skip_fields: frozenset[str] = frozenset()
    cascade_variations: bool = False
    seed: int | None = None

    @property
    def effective_variation_title_length(self) -> int:
        """Maximum variation SKU length actually used."""
        return self.variation_title_length or self.title_length


@dataclass
class GenerationReport:
    """Outcome of the latest generation run.

    Attributes:
        deleted: Products deleted by kill.
        product_ids: Ids of created products.
        variations_created: Number of created variations.
        messages: Operator messages in emission order.
    """

    deleted: int = 0
    product_ids: list[int] = field(default_factory=list)
    variations_created: int = 0
    messages: list[str] = field(default_factory=list)


# ============================================================================
# Commerce Generator
# ============================================================================


class CommerceGenerator:
    """Generates commerce products with variations.

    Example usage:
        generator = CommerceGenerator(
            ProductRepository(session),
            VariationRepository(session),
            FieldDefinitionProvider(),
            LanguageManager({"en": "English"}, "en"),
        )
        summary = await generator.run(GeneratorConfig(count=5))
    """

    def __init__(
        self,
        products: ProductRepository,
        variations: VariationRepository,
        fields: FieldDefinitionProvider,
        languages: LanguageManager,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize generator with its collaborators.

        Args:
            products: Product storage.
            variations: Variation storage.
            fields: Field definitions and sample values.
            languages: Language manager.
            rng: Random number generator.
        """
        self.products = products
        self.variations = variations
        self.fields = fields
        self.languages = languages
        self.rng = rng or random.Random()
        self.random = RandomData(self.rng)
        self.report = GenerationReport()

        self.field_handlers = FieldHandlerRegistry(default=self._populate_samples)
        self.field_handlers.register(
            VARIATIONS_FIELD,
            self._populate_variations,
            entity_type=Product.entity_type_id,
        )

    def _set_message(self, message: str, **context: Any) -> None:
        self.report.messages.append(message)
        logger.info(message, **context)

    async def run(self, config: GeneratorConfig) -> str:
        """Run a generation pass.

        Args:
            config: Generator configuration.

        Returns:
            Summary message.
        """
        self.report = GenerationReport()
        if config.seed is not None:
            self.rng.seed(config.seed)
            self.fields.seed(config.seed)

        logger.info(
            "Generating products",
            count=config.count,
            variation_count=config.variation_count,
            kill=config.kill,
        )

        if config.kill:
            await self.delete_all_products(cascade=config.cascade_variations)

        for _ in range(config.count):
            product = await self.create_product(config)
            self.report.product_ids.append(product.id)

        summary = format_plural(
            config.count,
            "1 product created.",
            "Finished creating @count products",
        )
        self._set_message(summary, products_created=config.count)
        return summary

    async def delete_all_products(self, cascade: bool = False) -> int:
        """Delete every stored product.

        Args:
            cascade: Also delete the variations still attached to the deleted
                products. Variations orphaned by an earlier kill are kept.

        Returns:
            Number of deleted products.
        """
        ids = await self.products.query_ids()
        if not ids:
            return 0

        products = await self.products.load_multiple(ids)
        variations = await self.variations.find_by_products(ids) if cascade else []
        deleted = await self.products.delete(products, variations=variations)

        self.report.deleted = deleted
        self._set_message(
            format_plural(deleted, "Deleted 1 product.", "Deleted @count products."),
            deleted=deleted,
            variations_deleted=len(variations),
        )
        return deleted

    async def create_product(self, config: GeneratorConfig) -> Product:
        """Create and save one product.

        Args:
            config: Generator configuration.

        Returns:
            Saved product.
        """
        title = self.random.word(self.rng.randint(1, config.title_length))
        product = self.products.create(
            type=DEFAULT_BUNDLE,
            langcode=self.resolve_language(config),
            title=title,
            generated=True,
        )

        await self.populate_fields(config, product)

        return await self.products.save(product)

    async def create_variation(self, config: GeneratorConfig) -> ProductVariation:
        """Create and save one product variation.

        Args:
            config: Generator configuration.

        Returns:
            Saved variation.
        """
        sku = self.random.word(self.rng.randint(1, config.effective_variation_title_length))
        variation = self.variations.create(
            type=DEFAULT_BUNDLE,
            langcode=self.resolve_language(config),
            sku=sku,
            title=sku,
            price_amount=self.rng.randint(config.price_min, config.price_max),
            price_currency_code=config.currency_code,
            generated=True,
        )

        await self.populate_fields(config, variation)

        variation = await self.variations.save(variation)
        self.report.variations_created += 1
        return variation

    def resolve_language(self, config: GeneratorConfig) -> str:
        """Pick the langcode of a new entity.

        Args:
            config: Generator configuration.

        Returns:
            A configured langcode, or the default language.
        """
        if config.languages:
            return self.rng.choice(config.languages)
        return self.languages.get_default_language()

    async def populate_fields(
        self,
        config: GeneratorConfig,
        entity: Product | ProductVariation,
    ) -> None:
        """Populate the declared fields of an entity.

        Args:
            config: Generator configuration.
            entity: Unsaved entity.
        """
        declared = self.fields.list_fields_for(entity.entity_type_id, entity.bundle)
        for field_definition in declared:
            if field_definition.name in config.skip_fields:
                continue
            handler = self.field_handlers.resolve(
                entity.entity_type_id, field_definition.name
            )
            await handler(config, entity, field_definition)

    async def _populate_variations(
        self,
        config: GeneratorConfig,
        product: Product,
        field_definition: FieldDefinition,
    ) -> None:
        variations = []
        for _ in range(config.variation_count):
            variations.append(await self.create_variation(config))
        product.variations = variations

    async def _populate_samples(
        self,
        config: GeneratorConfig,
        entity: Product | ProductVariation,
        field_definition: FieldDefinition,
    ) -> None:
        count = field_definition.cardinality
        if field_definition.is_unlimited:
            # Arbitrary number of values for "unlimited"
            count = self.rng.randint(*UNLIMITED_SAMPLE_RANGE)
        self.fields.generate_sample_values(entity, field_definition.name, count)
