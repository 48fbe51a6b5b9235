"""Tests for the commerce product generator."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from commerce_generate.catalog.fields import (
    CARDINALITY_UNLIMITED,
    FieldDefinition,
    FieldDefinitionProvider,
)
from commerce_generate.catalog.generator import (
    CommerceGenerator,
    GeneratorConfig,
    format_plural,
    parse_skip_fields,
)
from commerce_generate.catalog.languages import LanguageManager
from commerce_generate.catalog.models import Product, ProductVariation
from commerce_generate.catalog.repository import ProductRepository, VariationRepository


def scenario_config(**overrides) -> GeneratorConfig:
    """Config used by most tests: small titles, one language."""
    values = dict(
        count=5,
        title_length=10,
        variation_count=1,
        price_min=10,
        price_max=1000,
        currency_code="USD",
        languages=("en",),
    )
    values.update(overrides)
    return GeneratorConfig(**values)


@pytest.fixture
def mock_products() -> MagicMock:
    """Product storage that builds real entities but persists nothing."""
    products = MagicMock(spec=ProductRepository)
    products.create.side_effect = lambda **values: Product(field_values={}, **values)
    products.save = AsyncMock(side_effect=lambda product: product)
    products.query_ids = AsyncMock(return_value=[])
    products.load_multiple = AsyncMock(return_value=[])
    products.delete = AsyncMock(return_value=0)
    return products


@pytest.fixture
def mock_variations() -> MagicMock:
    """Variation storage that builds real entities but persists nothing."""
    variations = MagicMock(spec=VariationRepository)
    variations.create.side_effect = lambda **values: ProductVariation(field_values={}, **values)
    variations.save = AsyncMock(side_effect=lambda variation: variation)
    variations.find_by_products = AsyncMock(return_value=[])
    return variations


@pytest.fixture
def mock_generator(
    mock_products: MagicMock,
    mock_variations: MagicMock,
    field_provider: FieldDefinitionProvider,
    languages: LanguageManager,
) -> CommerceGenerator:
    """Generator over mocked storage."""
    return CommerceGenerator(
        mock_products,
        mock_variations,
        field_provider,
        languages,
        rng=random.Random(99),
    )


class TestHelpers:
    """Tests for message and option helpers."""

    def test_format_plural_singular(self) -> None:
        """Count of one uses the singular form verbatim."""
        assert format_plural(1, "1 product created.", "Finished creating @count products") == (
            "1 product created."
        )

    def test_format_plural_plural(self) -> None:
        """Other counts substitute @count."""
        assert format_plural(0, "x", "Finished creating @count products") == (
            "Finished creating 0 products"
        )
        assert format_plural(7, "x", "Deleted @count products.") == "Deleted 7 products."

    def test_parse_skip_fields(self) -> None:
        """Comma-separated names become a set, blanks are dropped."""
        assert parse_skip_fields("body, tags,,") == frozenset({"body", "tags"})
        assert parse_skip_fields("") == frozenset()
        assert parse_skip_fields(None) == frozenset()


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_variation_title_length_falls_back(self) -> None:
        """Unset variation title length uses the product title length."""
        assert GeneratorConfig(title_length=12).effective_variation_title_length == 12
        config = GeneratorConfig(title_length=12, variation_title_length=3)
        assert config.effective_variation_title_length == 3

    def test_config_is_immutable(self) -> None:
        """Config cannot be changed once built."""
        config = GeneratorConfig()
        with pytest.raises(AttributeError):
            config.count = 3  # type: ignore[misc]


class TestRun:
    """Tests for full generation runs against the database."""

    @pytest.mark.asyncio
    async def test_creates_products_with_variations(self, generator: CommerceGenerator) -> None:
        """Five products, one variation each, priced and in English."""
        summary = await generator.run(scenario_config())

        assert summary == "Finished creating 5 products"
        assert await generator.products.count() == 5
        assert await generator.variations.count() == 5

        products = await generator.products.load_multiple(generator.report.product_ids)
        assert len(products) == 5
        for product in products:
            assert product.id is not None
            assert product.type == "default"
            assert product.langcode == "en"
            assert product.generated is True
            assert 1 <= len(product.title) <= 10
            assert len(product.variations) == 1

            variation = product.variations[0]
            assert variation.id is not None
            assert variation.product_id == product.id
            assert variation.langcode == "en"
            assert variation.sku == variation.title
            assert 10 <= variation.price.amount <= 1000
            assert variation.price.currency_code == "USD"

    @pytest.mark.asyncio
    async def test_single_product_message(self, generator: CommerceGenerator) -> None:
        """Creating one product uses the singular message."""
        summary = await generator.run(scenario_config(count=1))

        assert summary == "1 product created."
        assert generator.report.messages == ["1 product created."]

    @pytest.mark.asyncio
    async def test_variation_count_per_product(self, generator: CommerceGenerator) -> None:
        """Every product gets exactly variation_count variations."""
        await generator.run(scenario_config(count=3, variation_count=4))

        products = await generator.products.load_multiple(generator.report.product_ids)
        assert [len(p.variations) for p in products] == [4, 4, 4]
        assert generator.report.variations_created == 12

    @pytest.mark.asyncio
    async def test_zero_variations(self, generator: CommerceGenerator) -> None:
        """A variation count of zero leaves products without variations."""
        await generator.run(scenario_config(count=2, variation_count=0))

        assert await generator.variations.count() == 0

    @pytest.mark.asyncio
    async def test_kill_deletes_existing_products(self, generator: CommerceGenerator) -> None:
        """Kill deletes pre-existing products before creating new ones."""
        await generator.run(scenario_config(count=3))

        summary = await generator.run(scenario_config(count=2, kill=True))

        assert generator.report.deleted == 3
        assert generator.report.messages == ["Deleted 3 products.", summary]
        assert summary == "Finished creating 2 products"
        assert await generator.products.count() == 2

    @pytest.mark.asyncio
    async def test_kill_keeps_variations_without_cascade(
        self, generator: CommerceGenerator
    ) -> None:
        """Without cascade the variations of deleted products remain."""
        await generator.run(scenario_config(count=3))

        await generator.run(scenario_config(count=2, kill=True))

        assert await generator.variations.count() == 5

    @pytest.mark.asyncio
    async def test_kill_with_cascade_deletes_variations(
        self, generator: CommerceGenerator
    ) -> None:
        """With cascade the variations of deleted products go too."""
        await generator.run(scenario_config(count=3, variation_count=2))

        await generator.run(
            scenario_config(count=2, variation_count=2, kill=True, cascade_variations=True)
        )

        assert await generator.products.count() == 2
        assert await generator.variations.count() == 4

    @pytest.mark.asyncio
    async def test_cascade_keeps_previously_orphaned_variations(
        self, generator: CommerceGenerator
    ) -> None:
        """Cascade only reaches variations still attached to a product."""
        await generator.run(scenario_config(count=2))
        await generator.run(scenario_config(count=3, kill=True))

        await generator.run(scenario_config(count=0, kill=True, cascade_variations=True))

        assert generator.report.deleted == 3
        assert await generator.products.count() == 0
        assert await generator.variations.count() == 2

    @pytest.mark.asyncio
    async def test_seed_makes_runs_reproducible(self, generator: CommerceGenerator) -> None:
        """The same seed produces the same titles, SKUs and prices."""
        await generator.run(scenario_config(count=3, seed=42))
        first = await generator.products.load_multiple(generator.report.product_ids)
        first_values = [
            (p.title, [(v.sku, v.price_amount) for v in p.variations]) for p in first
        ]

        await generator.run(scenario_config(count=3, seed=42, kill=True))
        second = await generator.products.load_multiple(generator.report.product_ids)
        second_values = [
            (p.title, [(v.sku, v.price_amount) for v in p.variations]) for p in second
        ]

        assert first_values == second_values


class TestDeleteAllProducts:
    """Tests for deleting every product."""

    @pytest.mark.asyncio
    async def test_empty_storage_is_noop(self, generator: CommerceGenerator) -> None:
        """Nothing to delete emits no message."""
        deleted = await generator.delete_all_products()

        assert deleted == 0
        assert generator.report.messages == []

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, generator: CommerceGenerator) -> None:
        """A second delete in a row deletes nothing."""
        await generator.run(scenario_config(count=2))

        assert await generator.delete_all_products() == 2
        assert await generator.delete_all_products() == 0
        assert await generator.products.count() == 0

    @pytest.mark.asyncio
    async def test_single_product_message(self, generator: CommerceGenerator) -> None:
        """Deleting one product uses the singular message."""
        await generator.run(scenario_config(count=1))
        generator.report.messages.clear()

        await generator.delete_all_products()

        assert generator.report.messages == ["Deleted 1 product."]


class TestResolveLanguage:
    """Tests for language selection."""

    def test_picks_configured_language(self, mock_generator: CommerceGenerator) -> None:
        """Langcodes are drawn from the configured set."""
        config = scenario_config(languages=("fr", "de"))
        drawn = {mock_generator.resolve_language(config) for _ in range(50)}

        assert drawn <= {"fr", "de"}
        assert len(drawn) == 2

    def test_falls_back_to_default(self, mock_generator: CommerceGenerator) -> None:
        """No configured languages uses the default language."""
        assert mock_generator.resolve_language(scenario_config(languages=())) == "en"

    @pytest.mark.asyncio
    async def test_every_entity_uses_configured_language(
        self, mock_generator: CommerceGenerator, mock_products: MagicMock
    ) -> None:
        """Products and variations draw their langcode independently from the set."""
        await mock_generator.run(scenario_config(count=10, variation_count=2, languages=("fr", "de")))

        for call in mock_products.save.await_args_list:
            product = call.args[0]
            assert product.langcode in {"fr", "de"}
            assert all(v.langcode in {"fr", "de"} for v in product.variations)


class TestPopulateFields:
    """Tests for declared field population."""

    @pytest.mark.asyncio
    async def test_declared_fields_are_populated(self, mock_generator: CommerceGenerator) -> None:
        """Product and variation fields receive sample values."""
        product = await mock_generator.create_product(scenario_config())

        assert len(product.get_field_values("body")) == 1
        assert 1 <= len(product.get_field_values("tags")) <= 3
        variation = product.variations[0]
        assert len(variation.get_field_values("weight")) == 1
        assert len(variation.get_field_values("color")) == 1
        assert 1 <= len(variation.get_field_values("images")) <= 3

    @pytest.mark.asyncio
    async def test_skip_fields_are_not_touched(self, mock_generator: CommerceGenerator) -> None:
        """Skipped fields never appear on products or variations."""
        config = scenario_config(skip_fields=frozenset({"body", "images"}))

        for _ in range(5):
            product = await mock_generator.create_product(config)
            assert "body" not in product.field_values
            assert "tags" in product.field_values
            for variation in product.variations:
                assert "images" not in variation.field_values
                assert "color" in variation.field_values

    @pytest.mark.asyncio
    async def test_skipping_variations_creates_none(
        self, mock_generator: CommerceGenerator, mock_variations: MagicMock
    ) -> None:
        """Skipping the variations field creates no variations."""
        product = await mock_generator.create_product(
            scenario_config(skip_fields=frozenset({"variations"}))
        )

        assert product.variations == []
        mock_variations.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlimited_cardinality_gets_one_to_three_values(
        self, mock_generator: CommerceGenerator
    ) -> None:
        """Unlimited fields receive between one and three values."""
        counts = set()
        for _ in range(40):
            product = await mock_generator.create_product(scenario_config(variation_count=0))
            counts.add(len(product.get_field_values("tags")))

        assert counts <= {1, 2, 3}
        assert len(counts) > 1

    @pytest.mark.asyncio
    async def test_fixed_cardinality_is_respected(
        self,
        mock_products: MagicMock,
        mock_variations: MagicMock,
        languages: LanguageManager,
    ) -> None:
        """A field with cardinality N receives exactly N values."""
        provider = FieldDefinitionProvider(
            schema={("commerce_product", "default"): [FieldDefinition("codes", "integer", 4)]}
        )
        generator = CommerceGenerator(mock_products, mock_variations, provider, languages)

        product = await generator.create_product(scenario_config())

        assert len(product.get_field_values("codes")) == 4
        assert product.variations == []

    @pytest.mark.asyncio
    async def test_bundle_without_fields_is_noop(
        self,
        mock_products: MagicMock,
        mock_variations: MagicMock,
        languages: LanguageManager,
    ) -> None:
        """An empty schema populates nothing and raises nothing."""
        generator = CommerceGenerator(
            mock_products, mock_variations, FieldDefinitionProvider(schema={}), languages
        )

        product = await generator.create_product(scenario_config())

        assert product.field_values == {}

    @pytest.mark.asyncio
    async def test_variations_field_on_variation_gets_samples(
        self,
        mock_products: MagicMock,
        mock_variations: MagicMock,
        languages: LanguageManager,
    ) -> None:
        """A "variations" field declared on variations is treated as a plain field."""
        provider = FieldDefinitionProvider(
            schema={
                ("commerce_product", "default"): [
                    FieldDefinition("variations", "entity_reference", CARDINALITY_UNLIMITED),
                ],
                ("commerce_product_variation", "default"): [
                    FieldDefinition("variations", "entity_reference", 2),
                ],
            }
        )
        generator = CommerceGenerator(mock_products, mock_variations, provider, languages)

        product = await generator.create_product(scenario_config(variation_count=2))

        assert len(product.variations) == 2
        assert all(len(v.get_field_values("variations")) == 2 for v in product.variations)
        assert mock_variations.create.call_count == 2


class TestStorageInteraction:
    """Tests for how the generator drives storage."""

    @pytest.mark.asyncio
    async def test_zero_count_never_touches_storage(
        self,
        mock_generator: CommerceGenerator,
        mock_products: MagicMock,
        mock_variations: MagicMock,
    ) -> None:
        """A run of zero products only reports."""
        summary = await mock_generator.run(scenario_config(count=0))

        assert summary == "Finished creating 0 products"
        mock_products.create.assert_not_called()
        mock_products.save.assert_not_awaited()
        mock_products.query_ids.assert_not_awaited()
        mock_variations.create.assert_not_called()
        mock_variations.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_variations_saved_before_product(
        self,
        mock_generator: CommerceGenerator,
        mock_products: MagicMock,
        mock_variations: MagicMock,
    ) -> None:
        """All variations of a product are saved before the product."""
        order = []
        mock_variations.save.side_effect = lambda v: order.append("variation") or v
        mock_products.save.side_effect = lambda p: order.append("product") or p

        await mock_generator.run(scenario_config(count=2, variation_count=2))

        assert order == ["variation", "variation", "product"] * 2

    @pytest.mark.asyncio
    async def test_storage_failure_aborts_run(
        self,
        mock_generator: CommerceGenerator,
        mock_products: MagicMock,
    ) -> None:
        """The first save error propagates and no summary is produced."""
        saved = []

        def save(product: Product) -> Product:
            if len(saved) == 1:
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            saved.append(product)
            return product

        mock_products.save.side_effect = save

        with pytest.raises(OperationalError):
            await mock_generator.run(scenario_config(count=5))

        assert mock_products.save.await_count == 2
        assert mock_generator.report.messages == []
        assert len(mock_generator.report.product_ids) == 1

    @pytest.mark.asyncio
    async def test_price_bounds_are_inclusive(
        self, mock_generator: CommerceGenerator, mock_products: MagicMock
    ) -> None:
        """Equal bounds always yield that exact amount."""
        await mock_generator.run(
            scenario_config(count=3, variation_count=2, price_min=25, price_max=25)
        )

        for call in mock_products.save.await_args_list:
            assert [v.price.amount for v in call.args[0].variations] == [25, 25]

    @pytest.mark.asyncio
    async def test_variation_title_length_bound(
        self, mock_generator: CommerceGenerator, mock_products: MagicMock
    ) -> None:
        """SKU length stays within the variation title length."""
        await mock_generator.run(
            scenario_config(count=10, variation_count=3, title_length=50, variation_title_length=2)
        )

        for call in mock_products.save.await_args_list:
            assert all(1 <= len(v.sku) <= 2 for v in call.args[0].variations)
