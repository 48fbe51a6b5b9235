"""Generate service.

Wires a database session to the generator and its collaborators, and
describes the operator settings form.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from commerce_generate.catalog.currencies import CurrencyProvider
from commerce_generate.catalog.fields import FieldDefinitionProvider
from commerce_generate.catalog.generator import CommerceGenerator, GeneratorConfig
from commerce_generate.catalog.languages import LanguageManager
from commerce_generate.catalog.repository import ProductRepository, VariationRepository
from commerce_generate.domain.exceptions import InvalidGenerateSettingsError
from commerce_generate.infrastructure.config import Settings, settings as app_settings


class GenerateService:
    """Service for generation runs.

    Example usage:
        async with async_session_factory() as session:
            service = GenerateService(session)
            result = await service.generate(GeneratorConfig(count=5, kill=True))
            print(result["summary"])
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        fields: FieldDefinitionProvider | None = None,
        currencies: CurrencyProvider | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            settings: Application settings.
            fields: Field definition provider.
            currencies: Currency provider.
        """
        self.session = session
        self.settings = settings or app_settings
        self.languages = LanguageManager.from_settings(self.settings)
        self.currencies = currencies or CurrencyProvider()
        self.products = ProductRepository(session)
        self.variations = VariationRepository(session)
        self.generator = CommerceGenerator(
            self.products,
            self.variations,
            fields or FieldDefinitionProvider(),
            self.languages,
        )

    def validate_config(self, config: GeneratorConfig) -> None:
        """Check a config against the known currencies and languages.

        Args:
            config: Generator configuration.

        Raises:
            InvalidGenerateSettingsError: On an unknown code or reversed price range.
        """
        if config.price_min > config.price_max:
            raise InvalidGenerateSettingsError(
                "price_min", config.price_min, f"greater than price_max {config.price_max}"
            )
        if not self.currencies.has_currency(config.currency_code):
            raise InvalidGenerateSettingsError(
                "currency", config.currency_code, "unknown currency"
            )
        for langcode in config.languages:
            if not self.languages.has_language(langcode):
                raise InvalidGenerateSettingsError("add_language", langcode, "unknown language")

    async def generate(self, config: GeneratorConfig) -> dict[str, Any]:
        """Validate the config and run the generator.

        Args:
            config: Generator configuration.

        Returns:
            Generation result with counts and messages.
        """
        self.validate_config(config)
        summary = await self.generator.run(config)
        report = self.generator.report

        return {
            "summary": summary,
            "messages": list(report.messages),
            "deleted": report.deleted,
            "products_created": len(report.product_ids),
            "variations_created": report.variations_created,
            "product_ids": list(report.product_ids),
        }

    def settings_form(self) -> list[dict[str, Any]]:
        """Describe the settings form fields.

        Returns:
            Field descriptions in display order.
        """
        s = self.settings
        return [
            {
                "name": "num",
                "type": "number",
                "title": "How many products would you like to generate?",
                "default": s.default_num,
                "required": True,
                "min": 0,
            },
            {
                "name": "kill",
                "type": "checkbox",
                "title": "Delete all products before generating new products.",
                "default": False,
            },
            {
                "name": "title_length",
                "type": "number",
                "title": "Maximum length of product titles",
                "default": s.default_title_length,
                "required": True,
                "min": 1,
                "max": 255,
            },
            {
                "name": "num_var",
                "type": "number",
                "title": "How many variations per product?",
                "default": s.default_num_variations,
                "required": True,
                "min": 0,
            },
            {
                "name": "title_var_length",
                "type": "number",
                "title": "Maximum length of variation SKUs",
                "default": None,
                "min": 1,
                "max": 255,
            },
            {
                "name": "price_min",
                "type": "number",
                "title": "Minimum variation price",
                "default": s.default_price_min,
                "min": 0,
            },
            {
                "name": "price_max",
                "type": "number",
                "title": "Maximum variation price",
                "default": s.default_price_max,
                "min": 0,
            },
            {
                "name": "currency",
                "type": "select",
                "title": "Currency",
                "default": s.default_currency,
                "options": self.currencies.list_currencies(),
            },
            {
                "name": "add_language",
                "type": "select",
                "title": "Set language on products",
                "multiple": True,
                "default": [self.languages.get_default_language()],
                "options": self.languages.list_languages(),
            },
        ]
