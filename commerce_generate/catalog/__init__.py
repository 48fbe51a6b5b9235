"""Commerce catalog generation.

Provides product and variation models, their storage, declared field
handling and the generator itself.
"""

from commerce_generate.catalog.currencies import CurrencyProvider
from commerce_generate.catalog.fields import (
    CARDINALITY_UNLIMITED,
    FieldDefinition,
    FieldDefinitionProvider,
    FieldHandlerRegistry,
)
from commerce_generate.catalog.generator import (
    CommerceGenerator,
    GenerationReport,
    GeneratorConfig,
)
from commerce_generate.catalog.languages import LanguageManager
from commerce_generate.catalog.models import Price, Product, ProductVariation
from commerce_generate.catalog.repository import ProductRepository, VariationRepository
from commerce_generate.catalog.service import GenerateService

__all__ = [
    # Models
    "Price",
    "Product",
    "ProductVariation",
    # Storage
    "ProductRepository",
    "VariationRepository",
    # Fields
    "CARDINALITY_UNLIMITED",
    "FieldDefinition",
    "FieldDefinitionProvider",
    "FieldHandlerRegistry",
    # Collaborators
    "CurrencyProvider",
    "LanguageManager",
    # Generator
    "CommerceGenerator",
    "GenerationReport",
    "GeneratorConfig",
    # Service
    "GenerateService",
]
