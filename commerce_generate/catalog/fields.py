"""Declared fields and how they are populated.

A field definition names a field of an entity type/bundle, its value type
and its cardinality. FieldDefinitionProvider answers which fields a bundle
declares and writes sample values onto entities. FieldHandlerRegistry maps
field names to the handler that populates them during generation.

Schema format example:
    {
        ("commerce_product", "default"): [
            FieldDefinition("variations", "entity_reference", CARDINALITY_UNLIMITED),
            FieldDefinition("body", "text", 1),
        ],
    }
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from commerce_generate.catalog.models import Product, ProductVariation
from commerce_generate.catalog.samples import SampleValueGenerator

# Cardinality sentinel for fields accepting any number of values
CARDINALITY_UNLIMITED = -1


@dataclass(frozen=True)
class FieldDefinition:
    """A field declared on an entity bundle.

    Attributes:
        name: Field machine name.
        field_type: Value type (see SampleValueGenerator.supported_types).
        cardinality: Maximum number of values, or CARDINALITY_UNLIMITED.
    """

    name: str
    field_type: str
    cardinality: int = 1

    @property
    def is_unlimited(self) -> bool:
        """Whether the field accepts any number of values."""
        return self.cardinality == CARDINALITY_UNLIMITED


SchemaKey = tuple[str, str]

DEFAULT_FIELD_SCHEMA: dict[SchemaKey, list[FieldDefinition]] = {
    (Product.entity_type_id, "default"): [
        FieldDefinition("variations", "entity_reference", CARDINALITY_UNLIMITED),
        FieldDefinition("body", "text", 1),
        FieldDefinition("tags", "string", CARDINALITY_UNLIMITED),
    ],
    (ProductVariation.entity_type_id, "default"): [
        FieldDefinition("weight", "decimal", 1),
        FieldDefinition("color", "string", 1),
        FieldDefinition("images", "uri", CARDINALITY_UNLIMITED),
    ],
}


class FieldDefinitionProvider:
    """Field definitions backed by a static schema map.

    Example usage:
        provider = FieldDefinitionProvider()
        for field in provider.list_fields_for("commerce_product", "default"):
            print(field.name, field.cardinality)
    """

    def __init__(
        self,
        schema: dict[SchemaKey, list[FieldDefinition]] | None = None,
        samples: SampleValueGenerator | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            schema: Field definitions by (entity type, bundle).
            samples: Sample value generator.
        """
        self.schema = DEFAULT_FIELD_SCHEMA if schema is None else schema
        self.samples = samples or SampleValueGenerator()

    def list_fields_for(self, entity_type: str, bundle: str) -> list[FieldDefinition]:
        """List fields declared on a bundle.

        Args:
            entity_type: Entity type id.
            bundle: Bundle name.

        Returns:
            Field definitions (empty if the bundle declares none).
        """
        return list(self.schema.get((entity_type, bundle), []))

    def get_field(self, entity_type: str, bundle: str, field_name: str) -> FieldDefinition | None:
        """Get a single field definition by name.

        Returns:
            Field definition if declared, None otherwise.
        """
        for field in self.schema.get((entity_type, bundle), []):
            if field.name == field_name:
                return field
        return None

    def generate_sample_values(
        self,
        entity: Product | ProductVariation,
        field_name: str,
        count: int,
    ) -> list[Any]:
        """Write sample values for a field onto an entity.

        Args:
            entity: Entity to populate.
            field_name: Declared field name.
            count: Number of values.

        Returns:
            The generated values.

        Raises:
            KeyError: If the field is not declared on the entity's bundle.
        """
        field = self.get_field(entity.entity_type_id, entity.bundle, field_name)
        if field is None:
            raise KeyError(
                f"Field '{field_name}' is not declared on "
                f"{entity.entity_type_id}:{entity.bundle}"
            )
        values = self.samples.generate(field.name, field.field_type, count)
        entity.set_field_values(field.name, values)
        return values

    def seed(self, seed: int) -> None:
        """Reseed sample value generation."""
        self.samples.seed(seed)


FieldHandler = Callable[[Any, Any, FieldDefinition], Awaitable[None]]


class FieldHandlerRegistry:
    """Maps field names to the handler that populates them.

    A handler registered for an entity type wins over one registered for
    the field name alone, which wins over the default handler.
    """

    def __init__(self, default: FieldHandler) -> None:
        self.default = default
        self._handlers: dict[tuple[str | None, str], FieldHandler] = {}

    def register(
        self,
        field_name: str,
        handler: FieldHandler,
        entity_type: str | None = None,
    ) -> None:
        """Register a handler.

        Args:
            field_name: Field name the handler populates.
            handler: Async callable taking (config, entity, field).
            entity_type: Restrict the handler to one entity type.
        """
        self._handlers[(entity_type, field_name)] = handler

    def resolve(self, entity_type: str, field_name: str) -> FieldHandler:
        """Find the handler for a field.

        Args:
            entity_type: Entity type id.
            field_name: Field name.

        Returns:
            Registered handler or the default.
        """
        return (
            self._handlers.get((entity_type, field_name))
            or self._handlers.get((None, field_name))
            or self.default
        )
