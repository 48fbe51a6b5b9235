"""Random values for generated entities.

RandomData builds pronounceable words of an exact length for titles and
SKUs. SampleValueGenerator produces values for declared fields by field
type, using Faker.
"""

import random
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from faker import Faker

from commerce_generate.domain.exceptions import UnsupportedFieldTypeError

VOWELS = ["a", "e", "i", "o", "u"]

CONSONANTS = [
    "b", "c", "d", "g", "h", "j", "k", "l", "m", "n", "p", "r", "s", "t",
    "u", "v", "w", "tr", "cr", "br", "fr", "th", "dr", "ch", "ph", "wr",
    "st", "sp", "sw", "pr", "sl", "cl", "sh",
]


class RandomData:
    """Random strings drawn from a shared random generator.

    Example usage:
        data = RandomData(random.Random(42))
        data.word(8)  # e.g. "brasideh"
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def word(self, length: int) -> str:
        """Generate a pronounceable lowercase word.

        Args:
            length: Exact number of characters (>= 1).

        Returns:
            Random word.
        """
        word = ""
        while len(word) < length:
            word += self.rng.choice(CONSONANTS) + self.rng.choice(VOWELS)
        return word[:length]


class SampleValueGenerator:
    """Generates sample values for declared fields.

    Each supported field type maps to a Faker-backed factory returning one
    JSON-serializable value.
    """

    def __init__(self, seed: int | None = None) -> None:
        """Initialize generator.

        Args:
            seed: Optional seed for reproducible values.
        """
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)
        self._factories: dict[str, Callable[[], Any]] = {
            "string": lambda: self.fake.word(),
            "text": lambda: self.fake.paragraph(nb_sentences=3),
            "integer": lambda: self.fake.random_int(min=0, max=1000),
            "decimal": lambda: str(
                Decimal(self.fake.pyfloat(left_digits=3, right_digits=2, positive=True))
                .quantize(Decimal("0.01"))
            ),
            "boolean": lambda: self.fake.pybool(),
            "email": lambda: self.fake.email(),
            "uri": lambda: self.fake.image_url(),
            "entity_reference": lambda: self.fake.random_int(min=1, max=100),
        }

    def seed(self, seed: int) -> None:
        """Reseed the underlying Faker instance.

        Args:
            seed: Seed value.
        """
        self.fake.seed_instance(seed)

    @property
    def supported_types(self) -> list[str]:
        """Field types with a sample factory."""
        return sorted(self._factories)

    def generate(self, field_name: str, field_type: str, count: int) -> list[Any]:
        """Generate sample values for a field.

        Args:
            field_name: Field name (for error reporting).
            field_type: Field type.
            count: Number of values.

        Returns:
            List of `count` values.

        Raises:
            UnsupportedFieldTypeError: If the field type has no factory.
        """
        factory = self._factories.get(field_type)
        if factory is None:
            raise UnsupportedFieldTypeError(field_name, field_type)
        return [factory() for _ in range(count)]
