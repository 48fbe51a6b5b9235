"""Languages available to generated entities."""

from commerce_generate.infrastructure.config import Settings


class LanguageManager:
    """Known languages and the site default language."""

    def __init__(self, languages: dict[str, str], default_langcode: str) -> None:
        """Initialize language manager.

        Args:
            languages: Language names by langcode.
            default_langcode: Default langcode (added to languages if missing).
        """
        self._languages = dict(languages)
        self._languages.setdefault(default_langcode, default_langcode)
        self._default = default_langcode

    @classmethod
    def from_settings(cls, settings: Settings) -> "LanguageManager":
        return cls(settings.languages, settings.default_language)

    def list_languages(self) -> dict[str, str]:
        """Get all languages.

        Returns:
            Language names by langcode.
        """
        return dict(self._languages)

    def get_default_language(self) -> str:
        """Get the default langcode."""
        return self._default

    def has_language(self, langcode: str) -> bool:
        return langcode in self._languages
