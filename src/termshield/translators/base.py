"""Defines the base class for all translators."""

from abc import ABC, abstractmethod

from termshield.config import ProviderSettings


class BaseTranslator(ABC):
    """
    Abstract base class for all translator implementations.

    A translator turns a string into its translation. Its `name` identifies the
    backend in term translator filters, so it must stay stable.
    """

    name: str = ""

    def __init__(self, settings: ProviderSettings | None = None, target_lang: str | None = None) -> None:
        """
        Initialize the translator with provider-specific settings.

        Args:
            settings: A Pydantic model containing provider-specific configurations.
            target_lang: The language this instance translates into. Backends are bound to one language.

        """
        self.settings = settings
        self.target_lang = target_lang

    @property
    def is_passthrough(self) -> bool:
        """Return True if the translator hands its input back unchanged."""
        return False

    @abstractmethod
    async def translate(self, text: str) -> str:
        """
        Translate a single text.

        Args:
            text: The text to translate. It may contain marker tokens, which must be kept intact.

        Returns:
            The translated text.

        """
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return a short representation for logging."""
        return f"{self.__class__.__name__}(name={self.name!r})"
