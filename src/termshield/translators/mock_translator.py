"""A mock translator for testing purposes."""

import logging

from termshield.config import ProviderSettings

from .base import BaseTranslator

logger = logging.getLogger(__name__)


class MockTranslatorError(Exception):
    """Custom exception for mock translator errors."""


class MockTranslator(BaseTranslator):
    """
    A mock translator for testing that prepends a '[MOCK]' prefix.

    It can also be configured to raise an exception for testing error handling,
    and records every text it receives.
    """

    name = "Mock"

    def __init__(self, settings: ProviderSettings | None = None, target_lang: str | None = None, *, return_error: bool = False) -> None:
        """
        Initialize the Mock Translator.

        Args:
            settings: Provider-specific configurations (ignored).
            target_lang: The target language (only used for logging).
            return_error: If True, the translate method will raise an exception.

        """
        super().__init__(settings, target_lang)
        self.return_error = return_error
        self.received: list[str] = []

    async def translate(self, text: str) -> str:
        """
        Prepend '[MOCK] ' to the text to simulate translation.

        Raises:
            MockTranslatorError: If `return_error` was set to True during initialization.

        """
        self.received.append(text)

        if self.return_error:
            msg = "Mock translator was configured to fail."
            raise MockTranslatorError(msg)

        logger.debug("MockTranslator processed %d characters for target '%s'.", len(text), self.target_lang)
        return f"[MOCK] {text}"
