"""Translators that hand their input back unchanged."""

from termshield.config import ProviderSettings

from .base import BaseTranslator


class NopTranslator(BaseTranslator):
    """
    A translator that returns its input unchanged.

    Useful for previewing what the dictionary alone does to a text.
    """

    name = "Nop"

    @property
    def is_passthrough(self) -> bool:
        """Return True; the text is never altered."""
        return True

    async def translate(self, text: str) -> str:
        """Return `text` unchanged."""
        return text


class PassthroughTranslator(NopTranslator):
    """
    An identity translator that reports the name of another translator.

    Nested dictionary runs use it so that terms filtered by translator name
    behave exactly as they do in the outer run, without calling the backend.
    """

    def __init__(self, name: str, settings: ProviderSettings | None = None) -> None:
        """
        Initialize the passthrough translator.

        Args:
            name: The translator name to report.
            settings: Ignored.

        """
        super().__init__(settings)
        self.name = name
