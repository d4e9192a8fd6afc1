"""A term driven by a user-supplied regular expression."""

from typing import TYPE_CHECKING, Any

import regex

from .base import ScanResult, Term, TermConfig

if TYPE_CHECKING:
    from termshield.dictionary import DictionaryTranslator
    from termshield.types import TermDefinition


class PatternTerm(Term):
    """Replaces every match of a regular expression with a literal output string."""

    def __init__(self, pattern: "regex.Pattern[str]", output: str, config: TermConfig | None = None) -> None:
        """
        Initialize the pattern term.

        Args:
            pattern: The compiled input pattern.
            output: The literal replacement text. Backreferences are not expanded.
            config: Stage and filters of the term.

        """
        super().__init__(config)
        self.pattern = pattern
        self.output = output

    @classmethod
    def from_definition(cls, definition: "TermDefinition") -> "PatternTerm":
        """Build a term from a validated store definition."""
        config = TermConfig(
            stage=definition.type,
            target_lang=definition.target_lang,
            translator=definition.translator,
        )
        return cls(regex.compile(definition.input), definition.output, config)

    @property
    def source(self) -> str:
        """Return the input pattern."""
        return self.pattern.pattern

    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        """Find the first match of the input pattern."""
        _ = ctx
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.start(), match.end(), None

    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        """Return the literal output."""
        _ = ctx
        _ = payload
        return self.output
