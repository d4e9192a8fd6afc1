"""Defines the base class for all dictionary terms."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from termshield.types import FilterList, Stage

if TYPE_CHECKING:
    from termshield.dictionary import DictionaryTranslator

ScanResult = tuple[int, int, Any]


def match_language(lang_filter: str | None, lang: str) -> bool:
    """
    Check a target language against a term's language filter.

    A missing filter matches every language. Otherwise the main parts must be equal,
    and the region parts must be equal when both sides carry one, so `zh` matches
    `zh-TW` while `zh-CN` does not.
    """
    if not lang_filter:
        return True
    filter_main, _, filter_sub = lang_filter.partition("-")
    lang_main, _, lang_sub = lang.partition("-")
    if filter_main != lang_main:
        return False
    return not (filter_sub and lang_sub and filter_sub != lang_sub)


@dataclass(frozen=True)
class TermConfig:
    """Where and when a term applies."""

    stage: Stage = Stage.TRANSFORM
    target_lang: str | None = None
    translator: FilterList | None = None


class Term(ABC):
    """
    Abstract base class for a unit of dictionary behaviour.

    A term locates itself in text with `scan` and renders the replacement for a
    located occurrence with `process`. Terms are immutable once built and are
    shared by every concurrent translation.
    """

    def __init__(self, config: TermConfig | None = None) -> None:
        """
        Initialize the term.

        Args:
            config: Stage and filters of the term. Defaults to an unfiltered transform term.

        """
        self.config = config or TermConfig()

    @property
    def stage(self) -> Stage:
        """Return the pipeline stage of the term."""
        return self.config.stage

    @property
    @abstractmethod
    def source(self) -> str:
        """Return the pattern source of the term, for ordering and diagnostics."""
        raise NotImplementedError

    def should_apply(self, ctx: "DictionaryTranslator") -> bool:
        """Determine whether the term applies to the context's target language and translator."""
        if not match_language(self.config.target_lang, ctx.target_lang):
            return False
        if self.config.translator is None:
            return True
        return self.config.translator.contains(ctx.translator.name)

    @abstractmethod
    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        """
        Find the first occurrence of the term in `text`.

        Returns:
            A `(start, end, payload)` tuple, or None if the term does not occur.
            The payload is handed back to `process` unchanged.

        """
        raise NotImplementedError

    @abstractmethod
    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        """Render the replacement text for an occurrence found by `scan`."""
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return a short representation for logging."""
        return f"{self.__class__.__name__}({self.source!r}, stage={self.stage.value})"
