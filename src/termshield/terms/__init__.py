"""
Dictionary term implementations.

Each term adheres to the `Term` interface. Store definitions always become
`PatternTerm`s; the built-in terms are shared by every term set and are tried
before any store term.
"""

from typing import Final

from termshield.types import TermDefinition

from .base import ScanResult, Term, TermConfig, match_language
from .builtin import EmojiTerm, HashtagTerm, UrlTerm
from .pattern import PatternTerm

BUILTIN_TERMS: Final[tuple[Term, ...]] = (UrlTerm(), HashtagTerm(), EmojiTerm())


def build_term(definition: TermDefinition) -> Term:
    """Build the term for a validated store definition."""
    return PatternTerm.from_definition(definition)


__all__ = [
    "BUILTIN_TERMS",
    "EmojiTerm",
    "HashtagTerm",
    "PatternTerm",
    "ScanResult",
    "Term",
    "TermConfig",
    "UrlTerm",
    "build_term",
    "match_language",
]
