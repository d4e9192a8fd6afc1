"""Built-in terms that protect URLs, hashtags and emoji regardless of the dictionary contents."""

import logging
from typing import TYPE_CHECKING, Any, Final

import regex

from termshield.translators.nop_translator import PassthroughTranslator

from .base import ScanResult, Term

if TYPE_CHECKING:
    from termshield.dictionary import DictionaryTranslator

logger = logging.getLogger(__name__)

# Scheme or 'www.' prefix, then URL-safe ASCII. A trailing punctuation mark is left to the sentence.
URL_REGEX: Final = regex.compile(
    r"(?:https?://|www\.)[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*[A-Za-z0-9\-_~/#=&%+]",
    regex.IGNORECASE,
)

# The body must hold at least one letter, so '#1' is not a hashtag. Entities like '&#39;' are skipped.
HASHTAG_REGEX: Final = regex.compile(r"(?<![\w&/#])#(\w*[^\W\d_]\w*)")

EMOJI_REGEX: Final = regex.compile(
    r"[#*0-9]\uFE0F?\u20E3"
    r"|\p{Regional_Indicator}{2}"
    r"|\p{Extended_Pictographic}(?:\p{Emoji_Modifier}|\uFE0F|\u200D\p{Extended_Pictographic})*",
)


class UrlTerm(Term):
    """Keeps URLs away from the translator."""

    @property
    def source(self) -> str:
        """Return the URL pattern."""
        return URL_REGEX.pattern

    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        """Find the first URL."""
        _ = ctx
        match = URL_REGEX.search(text)
        if match is None:
            return None
        return match.start(), match.end(), match.group(0)

    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        """Return the URL unchanged."""
        _ = ctx
        return payload


class HashtagTerm(Term):
    """
    Keeps hashtags away from the translator while still applying the dictionary to them.

    The body of the hashtag is run through a nested dictionary translation whose
    translator returns its input unchanged, so dictionary terms rewrite the body
    but the backend never sees it.
    """

    @property
    def source(self) -> str:
        """Return the hashtag pattern."""
        return HASHTAG_REGEX.pattern

    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        """Find the first hashtag; the payload is its body without '#'."""
        _ = ctx
        match = HASHTAG_REGEX.search(text)
        if match is None:
            return None
        return match.start(), match.end(), match.group(1)

    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        """Translate the body through the dictionary only and prefix it with '#'."""
        # The passthrough keeps the outer translator's name so translator filters behave the same.
        nested = ctx.with_translator(PassthroughTranslator(ctx.translator.name))
        body = await nested.translate(payload)
        logger.debug("Hashtag body '%s' rendered as '%s'", payload, body)
        return f"#{body}"


class EmojiTerm(Term):
    """Keeps emoji, including modifier and ZWJ sequences, away from the translator."""

    @property
    def source(self) -> str:
        """Return the emoji pattern."""
        return EMOJI_REGEX.pattern

    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        """Find the first emoji sequence."""
        _ = ctx
        match = EMOJI_REGEX.search(text)
        if match is None:
            return None
        return match.start(), match.end(), match.group(0)

    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        """Return the emoji unchanged."""
        _ = ctx
        return payload
