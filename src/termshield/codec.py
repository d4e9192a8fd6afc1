"""
Marker codec.

Marker segments are replaced by opaque tokens before the text is handed to the
translator, and the tokens are mapped back to their markers afterwards. A token
is the marker's index written in base 20 over consonants that survive case
folding and transliteration, framed as `ZM<digits>Z`. Decoding is
case-insensitive because some translators change the case of unknown words.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Final

import regex

from .segments import Segment
from .terms.base import ScanResult, Term

if TYPE_CHECKING:
    from .dictionary import DictionaryTranslator

logger = logging.getLogger(__name__)

USABLE_CHARS: Final[str] = "BCDFGHJKLMNPQRSTVWXY"
# ASCII keeps case folding from admitting look-alikes such as the Kelvin sign for K.
MARKER_REGEX: Final = regex.compile(rf"ZM[{USABLE_CHARS}]+Z", regex.IGNORECASE | regex.ASCII)
# Anything that is, or could grow into, a token once a real token is placed next to it.
_COLLISION_REGEX: Final = regex.compile(rf"ZM[{USABLE_CHARS}]*Z?", regex.IGNORECASE | regex.ASCII)


class MarkerDecodeError(ValueError):
    """Raised when translated text refers to a marker that was never issued."""


class _EscapedText(Term):
    """Carries input text that would otherwise be mistaken for a token."""

    @property
    def source(self) -> str:
        return _COLLISION_REGEX.pattern

    def scan(self, ctx: "DictionaryTranslator", text: str) -> ScanResult | None:
        _ = ctx
        match = _COLLISION_REGEX.search(text)
        if match is None:
            return None
        return match.start(), match.end(), match.group(0)

    async def process(self, ctx: "DictionaryTranslator", payload: Any) -> str:  # noqa: ANN401
        _ = ctx
        return payload


_ESCAPED_TEXT: Final = _EscapedText()


def encode_marker(index: int) -> str:
    """
    Encode a marker index as a token.

    Examples:
        >>> encode_marker(0)
        'ZMBZ'
        >>> encode_marker(21)
        'ZMCCZ'

    """
    if index < 0:
        msg = f"Marker index must not be negative, got {index}"
        raise ValueError(msg)
    digits = ""
    while index > 0 or not digits:
        index, digit = divmod(index, len(USABLE_CHARS))
        digits = USABLE_CHARS[digit] + digits
    return f"ZM{digits}Z"


def decode_marker(token: str) -> int:
    """
    Decode a token back into its marker index, ignoring case.

    Raises:
        MarkerDecodeError: If `token` is not a well-formed token.

    """
    if not MARKER_REGEX.fullmatch(token):
        msg = f"Not a marker token: '{token}'"
        raise MarkerDecodeError(msg)
    index = 0
    for char in token[2:-1].upper():
        digit = USABLE_CHARS.find(char)
        if digit < 0:
            msg = f"Invalid digit '{char}' in marker token '{token}'"
            raise MarkerDecodeError(msg)
        index = index * len(USABLE_CHARS) + digit
    return index


def _encode(segments: Iterable[Segment]) -> tuple[str, list[Segment], list[tuple[int, int]]]:
    parts: list[str] = []
    markers: list[Segment] = []
    spans: list[tuple[int, int]] = []
    length = 0
    for segment in segments:
        if segment.is_text:
            piece = segment.text
        else:
            piece = encode_marker(len(markers))
            markers.append(segment)
            spans.append((length, length + len(piece)))
        parts.append(piece)
        length += len(piece)
    return "".join(parts), markers, spans


def _escape(segments: Iterable[Segment]) -> list[Segment]:
    escaped: list[Segment] = []
    for segment in segments:
        if segment.is_marker:
            escaped.append(segment)
            continue
        last = 0
        for match in _COLLISION_REGEX.finditer(segment.text):
            if match.start() > last:
                escaped.append(Segment.of_text(segment.text[last : match.start()]))
            escaped.append(Segment.of_marker(_ESCAPED_TEXT, match.group(0)))
            last = match.end()
        if last < len(segment.text):
            escaped.append(Segment.of_text(segment.text[last:]))
    return escaped


def encode(segments: list[Segment]) -> tuple[str, list[Segment]]:
    """
    Replace every marker with a token.

    Markers are numbered densely in the order they are met. If the text around
    the markers would be read back as a token, the offending text is itself
    turned into markers so that decoding stays exact.

    Returns:
        The encoded string and the markers, indexed by token value.

    """
    encoded, markers, spans = _encode(segments)
    if [match.span() for match in MARKER_REGEX.finditer(encoded)] != spans:
        logger.warning("Input contains marker-like text; escaping it before translation.")
        encoded, markers, _ = _encode(_escape(segments))
    return encoded, markers


def decode(encoded: str, markers: list[Segment]) -> list[Segment]:
    """
    Split translated text on tokens and restore the markers they stand for.

    Raises:
        MarkerDecodeError: If a token refers to an index outside `markers`.

    """
    segments: list[Segment] = []
    seen: set[int] = set()
    last = 0
    for match in MARKER_REGEX.finditer(encoded):
        if match.start() > last:
            segments.append(Segment.of_text(encoded[last : match.start()]))
        index = decode_marker(match.group(0))
        if index >= len(markers):
            msg = f"Token '{match.group(0)}' refers to marker {index}, but only {len(markers)} were issued."
            raise MarkerDecodeError(msg)
        segments.append(markers[index])
        seen.add(index)
        last = match.end()
    if last < len(encoded):
        segments.append(Segment.of_text(encoded[last:]))

    if len(seen) < len(markers):
        logger.warning("%d of %d protected spans were dropped by the translator.", len(markers) - len(seen), len(markers))
    return segments
