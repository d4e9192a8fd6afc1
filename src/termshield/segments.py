"""
Segment model for partially transformed text.

While a translation is running, text is held as a sequence of segments. Each
segment is either plain text or a marker standing for a term match that has
not yet been rendered.

Architecture:
    SegmentKind (Enum) → Which variant a segment is
    Segment (Dataclass) → The tagged variant itself, immutable
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from termshield.terms.base import Term


class SegmentKind(str, Enum):
    """The variant of a segment."""

    TEXT = "text"
    """Plain text, sent to the translator or returned as-is."""

    MARKER = "marker"
    """A term match waiting to be rendered by its term."""


@dataclass(frozen=True)
class Segment:
    """
    One piece of partially transformed text.

    Attributes:
        kind: Which variant this segment is.
        text: The text of a TEXT segment. Empty for markers.
        term: The term that produced a MARKER segment.
        payload: Term-specific data from `Term.scan`, handed back to `Term.process`.

    """

    kind: SegmentKind
    text: str = ""
    term: Term | None = None
    payload: Any = None

    @classmethod
    def of_text(cls, text: str) -> Segment:
        """Create a text segment."""
        return cls(kind=SegmentKind.TEXT, text=text)

    @classmethod
    def of_marker(cls, term: Term, payload: Any) -> Segment:  # noqa: ANN401
        """Create a marker segment."""
        return cls(kind=SegmentKind.MARKER, term=term, payload=payload)

    @property
    def is_text(self) -> bool:
        """Check if this is a text segment."""
        return self.kind == SegmentKind.TEXT

    @property
    def is_marker(self) -> bool:
        """Check if this is a marker segment."""
        return self.kind == SegmentKind.MARKER


def coalesce(segments: Iterable[Segment]) -> list[Segment]:
    """Merge adjacent text segments and drop empty ones."""
    result: list[Segment] = []
    for segment in segments:
        if segment.is_text:
            if not segment.text:
                continue
            if result and result[-1].is_text:
                result[-1] = Segment.of_text(result[-1].text + segment.text)
                continue
        result.append(segment)
    return result
