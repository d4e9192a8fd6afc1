"""
Dictionary translation.

`DictionaryTranslator` wraps a translator with a list of terms. A call runs a
fixed pipeline:

1. transform: preprocess and transform terms turn matches into markers.
2. inverse transform: preprocess markers are rendered into the text.
3. encode: the remaining markers become opaque tokens.
4. translate: the backend translates the encoded text.
5. decode: tokens are turned back into markers.
6. postprocess: postprocess terms are applied, then every marker is rendered.

The term list is shared and read-only; the markers of a call live only in
that call, so one instance may serve concurrent translations.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from . import codec
from .segments import Segment, coalesce
from .terms.base import Term
from .translators.base import BaseTranslator
from .types import Stage

logger = logging.getLogger(__name__)


def _is_preprocess(term: Term) -> bool:
    return term.stage == Stage.PREPROCESS


def _accept_all(term: Term) -> bool:
    _ = term
    return True


class DictionaryTranslator(BaseTranslator):
    """A translator that applies dictionary terms around another translator."""

    name = "Term"

    def __init__(self, target_lang: str, translator: BaseTranslator, terms: Sequence[Term]) -> None:
        """
        Initialize the dictionary translator.

        Args:
            target_lang: The language being translated into, used by term language filters.
            translator: The backend that performs the actual translation.
            terms: Terms in scanning order, highest priority first.

        """
        super().__init__(target_lang=target_lang)
        self.translator = translator
        self.terms = tuple(terms)
        self.preprocess_terms = tuple(term for term in self.terms if term.stage != Stage.POSTPROCESS)
        self.postprocess_terms = tuple(term for term in self.terms if term.stage == Stage.POSTPROCESS)

    def with_translator(self, translator: BaseTranslator) -> "DictionaryTranslator":
        """Return a dictionary translator over the same terms and language, using another backend."""
        return DictionaryTranslator(self.target_lang, translator, self.terms)

    def transform(self, segments: Iterable[Segment], terms: Sequence[Term]) -> list[Segment]:
        """
        Replace term matches in the text segments with markers.

        Marker segments pass through unchanged.
        """
        transformed: list[Segment] = []
        for segment in segments:
            if segment.is_text:
                self._scan_text(segment.text, terms, 0, transformed)
            else:
                transformed.append(segment)
        return transformed

    def _scan_text(self, text: str, terms: Sequence[Term], first: int, out: list[Segment]) -> None:
        """
        Scan `text` with `terms[first:]`, appending segments to `out`.

        Each term consumes all of its matches before the next term is tried. The
        text in front of a match has not been seen by the terms after the current
        one yet, so it is scanned by them before the marker is emitted.
        """
        index = first
        while text and index < len(terms):
            term = terms[index]
            if term.should_apply(self):
                skip = 0
                while skip < len(text):
                    found = term.scan(self, text[skip:])
                    if found is None:
                        break
                    start, end, payload = found
                    if end <= start:
                        # An empty match never consumes text; search again one character further on.
                        skip += start + 1
                        continue
                    start, end = start + skip, end + skip
                    skip = 0
                    self._scan_text(text[:start], terms, index + 1, out)
                    out.append(Segment.of_marker(term, payload))
                    text = text[end:]
            index += 1

        if text:
            out.append(Segment.of_text(text))

    async def inverse_transform(self, segments: Iterable[Segment], accept: Callable[[Term], bool]) -> list[Segment]:
        """
        Render the markers whose term is accepted and merge the resulting text.

        Markers that are not accepted are kept for a later stage.
        """
        rendered: list[Segment] = []
        for segment in segments:
            if segment.is_marker and segment.term is not None and accept(segment.term):
                text = await segment.term.process(self, segment.payload)
                rendered.append(Segment.of_text(text))
            else:
                rendered.append(segment)
        return coalesce(rendered)

    async def translate(self, text: str) -> str:
        """Translate `text`, applying the dictionary before and after the backend call."""
        transformed = self.transform([Segment.of_text(text)], self.preprocess_terms)
        preprocessed = await self.inverse_transform(transformed, _is_preprocess)
        encoded, markers = codec.encode(preprocessed)

        if not self.translator.is_passthrough:
            logger.debug("Translating with %s: %s", self.translator.name, encoded)
        translated = await self.translator.translate(encoded)
        if not self.translator.is_passthrough:
            logger.debug("Translated by %s: %s", self.translator.name, translated)

        decoded = codec.decode(translated, markers)
        postprocessed = self.transform(decoded, self.postprocess_terms)
        processed = await self.inverse_transform(postprocessed, _accept_all)
        if not processed:
            return ""
        return processed[0].text
