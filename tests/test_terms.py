"""Tests for the term implementations."""

import unittest

import regex

from termshield.dictionary import DictionaryTranslator
from termshield.terms import BUILTIN_TERMS, EmojiTerm, HashtagTerm, PatternTerm, TermConfig, UrlTerm, build_term, match_language
from termshield.translators.mock_translator import MockTranslator
from termshield.translators.nop_translator import NopTranslator
from termshield.types import FilterList, Stage, TermDefinition


def _ctx(target_lang: str = "en", translator: object = None) -> DictionaryTranslator:
    return DictionaryTranslator(target_lang, translator or NopTranslator(), [])


class TestMatchLanguage(unittest.TestCase):
    """Test suite for target language matching."""

    def test_no_filter_matches_all(self) -> None:
        """1. No Filter: Every language matches."""
        assert match_language(None, "en")
        assert match_language(None, "zh-TW")

    def test_main_part_must_match(self) -> None:
        """2. Main Part: Different main languages never match."""
        assert match_language("en", "en")
        assert not match_language("en", "ja")

    def test_sub_part_compared_only_when_both_present(self) -> None:
        """3. Region: Region parts are compared only when both sides carry one."""
        assert match_language("zh", "zh-TW")
        assert match_language("zh-TW", "zh")
        assert match_language("zh-TW", "zh-TW")
        assert not match_language("zh-CN", "zh-TW")


class TestShouldApply(unittest.TestCase):
    """Test suite for term filters against a translation context."""

    def test_unfiltered_term_applies(self) -> None:
        """1. No Filters: The term applies everywhere."""
        term = PatternTerm(regex.compile("a"), "b")
        assert term.should_apply(_ctx())

    def test_language_filter(self) -> None:
        """2. Language: The target language filter is honoured."""
        term = PatternTerm(regex.compile("a"), "b", TermConfig(target_lang="zh"))
        assert term.should_apply(_ctx("zh-TW"))
        assert not term.should_apply(_ctx("en"))

    def test_translator_include_filter(self) -> None:
        """3. Translator Include: Applies only to listed translators."""
        term = PatternTerm(regex.compile("a"), "b", TermConfig(translator=FilterList(exclude=False, names=("Mock",))))
        assert term.should_apply(_ctx(translator=MockTranslator()))
        assert not term.should_apply(_ctx(translator=NopTranslator()))

    def test_translator_exclude_filter(self) -> None:
        """4. Translator Exclude: Applies to every translator except the listed ones."""
        term = PatternTerm(regex.compile("a"), "b", TermConfig(translator=FilterList(exclude=True, names=("Nop",))))
        assert term.should_apply(_ctx(translator=MockTranslator()))
        assert not term.should_apply(_ctx(translator=NopTranslator()))


class TestPatternTerm(unittest.IsolatedAsyncioTestCase):
    """Test suite for regular expression terms."""

    def test_scan_finds_first_match(self) -> None:
        """1. Scan: Returns the span of the first match and no payload."""
        term = PatternTerm(regex.compile(r"\d+"), "N")
        assert term.scan(_ctx(), "ab 12 cd 345") == (3, 5, None)

    def test_scan_without_match(self) -> None:
        """2. Scan: Returns None when the pattern does not occur."""
        term = PatternTerm(regex.compile("x"), "y")
        assert term.scan(_ctx(), "abc") is None

    async def test_process_returns_literal_output(self) -> None:
        """3. Process: The output is literal; backreferences are not expanded."""
        term = PatternTerm(regex.compile(r"(\w+)"), r"\1!")
        assert await term.process(_ctx(), None) == r"\1!"

    def test_from_definition(self) -> None:
        """4. Build: Stage and filters are taken from the definition."""
        definition = TermDefinition.model_validate({"input": "猫", "output": "cat", "targetLang": "en", "type": "preprocess"})
        term = build_term(definition)
        assert isinstance(term, PatternTerm)
        assert term.stage == Stage.PREPROCESS
        assert term.config.target_lang == "en"
        assert term.source == "猫"
        assert term.output == "cat"


class TestBuiltinTerms(unittest.IsolatedAsyncioTestCase):
    """Test suite for the URL, hashtag and emoji terms."""

    def test_builtin_order(self) -> None:
        """1. Order: URL, hashtag, then emoji."""
        assert [type(term) for term in BUILTIN_TERMS] == [UrlTerm, HashtagTerm, EmojiTerm]

    def test_url_scan_excludes_trailing_punctuation(self) -> None:
        """2. URL: Sentence punctuation after a URL is not part of it."""
        text = "See https://example.com/a?b=1."
        start, end, payload = UrlTerm().scan(_ctx(), text)
        assert payload == "https://example.com/a?b=1"
        assert text[start:end] == payload

    def test_url_scan_www(self) -> None:
        """3. URL: Bare 'www.' addresses are found."""
        result = UrlTerm().scan(_ctx(), "go to www.example.org now")
        assert result is not None
        assert result[2] == "www.example.org"

    def test_hashtag_scan(self) -> None:
        """4. Hashtag: The payload is the body without '#'."""
        assert HashtagTerm().scan(_ctx(), "hello #foo bar") == (6, 10, "foo")

    def test_hashtag_requires_letter(self) -> None:
        """5. Hashtag: Numbers and HTML entities are not hashtags."""
        assert HashtagTerm().scan(_ctx(), "item #1") is None
        assert HashtagTerm().scan(_ctx(), "it&#39;s") is None
        assert HashtagTerm().scan(_ctx(), "a#b") is None

    def test_emoji_scan_sequences(self) -> None:
        """6. Emoji: Modifier sequences are matched as one unit."""
        result = EmojiTerm().scan(_ctx(), "ok \U0001f44d\U0001f3fd!")
        assert result is not None
        assert result[2] == "\U0001f44d\U0001f3fd"

    def test_emoji_ignores_plain_digits(self) -> None:
        """7. Emoji: Plain digits and '#' are not emoji."""
        assert EmojiTerm().scan(_ctx(), "room 42 #") is None

    async def test_url_and_emoji_render_unchanged(self) -> None:
        """8. Process: URLs and emoji are rendered as found."""
        assert await UrlTerm().process(_ctx(), "https://a.io") == "https://a.io"
        assert await EmojiTerm().process(_ctx(), "\U0001f600") == "\U0001f600"

    async def test_hashtag_body_uses_dictionary_only(self) -> None:
        """9. Hashtag: The body is rewritten by the dictionary, never by the backend."""
        translator = MockTranslator()
        foo = PatternTerm(regex.compile("foo"), "baz")
        ctx = DictionaryTranslator("en", translator, [*BUILTIN_TERMS, foo])

        assert await HashtagTerm().process(ctx, "foo") == "#baz"
        assert translator.received == []


if __name__ == "__main__":
    unittest.main()
