"""Ties the configuration, the term store and the dictionary translator together."""

import logging

from .config import ShieldConfig
from .dictionary import DictionaryTranslator
from .store import TermSet
from .translators import TRANSLATOR_MAPPING
from .translators.base import BaseTranslator

logger = logging.getLogger(__name__)

# A cache to store initialized translator instances, keyed by provider and target language.
_translator_cache: dict[tuple[str, str], BaseTranslator] = {}


def clear_translator_cache() -> None:
    """Forget every cached translator instance."""
    _translator_cache.clear()


def get_translator(provider_name: str, config: ShieldConfig, target_lang: str) -> BaseTranslator:
    """
    Retrieve an initialized translator instance, using a cache to avoid re-initialization.

    The translator class is looked up in `TRANSLATOR_MAPPING` and initialized
    with the provider settings from the configuration.

    Args:
        provider_name: The provider key (e.g., "nop", "mock").
        config: The application configuration.
        target_lang: The language the translator is bound to.

    Raises:
        ValueError: If no translator is registered under `provider_name`.

    """
    provider_name_lower = provider_name.lower()
    cache_key = (provider_name_lower, target_lang)
    if cache_key in _translator_cache:
        return _translator_cache[cache_key]

    translator_class = TRANSLATOR_MAPPING.get(provider_name_lower)
    if translator_class is None:
        msg = f"Unknown translator provider: '{provider_name}'. Available: {', '.join(sorted(TRANSLATOR_MAPPING))}"
        raise ValueError(msg)

    settings = config.providers.get(provider_name_lower)
    translator = translator_class(settings=settings, target_lang=target_lang)
    logger.debug("Initialized translator %r for provider '%s' and language '%s'.", translator, provider_name_lower, target_lang)
    _translator_cache[cache_key] = translator
    return translator


async def translate_text(
    text: str,
    target_lang: str,
    *,
    config: ShieldConfig,
    term_set: TermSet,
    translator: BaseTranslator | None = None,
) -> str:
    """
    Translate one text into `target_lang` with the dictionary applied.

    Args:
        text: The text to translate.
        target_lang: The target language, e.g. 'en' or 'zh-TW'.
        config: Used to pick the translator when none is given.
        term_set: The terms to apply. The set is held for the whole call.
        translator: The backend to use. Defaults to the one configured for `target_lang`.

    Returns:
        The translated text.

    """
    if translator is None:
        translator = get_translator(config.translator_for(target_lang), config, target_lang)
    dictionary = DictionaryTranslator(target_lang, translator, term_set.terms)
    logger.debug("Translating %d characters into '%s' with %s and %d term(s).", len(text), target_lang, translator.name, len(term_set))
    return await dictionary.translate(text)
