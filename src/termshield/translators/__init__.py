"""
Translator implementations.

Each translator adheres to the `BaseTranslator` interface and can be
selected by provider key in the configuration. Backends living outside this
package register themselves by adding their class to `TRANSLATOR_MAPPING`.
"""

from .base import BaseTranslator
from .mock_translator import MockTranslator, MockTranslatorError
from .nop_translator import NopTranslator, PassthroughTranslator

# Central mapping from provider key to translator class.
# This allows for dynamic instantiation of translators.
TRANSLATOR_MAPPING: dict[str, type[BaseTranslator]] = {
    "nop": NopTranslator,
    "mock": MockTranslator,
}

__all__ = [
    "TRANSLATOR_MAPPING",
    "BaseTranslator",
    "MockTranslator",
    "MockTranslatorError",
    "NopTranslator",
    "PassthroughTranslator",
]
