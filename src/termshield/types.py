"""Defines the term definition schema shared by the store and the term engine."""

from enum import Enum
from typing import Final

import regex
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Names of the backends the term store was designed around. Names of classes registered in
# `TRANSLATOR_MAPPING` are accepted as well, see `known_translator_names`.
KNOWN_TRANSLATOR_NAMES: Final[frozenset[str]] = frozenset({"Nop", "Google", "Microsoft", "Baidu", "DeepL", "Mock"})

_LANG_PATTERN = regex.compile(r"^[A-Za-z]+(?:-[A-Za-z0-9]+)?$")


def known_translator_names() -> frozenset[str]:
    """Return every name a term translator filter may refer to."""
    from termshield.translators import TRANSLATOR_MAPPING  # noqa: PLC0415

    return KNOWN_TRANSLATOR_NAMES | {translator_class.name for translator_class in TRANSLATOR_MAPPING.values()}


class Stage(str, Enum):
    """The pipeline stage at which a term is applied."""

    PREPROCESS = "preprocess"
    """Replaced before translation; the output is sent to the translator."""

    TRANSFORM = "transform"
    """Hidden behind a marker during translation and rendered afterwards."""

    POSTPROCESS = "postprocess"
    """Applied to the translated text only."""


class FilterList(BaseModel):
    """An include or exclude list of names."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    exclude: bool
    # Stored under the 'list' key in term files.
    names: tuple[str, ...] = Field(default=(), alias="list")

    @field_validator("names")
    @classmethod
    def _check_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        known = known_translator_names()
        unknown = [name for name in value if name not in known]
        if unknown:
            msg = f"Unknown translator name(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return value

    def contains(self, name: str) -> bool:
        """Check whether `name` passes the filter."""
        return (name in self.names) != self.exclude

    def to_list(self, all_options: list[str]) -> list[str]:
        """Expand the filter into the explicit list of accepted options."""
        if not self.exclude:
            return list(self.names)
        return [option for option in all_options if option not in self.names]

    @classmethod
    def from_list(cls, names: list[str], all_options: list[str]) -> "FilterList":
        """
        Build the most compact filter accepting exactly `names`.

        Accepting every option yields an empty exclude list. When more than half
        of the options are accepted, the missing ones are listed as exclusions.
        """
        if len(names) == len(all_options):
            return cls(exclude=True, names=())
        if len(names) * 2 > len(all_options):
            return cls(exclude=True, names=tuple(option for option in all_options if option not in names))
        return cls(exclude=False, names=tuple(names))


class TermDefinition(BaseModel):
    """A raw dictionary term, as supplied by the term store."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    input: str
    output: str
    target_lang: str | None = Field(default=None, alias="targetLang")
    translator: FilterList | None = None
    priority: int = 0
    context: FilterList | None = None
    type: Stage = Stage.TRANSFORM
    comment: str | None = None

    @field_validator("input")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            regex.compile(value)
        except regex.error as e:
            msg = f"input must be a valid regular expression: {e}"
            raise ValueError(msg) from e
        return value

    @field_validator("target_lang")
    @classmethod
    def _check_target_lang(cls, value: str | None) -> str | None:
        if value is not None and not _LANG_PATTERN.match(value):
            msg = f"targetLang must look like 'lang' or 'lang-region', got '{value}'"
            raise ValueError(msg)
        return value


def priority_key(definition: TermDefinition) -> tuple[int, bool, int]:
    """
    Return the sort key placing a definition in scanning order.

    Higher priority first, then non-postprocess terms before postprocess ones,
    then shorter input patterns first.
    """
    return (-definition.priority, definition.type == Stage.POSTPROCESS, len(definition.input))


def sort_definitions(definitions: list[TermDefinition]) -> list[TermDefinition]:
    """Sort term definitions into scanning order. Equal keys keep their original order."""
    return sorted(definitions, key=priority_key)
