"""
Loading of dictionary terms from a term file.

A term file is either YAML (a list of term mappings, or a mapping with a
`terms` list) or line-delimited JSON with one term object per line. Loading
validates every definition, sorts them into scanning order, builds the terms
and places the built-in terms in front. The result is an immutable `TermSet`
that concurrent translations share.
"""

import json
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import load_yaml
from .terms import BUILTIN_TERMS, Term, build_term
from .types import TermDefinition, sort_definitions

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")
_JSON_SUFFIXES = (".jsonl", ".json", ".ndjson")


class TermValidationError(ValueError):
    """Raised when a single term definition is invalid."""

    def __init__(self, index: int, term_id: str | None, message: str) -> None:
        """
        Initialize the error.

        Args:
            index: Position of the definition in the term file.
            term_id: The `_id` of the definition, if it has one.
            message: What is wrong with the definition.

        """
        self.index = index
        self.term_id = term_id
        self.message = message
        label = f"#{index}" if term_id is None else f"#{index} ({term_id})"
        super().__init__(f"Invalid term {label}: {message}")


class TermLoadError(ValueError):
    """Raised by strict loads when one or more definitions are invalid."""

    def __init__(self, errors: list[TermValidationError]) -> None:
        """Initialize the error with every invalid definition found."""
        self.errors = errors
        details = "; ".join(str(error) for error in errors)
        super().__init__(f"{len(errors)} invalid term(s): {details}")


@dataclass(frozen=True)
class TermSet:
    """
    A loaded, ordered set of terms.

    Attributes:
        definitions: The valid store definitions, in scanning order.
        terms: The built-in terms followed by one term per definition, in scanning order.

    """

    definitions: tuple[TermDefinition, ...] = ()
    terms: tuple[Term, ...] = BUILTIN_TERMS

    def __len__(self) -> int:
        """Return the number of terms, built-ins included."""
        return len(self.terms)


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(part) for part in item['loc']) or 'term'}: {item['msg']}" for item in error.errors())


def validate_definitions(raw_definitions: Iterable[Any]) -> tuple[list[TermDefinition], list[TermValidationError]]:
    """
    Validate raw term mappings.

    Returns:
        The valid definitions in their original order, and one error per invalid definition.

    """
    definitions: list[TermDefinition] = []
    errors: list[TermValidationError] = []
    for index, raw in enumerate(raw_definitions):
        if not isinstance(raw, dict):
            errors.append(TermValidationError(index, None, "term must be a mapping"))
            continue
        term_id = raw.get("_id")
        try:
            definitions.append(TermDefinition.model_validate(raw))
        except ValidationError as e:
            errors.append(TermValidationError(index, str(term_id) if term_id is not None else None, _format_validation_error(e)))
    return definitions, errors


def build_term_set(raw_definitions: Iterable[Any], *, strict: bool = True) -> TermSet:
    """
    Validate, sort and build terms from raw definitions.

    Args:
        raw_definitions: Term mappings as read from the store.
        strict: If True, any invalid definition aborts the load. Otherwise invalid
            definitions are logged and skipped.

    Raises:
        TermLoadError: In strict mode, if any definition is invalid.

    """
    definitions, errors = validate_definitions(raw_definitions)
    if errors:
        if strict:
            raise TermLoadError(errors)
        for error in errors:
            logger.warning("Skipping %s", error)

    ordered = sort_definitions(definitions)
    terms = BUILTIN_TERMS + tuple(build_term(definition) for definition in ordered)
    return TermSet(definitions=tuple(ordered), terms=terms)


def _load_json_lines(path: Path) -> list[Any]:
    items: list[Any] = []
    with path.open(encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                items.append(json.loads(line))
            except json.JSONDecodeError as e:
                msg = f"Invalid JSON on line {line_number} of {path}: {e}"
                raise ValueError(msg) from e
    return items


def load_definitions(path: str | Path) -> list[Any]:
    """
    Read raw term mappings from a term file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is unknown or the file is malformed.

    """
    path = Path(path)
    if not path.is_file():
        msg = f"Term file not found at: {path}"
        raise FileNotFoundError(msg)

    suffix = path.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        return _load_json_lines(path)
    if suffix not in _YAML_SUFFIXES:
        msg = f"Unsupported term file type '{suffix}'. Use one of: {', '.join(_YAML_SUFFIXES + _JSON_SUFFIXES)}"
        raise ValueError(msg)

    data = load_yaml(path)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("terms") or []
    if not isinstance(data, list):
        msg = f"Term file {path} must contain a list of terms."
        raise ValueError(msg)  # noqa: TRY004
    return data


class TermStore:
    """
    A term file and the term set most recently loaded from it.

    `reload` builds a complete new set before swapping it in, so translations
    that already hold the previous set are unaffected.
    """

    def __init__(self, path: str | Path, *, strict: bool = True) -> None:
        """
        Initialize the store. Nothing is read until `load` is called.

        Args:
            path: The term file.
            strict: Whether invalid definitions abort a load.

        """
        self.path = Path(path)
        self.strict = strict
        self._term_set = TermSet()
        self._lock = threading.Lock()

    @property
    def term_set(self) -> TermSet:
        """Return the current term set."""
        return self._term_set

    @property
    def definitions(self) -> tuple[TermDefinition, ...]:
        """Return the definitions of the current term set, in scanning order."""
        return self._term_set.definitions

    def load(self) -> TermSet:
        """Load the term file and make the result the current term set."""
        term_set = build_term_set(load_definitions(self.path), strict=self.strict)
        with self._lock:
            self._term_set = term_set
        logger.info("Loaded %d term(s) from %s", len(term_set.definitions), self.path)
        return term_set

    reload = load
