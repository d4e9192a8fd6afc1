"""Handles the parsing and validation of the TermShield configuration file."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ProviderSettings(BaseModel):
    """Settings for a specific translation provider."""

    api_key: str | None = None
    source_lang: str = "auto"
    extra: dict[str, Any] | None = None


def _build_providers_from_dict(providers_data: dict[str, Any]) -> dict[str, ProviderSettings]:
    """
    Build provider settings keyed by lowercase provider key.

    A provider listed without a mapping (e.g. `nop:`) gets the default settings.
    """
    return {str(name).lower(): ProviderSettings(**(p_config if isinstance(p_config, dict) else {})) for name, p_config in providers_data.items()}


class ShieldConfig(BaseModel):
    """The root configuration for TermShield."""

    model_config = ConfigDict(extra="forbid")

    terms: Path | None = None
    default_translator: str = "nop"
    languages: dict[str, str] = Field(default_factory=dict)
    providers: dict[str, ProviderSettings] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "ShieldConfig":
        """
        Create a ShieldConfig object from a dictionary.

        Args:
            data: The parsed configuration mapping.
            base_dir: Directory against which a relative `terms` path is resolved.

        """
        data = dict(data)
        providers_data = data.get("providers") or {}
        if not isinstance(providers_data, dict):
            msg = "Invalid or missing configuration: 'providers' must be a mapping."
            raise ValueError(msg)  # noqa: TRY004
        try:
            data["providers"] = _build_providers_from_dict(providers_data)
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e

        terms = data.get("terms")
        if terms is not None and base_dir is not None and not Path(terms).is_absolute():
            data["terms"] = base_dir / terms

        try:
            return cls(**data)
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e

    def translator_for(self, target_lang: str) -> str:
        """
        Resolve the provider key used for a target language.

        The exact language is tried first, then its main part (`zh` for `zh-TW`),
        then the default translator.
        """
        if target_lang in self.languages:
            return self.languages[target_lang]
        main_lang = target_lang.partition("-")[0]
        return self.languages.get(main_lang, self.default_translator)


class StrictSingleQuoteLoader(yaml.SafeLoader):
    """
    A custom YAML loader that enforces the use of single quotes for all strings.

    It raises an error if any double-quoted strings are found. Single-quoted
    scalars keep backslashes literal, which is what regular expressions need.
    """


def _construct_scalar(loader: StrictSingleQuoteLoader, node: yaml.ScalarNode) -> Any:  # noqa: ANN401
    """Construct a scalar node, but first check its style."""
    if node.style == '"':
        # Get line and column information for a helpful error message
        line = node.start_mark.line + 1
        col = node.start_mark.column + 1
        msg = f"Double-quoted string found at line {line}, column {col}. Please use single quotes (') instead."
        raise yaml.YAMLError(msg)
    return loader.construct_scalar(node)


# Add the custom constructor to the loader
StrictSingleQuoteLoader.add_constructor("tag:yaml.org,2002:str", _construct_scalar)


def load_yaml(path: Path) -> Any:  # noqa: ANN401
    """
    Load a YAML document with the strict single-quote loader.

    Raises:
        yaml.YAMLError: If there is a syntax error or a double-quoted string.

    """
    try:
        with path.open(encoding="utf-8") as f:
            return yaml.load(f, Loader=StrictSingleQuoteLoader)  # noqa: S506
    except yaml.YAMLError as e:
        msg = f"Error parsing YAML file {path}: {e}"
        raise yaml.YAMLError(msg) from e


def load_config(config_path: str | Path) -> ShieldConfig:
    """
    Load, parse, and validate the YAML configuration file.

    Args:
        config_path: The path to the config.yaml file.

    Returns:
        A ShieldConfig object representing the validated configuration.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the configuration is invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    data = load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Invalid or missing configuration: config file must be a YAML mapping (dictionary)."
        raise ValueError(msg)  # noqa: TRY004

    config = ShieldConfig.from_dict(data, base_dir=path.parent)
    logger.debug("Loaded configuration from %s", path)
    return config
