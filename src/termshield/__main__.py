"""Main entry point for the TermShield command-line interface."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

from . import __version__, paths
from .config import ShieldConfig, load_config
from .logging_utils import setup_logging
from .store import TermSet, TermStore, load_definitions, validate_definitions
from .workflow import get_translator, translate_text

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    """
    Parse command-line arguments for the TermShield CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(description="TermShield dictionary-protected translation")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"TermShield {__version__}",
        help="Show the version number and exit.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'translate' command
    translate_parser = subparsers.add_parser("translate", help="Translate a text with the dictionary applied.")
    translate_parser.add_argument("text", help="The text to translate, or '-' to read it from stdin.")
    translate_parser.add_argument(
        "--to",
        dest="target_lang",
        required=True,
        help="The target language, e.g. 'en' or 'zh-TW'.",
    )
    translate_parser.add_argument(
        "--translator",
        default=None,
        help="Provider key of the translator to use (default: from the configuration).",
    )
    translate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the configuration file (default: discovered from .termshield/).",
    )
    translate_parser.add_argument(
        "--terms",
        type=Path,
        default=None,
        help="Path to the term file (default: from the configuration).",
    )
    translate_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug level logging.",
    )

    # 'check' command
    check_parser = subparsers.add_parser("check", help="Validate every term in a term file.")
    check_parser.add_argument("terms_file", type=Path, help="The term file to validate.")
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug level logging.",
    )

    # If no arguments are provided, print help
    if len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    return parser.parse_args()


def _log_dir() -> Path:
    """Return the project log directory, or one under the current directory outside a project."""
    try:
        return paths.get_log_dir()
    except FileNotFoundError:
        return Path.cwd() / paths.PROJECT_SUBDIR / paths.LOG_SUBDIR


def _load_config(config_path: Path | None) -> ShieldConfig:
    """
    Load the configuration from `config_path`, or discover it from the current directory.

    Outside a TermShield project, the default configuration is used.
    """
    if config_path is not None:
        logger.info("Loading configuration from: %s", config_path)
        return load_config(config_path)
    try:
        discovered = paths.get_config_file_path()
    except FileNotFoundError:
        logger.debug("No configuration found; using defaults.")
        return ShieldConfig()
    logger.info("Loading configuration from: %s", discovered)
    return load_config(discovered)


def _load_terms(terms_path: Path | None) -> TermSet:
    """Load the term file, or fall back to the built-in terms when there is none."""
    if terms_path is None:
        logger.debug("No term file configured; only built-in terms apply.")
        return TermSet()
    return TermStore(terms_path).load()


def _translate(args: argparse.Namespace) -> None:
    """Run the 'translate' command and print the result."""
    text = sys.stdin.read() if args.text == "-" else args.text
    config = _load_config(args.config)
    term_set = _load_terms(args.terms or config.terms)
    translator = get_translator(args.translator, config, args.target_lang) if args.translator else None
    result = asyncio.run(translate_text(text, args.target_lang, config=config, term_set=term_set, translator=translator))
    sys.stdout.write(result + "\n")


def _check(terms_file: Path) -> bool:
    """
    Run the 'check' command.

    Returns:
        True if every term in the file is valid.

    """
    definitions, errors = validate_definitions(load_definitions(terms_file))
    for error in errors:
        logger.error("%s", error)
    if errors:
        logger.error("%d of %d term(s) in %s are invalid.", len(errors), len(definitions) + len(errors), terms_file)
        return False
    logger.info("All %d term(s) in %s are valid.", len(definitions), terms_file)
    return True


def main() -> None:
    """
    Run the main entry point for the TermShield command-line interface.

    1. Parses command-line arguments.
    2. Sets up logging.
    3. Dispatches to the requested command.
    """
    args = _parse_args()
    if args.command is None:
        logger.error("No command given. Use 'translate' or 'check'.")
        sys.exit(1)

    setup_logging(version=__version__, debug=args.debug, log_dir=_log_dir() if args.debug else None)

    try:
        if args.command == "check":
            if not _check(args.terms_file):
                sys.exit(1)
            return
        _translate(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("%s", e)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        logger.exception("An unexpected error occurred")
        logger.critical("An unrecoverable error occurred. Please check the logs for details.")
        sys.exit(1)


if __name__ == "__main__":
    main()
