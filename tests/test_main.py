"""Tests for the main CLI entry point."""

import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from termshield import __version__
from termshield.__main__ import _load_config, _parse_args, main
from termshield.config import ShieldConfig
from termshield.workflow import clear_translator_cache


class TestParseArgs(unittest.TestCase):
    """Test suite for CLI argument parsing."""

    @patch("sys.argv", ["termshield", "translate", "hello", "--to", "zh-TW"])
    def test_parse_translate_defaults(self) -> None:
        """1. Translate: Parses the text and target language with defaults for the rest."""
        args = _parse_args()
        assert args.command == "translate"
        assert args.text == "hello"
        assert args.target_lang == "zh-TW"
        assert args.translator is None
        assert args.config is None
        assert args.terms is None
        assert args.debug is False

    @patch("sys.argv", ["termshield", "translate", "-", "--to", "en", "--translator", "mock", "--terms", "t.yaml", "--debug"])
    def test_parse_translate_all_options(self) -> None:
        """2. Translate: Parses every option."""
        args = _parse_args()
        assert args.text == "-"
        assert args.translator == "mock"
        assert args.terms == Path("t.yaml")
        assert args.debug is True

    @patch("sys.argv", ["termshield", "check", "terms.jsonl"])
    def test_parse_check(self) -> None:
        """3. Check: Parses the term file path."""
        args = _parse_args()
        assert args.command == "check"
        assert args.terms_file == Path("terms.jsonl")

    @patch("sys.argv", ["termshield", "translate", "hello"])
    def test_parse_translate_requires_language(self) -> None:
        """4. Failure: The target language is required."""
        with pytest.raises(SystemExit) as exc_info, patch("sys.stderr", new_callable=io.StringIO):
            _parse_args()
        assert exc_info.value.code == 2

    @patch("sys.argv", ["termshield", "--version"])
    def test_parse_args_version_flag(self) -> None:
        """5. Version Flag: --version prints the version and exits successfully."""
        with pytest.raises(SystemExit) as exc_info, patch("sys.stdout", new_callable=io.StringIO) as stdout:
            _parse_args()
        assert exc_info.value.code == 0
        assert f"TermShield {__version__}" in stdout.getvalue()

    @patch("sys.argv", ["termshield"])
    def test_parse_args_no_arguments(self) -> None:
        """6. No Arguments: Help is printed and the process exits with an error."""
        with pytest.raises(SystemExit) as exc_info, patch("sys.stderr", new_callable=io.StringIO):
            _parse_args()
        assert exc_info.value.code == 1


class TestLoadConfig(unittest.TestCase):
    """Test suite for configuration discovery."""

    @patch("termshield.__main__.paths.get_config_file_path", side_effect=FileNotFoundError("none"))
    def test_defaults_outside_project(self, _mock_get_path: object) -> None:
        """1. Defaults: Outside a project the default configuration is used."""
        assert _load_config(None) == ShieldConfig()

    @patch("termshield.__main__.load_config")
    @patch("termshield.__main__.paths.get_config_file_path")
    def test_discovered_config(self, mock_get_path: object, mock_load_config: object) -> None:
        """2. Discovery: The project configuration is loaded when found."""
        mock_get_path.return_value = Path("/project/.termshield/config.yaml")
        mock_load_config.return_value = ShieldConfig(default_translator="mock")

        with self.assertLogs("termshield.__main__", level="INFO") as cm:
            config = _load_config(None)

        assert config.default_translator == "mock"
        mock_load_config.assert_called_once_with(Path("/project/.termshield/config.yaml"))
        assert "Loading configuration from" in cm.output[0]


class TestMain(unittest.TestCase):
    """Test suite for running commands end to end."""

    def setUp(self) -> None:
        """Create a scratch directory with a term file and no project configuration."""
        clear_translator_cache()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        self.terms_path = self.tmp_path / "terms.jsonl"
        self.terms_path.write_text(json.dumps({"_id": "cat", "input": "猫", "output": "cat", "targetLang": "en"}, ensure_ascii=False) + "\n", encoding="utf-8")
        patcher = patch("termshield.__main__.paths.get_config_file_path", side_effect=FileNotFoundError("none"))
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        """Reset logging and remove the scratch directory."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)
        clear_translator_cache()
        self._tmp.cleanup()

    def _run(self, *argv: str) -> str:
        with patch("sys.argv", ["termshield", *argv]), patch("sys.stdout", new_callable=io.StringIO) as stdout:
            main()
        return stdout.getvalue()

    def test_translate_with_terms(self) -> None:
        """1. Translate: The term file is applied and the result printed."""
        assert self._run("translate", "私は猫が好き", "--to", "en", "--terms", str(self.terms_path)) == "私はcatが好き\n"

    def test_translate_with_translator(self) -> None:
        """2. Translate: An explicit provider key selects the translator."""
        assert self._run("translate", "猫", "--to", "en", "--terms", str(self.terms_path), "--translator", "mock") == "[MOCK] cat\n"

    def test_translate_reads_stdin(self) -> None:
        """3. Translate: '-' reads the text from stdin."""
        with patch("sys.stdin", io.StringIO("a #tag")):
            assert self._run("translate", "-", "--to", "en") == "a #tag\n"

    def test_translate_with_config_file(self) -> None:
        """4. Translate: An explicit config routes languages and points at the term file."""
        config_path = self.tmp_path / "config.yaml"
        config_path.write_text("terms: 'terms.jsonl'\nlanguages:\n  en: 'mock'\n", encoding="utf-8")
        assert self._run("translate", "猫", "--to", "en", "--config", str(config_path)) == "[MOCK] cat\n"

    def test_translate_missing_config(self) -> None:
        """5. Failure: A missing config file exits with status 1."""
        with self.assertLogs("termshield.__main__", level="ERROR") as cm, pytest.raises(SystemExit) as exc_info:
            self._run("translate", "x", "--to", "en", "--config", str(self.tmp_path / "nope.yaml"))
        assert exc_info.value.code == 1
        assert "Configuration file not found" in cm.output[0]

    def test_translate_unknown_translator(self) -> None:
        """6. Failure: An unknown provider key exits with status 1."""
        with self.assertLogs("termshield.__main__", level="ERROR"), pytest.raises(SystemExit) as exc_info:
            self._run("translate", "x", "--to", "en", "--translator", "bing")
        assert exc_info.value.code == 1

    def test_translate_backend_failure(self) -> None:
        """7. Failure: Unexpected errors are logged and exit with status 1."""
        with patch("termshield.__main__.translate_text", side_effect=RuntimeError("boom")), self.assertLogs("termshield.__main__", level="ERROR") as cm, pytest.raises(SystemExit) as exc_info:
            self._run("translate", "x", "--to", "en")
        assert exc_info.value.code == 1
        assert any("unexpected error" in line for line in cm.output)

    def test_check_valid(self) -> None:
        """8. Check: A valid term file passes."""
        with self.assertLogs("termshield.__main__", level="INFO") as cm:
            self._run("check", str(self.terms_path))
        assert "All 1 term(s)" in cm.output[-1]

    def test_check_invalid(self) -> None:
        """9. Check: Every invalid term is logged and the exit status is 1."""
        bad_path = self.tmp_path / "bad.jsonl"
        bad_path.write_text('{"input": "(", "output": "x"}\n{"input": "a"}\n', encoding="utf-8")

        with self.assertLogs("termshield.__main__", level="ERROR") as cm, pytest.raises(SystemExit) as exc_info:
            self._run("check", str(bad_path))

        assert exc_info.value.code == 1
        assert "Invalid term #0" in cm.output[0]
        assert "Invalid term #1" in cm.output[1]
        assert "2 of 2 term(s)" in cm.output[2]


if __name__ == "__main__":
    unittest.main()
