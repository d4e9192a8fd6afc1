"""Custom logging utilities for the TermShield application."""
# src/termshield/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path

from . import paths


def _format_utc_time(formatter: logging.Formatter, record: logging.LogRecord, datefmt: str | None) -> str:
    """Format the record time in UTC with 6-digit microseconds and a 'Z' suffix."""
    ct = formatter.converter(record.created)
    s = time.strftime(datefmt, ct) if datefmt else time.strftime(formatter.default_time_format, ct)
    # Calculate microseconds from the fractional part of `created`
    microseconds = int((record.created - int(record.created)) * 1_000_000)
    return f"{s}.{microseconds:06d}Z"


# Console Log Formatter
class ConsoleFormatter(logging.Formatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The TermShield application version.

        """
        super().__init__(
            fmt=f"%(asctime)s | TermShield - {version} | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self, record, datefmt)


# File Log Formatter
class FileFormatter(logging.Formatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__(
            fmt="%(asctime)s | %(name)-24s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self, record, datefmt)


def setup_logging(version: str, *, debug: bool = False, log_dir: Path | None = None) -> None:
    """
    Configure the root logger for the TermShield application.

    This function sets up a dual-logging system:
    1.  Console: User-facing messages on stderr. Level is INFO by default, DEBUG if debug=True.
    2.  File (DEBUG): Developer-facing, detailed logs written to 'debug.log'
        in `log_dir` when debug=True.

    Args:
        version: The application version, included in console logs.
        debug: If True, enables detailed file logging and sets console level to DEBUG.
        log_dir: Directory for the debug log. Defaults to the project log directory.

    """
    root_logger = logging.getLogger()
    # Clear any handlers created by basicConfig or previous setups
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(level)

    # --- Console Handler ---
    # stderr keeps stdout free for translation results.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug:
        try:
            target_dir = log_dir or paths.get_log_dir()
            paths.ensure_dir_exists(target_dir)
            log_file_path = target_dir / "debug.log"

            # --- File Handler (DEBUG) ---
            file_handler = FileHandler(log_file_path, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger().info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file_path,
            )
        except OSError:
            # If creating the log file fails, we should still continue with console logging.
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
