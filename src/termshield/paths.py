"""
Locations of the files a TermShield project keeps on disk.

A project is any directory holding `.termshield/config.yaml` (or `config.yml`).
Commands run anywhere below it find it by walking up from the working directory.
"""

from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path
from typing import Final

PROJECT_SUBDIR: Final[Path] = Path(".termshield")
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = ("config.yaml", "config.yml")
LOG_SUBDIR: Final[str] = "logs"


def _config_file_in(directory: Path) -> Path | None:
    """Return the config file of `directory` if it is a project root."""
    candidates = (directory / PROJECT_SUBDIR / name for name in CONFIG_FILE_NAMES)
    return next((candidate for candidate in candidates if candidate.is_file()), None)


def _walk_up(start: Path) -> Iterator[Path]:
    yield start
    yield from start.parents


@lru_cache(maxsize=8)
def find_project_root(start_path: Path | None = None) -> Path:
    """
    Return the nearest directory at or above `start_path` (default: CWD) that is a project root.

    Raises:
        FileNotFoundError: If no directory up to the filesystem root holds a config file.

    """
    start = (start_path or Path.cwd()).resolve()
    root = next((directory for directory in _walk_up(start) if _config_file_in(directory) is not None), None)
    if root is None:
        names = " or ".join(CONFIG_FILE_NAMES)
        msg = f"Could not find a configuration file ({names}) in a '{PROJECT_SUBDIR}' directory at or above {start}."
        raise FileNotFoundError(msg)
    return root


def get_config_file_path(root_path: Path | None = None) -> Path:
    """
    Return the config file of the project containing `root_path`.

    Raises:
        FileNotFoundError: If there is no project, or its config file was removed after discovery.

    """
    config_file = _config_file_in(find_project_root(root_path))
    if config_file is None:
        msg = "Configuration file disappeared after being found."
        raise FileNotFoundError(msg)
    return config_file


def get_log_dir(root_path: Path | None = None) -> Path:
    """Return where debug logs of the project containing `root_path` are written."""
    return find_project_root(root_path) / PROJECT_SUBDIR / LOG_SUBDIR


def ensure_dir_exists(path: Path) -> None:
    """Create `path` and its parents unless they already exist."""
    path.mkdir(parents=True, exist_ok=True)
