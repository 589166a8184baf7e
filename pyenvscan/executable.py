"""Finding Python executables inside environment directories."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_IS_WINDOWS = os.name == "nt"
_BIN_DIR = "Scripts" if _IS_WINDOWS else "bin"
_PYTHON_EXE = "python.exe" if _IS_WINDOWS else "python"
_PYTHON3_EXE = "python3.exe" if _IS_WINDOWS else "python3"

_WINDOWS_EXE = re.compile(r"python(\d+\.?)*.exe")
_UNIX_EXE = re.compile(r"python(\d+\.?)*$")

_FOLDERS_TO_IGNORE = frozenset(
    {
        "node_modules",
        ".git",
        ".tox",
        ".nox",
        ".hypothesis",
        ".ipynb_checkpoints",
        ".eggs",
        ".coverage",
        ".cache",
        ".pyre",
        ".ptype",
        ".pytest_cache",
        "__pycache__",
        "__pypackages__",
        ".mypy_cache",
        "cython_debug",
        "env.bak",
        "venv.bak",
        # The parent of a bin or Scripts folder is most likely an environment.
        "Scripts",
        "bin",
    }
)


def find_executable(env_path: str | os.PathLike) -> Path | None:
    """Return the first of the usual ``python`` locations that exists in ``env_path``."""
    env_path = Path(env_path)
    candidates = (
        env_path / _BIN_DIR / _PYTHON_EXE,
        env_path / _BIN_DIR / _PYTHON3_EXE,
        env_path / _PYTHON_EXE,
        env_path / _PYTHON3_EXE,
    )
    return next((path for path in candidates if path.exists()), None)


def find_executables(env_path: str | os.PathLike) -> list[Path]:
    """Return all ``python`` and ``pythonX.Y`` files of an environment, sorted."""
    env_path = Path(env_path)
    # Shims are not real executables.
    if env_path.parts[-2:] == (".pyenv", "shims"):
        return []
    if (env_path / _BIN_DIR).exists():
        env_path = env_path / _BIN_DIR

    # Listing a directory is expensive, so only do it where an interpreter is likely.
    if not (
        (env_path / _PYTHON_EXE).exists()
        or (env_path / _PYTHON3_EXE).exists()
        or env_path.name == _BIN_DIR
    ):
        return []

    try:
        entries = list(os.scandir(env_path))
    except OSError:
        return []
    executables = [
        Path(entry.path)
        for entry in entries
        if Path(entry.path).is_file() and is_python_executable_name(entry.path)
    ]
    # Puts `python` ahead of `python3.10`.
    return sorted(executables)


def is_python_executable_name(exe: str | os.PathLike) -> bool:
    """Tell whether the file name looks like a Python interpreter (not ``pythonw``)."""
    name = Path(exe).name.lower()
    if not name.startswith("python"):
        return False
    pattern = _WINDOWS_EXE if _IS_WINDOWS else _UNIX_EXE
    return pattern.search(name) is not None


def should_search_for_environments_in_path(path: str | os.PathLike) -> bool:
    """Tell whether a directory may hold environments worth scanning."""
    path = Path(path)
    if path.name in _FOLDERS_TO_IGNORE:
        logger.debug("Ignoring folder: %s", path)
        return False
    return True