"""Locating and reading the ``pyvenv.cfg`` file of a virtual environment."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

PYVENV_CONFIG_FILE = "pyvenv.cfg"

_VERSION = re.compile(r"^version\s*=\s*(\d+\.\d+\.\d+)$")
_VERSION_INFO = re.compile(r"^version_info\s*=\s*(\d+\.\d+\.\d+.*)$")
_BIN_DIR = "Scripts" if os.name == "nt" else "bin"


def _lines(text: str):
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


@dataclass(frozen=True)
class PyVenvCfg:
    """The Python version recorded in a ``pyvenv.cfg`` file."""

    version: str

    @classmethod
    def find(cls, path: str | os.PathLike) -> PyVenvCfg | None:
        """Find and parse the ``pyvenv.cfg`` belonging to ``path``, if any."""
        cfg_file = find_pyvenv_cfg(path)
        if cfg_file is None:
            return None
        return parse_pyvenv_cfg(cfg_file)


def find_pyvenv_cfg(path: str | os.PathLike) -> Path | None:
    """Return the ``pyvenv.cfg`` in ``path``, or in its parent when ``path`` is a bin directory."""
    path = Path(path)
    cfg = path / PYVENV_CONFIG_FILE
    if cfg.exists():
        return cfg
    if path.name == _BIN_DIR:
        cfg = path.parent / PYVENV_CONFIG_FILE
        if cfg.exists():
            return cfg
    return None


def parse_pyvenv_cfg(file: str | os.PathLike) -> PyVenvCfg | None:
    """Read the version from a ``pyvenv.cfg`` file; ``None`` if absent or unreadable."""
    try:
        contents = Path(file).read_text(encoding="utf-8")
    except (OSError, ValueError):
        return None
    for line in _lines(contents):
        if "version" not in line:
            continue
        for pattern in (_VERSION, _VERSION_INFO):
            match = pattern.match(line)
            if match:
                return PyVenvCfg(match.group(1))
    return None