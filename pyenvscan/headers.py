"""Reading the Python version from the ``patchlevel.h`` header of an install."""

from __future__ import annotations

import os
import re
from pathlib import Path

_VERSION = re.compile(r'#define\s+PY_VERSION\s+"((\d+\.?)*.*)"')
_BIN_DIR = "Scripts" if os.name == "nt" else "bin"


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, ValueError):
        return None


def _read_from_subdirectories(headers_path: Path) -> str:
    """Look for ``patchlevel.h`` in sub directories such as ``python3.10``."""
    try:
        entries = sorted(os.scandir(headers_path), key=lambda e: e.name)
    except OSError:
        return ""
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError:
            pass
        contents = _read(Path(entry.path) / "patchlevel.h")
        if contents is not None:
            return contents
    return ""


def get_version(path: str | os.PathLike) -> str | None:
    """Return ``PY_VERSION`` from ``<prefix>/Headers`` or ``<prefix>/include``, if found."""
    path = Path(path)
    if path.name == _BIN_DIR:
        path = path.parent
    for headers_path in (path / "Headers", path / "include"):
        contents = _read(headers_path / "patchlevel.h")
        if contents is None:
            if not headers_path.exists():
                continue
            contents = _read_from_subdirectories(headers_path)
        for line in contents.split("\n"):
            match = _VERSION.search(line.rstrip("\r"))
            if match:
                return match.group(1)
    return None