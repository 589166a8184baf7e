"""Working out the Python version of an environment from files on disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import headers
from .env import resolve_symlink
from .pyvenv_cfg import PyVenvCfg

logger = logging.getLogger(__name__)

_IS_WINDOWS = os.name == "nt"
_BIN_DIR = "Scripts" if _IS_WINDOWS else "bin"


def from_header_files(prefix: str | os.PathLike) -> str | None:
    """The version given in the install's ``patchlevel.h``."""
    return headers.get_version(prefix)


def from_pyvenv_cfg(prefix: str | os.PathLike) -> str | None:
    """The version given in the environment's ``pyvenv.cfg``."""
    cfg = PyVenvCfg.find(prefix)
    return cfg.version if cfg is not None else None


def from_creator_for_virtual_env(prefix: str | os.PathLike) -> str | None:
    """The version of a virtual env, taken from the interpreter that created it."""
    prefix = Path(prefix)
    version = headers.get_version(prefix)
    if version is not None:
        return version
    executable = prefix / _BIN_DIR / "python"

    creator = _get_python_exe_used_to_create_venv(executable)
    if creator is not None:
        # It may resolve back into the same bin directory, e.g. to python3.10.
        if creator.is_relative_to(prefix):
            creator = resolve_symlink(creator)
            if creator is None:
                return None
        parent_dir = creator.parent
        if parent_dir.name != _BIN_DIR:
            logger.debug(
                "Creator of virtual environment found, but the creator of %s is located in %s, "
                "instead of a %s directory",
                prefix,
                creator,
                _BIN_DIR,
            )
            return None
        return from_header_files(parent_dir)
    if _IS_WINDOWS:
        return _get_version_from_pyvenv_if_created_same_time(prefix)
    return None


def from_prefix(prefix: str | os.PathLike) -> str | None:
    """The version from ``pyvenv.cfg``, falling back to the header files."""
    version = from_pyvenv_cfg(prefix)
    if version is not None:
        return version
    return from_header_files(prefix)


def _get_python_exe_used_to_create_venv(executable: Path) -> Path | None:
    """The interpreter a venv executable links to, if it is a link to a file."""
    if executable.parent.name != _BIN_DIR:
        logger.warning(
            "Attempted to determine creator of virtual environment, but the env executable "
            "(%s) is not in the expected location.",
            executable,
        )
        return None
    target = resolve_symlink(executable)
    if target is not None and target.is_file():
        return target
    return None


def _get_version_from_pyvenv_if_created_same_time(prefix: Path) -> str | None:
    """Trust ``pyvenv.cfg`` when it and ``Scripts/python.exe`` were written within a minute."""
    cfg = PyVenvCfg.find(prefix)
    if cfg is None:
        return None
    pyvenv_cfg = prefix / "pyvenv.cfg"
    try:
        cfg_modified = int(pyvenv_cfg.stat().st_mtime)
        exe_modified = int((prefix / "Scripts" / "python.exe").stat().st_mtime)
    except OSError:
        return None
    if abs(cfg_modified - exe_modified) < 60:
        logger.debug("Using pyvenv.cfg to get version of virtual environment %s", prefix)
        return cfg.version
    return None