"""User directories for an application, following the platformdirs conventions."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name)
    return None if value is None else Path(value)


def _first(primary: str, fallback: str, *parts: str) -> Path | None:
    """The path in ``primary``, else the one in ``fallback`` joined with ``parts``."""
    path = _env_path(primary)
    if path is not None:
        return path
    base = _env_path(fallback)
    return None if base is None else base.joinpath(*parts)


def _is_windows() -> bool:
    return sys.platform == "win32"


def _is_macos() -> bool:
    return sys.platform == "darwin"


class Platformdirs:
    """Cache, config and data locations for ``app_name``."""

    def __init__(self, app_name: str, roaming: bool) -> None:
        self.app_name = app_name
        self.version: str | None = None
        self.roaming = roaming

    def user_cache_path(self) -> Path | None:
        """Same as :meth:`user_cache_dir`."""
        return self.user_cache_dir()

    def user_cache_dir(self) -> Path | None:
        """The per-user cache directory, or ``None`` if it cannot be determined."""
        if _is_windows():
            base = _first("CSIDL_LOCAL_APPDATA", "USERPROFILE", "AppData", "Local")
            return None if base is None else self._append(base, "Cache")
        if _is_macos():
            home = _env_path("HOME")
            return None if home is None else self._append(home / "Library" / "Caches")
        base = _first("XDG_CACHE_HOME", "HOME", ".cache")
        return None if base is None else self._append(base)

    def user_config_path(self) -> Path | None:
        """The per-user configuration directory, or ``None``."""
        if _is_windows() or _is_macos():
            return self.user_data_dir()
        base = _first("XDG_CONFIG_HOME", "HOME", ".config")
        return None if base is None else self._append(base)

    def user_data_dir(self) -> Path | None:
        """The per-user data directory, or ``None``."""
        if _is_windows():
            if self.roaming:
                base = _first("CSIDL_APPDATA", "USERPROFILE", "AppData", "Roaming")
            else:
                base = _first("CSIDL_LOCAL_APPDATA", "USERPROFILE", "AppData", "Local")
            return None if base is None else self._append(base)
        if _is_macos():
            home = _env_path("HOME")
            if home is None:
                return None
            return self._append(home / "Library" / "Application Support")
        base = _first("XDG_DATA_HOME", "HOME", ".local", "share")
        return None if base is None else self._append(base)

    def _append(self, path: Path, suffix: str | None = None) -> Path:
        path = path / self.app_name
        if self.version is not None:
            path = path / self.version
        return path / suffix if suffix is not None else path