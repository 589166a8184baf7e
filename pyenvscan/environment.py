"""The description of a discovered Python environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class PythonEnvironmentKind(Enum):
    """How an environment was created or installed."""

    Conda = "Conda"
    Homebrew = "Homebrew"
    Pyenv = "Pyenv"
    GlobalPaths = "GlobalPaths"
    PyenvVirtualEnv = "PyenvVirtualEnv"
    Pipenv = "Pipenv"
    Poetry = "Poetry"
    MacPythonOrg = "MacPythonOrg"
    MacCommandLineTools = "MacCommandLineTools"
    LinuxGlobal = "LinuxGlobal"
    MacXCode = "MacXCode"
    Venv = "Venv"
    VirtualEnv = "VirtualEnv"
    VirtualEnvWrapper = "VirtualEnvWrapper"
    WindowsStore = "WindowsStore"
    WindowsRegistry = "WindowsRegistry"


class Architecture(Enum):
    """Bitness of an interpreter."""

    X64 = "x64"
    X86 = "x86"


@dataclass
class PythonEnvironment:
    """Everything known about one Python environment."""

    display_name: str | None = None
    name: str | None = None
    executable: Path | None = None
    kind: PythonEnvironmentKind | None = None
    version: str | None = None
    prefix: Path | None = None
    manager: Any = None
    project: Path | None = None
    arch: Architecture | None = None
    symlinks: list[Path] | None = None
    search_path: Path | None = None


def get_environment_key(env: PythonEnvironment) -> Path | None:
    """The path that identifies ``env``: its executable, else a path derived from its prefix."""
    if env.executable is not None:
        return Path(env.executable)
    if env.prefix is not None:
        prefix = Path(env.prefix)
        # A conda env without Python would have its interpreter here.
        if env.kind is PythonEnvironmentKind.Conda:
            return prefix / "bin" / ("python.exe" if os.name == "nt" else "python")
        return prefix
    logger.error("Failed to report environment due to lack of exe & prefix: %r", env)
    return None