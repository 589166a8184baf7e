"""Locator for environments created with ``virtualenv``."""

from __future__ import annotations

import os
from pathlib import Path

from . import version as version_info
from .env import PythonEnv
from .environment import PythonEnvironment, PythonEnvironmentKind
from .executable import find_executable, find_executables


def is_virtualenv(env: PythonEnv) -> bool:
    """Tell whether ``env`` has ``activate`` scripts beside its interpreter."""
    bin_dir = env.executable.parent
    if env.prefix is None and bin_dir.name not in ("bin", "Scripts"):
        return False
    if (bin_dir / "activate").exists() or (bin_dir / "activate.bat").exists():
        return True
    try:
        with os.scandir(bin_dir) as entries:
            return any(entry.name.startswith("activate") for entry in entries)
    except OSError:
        return False


class VirtualEnv:
    """Identifies environments made by ``virtualenv``; the most generic locator."""

    name = "VirtualEnv"
    # Virtual environments have no common global location; callers identify
    # them one by one through ``try_from``.
    search_roots: tuple[Path, ...] = ()

    def supported_categories(self) -> list[PythonEnvironmentKind]:
        """The kinds of environment this locator reports."""
        return [PythonEnvironmentKind.VirtualEnv]

    def try_from(self, env: PythonEnv) -> PythonEnvironment | None:
        """Describe ``env`` as a virtualenv, or return ``None`` if it is not one."""
        if not is_virtualenv(env):
            return None
        version = env.version
        if version is None and env.prefix is not None:
            version = version_info.from_creator_for_virtual_env(env.prefix)
        symlinks = find_executables(env.prefix) if env.prefix is not None else []
        return PythonEnvironment(
            kind=PythonEnvironmentKind.VirtualEnv,
            executable=env.executable,
            version=version,
            prefix=env.prefix,
            symlinks=symlinks,
        )

    def find(self, reporter) -> None:
        """Report the virtualenvs found directly under ``search_roots`` (none by default)."""
        for root in self.search_roots:
            try:
                children = [child for child in Path(root).iterdir() if child.is_dir()]
            except OSError:
                continue
            for child in sorted(children):
                executable = find_executable(child)
                if executable is None:
                    continue
                found = self.try_from(PythonEnv(executable, None, None))
                if found is not None:
                    reporter.report_environment(found)