"""Locator for environments created with the ``venv`` module."""

from __future__ import annotations

import os
from pathlib import Path

from . import version as version_info
from .env import PythonEnv
from .environment import PythonEnvironment, PythonEnvironmentKind
from .executable import find_executable, find_executables
from .pyvenv_cfg import PyVenvCfg


def is_venv(env: PythonEnv) -> bool:
    """Tell whether ``env`` has a ``pyvenv.cfg`` beside its interpreter or in its prefix."""
    if PyVenvCfg.find(env.executable.parent) is not None:
        return True
    if env.prefix is None:
        return False
    return PyVenvCfg.find(env.prefix) is not None


def is_venv_dir(path: str | os.PathLike) -> bool:
    """Tell whether ``path`` is the root (or bin directory) of a virtual environment."""
    return PyVenvCfg.find(path) is not None


class Venv:
    """Identifies environments made by ``python -m venv``."""

    name = "Venv"
    # Virtual environments have no common global location; callers identify
    # them one by one through ``try_from``.
    search_roots: tuple[Path, ...] = ()

    def supported_categories(self) -> list[PythonEnvironmentKind]:
        """The kinds of environment this locator reports."""
        return [PythonEnvironmentKind.Venv]

    def try_from(self, env: PythonEnv) -> PythonEnvironment | None:
        """Describe ``env`` as a venv, or return ``None`` if it is not one."""
        if not is_venv(env):
            return None
        prefix = env.prefix if env.prefix is not None else Path(env.executable).parent.parent
        version = env.version
        if version is None:
            version = version_info.from_creator_for_virtual_env(prefix)
        return PythonEnvironment(
            kind=PythonEnvironmentKind.Venv,
            executable=env.executable,
            version=version,
            prefix=prefix,
            symlinks=find_executables(prefix),
        )

    def find(self, reporter) -> None:
        """Report the venvs found directly under ``search_roots`` (none by default)."""
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