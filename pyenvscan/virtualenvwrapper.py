"""Locator for environments managed by ``virtualenvwrapper``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from . import version as version_info
from .env import PythonEnv, norm_case
from .environment import PythonEnvironment, PythonEnvironmentKind
from .executable import find_executable, find_executables
from .virtualenv import is_virtualenv


@dataclass(frozen=True)
class EnvVariables:
    """The environment variables that decide where virtualenvwrapper keeps envs."""

    home: Path | None
    workon_home: str | None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> EnvVariables:
        """Read the values from ``environ`` (the process environment by default)."""
        if environ is None:
            environ = os.environ
        home = environ.get("HOME") or environ.get("USERPROFILE")
        return cls(
            home=Path(home) if home else None,
            workon_home=environ.get("WORKON_HOME"),
        )


def _default_virtualenvwrapper_path(env_vars: EnvVariables) -> Path | None:
    if env_vars.home is None:
        return None
    # On Windows the default is %USERPROFILE%\Envs, with virtualenvs as a fallback.
    names = ("Envs", "virtualenvs") if os.name == "nt" else (".virtualenvs",)
    for name in names:
        candidate = env_vars.home / name
        if candidate.exists():
            return norm_case(candidate)
    return None


def get_work_on_home_path(env_vars: EnvVariables) -> Path | None:
    """The root directory holding all virtualenvwrapper environments."""
    if env_vars.workon_home is not None:
        try:
            work_on_home = Path(env_vars.workon_home).resolve(strict=True)
        except (OSError, RuntimeError):
            work_on_home = None
        if work_on_home is not None and work_on_home.exists():
            return norm_case(work_on_home)
    return _default_virtualenvwrapper_path(env_vars)


def is_virtualenvwrapper(env: PythonEnv, env_vars: EnvVariables) -> bool:
    """Tell whether ``env`` is a virtualenv living under the WORKON_HOME directory."""
    if env.prefix is None:
        return False
    work_on_home = get_work_on_home_path(env_vars)
    if work_on_home is None:
        return False
    return Path(env.executable).is_relative_to(work_on_home) and is_virtualenv(env)


def get_project(env: PythonEnv) -> Path | None:
    """The project directory named in the environment's ``.project`` file, if it exists."""
    if env.prefix is None:
        return None
    try:
        contents = (Path(env.prefix) / ".project").read_text(encoding="utf-8")
    except (OSError, ValueError):
        return None
    project_folder = norm_case(contents.strip())
    try:
        os.stat(project_folder)
    except (OSError, ValueError):
        return None
    return project_folder


class VirtualEnvWrapper:
    """Identifies environments created through virtualenvwrapper."""

    name = "VirtualEnvWrapper"
    # Environments are identified one by one through ``try_from``; no roots
    # are searched unless a caller supplies them.
    search_roots: tuple[Path, ...] = ()

    def __init__(self, env_vars: EnvVariables) -> None:
        self.env_vars = env_vars

    def supported_categories(self) -> list[PythonEnvironmentKind]:
        """The kinds of environment this locator reports."""
        return [PythonEnvironmentKind.VirtualEnvWrapper]

    def try_from(self, env: PythonEnv) -> PythonEnvironment | None:
        """Describe ``env`` as a virtualenvwrapper env, or return ``None``."""
        if not is_virtualenvwrapper(env, self.env_vars):
            return None
        version = env.version
        if version is None and env.prefix is not None:
            version = version_info.from_creator_for_virtual_env(env.prefix)
        symlinks = find_executables(env.prefix) if env.prefix is not None else []
        return PythonEnvironment(
            kind=PythonEnvironmentKind.VirtualEnvWrapper,
            executable=env.executable,
            version=version,
            prefix=env.prefix,
            project=get_project(env),
            symlinks=symlinks,
        )

    def find(self, reporter) -> None:
        """Report the environments found directly under ``search_roots`` (none by default)."""
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