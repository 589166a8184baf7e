"""Identifying an interpreter by asking each locator in turn."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from .env import PythonEnv, ResolvedPythonEnv, resolve_symlink
from .environment import Architecture, PythonEnvironment, PythonEnvironmentKind
from .executable import find_executables
from .venv import Venv
from .virtualenv import VirtualEnv
from .virtualenvwrapper import EnvVariables, VirtualEnvWrapper

logger = logging.getLogger(__name__)

_SEARCH_PATH_KINDS = frozenset(
    {
        PythonEnvironmentKind.Conda,
        PythonEnvironmentKind.Venv,
        PythonEnvironmentKind.VirtualEnv,
    }
)


def create_locators(environ: Mapping[str, str] | None = None) -> list:
    """The locators in the order they are tried; the most generic comes last."""
    return [
        VirtualEnvWrapper(EnvVariables.from_environ(environ)),
        Venv(),
        VirtualEnv(),
    ]


def _try_locators(env: PythonEnv, locators: Iterable) -> PythonEnvironment | None:
    return next(
        (found for found in (loc.try_from(env) for loc in locators) if found is not None),
        None,
    )


def identify_python_environment_using_locators(
    env: PythonEnv,
    locators: Sequence,
    global_env_search_paths: Iterable[str | os.PathLike],
    search_path: str | os.PathLike | None,
) -> PythonEnvironment | None:
    """Describe ``env`` using the first locator that knows it, running it as a last resort."""
    executable = env.executable
    search_paths = [Path(search_path)] if search_path is not None else []

    found = _try_locators(env, locators)
    if found is not None:
        identify_and_set_search_path(found, search_paths)
        return found

    # Unknown: ask the interpreter itself, the real executable may be identifiable.
    resolved_env = ResolvedPythonEnv.from_executable(executable)
    if resolved_env is None:
        return None

    found = _try_locators(resolved_env.to_python_env(), locators)
    if found is not None:
        logger.debug("Env (%s) in Path resolved as %s", executable, found.kind)
        identify_and_set_search_path(found, search_paths)
        return found

    global_paths = {Path(p) for p in global_env_search_paths}
    candidates = [*(resolved_env.symlinks or []), resolved_env.executable, executable]
    fallback_kind = (
        PythonEnvironmentKind.GlobalPaths
        if any(Path(c).parent in global_paths for c in candidates)
        else None
    )
    logger.info(
        "Env (%s) in Path resolved as %r and reported as %s",
        executable,
        resolved_env,
        fallback_kind,
    )
    unknown = _create_unknown_env(resolved_env, fallback_kind)
    identify_and_set_search_path(unknown, search_paths)
    return unknown


def identify_and_set_search_path(
    env: PythonEnvironment, search_paths: Sequence[str | os.PathLike]
) -> None:
    """Record the search folder on workspace-local envs that have no project set."""
    if not search_paths or env.project is not None:
        return
    if env.kind not in _SEARCH_PATH_KINDS or env.prefix is None:
        return
    prefix = Path(env.prefix)
    for path in search_paths:
        if Path(path).is_relative_to(prefix):
            env.search_path = Path(path)
            return


def _create_unknown_env(
    resolved_env: ResolvedPythonEnv, kind: PythonEnvironmentKind | None
) -> PythonEnvironment:
    return PythonEnvironment(
        kind=kind,
        symlinks=find_symlinks(resolved_env.executable),
        executable=resolved_env.executable,
        prefix=resolved_env.prefix,
        arch=Architecture.X64 if resolved_env.is64_bit else Architecture.X86,
        version=resolved_env.version,
    )


def _real_path(path: Path) -> Path | None:
    target = resolve_symlink(path)
    if target is not None:
        return target
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def find_symlinks(executable: str | os.PathLike) -> list[Path] | None:
    """Interpreters in the same bin directory that lead to the same real file as ``executable``."""
    if os.name == "nt":
        return None
    executable = Path(executable)
    real_exe = _real_path(executable)
    bin_dir = executable.parent
    if bin_dir.name not in ("bin", "Scripts", "scripts"):
        return None
    return [exe for exe in find_executables(bin_dir) if _real_path(exe) == real_exe]