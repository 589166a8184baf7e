"""Fully resolving an environment by identifying it and then running its interpreter."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .env import PythonEnv, ResolvedPythonEnv
from .environment import Architecture, PythonEnvironment
from .locators import identify_and_set_search_path, identify_python_environment_using_locators

logger = logging.getLogger(__name__)


@dataclass
class ResolvedEnvironment:
    """What discovery found, and the same environment as reported by its interpreter."""

    discovered: PythonEnvironment
    resolved: PythonEnvironment | None


def resolve_environment(
    executable: str | os.PathLike,
    locators: Sequence,
    search_paths: Sequence[str | os.PathLike],
    global_env_search_paths: Iterable[str | os.PathLike],
) -> ResolvedEnvironment | None:
    """Identify ``executable`` and then run it for exact details; ``None`` if unidentifiable."""
    env = PythonEnv(executable, None, None)
    found = identify_python_environment_using_locators(
        env, locators, list(global_env_search_paths), None
    )
    if found is None:
        logger.warning("Unknown Python Env %s", executable)
        return None
    identify_and_set_search_path(found, search_paths)

    if found.executable is None:
        logger.warning("Unknown Python Env %s resolved as %r", executable, found)
        return ResolvedEnvironment(discovered=found, resolved=None)

    info = ResolvedPythonEnv.from_executable(found.executable)
    if info is None:
        return ResolvedEnvironment(discovered=found, resolved=None)
    logger.debug("Resolved Python Exe %s as %r", found.executable, info)

    symlinks = sorted(
        {Path(p) for p in [*(found.symlinks or []), info.executable, *(info.symlinks or [])]}
    )
    resolved = PythonEnvironment(
        kind=found.kind,
        arch=Architecture.X64 if info.is64_bit else Architecture.X86,
        display_name=found.display_name,
        executable=info.executable,
        manager=found.manager,
        name=found.name,
        prefix=info.prefix,
        project=found.project,
        search_path=found.search_path,
        symlinks=symlinks,
        version=info.version,
    )
    return ResolvedEnvironment(discovered=found, resolved=resolved)