"""Spotting differences between a discovered environment and its resolved form."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .env import norm_case
from .environment import PythonEnvironment, PythonEnvironmentKind

logger = logging.getLogger(__name__)

_PYTHON_VERSION = re.compile(r"(\d+\.\d+\.\d+).*")


@dataclass(frozen=True)
class InaccuratePythonEnvironmentInfo:
    """Which parts of a discovered environment turned out to be wrong."""

    kind: PythonEnvironmentKind | None = None
    invalid_executable: bool | None = None
    executable_not_in_symlinks: bool | None = None
    invalid_prefix: bool | None = None
    invalid_version: bool | None = None
    invalid_arch: bool | None = None


def are_versions_different(actual: str, expected: str) -> bool | None:
    """Compare the ``X.Y.Z`` parts of two versions; ``None`` if either lacks one."""
    actual_match = _PYTHON_VERSION.search(actual)
    expected_match = _PYTHON_VERSION.search(expected)
    if actual_match is None or expected_match is None:
        return None
    return actual_match.group(1) != expected_match.group(1)


def report_inaccuracies_identified_after_resolving(
    env: PythonEnvironment, resolved: PythonEnvironment
) -> InaccuratePythonEnvironmentInfo | None:
    """Log and return what ``env`` got wrong compared to ``resolved``; ``None`` if nothing."""
    if resolved.executable is None or resolved.prefix is None or resolved.version is None:
        return None
    known_symlinks = list(env.symlinks or [])
    resolved_executable = Path(resolved.executable)
    norm_cased_executable = norm_case(resolved_executable)

    if env.executable is None:
        invalid_executable = False
        executable_not_in_symlinks = False
    else:
        executable = Path(env.executable)
        invalid_executable = (
            executable != resolved_executable and executable != norm_cased_executable
        )
        executable_not_in_symlinks = (
            resolved_executable not in known_symlinks
            and norm_cased_executable not in known_symlinks
        )

    invalid_prefix = env.prefix is not None and Path(env.prefix) != Path(resolved.prefix)
    invalid_arch = env.arch is not None and env.arch != resolved.arch
    invalid_version = are_versions_different(resolved.version, env.version or "")

    if not (
        invalid_executable
        or executable_not_in_symlinks
        or invalid_prefix
        or invalid_arch
        or invalid_version
    ):
        return None
    event = InaccuratePythonEnvironmentInfo(
        kind=env.kind,
        invalid_executable=invalid_executable,
        executable_not_in_symlinks=executable_not_in_symlinks,
        invalid_prefix=invalid_prefix,
        invalid_version=invalid_version,
        invalid_arch=invalid_arch,
    )
    logger.warning(
        "Inaccurate Python Environment Info for => \n%r.\nResolved as => \n%r\n"
        "Incorrect information => \n%r",
        env,
        resolved,
        event,
    )
    return event