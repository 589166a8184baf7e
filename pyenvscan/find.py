"""Searching the machine for Python environments and reporting each one found."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter

from .env import PythonEnv
from .executable import (
    find_executable,
    find_executables,
    should_search_for_environments_in_path,
)
from .locators import identify_python_environment_using_locators
from .reporters import Reporter
from .venv import is_venv_dir

logger = logging.getLogger(__name__)

_MACOS_PYTHON2 = "/usr/bin/python2"


@dataclass
class FindSummary:
    """How long each part of a search took, in seconds."""

    time: float = 0.0
    find_locators_times: dict[str, float] = field(default_factory=dict)
    find_locators_time: float = 0.0
    find_path_time: float = 0.0
    find_search_paths_time: float = 0.0


def _locator_name(locator) -> str:
    return getattr(locator, "name", type(locator).__name__)


def _run_all(tasks: Sequence) -> None:
    """Run the callables in parallel and re-raise the first failure."""
    if not tasks:
        return
    with ThreadPoolExecutor(max_workers=min(32, len(tasks))) as pool:
        futures = [pool.submit(task) for task in tasks]
        for future in futures:
            future.result()


def _path_variable_dirs() -> list[Path]:
    """The directories named in the PATH variable, in order and without repeats."""
    entries = os.environ.get("PATH", "").split(os.pathsep)
    return [Path(entry) for entry in dict.fromkeys(e for e in entries if e)]


def find_and_report_envs(
    reporter: Reporter,
    project_directories: Iterable[str | os.PathLike] | None,
    locators: Sequence,
) -> FindSummary:
    """Find environments through the locators, PATH and the project folders."""
    summary = FindSummary()
    start = perf_counter()
    projects = [Path(p) for p in project_directories or []]

    def using_locators() -> None:
        begin = perf_counter()

        def run(locator) -> None:
            locator_start = perf_counter()
            locator.find(reporter)
            summary.find_locators_times[_locator_name(locator)] = perf_counter() - locator_start

        _run_all([lambda loc=loc: run(loc) for loc in locators])
        summary.find_locators_time = perf_counter() - begin

    def in_path_variable() -> None:
        begin = perf_counter()
        search_paths = _path_variable_dirs()
        logger.debug("Searching for environments in global folders: %s", search_paths)
        _find_python_environments(search_paths, reporter, locators, False, search_paths, None)
        summary.find_path_time = perf_counter() - begin

    def in_projects() -> None:
        if not projects:
            return
        logger.debug("Searching for environments in custom folders: %s", projects)
        begin = perf_counter()
        find_python_environments_in_workspace_folders(projects, reporter, locators)
        summary.find_search_paths_time = perf_counter() - begin

    _run_all([using_locators, in_path_variable, in_projects])
    summary.time = perf_counter() - start
    return summary


def find_python_environments_in_workspace_folders(
    workspace_folders: Iterable[str | os.PathLike],
    reporter: Reporter,
    locators: Sequence,
) -> None:
    """Look in each workspace folder, its usual env folders and its direct sub folders."""
    for folder in workspace_folders:
        folder = Path(folder)
        search_first = [
            folder,
            folder / ".venv",
            folder / ".conda",
            folder / ".virtualenv",
            folder / "venv",
        ]
        _find_in_paths_with_locators(search_first, locators, reporter, True, [], folder)

        # A virtual env folder needs no further scanning.
        if is_venv_dir(folder):
            continue

        try:
            with os.scandir(folder) as entries:
                subfolders = sorted(
                    Path(entry.path)
                    for entry in entries
                    if _is_dir_entry(entry)
                )
        except OSError:
            continue
        for subfolder in subfolders:
            if not should_search_for_environments_in_path(subfolder):
                continue
            if subfolder in search_first:
                continue
            _find_python_environments([subfolder], reporter, locators, True, [], folder)


def _is_dir_entry(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _find_python_environments(
    paths: Sequence[Path],
    reporter: Reporter,
    locators: Sequence,
    is_workspace_folder: bool,
    global_env_search_paths: Sequence[Path],
    search_path: Path | None,
) -> None:
    _run_all(
        [
            lambda item=item: _find_in_paths_with_locators(
                [item],
                locators,
                reporter,
                is_workspace_folder,
                global_env_search_paths,
                search_path,
            )
            for item in paths
        ]
    )


def _find_in_paths_with_locators(
    paths: Iterable[Path],
    locators: Sequence,
    reporter: Reporter,
    is_workspace_folder: bool,
    global_env_search_paths: Sequence[Path],
    search_path: Path | None,
) -> None:
    for path in paths:
        if is_workspace_folder:
            # Workspace envs almost always have bin/python, so only that is looked for.
            executable = find_executable(path)
            executables = [executable] if executable is not None else []
        else:
            executables = [
                exe
                for exe in find_executables(path)
                if not (sys.platform == "darwin" and str(exe) == _MACOS_PYTHON2)
            ]
        _identify_executables(
            executables, locators, reporter, global_env_search_paths, search_path
        )


def _identify_executables(
    executables: Iterable[Path],
    locators: Sequence,
    reporter: Reporter,
    global_env_search_paths: Sequence[Path],
    search_path: Path | None,
) -> None:
    for exe in executables:
        env = identify_python_environment_using_locators(
            PythonEnv(exe, None, None), locators, global_env_search_paths, search_path
        )
        if env is None:
            logger.warning("Unknown Python Env %s", exe)
            continue
        reporter.report_environment(env)
        if env.manager is not None:
            reporter.report_manager(env.manager)