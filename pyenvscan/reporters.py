"""Receivers for discovered environments and managers."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .environment import PythonEnvironment, PythonEnvironmentKind, get_environment_key


class Reporter(ABC):
    """Something that is told about every environment and manager found."""

    @abstractmethod
    def report_environment(self, env: PythonEnvironment) -> None:
        """Receive one discovered environment."""

    def report_manager(self, manager: Any) -> None:
        """Receive one discovered environment manager; ignored by default."""

    def report_telemetry(self, event: Any) -> None:
        """Receive a telemetry event; ignored by default."""


class CacheReporter(Reporter):
    """Forwards each environment and manager to ``reporter`` only the first time it is seen."""

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter
        self._lock = threading.Lock()
        self._managers: dict[Any, Any] = {}
        self._environments: dict[Path, PythonEnvironment] = {}

    def report_telemetry(self, event: Any) -> None:
        """Pass telemetry straight through."""
        self.reporter.report_telemetry(event)

    def report_manager(self, manager: Any) -> None:
        """Forward ``manager`` unless one with the same executable was already reported."""
        key = getattr(manager, "executable", None)
        with self._lock:
            if key in self._managers:
                return
            self._managers[key] = manager
        self.reporter.report_manager(manager)

    def report_environment(self, env: PythonEnvironment) -> None:
        """Forward ``env`` unless an environment with the same key was already reported."""
        key = get_environment_key(env)
        if key is None:
            return
        with self._lock:
            if key in self._environments:
                return
            self._environments[key] = env
        self.reporter.report_environment(env)


@dataclass
class Summary:
    """Counts of what a :class:`StdioReporter` has seen."""

    managers: dict[Any, int] = field(default_factory=dict)
    environments: dict[PythonEnvironmentKind | None, int] = field(default_factory=dict)


def _describe(env: PythonEnvironment) -> str:
    kind = env.kind.value if env.kind is not None else "Unknown"
    lines = [f"Environment ({kind})"]
    fields = (
        ("Display-Name", env.display_name),
        ("Name", env.name),
        ("Executable", env.executable),
        ("Version", env.version),
        ("Prefix", env.prefix),
        ("Project", env.project),
        ("Architecture", env.arch.value if env.arch is not None else None),
        ("Search Path", env.search_path),
        ("Manager", env.manager),
    )
    lines.extend(f"   {label:<14}: {value}" for label, value in fields if value is not None)
    if env.symlinks:
        lines.append(f"   {'Symlinks':<14}: " + ", ".join(str(s) for s in env.symlinks))
    return "\n".join(lines)


class StdioReporter(Reporter):
    """Counts environments and managers by kind, optionally printing each one."""

    def __init__(self, print_list: bool) -> None:
        self.print_list = print_list
        self._lock = threading.Lock()
        self._managers: dict[Any, int] = {}
        self._environments: dict[PythonEnvironmentKind | None, int] = {}

    def report_manager(self, manager: Any) -> None:
        """Count ``manager`` by its tool and print it when listing."""
        tool = getattr(manager, "tool", None)
        with self._lock:
            self._managers[tool] = self._managers.get(tool, 0) + 1
        if self.print_list:
            print(manager)

    def report_environment(self, env: PythonEnvironment) -> None:
        """Count ``env`` by its kind and print it when listing."""
        with self._lock:
            self._environments[env.kind] = self._environments.get(env.kind, 0) + 1
        if self.print_list:
            print(_describe(env))

    def get_summary(self) -> Summary:
        """A snapshot of the counts so far."""
        with self._lock:
            return Summary(managers=dict(self._managers), environments=dict(self._environments))


@dataclass
class LocatorResult:
    """The managers and environments collected during a search."""

    managers: list[Any] = field(default_factory=list)
    environments: list[PythonEnvironment] = field(default_factory=list)


class CollectingReporter(Reporter):
    """Keeps everything reported, the latest report for a key replacing earlier ones."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._managers: dict[Any, Any] = {}
        self._environments: dict[Path, PythonEnvironment] = {}

    def report_manager(self, manager: Any) -> None:
        """Store ``manager`` keyed by its executable."""
        with self._lock:
            self._managers[getattr(manager, "executable", None)] = manager

    def report_environment(self, env: PythonEnvironment) -> None:
        """Store ``env`` keyed by its environment key; envs without a key are dropped."""
        key = get_environment_key(env)
        if key is None:
            return
        with self._lock:
            self._environments[key] = env

    def get_result(self) -> LocatorResult:
        """Everything collected so far."""
        with self._lock:
            return LocatorResult(
                managers=list(self._managers.values()),
                environments=list(self._environments.values()),
            )