"""Python environments identified by their interpreter, and resolving them by running it."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .pyvenv_cfg import PyVenvCfg

logger = logging.getLogger(__name__)

PYTHON_INFO_JSON_SEPARATOR = "093385e9-59f7-4a16-a604-14bf206256fe"
PYTHON_INFO_CMD = (
    "import json, sys; print('093385e9-59f7-4a16-a604-14bf206256fe');"
    "print(json.dumps({'version': '.'.join(str(n) for n in sys.version_info), "
    "'sys_prefix': sys.prefix, 'executable': sys.executable, "
    "'is64_bit': sys.maxsize > 2**32}))"
)


def norm_case(path: str | os.PathLike) -> Path:
    """Normalise a path for comparison; case-insensitive platforms get a normalised form."""
    if os.name == "nt":
        return Path(os.path.normpath(os.fspath(path)))
    return Path(path)


def resolve_symlink(path: str | os.PathLike) -> Path | None:
    """Return the final target of ``path`` if it is a symbolic link, else ``None``."""
    path = Path(path)
    try:
        if not path.is_symlink():
            return None
        return Path(os.path.realpath(path))
    except OSError:
        return None


@dataclass(init=False)
class PythonEnv:
    """An interpreter executable with whatever is known about its environment."""

    executable: Path
    prefix: Path | None
    version: str | None
    symlinks: list[Path] | None = field(default=None)

    def __init__(
        self,
        executable: str | os.PathLike,
        prefix: str | os.PathLike | None,
        version: str | None,
    ) -> None:
        executable = Path(executable)
        resolved_prefix = norm_case(prefix) if prefix is not None else None
        if resolved_prefix is None:
            # bin/python or Scripts/python with a pyvenv.cfg beside the bin directory.
            bin_dir = executable.parent
            if bin_dir.name in ("Scripts", "bin"):
                candidate = bin_dir.parent
                if PyVenvCfg.find(candidate) is not None:
                    resolved_prefix = candidate
        self.executable = norm_case(executable)
        self.prefix = resolved_prefix
        self.version = version
        self.symlinks = None


@dataclass(frozen=True)
class InterpreterInfo:
    """What a running interpreter reports about itself."""

    version: str
    sys_prefix: str
    executable: str
    is64_bit: bool


def _parse_interpreter_info(text: str) -> InterpreterInfo | None:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    version = data.get("version")
    sys_prefix = data.get("sys_prefix")
    executable = data.get("executable")
    is64_bit = data.get("is64_bit")
    if not all(isinstance(value, str) for value in (version, sys_prefix, executable)):
        return None
    if not isinstance(is64_bit, bool):
        return None
    return InterpreterInfo(version, sys_prefix, executable, is64_bit)


@dataclass
class ResolvedPythonEnv:
    """An environment as reported by running its interpreter."""

    executable: Path
    prefix: Path
    version: str
    is64_bit: bool
    symlinks: list[Path] | None = None

    def to_python_env(self) -> PythonEnv:
        """Convert to a :class:`PythonEnv`, keeping the known symlinks."""
        env = PythonEnv(self.executable, self.prefix, self.version)
        env.symlinks = list(self.symlinks) if self.symlinks is not None else None
        return env

    @classmethod
    def from_executable(cls, executable: str | os.PathLike) -> ResolvedPythonEnv | None:
        """Run ``executable`` to learn its version, prefix and real path; ``None`` on failure."""
        executable = os.fspath(executable)
        logger.debug("Executing Python: %s -c %s", executable, PYTHON_INFO_CMD)
        try:
            result = subprocess.run(
                [executable, "-c", PYTHON_INFO_CMD],
                capture_output=True,
                check=False,
            )
        except (OSError, ValueError) as err:
            logger.error("Failed to execute Python to resolve info %r: %s", executable, err)
            return None
        output = result.stdout.decode("utf-8", errors="replace").strip()
        logger.debug("Executed Python %r & produced an output %r", executable, output)
        _, separator, payload = output.partition(PYTHON_INFO_JSON_SEPARATOR)
        if not separator:
            logger.error(
                "Python Execution for %r produced an output %r without a separator",
                executable,
                output,
            )
            return None
        info = _parse_interpreter_info(payload)
        if info is None:
            logger.error(
                "Python Execution for %r produced an output %r that could not be parsed as JSON",
                executable,
                payload,
            )
            return None
        return cls(
            executable=Path(info.executable),
            prefix=Path(info.sys_prefix),
            version=info.version.strip(),
            is64_bit=info.is64_bit,
            symlinks=None if info.executable == executable else [Path(executable)],
        )