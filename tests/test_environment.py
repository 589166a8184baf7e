import os
from pathlib import Path

from pyenvscan.environment import (
    PythonEnvironment,
    PythonEnvironmentKind,
    get_environment_key,
)

PYTHON = "python.exe" if os.name == "nt" else "python"


def test_key_is_executable_when_present(tmp_path):
    exe = tmp_path / "bin" / "python3"
    env = PythonEnvironment(
        executable=exe, prefix=tmp_path, kind=PythonEnvironmentKind.Conda
    )
    assert get_environment_key(env) == exe


def test_key_for_conda_without_executable(tmp_path):
    env = PythonEnvironment(prefix=tmp_path, kind=PythonEnvironmentKind.Conda)
    assert get_environment_key(env) == tmp_path / "bin" / PYTHON


def test_key_for_other_kind_is_prefix(tmp_path):
    env = PythonEnvironment(prefix=tmp_path, kind=PythonEnvironmentKind.Venv)
    assert get_environment_key(env) == tmp_path


def test_key_for_prefix_without_kind(tmp_path):
    env = PythonEnvironment(prefix=str(tmp_path))
    assert get_environment_key(env) == Path(tmp_path)


def test_no_key_without_executable_or_prefix():
    env = PythonEnvironment(kind=PythonEnvironmentKind.Venv, version="3.12.1")
    assert get_environment_key(env) is None


def test_environments_compare_by_value(tmp_path):
    first = PythonEnvironment(executable=tmp_path / "python", version="3.12.1")
    second = PythonEnvironment(executable=tmp_path / "python", version="3.12.1")
    assert first == second
    second.version = "3.11.0"
    assert first.version == "3.12.1"
    assert first != second or first.version == second.version