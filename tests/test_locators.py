import json
import os
import subprocess
from pathlib import Path
from unittest.mock import patch

from pyenvscan.env import PYTHON_INFO_JSON_SEPARATOR, PythonEnv
from pyenvscan.environment import Architecture, PythonEnvironment, PythonEnvironmentKind
from pyenvscan.locators import (
    create_locators,
    find_symlinks,
    identify_and_set_search_path,
    identify_python_environment_using_locators,
)


def _completed(executable, prefix, version="3.12.1", is64_bit=True):
    payload = json.dumps(
        {
            "version": version,
            "sys_prefix": str(prefix),
            "executable": str(executable),
            "is64_bit": is64_bit,
        }
    )
    stdout = f"{PYTHON_INFO_JSON_SEPARATOR}\n{payload}\n".encode()
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr=b"")


def _make_venv(root):
    prefix = root / ".venv"
    (prefix / "bin").mkdir(parents=True)
    (prefix / "pyvenv.cfg").write_text("version = 3.12.1\n")
    exe = prefix / "bin" / "python"
    exe.write_text("")
    return prefix, exe


def _make_plain_install(root):
    bin_dir = root / "usr" / "bin"
    bin_dir.mkdir(parents=True)
    exe = bin_dir / "python"
    exe.write_text("")
    return bin_dir, exe


def test_create_locators_order():
    assert [loc.name for loc in create_locators({})] == ["VirtualEnvWrapper", "Venv", "VirtualEnv"]


def test_identify_venv(tmp_path):
    root = tmp_path.resolve()
    prefix, exe = _make_venv(root)
    found = identify_python_environment_using_locators(
        PythonEnv(exe, None, None), create_locators({}), [], None
    )
    assert found.kind is PythonEnvironmentKind.Venv
    assert found.prefix == prefix
    assert found.executable == exe


def test_identify_venv_sets_search_path_inside_prefix(tmp_path):
    root = tmp_path.resolve()
    prefix, exe = _make_venv(root)
    found = identify_python_environment_using_locators(
        PythonEnv(exe, None, None), create_locators({}), [], prefix
    )
    assert found.search_path == prefix


def test_identify_venv_leaves_search_path_outside_prefix(tmp_path):
    root = tmp_path.resolve()
    _, exe = _make_venv(root)
    found = identify_python_environment_using_locators(
        PythonEnv(exe, None, None), create_locators({}), [], root
    )
    assert found.search_path is None


def test_identify_virtualenvwrapper_first(tmp_path):
    root = tmp_path.resolve()
    workon = root / "workon"
    prefix = workon / "env1"
    (prefix / "bin").mkdir(parents=True)
    (prefix / "pyvenv.cfg").write_text("version = 3.12.1\n")
    (prefix / "bin" / "activate").write_text("")
    exe = prefix / "bin" / "python"
    exe.write_text("")
    locators = create_locators({"WORKON_HOME": str(workon)})
    found = identify_python_environment_using_locators(PythonEnv(exe, None, None), locators, [], None)
    assert found.kind is PythonEnvironmentKind.VirtualEnvWrapper


def test_identify_unknown_in_global_path(tmp_path):
    root = tmp_path.resolve()
    bin_dir, exe = _make_plain_install(root)
    with patch("subprocess.run", return_value=_completed(exe, root / "usr")) as run:
        found = identify_python_environment_using_locators(
            PythonEnv(exe, None, None), create_locators({}), [bin_dir], None
        )
    assert run.called
    assert found.kind is PythonEnvironmentKind.GlobalPaths
    assert found.version == "3.12.1"
    assert found.arch is Architecture.X64
    assert found.prefix == root / "usr"
    assert found.symlinks == [exe]


def test_identify_unknown_outside_global_path(tmp_path):
    root = tmp_path.resolve()
    _, exe = _make_plain_install(root)
    with patch("subprocess.run", return_value=_completed(exe, root / "usr", is64_bit=False)):
        found = identify_python_environment_using_locators(
            PythonEnv(exe, None, None), create_locators({}), [], None
        )
    assert found.kind is None
    assert found.arch is Architecture.X86


def test_identify_returns_none_when_interpreter_cannot_run(tmp_path):
    root = tmp_path.resolve()
    _, exe = _make_plain_install(root)
    with patch("subprocess.run", side_effect=OSError("cannot run")):
        found = identify_python_environment_using_locators(
            PythonEnv(exe, None, None), create_locators({}), [], None
        )
    assert found is None


def test_set_search_path_skipped_when_project_known():
    env = PythonEnvironment(
        kind=PythonEnvironmentKind.Venv,
        prefix=Path("/work/.venv"),
        project=Path("/work"),
    )
    identify_and_set_search_path(env, [Path("/work/.venv")])
    assert env.search_path is None


def test_set_search_path_skipped_for_other_kinds():
    env = PythonEnvironment(kind=PythonEnvironmentKind.Poetry, prefix=Path("/work/.venv"))
    identify_and_set_search_path(env, [Path("/work/.venv")])
    assert env.search_path is None


def test_set_search_path_for_conda():
    env = PythonEnvironment(kind=PythonEnvironmentKind.Conda, prefix=Path("/work/.conda"))
    identify_and_set_search_path(env, [Path("/other"), Path("/work/.conda")])
    assert env.search_path == Path("/work/.conda")


def test_find_symlinks_outside_bin_is_none(tmp_path):
    exe = tmp_path / "python"
    exe.write_text("")
    assert find_symlinks(exe) is None


def test_find_symlinks_groups_links_to_same_file(tmp_path):
    root = tmp_path.resolve()
    bin_dir, exe = _make_plain_install(root)
    os.symlink(exe, bin_dir / "python3")
    (bin_dir / "python3.12").write_text("")
    assert find_symlinks(exe) == [bin_dir / "python", bin_dir / "python3"]