import os

from pyenvscan.env import PythonEnv
from pyenvscan.environment import PythonEnvironmentKind
from pyenvscan.virtualenvwrapper import (
    EnvVariables,
    VirtualEnvWrapper,
    get_project,
    get_work_on_home_path,
    is_virtualenvwrapper,
)

BIN = "Scripts" if os.name == "nt" else "bin"
PYTHON = "python.exe" if os.name == "nt" else "python"
DEFAULT_HOME_DIR = "Envs" if os.name == "nt" else ".virtualenvs"


def make_env(root):
    bin_dir = root / BIN
    bin_dir.mkdir(parents=True)
    (bin_dir / PYTHON).write_text("")
    (bin_dir / "activate").write_text("")
    return bin_dir / PYTHON


def test_from_environ_reads_values(tmp_path):
    env_vars = EnvVariables.from_environ({"HOME": str(tmp_path), "WORKON_HOME": "/envs"})
    assert env_vars.home == tmp_path
    assert env_vars.workon_home == "/envs"


def test_from_environ_missing_values():
    env_vars = EnvVariables.from_environ({})
    assert env_vars.home is None
    assert env_vars.workon_home is None


def test_work_on_home_from_variable(tmp_path):
    workon = tmp_path / "envs"
    workon.mkdir()
    env_vars = EnvVariables(home=None, workon_home=str(workon))
    assert get_work_on_home_path(env_vars) == workon.resolve()


def test_work_on_home_falls_back_to_default(tmp_path):
    default = tmp_path / DEFAULT_HOME_DIR
    default.mkdir()
    env_vars = EnvVariables(home=tmp_path, workon_home=str(tmp_path / "missing"))
    assert get_work_on_home_path(env_vars) == default


def test_work_on_home_none_when_nothing_exists(tmp_path):
    env_vars = EnvVariables(home=tmp_path, workon_home=None)
    assert get_work_on_home_path(env_vars) is None


def test_is_virtualenvwrapper_under_workon_home(tmp_path):
    workon = tmp_path / "envs"
    root = workon / "proj"
    exe = make_env(root)
    env_vars = EnvVariables(home=None, workon_home=str(workon))
    assert is_virtualenvwrapper(PythonEnv(exe, root, None), env_vars) is True


def test_is_virtualenvwrapper_requires_prefix(tmp_path):
    workon = tmp_path / "envs"
    exe = make_env(workon / "proj")
    env_vars = EnvVariables(home=None, workon_home=str(workon))
    assert is_virtualenvwrapper(PythonEnv(exe, None, None), env_vars) is False


def test_is_virtualenvwrapper_outside_workon_home(tmp_path):
    workon = tmp_path / "envs"
    workon.mkdir()
    root = tmp_path / "elsewhere"
    exe = make_env(root)
    env_vars = EnvVariables(home=None, workon_home=str(workon))
    assert is_virtualenvwrapper(PythonEnv(exe, root, None), env_vars) is False


def test_get_project_existing(tmp_path):
    root = tmp_path / "env"
    exe = make_env(root)
    project = tmp_path / "project"
    project.mkdir()
    (root / ".project").write_text(f"  {project}\n")
    assert get_project(PythonEnv(exe, root, None)) == project


def test_get_project_missing_folder(tmp_path):
    root = tmp_path / "env"
    exe = make_env(root)
    (root / ".project").write_text(str(tmp_path / "gone"))
    assert get_project(PythonEnv(exe, root, None)) is None


def test_get_project_without_file(tmp_path):
    root = tmp_path / "env"
    exe = make_env(root)
    assert get_project(PythonEnv(exe, root, None)) is None


def test_locator_try_from(tmp_path):
    workon = tmp_path / "envs"
    root = workon / "proj"
    exe = make_env(root)
    project = tmp_path / "project"
    project.mkdir()
    (root / ".project").write_text(str(project))
    locator = VirtualEnvWrapper(EnvVariables(home=None, workon_home=str(workon)))
    result = locator.try_from(PythonEnv(exe, root, "3.12.1"))
    assert result.kind is PythonEnvironmentKind.VirtualEnvWrapper
    assert result.project == project
    assert result.version == "3.12.1"
    assert result.symlinks == [exe]


def test_locator_try_from_rejects(tmp_path):
    root = tmp_path / "elsewhere"
    exe = make_env(root)
    locator = VirtualEnvWrapper(EnvVariables(home=None, workon_home=None))
    assert locator.try_from(PythonEnv(exe, root, None)) is None
    assert locator.supported_categories() == [PythonEnvironmentKind.VirtualEnvWrapper]