import os

from pyenvscan.env import PythonEnv
from pyenvscan.environment import PythonEnvironmentKind
from pyenvscan.venv import Venv, is_venv, is_venv_dir

BIN = "Scripts" if os.name == "nt" else "bin"
PYTHON = "python.exe" if os.name == "nt" else "python"
PYTHON3 = "python3.exe" if os.name == "nt" else "python3"


def make_venv(root, cfg="version = 3.12.1\n"):
    bin_dir = root / BIN
    bin_dir.mkdir(parents=True)
    (bin_dir / PYTHON).write_text("")
    (bin_dir / PYTHON3).write_text("")
    if cfg is not None:
        (root / "pyvenv.cfg").write_text(cfg)
    return bin_dir / PYTHON


def test_is_venv_dir_with_cfg(tmp_path):
    make_venv(tmp_path / "env")
    assert is_venv_dir(tmp_path / "env") is True
    assert is_venv_dir(tmp_path / "env" / BIN) is True


def test_is_venv_dir_without_cfg(tmp_path):
    make_venv(tmp_path / "env", cfg=None)
    assert is_venv_dir(tmp_path / "env") is False


def test_is_venv_detects_cfg_next_to_bin(tmp_path):
    exe = make_venv(tmp_path / "env")
    assert is_venv(PythonEnv(exe, None, None)) is True


def test_is_venv_false_without_cfg(tmp_path):
    exe = make_venv(tmp_path / "env", cfg=None)
    assert is_venv(PythonEnv(exe, None, None)) is False


def test_try_from_uses_given_version(tmp_path):
    root = tmp_path / "env"
    exe = make_venv(root)
    result = Venv().try_from(PythonEnv(exe, root, "3.11.2"))
    assert result.kind is PythonEnvironmentKind.Venv
    assert result.version == "3.11.2"
    assert result.prefix == root
    assert result.executable == exe
    assert result.symlinks == sorted([root / BIN / PYTHON, root / BIN / PYTHON3])


def test_try_from_derives_prefix_and_version_from_headers(tmp_path):
    root = tmp_path / "env"
    exe = make_venv(root)
    include = root / "include"
    include.mkdir()
    (include / "patchlevel.h").write_text('#define PY_VERSION              "3.10.2"\n')
    result = Venv().try_from(PythonEnv(exe, None, None))
    assert result.prefix == root
    assert result.version == "3.10.2"


def test_try_from_rejects_non_venv(tmp_path):
    exe = make_venv(tmp_path / "env", cfg=None)
    assert Venv().try_from(PythonEnv(exe, None, None)) is None


def test_supported_categories():
    assert Venv().supported_categories() == [PythonEnvironmentKind.Venv]