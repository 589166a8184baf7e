import os

from pyenvscan.headers import get_version

BIN = "Scripts" if os.name == "nt" else "bin"


def write_header(directory, version):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "patchlevel.h").write_text(
        "/* Version as a string */\n"
        f'#define PY_VERSION              "{version}"\n'
        "/*--end constants--*/\n"
    )


def test_version_from_include(tmp_path):
    prefix = tmp_path / "python3.9.9"
    write_header(prefix / "include", "3.9.9")
    (prefix / BIN).mkdir()
    assert get_version(prefix) == "3.9.9"
    assert get_version(prefix / BIN) == "3.9.9"


def test_version_from_headers_dir(tmp_path):
    prefix = tmp_path / "python3.10-dev"
    write_header(prefix / "Headers", "3.10.14+")
    assert get_version(prefix) == "3.10.14+"


def test_version_from_sub_directory(tmp_path):
    prefix = tmp_path / "python3.13"
    write_header(prefix / "include" / "python3.13", "3.13.0a5")
    (prefix / BIN).mkdir()
    assert get_version(prefix / BIN) == "3.13.0a5"


def test_headers_preferred_over_include(tmp_path):
    prefix = tmp_path / "p"
    write_header(prefix / "Headers", "3.10.2")
    write_header(prefix / "include", "3.9.9")
    assert get_version(prefix) == "3.10.2"


def test_no_headers(tmp_path):
    prefix = tmp_path / "python3.9.9_without_headers"
    (prefix / BIN).mkdir(parents=True)
    assert get_version(prefix) is None
    assert get_version(tmp_path / "missing") is None


def test_header_without_version_define(tmp_path):
    prefix = tmp_path / "p"
    (prefix / "include").mkdir(parents=True)
    (prefix / "include" / "patchlevel.h").write_text("#define PY_MAJOR_VERSION 3\n")
    assert get_version(prefix) is None