import subprocess
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from conan_bridge.exceptions import ProgramNotFoundError
from conan_bridge.platform import (
    ConanEnvironment,
    ConanProgram,
    ConanVersion,
    Remote,
    find_program,
    get_profile_list,
    get_remote_list,
    parse_remote_list,
    parse_version,
)


def _fake_output(monkeypatch, stdout: str, returncode: int = 0):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncode, stdout, "")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_environment_from_mapping(tmp_path):
    environment = ConanEnvironment.from_environ(
        {"CONAN": "/opt/conan", "PROFILE": "release", "OUT_DIR": "/tmp/out"},
        cwd=tmp_path,
    )
    assert environment.program == Path("/opt/conan")
    assert environment.build_mode == "release"
    assert environment.out_dir == Path("/tmp/out")
    assert environment.cwd == tmp_path


def test_empty_environment_values_are_unset():
    environment = ConanEnvironment.from_environ({"CONAN": "", "PROFILE": "", "OUT_DIR": ""})
    assert environment.program is None
    assert environment.build_mode is None
    assert environment.out_dir is None
    assert environment.cwd == Path.cwd()


def test_environment_from_process(monkeypatch):
    monkeypatch.setenv("PROFILE", "debug")
    monkeypatch.delenv("OUT_DIR", raising=False)
    environment = ConanEnvironment.from_environ()
    assert environment.build_mode == "debug"
    assert environment.out_dir is None


def test_find_program_override(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/conan")
    environment = ConanEnvironment(program=Path("/opt/conan/bin/conan"))
    assert find_program(environment) == Path("/opt/conan/bin/conan")


def test_find_program_on_path(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/local/bin/{name}")
    assert find_program(ConanEnvironment()) == Path("/usr/local/bin/conan")


def test_find_program_missing(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda name: None)
    with pytest.raises(ProgramNotFoundError):
        find_program(ConanEnvironment())


@pytest.mark.parametrize("output,expected", [
    ("Conan version 1.14.3\n", ConanVersion(major=1, minor=14, micro=3)),
    ("Conan version 1.59.0", ConanVersion(major=1, minor=59, micro=0)),
    ("Conan version 2.0", None),
    ("", None),
])
def test_parse_version(output, expected):
    assert parse_version(output) == expected


def test_version_str():
    assert str(ConanVersion(major=1, minor=14, micro=3)) == "1.14.3"


def test_parse_remote_list():
    output = (
        "conancenter: https://center.conan.io [Verify SSL: True]\n"
        "\n"
        "-----\n"
        "devolutions: https://conan.devolutions.net/artifactory/api/conan/conan-local [Verify SSL: True]\n"
    )
    assert parse_remote_list(output) == [
        Remote(name="conancenter", url="https://center.conan.io"),
        Remote(name="devolutions",
               url="https://conan.devolutions.net/artifactory/api/conan/conan-local"),
    ]


def test_remote_str():
    assert str(Remote(name="conancenter", url="https://center.conan.io")) == \
        "conancenter: https://center.conan.io"


def test_get_profile_list(monkeypatch):
    calls = _fake_output(monkeypatch, "default\nlinux-x86_64\n\n")
    assert get_profile_list(Path("conan")) == ["default", "linux-x86_64"]
    assert calls == [["conan", "profile", "list"]]


def test_get_profile_list_failure(monkeypatch):
    _fake_output(monkeypatch, "default\n", returncode=1)
    assert get_profile_list(Path("conan")) == []


def test_get_remote_list(monkeypatch):
    calls = _fake_output(monkeypatch, "conancenter: https://center.conan.io [Verify SSL: True]\n")
    assert get_remote_list(Path("conan")) == [Remote(name="conancenter", url="https://center.conan.io")]
    assert calls == [["conan", "remote", "list"]]


def test_detect_program(monkeypatch):
    calls = _fake_output(monkeypatch, "Conan version 1.14.3\n")
    program = ConanProgram.detect(ConanEnvironment(program=Path("/opt/conan")))

    assert program.path == Path("/opt/conan")
    assert str(program.version) == "1.14.3"
    assert calls == [["/opt/conan", "--version"]]


def test_detect_program_unknown_version(monkeypatch):
    _fake_output(monkeypatch, "usage: conan\n", returncode=2)
    program = ConanProgram.detect(ConanEnvironment(program=Path("/opt/conan")))
    assert program.version is None


def test_detect_program_override_that_does_not_exist(tmp_path):
    with pytest.raises(ProgramNotFoundError, match="Conan not found at"):
        ConanProgram.detect(ConanEnvironment(program=tmp_path / "missing-conan"))
