import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from conan_bridge.main import main

DATA_DIR = ROOT_DIR / "tests" / "data"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in ("CONAN", "PROFILE", "OUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_build_dry_run(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["build", "--dry-run"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "conan build .\n"


def test_install_dry_run_from_config(tmp_path, capsys):
    config = tmp_path / "conan.yaml"
    config.write_text("install:\n  profile_host: linux-x86_64\n  build_policy: missing\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["install", "--dry-run", "--config", str(config)])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "conan install -g json --profile:host linux-x86_64 -b missing\n"


def test_emit_from_report(capsys):
    main(["emit", "--build-info", str(DATA_DIR / "conanbuildinfo_openssl.json")])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("cargo:rustc-link-search=native=")
    assert lines[1:3] == ["cargo:rustc-link-lib=ssl", "cargo:rustc-link-lib=crypto"]
    assert lines[-1] == "cargo:rerun-if-env-changed=CONAN"


def test_emit_from_package(tmp_path, capsys):
    lib = tmp_path / "package" / "lib"
    lib.mkdir(parents=True)
    (lib / "libz.a").write_bytes(b"")

    main(["emit", "--package-dir", str(tmp_path / "package")])
    assert capsys.readouterr().out.splitlines() == [
        "cargo:rustc-link-lib=static=z",
        f"cargo:rustc-link-search=native={lib}",
    ]


def test_missing_report_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["emit", "--build-info", str(tmp_path / "conanbuildinfo.json")])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


def test_missing_config_exits_with_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["install", "--config", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 1


def test_recursive_emit_of_missing_package_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["emit", "--recursive", "--package-dir", str(tmp_path / "typo")])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""
