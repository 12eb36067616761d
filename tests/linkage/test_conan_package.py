import io
import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from conan_bridge.exceptions import InvalidFileNameError, ReportIOError
from conan_bridge.linkage import ConanPackage, LinkKind
from conan_bridge.linkage import directives


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def package(tmp_path):
    root = tmp_path / "package"
    _touch(root / "lib" / "libssl.a")
    _touch(root / "lib" / "libcrypto.so")
    _touch(root / "lib" / "zstd.dll")
    _touch(root / "lib" / "README.txt")
    _touch(root / "lib" / "cmake" / "libnested.a")
    _touch(root / "bin" / "libtool.dylib")
    return root


def test_directive_lines():
    assert directives.link_search("/opt/lib") == "cargo:rustc-link-search=native=/opt/lib"
    assert directives.link_lib("ssl") == "cargo:rustc-link-lib=ssl"
    assert directives.link_lib("ssl", LinkKind.STATIC) == "cargo:rustc-link-lib=static=ssl"
    assert directives.link_lib("ssl", LinkKind.DYNAMIC) == "cargo:rustc-link-lib=dylib=ssl"
    assert directives.include("/opt/include") == "cargo:include=/opt/include"
    assert directives.rerun_if_env_changed("CONAN") == "cargo:rerun-if-env-changed=CONAN"


def test_flat_scan(package):
    lib = package / "lib"
    assert list(ConanPackage(package).link_directives()) == [
        "cargo:rustc-link-lib=dylib=crypto",
        f"cargo:rustc-link-search=native={lib}",
        "cargo:rustc-link-lib=static=ssl",
        f"cargo:rustc-link-search=native={lib}",
        "cargo:rustc-link-lib=dylib=zstd",
        f"cargo:rustc-link-search=native={lib}",
    ]


def test_recursive_scan(package):
    names = [line for line in ConanPackage(package).link_directives(recursive=True)
             if line.startswith("cargo:rustc-link-lib=")]
    assert names == [
        "cargo:rustc-link-lib=dylib=tool",
        "cargo:rustc-link-lib=static=nested",
        "cargo:rustc-link-lib=dylib=crypto",
        "cargo:rustc-link-lib=static=ssl",
        "cargo:rustc-link-lib=dylib=zstd",
    ]


def test_recursive_scan_searches_each_parent(package):
    lines = list(ConanPackage(package).link_directives(recursive=True))
    assert lines[lines.index("cargo:rustc-link-lib=static=nested") + 1] == \
        f"cargo:rustc-link-search=native={package / 'lib' / 'cmake'}"


def test_unknown_extensions_are_skipped(package):
    files = ConanPackage(package).library_files()
    assert [f.name for f in files] == ["libcrypto.so", "libssl.a", "zstd.dll"]


def test_custom_library_dir(package):
    assert [f.name for f in ConanPackage(package, lib_dir="bin").library_files()] == ["libtool.dylib"]


def test_missing_library_dir(tmp_path):
    package = ConanPackage(tmp_path / "missing")
    with pytest.raises(ReportIOError) as excinfo:
        package.library_files()
    assert excinfo.value.path == tmp_path / "missing" / "lib"


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs byte file names")
def test_undecodable_file_name(tmp_path):
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "lib\udcff.a").write_bytes(b"")

    with pytest.raises(InvalidFileNameError):
        ConanPackage(tmp_path).library_files()


def test_emit_libs_linkage(package):
    stream = io.StringIO()
    ConanPackage(package, lib_dir="bin").emit_libs_linkage(stream=stream)
    assert stream.getvalue() == (
        "cargo:rustc-link-lib=dylib=tool\n"
        f"cargo:rustc-link-search=native={package / 'bin'}\n"
    )


def test_recursive_scan_of_missing_root(tmp_path):
    package = ConanPackage(tmp_path / "missing")
    with pytest.raises(ReportIOError) as excinfo:
        package.library_files(recursive=True)
    assert excinfo.value.path == tmp_path / "missing"


def test_recursive_scan_of_file_root(tmp_path):
    root = _touch(tmp_path / "package")
    with pytest.raises(ReportIOError):
        ConanPackage(root).library_files(recursive=True)


def test_recursive_scan_of_unreadable_subdirectory(package, monkeypatch):
    scandir = os.scandir
    locked = package / "lib" / "cmake"

    def fake_scandir(path="."):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    with pytest.raises(ReportIOError):
        ConanPackage(package).library_files(recursive=True)
