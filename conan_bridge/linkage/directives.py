"""
Build directive lines written to stdout for the calling build orchestrator
"""

import sys
from enum import Enum
from typing import Iterable, Optional, TextIO, Union
from pathlib import Path


class LinkKind(str, Enum):
    """How a library file is linked"""
    STATIC = "static"
    DYNAMIC = "dylib"


def link_search(path: Union[str, Path]) -> str:
    return f"cargo:rustc-link-search=native={path}"


def link_lib(name: str, kind: Optional[LinkKind] = None) -> str:
    if kind is None:
        return f"cargo:rustc-link-lib={name}"
    return f"cargo:rustc-link-lib={kind.value}={name}"


def include(path: Union[str, Path]) -> str:
    return f"cargo:include={path}"


def rerun_if_env_changed(variable: str) -> str:
    return f"cargo:rerun-if-env-changed={variable}"


def emit(lines: Iterable[str], stream: Optional[TextIO] = None) -> None:
    """Write directives one per line, stdout by default"""
    if stream is None:
        stream = sys.stdout
    for line in lines:
        print(line, file=stream)


__all__ = ["LinkKind", "emit", "include", "link_lib", "link_search", "rerun_if_env_changed"]
