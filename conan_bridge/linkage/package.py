"""
Linker directives derived from the files of an installed conan package
"""

import os
import logging
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Union

from ..exceptions import InvalidFileNameError, ReportIOError
from . import directives
from .directives import LinkKind

logger = logging.getLogger(__name__)

# Library file extensions and how they link
LIBRARY_EXTENSIONS = {
    ".a": LinkKind.STATIC,
    ".so": LinkKind.DYNAMIC,
    ".dll": LinkKind.DYNAMIC,
    ".dylib": LinkKind.DYNAMIC,
}


class ConanPackage:
    """A package folder produced by ``conan package`` or found in the cache"""

    def __init__(self, path: Union[str, Path] = Path("package"), lib_dir: str = "lib"):
        """
        Args:
            path: Package root folder
            lib_dir: Library folder, relative to the package root
        """
        self.path = Path(path)
        self.lib_dir = lib_dir

    @property
    def library_path(self) -> Path:
        return self.path / self.lib_dir

    def library_files(self, recursive: bool = False) -> List[Path]:
        """
        List the library files of the package

        Args:
            recursive: Walk the whole package root instead of the library folder only

        Raises:
            ReportIOError: The folder cannot be listed
            InvalidFileNameError: A library file name is not valid text
        """
        root = self.path if recursive else self.library_path
        if not root.is_dir():
            raise ReportIOError(f"Cannot list {root}: not a directory", root)
        try:
            if recursive:
                candidates = sorted(p for p in _walk_files(root) if p.is_file())
            else:
                candidates = sorted(p for p in root.iterdir() if p.is_file())
        except OSError as e:
            raise ReportIOError(f"Cannot list {root}: {e}", root) from e

        files = []
        for candidate in candidates:
            if candidate.suffix not in LIBRARY_EXTENSIONS:
                continue
            _check_file_name(candidate)
            files.append(candidate)
        return files

    def link_directives(self, recursive: bool = False) -> Iterator[str]:
        """Yield a link and a search-path directive for each library file"""
        for library in self.library_files(recursive):
            kind = LIBRARY_EXTENSIONS[library.suffix]
            name = library.stem
            # libfoo.a links as foo
            if name.startswith("lib"):
                name = name[3:]
            logger.debug(f"Linking {library.name} as {kind.value} library {name}")
            yield directives.link_lib(name, kind)
            yield directives.link_search(library.parent)

    def emit_libs_linkage(self, recursive: bool = False, stream: Optional[TextIO] = None) -> None:
        """Print the linkage of every library file in the package"""
        directives.emit(self.link_directives(recursive), stream)


def _walk_files(root: Path) -> Iterator[Path]:
    def _raise(error: OSError) -> None:
        raise error

    # os.walk drops unreadable directories unless onerror raises
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for filename in filenames:
            yield Path(dirpath) / filename


def _check_file_name(path: Path) -> None:
    # Undecodable bytes survive os.listdir as lone surrogates
    try:
        os.fsdecode(path.name).encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidFileNameError(path) from e


__all__ = ["ConanPackage", "LIBRARY_EXTENSIONS"]
