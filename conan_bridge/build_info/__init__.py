"""
Typed model of the ``conanbuildinfo.json`` report written by ``conan install -g json``
"""

import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import MalformedReportError, ReportIOError
from ..linkage import directives
from .build_dependency import BuildDependency
from .build_settings import BuildSettings, BuildType

logger = logging.getLogger(__name__)

BUILD_INFO_FILENAME = "conanbuildinfo.json"


class BuildInfo(BaseModel):
    """Dependencies and settings resolved by one ``conan install``"""
    model_config = ConfigDict(frozen=True)

    dependencies: Tuple[BuildDependency, ...]
    """Resolved packages, in report order"""
    settings: BuildSettings
    """Settings the packages were resolved for"""

    @classmethod
    def from_str(cls, text: str) -> "BuildInfo":
        """
        Parse a report from JSON text

        Raises:
            MalformedReportError: Invalid JSON or a payload not matching the schema
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedReportError(f"Invalid build info JSON: {e}") from e

        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise MalformedReportError(f"Invalid build info report: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "BuildInfo":
        """
        Parse a report from a file

        Raises:
            ReportIOError: The file is missing or unreadable
            MalformedReportError: The content is not a valid report
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReportIOError(f"Cannot read build info {path}: {e}", path) from e
        logger.debug(f"Loaded build info from {path}")
        return cls.from_str(text)

    def find_dependency(self, name: str) -> Optional[BuildDependency]:
        """Return the first dependency called ``name``, or None"""
        for dependency in self.dependencies:
            if dependency.name == name:
                return dependency
        return None

    def link_directives(self) -> Iterator[str]:
        """Yield the directives describing how to link every dependency"""
        for dependency in self.dependencies:
            for lib_path in dependency.lib_paths:
                yield directives.link_search(lib_path)

            for lib in dependency.libs:
                yield directives.link_lib(lib)

            for syslib in dependency.system_libs or ():
                yield directives.link_lib(syslib)

            for include_path in dependency.include_paths:
                yield directives.include(include_path)

            yield directives.rerun_if_env_changed("CONAN")

    def emit_link_directives(self, stream: Optional[TextIO] = None) -> None:
        """Print the link directives, one per line"""
        directives.emit(self.link_directives(), stream)

    def library_names(self) -> List[str]:
        """All libraries and system libraries, in link order"""
        names: List[str] = []
        for dependency in self.dependencies:
            names.extend(dependency.libs)
            names.extend(dependency.system_libs or ())
        return names


__all__ = [
    "BUILD_INFO_FILENAME",
    "BuildDependency",
    "BuildInfo",
    "BuildSettings",
    "BuildType",
]
