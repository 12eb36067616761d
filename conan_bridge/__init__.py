"""
Conan Bridge
Typed conan command lines and build info reports for native builds
"""

__version__ = "0.4.0"

from .build_info import BuildDependency, BuildInfo, BuildSettings, BuildType
from .commands import (
    BuildCommand,
    BuildCommandBuilder,
    BuildPolicy,
    InstallCommand,
    InstallCommandBuilder,
    PackageCommand,
    PackageCommandBuilder,
)
from .exceptions import (
    ConanError,
    InvalidFileNameError,
    InvalidPathEncodingError,
    MalformedReportError,
    MissingRequiredPathError,
    ProcessExecutionError,
    ProgramNotFoundError,
    ReportIOError,
)
from .linkage import ConanPackage, LinkKind
from .platform import ConanEnvironment, ConanProgram, ConanVersion, Remote

__all__ = [
    "BuildCommand",
    "BuildCommandBuilder",
    "BuildDependency",
    "BuildInfo",
    "BuildPolicy",
    "BuildSettings",
    "BuildType",
    "ConanEnvironment",
    "ConanError",
    "ConanPackage",
    "ConanProgram",
    "ConanVersion",
    "InstallCommand",
    "InstallCommandBuilder",
    "InvalidFileNameError",
    "InvalidPathEncodingError",
    "LinkKind",
    "MalformedReportError",
    "MissingRequiredPathError",
    "PackageCommand",
    "PackageCommandBuilder",
    "ProcessExecutionError",
    "ProgramNotFoundError",
    "Remote",
    "ReportIOError",
    "__version__",
]
