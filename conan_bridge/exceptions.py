"""Holds exceptions raised by the Conan bridge"""

from pathlib import Path
from typing import List, Optional, Union


class ConanError(Exception):
    """Base class for every failure surfaced by this package"""


class ProgramNotFoundError(ConanError):
    """Raised when the conan executable cannot be located"""
    def __init__(self, message: str = "Conan not found"):
        super().__init__(message)


class ProcessExecutionError(ConanError):
    """Raised when the conan process cannot be spawned"""
    def __init__(self, message: str, args: Optional[List[str]] = None):
        super().__init__(message)
        self.command = list(args or [])


class InvalidPathEncodingError(ConanError):
    """Raised when a path holds characters that cannot be passed as text"""
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Invalid Unicode in path: {path!r}")
        self.path = path


class MissingRequiredPathError(ConanError):
    """Raised when a command needs a path that was never set"""
    def __init__(self, name: str):
        super().__init__(f"The {name} path is missing")
        self.name = name


class MalformedReportError(ConanError):
    """Raised when a build info report is not valid JSON or does not match the schema"""


class ReportIOError(ConanError):
    """Raised when a file or directory cannot be read"""
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class InvalidFileNameError(ConanError):
    """Raised when a library file name cannot be interpreted as text"""
    def __init__(self, path: Path):
        super().__init__(f"Invalid file name: {path!r}")
        self.path = path


__all__ = [
    "ConanError",
    "InvalidFileNameError",
    "InvalidPathEncodingError",
    "MalformedReportError",
    "MissingRequiredPathError",
    "ProcessExecutionError",
    "ReportIOError",
    "ProgramNotFoundError",
]
