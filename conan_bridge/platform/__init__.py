"""
Conan program detection and the environment signals the bridge depends on
"""

import os
import re
import shutil
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ProcessExecutionError, ProgramNotFoundError
from ..utils import run_command

logger = logging.getLogger(__name__)

# $ conan --version
# Conan version 1.14.3
REGEX_CONAN_VERSION = re.compile(r"version (\d+)\.(\d+)\.(\d+)$")

# $ conan remote list
# conancenter: https://center.conan.io [Verify SSL: True]
REGEX_CONAN_REMOTE = re.compile(r"(\S+):\s+(\S+)\s+(.*)")


class ConanEnvironment(BaseModel):
    """Snapshot of the environment signals read by the commands

    Captured once and handed to commands explicitly, so rendering never
    reads process state on its own.
    """
    model_config = ConfigDict(frozen=True)

    program: Optional[Path] = None
    """Explicit conan executable (``CONAN``)"""
    build_mode: Optional[str] = None
    """Build mode of the calling build, ``debug`` or ``release`` (``PROFILE``)"""
    out_dir: Optional[Path] = None
    """Output directory chosen by the calling build (``OUT_DIR``)"""
    cwd: Path = Field(default_factory=Path.cwd)
    """Working directory the conan process will run in"""

    @classmethod
    def from_environ(cls,
                     environ: Optional[Mapping[str, str]] = None,
                     cwd: Optional[Path] = None) -> "ConanEnvironment":
        """
        Read the signals from the process environment

        Args:
            environ: Mapping to read instead of ``os.environ``
            cwd: Working directory, defaults to the current one

        Returns:
            ConanEnvironment instance
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, object] = {
            "program": environ.get("CONAN") or None,
            "build_mode": environ.get("PROFILE") or None,
            "out_dir": environ.get("OUT_DIR") or None,
        }
        if cwd is not None:
            values["cwd"] = cwd
        return cls(**values)


class ConanVersion(BaseModel):
    """Version reported by ``conan --version``"""
    model_config = ConfigDict(frozen=True)

    major: int
    minor: int
    micro: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.micro}"


class Remote(BaseModel):
    """A remote registered in the local conan client"""
    model_config = ConfigDict(frozen=True)

    name: str
    url: str

    def __str__(self) -> str:
        return f"{self.name}: {self.url}"


def find_program(environment: Optional[ConanEnvironment] = None) -> Path:
    """
    Locate the conan executable

    The ``CONAN`` override wins over a ``PATH`` search.

    Raises:
        ProgramNotFoundError: Neither source resolves
    """
    if environment is None:
        environment = ConanEnvironment.from_environ()

    if environment.program is not None:
        return environment.program

    found = shutil.which("conan")
    if not found:
        raise ProgramNotFoundError()
    return Path(found)


def parse_version(output: str) -> Optional[ConanVersion]:
    """Parse the output of ``conan --version``"""
    match = REGEX_CONAN_VERSION.search(output.strip())
    if not match:
        return None
    return ConanVersion(major=int(match.group(1)),
                        minor=int(match.group(2)),
                        micro=int(match.group(3)))


def parse_remote_list(output: str) -> List[Remote]:
    """Parse the output of ``conan remote list``"""
    remotes = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        match = REGEX_CONAN_REMOTE.match(line)
        if not match:
            logger.debug(f"Ignoring unrecognized remote line: {line}")
            continue
        remotes.append(Remote(name=match.group(1), url=match.group(2)))
    return remotes


def find_version(program: Path) -> Optional[ConanVersion]:
    """
    Query the version of a conan executable

    Returns:
        The version, or None if the program fails or prints something unexpected
    """
    result = run_command([str(program), "--version"], capture_output=True)
    if result.returncode != 0:
        return None
    return parse_version(result.stdout)


def get_profile_list(program: Path) -> List[str]:
    """List the profiles known to the conan client"""
    result = run_command([str(program), "profile", "list"], capture_output=True)
    if result.returncode != 0:
        return []
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def get_remote_list(program: Path) -> List[Remote]:
    """List the remotes configured in the conan client"""
    result = run_command([str(program), "remote", "list"], capture_output=True)
    if result.returncode != 0:
        return []
    return parse_remote_list(result.stdout)


class ConanProgram(BaseModel):
    """Resolved conan executable, passed explicitly to the commands that run it"""
    model_config = ConfigDict(frozen=True)

    path: Path
    version: Optional[ConanVersion] = None

    @classmethod
    def detect(cls, environment: Optional[ConanEnvironment] = None) -> "ConanProgram":
        """
        Resolve the executable and ask it for its version

        Raises:
            ProgramNotFoundError: No executable is found, or the resolved one cannot be started
        """
        path = find_program(environment)
        try:
            version = find_version(path)
        except ProcessExecutionError as e:
            raise ProgramNotFoundError(f"Conan not found at {path}") from e
        if version is None:
            logger.warning(f"Could not determine the version of {path}")
        else:
            logger.debug(f"Detected conan {version} at {path}")
        return cls(path=path, version=version)


__all__ = [
    "ConanEnvironment",
    "ConanProgram",
    "ConanVersion",
    "Remote",
    "find_program",
    "find_version",
    "get_profile_list",
    "get_remote_list",
    "parse_remote_list",
    "parse_version",
]
