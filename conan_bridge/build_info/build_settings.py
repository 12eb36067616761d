"""Contains the toolchain settings model shared by reports and install commands"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildType(str, Enum):
    """Values conan accepts for the ``build_type`` setting"""
    NONE = "None"
    DEBUG = "Debug"
    RELEASE = "Release"
    REL_WITH_DEB_INFO = "RelWithDebInfo"
    MIN_SIZE_REL = "MinSizeRel"

    def __str__(self) -> str:
        return self.value


# Build modes of the calling build mapped to conan build types
BUILD_MODE_TYPES = {
    "debug": BuildType.DEBUG,
    "release": BuildType.RELEASE,
}


class BuildSettings(BaseModel):
    """Holds conan settings, as found in a report or passed with ``-s``"""
    model_config = ConfigDict(frozen=True,
                              populate_by_name=True)

    arch: Optional[str] = None
    """Host architecture"""
    arch_build: Optional[str] = None
    """Architecture of the build machine"""
    build_type: Optional[str] = None
    """Build type, see BuildType"""
    compiler: Optional[str] = None
    """Compiler name"""
    compiler_libcxx: Optional[str] = Field(default=None, alias="compiler.libcxx")
    """C++ standard library of the compiler"""
    compiler_version: Optional[str] = Field(default=None, alias="compiler.version")
    """Compiler version"""
    os: Optional[str] = None
    """Host operating system"""
    os_build: Optional[str] = None
    """Operating system of the build machine"""

    @field_validator("build_type", mode="before")
    @classmethod
    def _build_type_to_str(cls, value):
        if isinstance(value, BuildType):
            return value.value
        return value

    def detect_build_type(self, build_mode: Optional[str] = None) -> Optional[str]:
        """
        Return the build type, falling back to the build mode of the caller

        Args:
            build_mode: ``debug`` or ``release``, anything else is ignored

        Returns:
            The configured build type, the detected one, or None
        """
        if self.build_type is not None:
            return self.build_type
        detected = BUILD_MODE_TYPES.get(build_mode or "")
        return detected.value if detected is not None else None

    def args(self, build_mode: Optional[str] = None) -> List[str]:
        """
        Render the settings as ``-s key=value`` pairs

        Pairs follow a fixed key order; unset keys are left out.
        """
        pairs = [
            ("arch", self.arch),
            ("arch_build", self.arch_build),
            ("build_type", self.detect_build_type(build_mode)),
            ("compiler", self.compiler),
            ("compiler.libcxx", self.compiler_libcxx),
            ("compiler.version", self.compiler_version),
            ("os", self.os),
            ("os_build", self.os_build),
        ]

        args: List[str] = []
        for key, value in pairs:
            if value is not None:
                args.extend(["-s", f"{key}={value}"])
        return args


__all__ = ["BuildSettings", "BuildType", "BUILD_MODE_TYPES"]
