"""Contains the model of one resolved dependency in a conan build info report"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class BuildDependency(BaseModel):
    """Holds the paths and flags conan resolved for one package"""
    model_config = ConfigDict(frozen=True)

    name: str
    """Package name, used as the lookup key"""
    version: str
    """Resolved package version"""
    description: Optional[str] = None
    """Package description"""
    rootpath: str
    """Package folder in the conan cache"""
    sysroot: str
    """Sysroot declared by the package"""
    include_paths: Tuple[str, ...]
    lib_paths: Tuple[str, ...]
    bin_paths: Tuple[str, ...]
    build_paths: Tuple[str, ...]
    res_paths: Tuple[str, ...]
    libs: Tuple[str, ...]
    """Libraries to link, without prefix or extension"""
    system_libs: Optional[Tuple[str, ...]] = None
    """System libraries the package needs, only present in newer reports"""
    defines: Tuple[str, ...]
    """Preprocessor definitions, ``NAME`` or ``NAME=VALUE``"""
    cflags: Tuple[str, ...]
    cxxflags: Optional[Tuple[str, ...]] = None
    cppflags: Optional[Tuple[str, ...]] = None
    sharedlinkflags: Tuple[str, ...]
    """Link flags for shared libraries"""
    exelinkflags: Tuple[str, ...]
    """Link flags for executables"""

    @field_validator("description", mode="before")
    @classmethod
    def _join_description(cls, value):
        """Accept the description as null, a string or a list of strings.

        Conan changed the shape of this field between releases; a list is
        concatenated in order without a separator.
        """
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return "".join(value)
        raise ValueError("description must be null, a string, or an array of strings")

    @property
    def root_dir(self) -> Optional[str]:
        return self.rootpath

    @property
    def library_dir(self) -> Optional[str]:
        """First library path, if any"""
        return self.lib_paths[0] if self.lib_paths else None

    @property
    def include_dir(self) -> Optional[str]:
        """First include path, if any"""
        return self.include_paths[0] if self.include_paths else None

    @property
    def binary_dir(self) -> Optional[str]:
        """First binary path, if any"""
        return self.bin_paths[0] if self.bin_paths else None


__all__ = ["BuildDependency"]
