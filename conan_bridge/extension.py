"""
setuptools integration: feed a build info report into extensions
"""

from pathlib import Path
from typing import List, Optional, Tuple

from setuptools import Extension
from setuptools.command.build_ext import build_ext

from .build_info import BuildInfo
from .config import ConfigLoader


def split_define(define: str) -> Tuple[str, Optional[str]]:
    """Turn ``NAME=VALUE`` into a define_macros entry"""
    name, sep, value = define.partition("=")
    return (name, value if sep else None)


def apply_build_info(ext: Extension, build_info: BuildInfo, cplusplus: bool = True) -> Extension:
    """
    Add the include/library paths, libraries, defines and flags of every
    dependency to an extension

    Args:
        ext: Extension to update in place
        build_info: Parsed conan report
        cplusplus: Use cxxflags rather than cflags for compilation

    Returns:
        The same extension, for chaining
    """
    compile_args: List[str] = []
    for dependency in build_info.dependencies:
        ext.include_dirs.extend(dependency.include_paths)
        ext.library_dirs.extend(dependency.lib_paths)
        ext.libraries.extend(dependency.libs)
        ext.libraries.extend(dependency.system_libs or ())
        ext.define_macros.extend(split_define(define) for define in dependency.defines)

        if cplusplus and dependency.cxxflags is not None:
            compile_args.extend(dependency.cxxflags)
        else:
            compile_args.extend(dependency.cflags)
        compile_args.extend(dependency.cppflags or ())

        ext.extra_link_args.extend(dependency.sharedlinkflags)

    ext.extra_compile_args.extend(compile_args)
    return ext


class ConanBuildExt(build_ext):
    """
    build_ext that runs ``conan install`` first and links every extension
    against the resolved dependencies.

    Use it in setup.py with ``cmdclass={"build_ext": ConanBuildExt}``; the
    install is described by ``--conan-config`` (defaults to ``conan.yaml``
    when that file exists).
    """

    user_options = build_ext.user_options + [
        ("conan-config=", None, "YAML file describing the conan install"),
    ]

    def initialize_options(self):
        super().initialize_options()
        self.conan_config = None

    def load_build_info(self) -> BuildInfo:
        config_file = Path(self.conan_config) if self.conan_config else Path("conan.yaml")
        if config_file.exists():
            loader = ConfigLoader(config_file)
        elif self.conan_config:
            raise RuntimeError(f"Conan config not found: {config_file}")
        else:
            loader = ConfigLoader()

        command = loader.get_install_builder().build()
        build_info = command.generate_if_no_buildinfo()
        if build_info is None:
            raise RuntimeError(
                "conan install failed. Please inspect the log output above."
            )
        return build_info

    def run(self):
        build_info = self.load_build_info()
        for ext in self.extensions:
            apply_build_info(ext, build_info, cplusplus=ext.language != "c")
        super().run()


__all__ = ["ConanBuildExt", "apply_build_info", "split_define"]
