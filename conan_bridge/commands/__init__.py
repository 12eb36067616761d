"""
Command models for the conan sub-commands
"""

from .base_command import BaseCommand
from .build_command import BuildCommand, BuildCommandBuilder
from .install_command import BuildPolicy, InstallCommand, InstallCommandBuilder
from .package_command import PackageCommand, PackageCommandBuilder

__all__ = [
    "BaseCommand",
    "BuildCommand",
    "BuildCommandBuilder",
    "BuildPolicy",
    "InstallCommand",
    "InstallCommandBuilder",
    "PackageCommand",
    "PackageCommandBuilder",
]
