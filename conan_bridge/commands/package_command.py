"""
``conan package`` command
"""

from typing import ClassVar, List

from .base_command import FolderCommand, FolderCommandBuilder


class PackageCommand(FolderCommand):
    """Packages a locally built recipe into a package folder"""

    command_name: ClassVar[str] = "package"

    def args(self) -> List[str]:
        return self.folder_args()


class PackageCommandBuilder(FolderCommandBuilder):
    """Builder for PackageCommand"""

    def build(self) -> PackageCommand:
        return PackageCommand(**self._fields())


__all__ = ["PackageCommand", "PackageCommandBuilder"]
