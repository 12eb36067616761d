"""
``conan build`` command
"""

from typing import ClassVar, List

from .base_command import FolderCommand, FolderCommandBuilder


class BuildCommand(FolderCommand):
    """Builds a recipe in a local folder"""

    command_name: ClassVar[str] = "build"

    should_configure: bool = False
    should_build: bool = False
    should_install: bool = False

    def args(self) -> List[str]:
        args = self.folder_args()

        if self.should_configure:
            args.append("--configure")

        if self.should_build:
            args.append("--build")

        if self.should_install:
            args.append("--install")

        return args


class BuildCommandBuilder(FolderCommandBuilder):
    """Builder for BuildCommand"""

    def __init__(self):
        super().__init__()
        self.should_configure = False
        self.should_build = False
        self.should_install = False

    def with_configure(self, should_configure: bool = True) -> "BuildCommandBuilder":
        """Run the configure step"""
        self.should_configure = should_configure
        return self

    def with_build(self, should_build: bool = True) -> "BuildCommandBuilder":
        """Run the build step"""
        self.should_build = should_build
        return self

    def with_install(self, should_install: bool = True) -> "BuildCommandBuilder":
        """Run the install step"""
        self.should_install = should_install
        return self

    def build(self) -> BuildCommand:
        return BuildCommand(
            should_configure=self.should_configure,
            should_build=self.should_build,
            should_install=self.should_install,
            **self._fields(),
        )


__all__ = ["BuildCommand", "BuildCommandBuilder"]
