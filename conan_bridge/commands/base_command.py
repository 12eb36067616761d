"""
Base class shared by the conan command models
"""

import logging
from abc import abstractmethod
from pathlib import Path
from typing import ClassVar, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import InvalidPathEncodingError, MissingRequiredPathError
from ..platform import ConanEnvironment, ConanProgram, find_program
from ..utils import run_command

logger = logging.getLogger(__name__)


def path_arg(path: Union[str, Path]) -> str:
    """
    Convert a path to a command line token

    Raises:
        InvalidPathEncodingError: The path holds undecodable bytes
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathEncodingError(path) from e
    return text


class BaseCommand(BaseModel):
    """Abstract base class for an immutable conan invocation"""
    model_config = ConfigDict(frozen=True)

    command_name: ClassVar[str]

    environment: ConanEnvironment = Field(default_factory=ConanEnvironment.from_environ)
    """Environment signals captured when the command was built"""

    @abstractmethod
    def args(self) -> List[str]:
        """Render the arguments passed to conan, sub-command first"""

    def program_path(self, program: Optional[ConanProgram] = None) -> Path:
        if program is not None:
            return program.path
        return find_program(self.environment)

    def run(self, program: Optional[ConanProgram] = None, dry_run: bool = False) -> int:
        """
        Run the command and return the exit status of conan

        Arguments are rendered before anything is spawned, so rendering
        errors leave no side effects.

        Args:
            program: Resolved conan executable, looked up if omitted
            dry_run: Log the command line instead of running it

        Raises:
            ProgramNotFoundError: No conan executable could be found
            ProcessExecutionError: conan could not be started
        """
        args = self.args()
        conan = self.program_path(program)
        logger.info(f"Running conan {self.command_name}...")
        result = run_command([str(conan), *args], cwd=self.environment.cwd, dry_run=dry_run)
        return result.returncode


class FolderCommand(BaseCommand):
    """A command taking a recipe path and optional folder overrides"""

    recipe_path: Optional[Path] = Path(".")
    build_path: Optional[Path] = None
    install_path: Optional[Path] = None
    package_path: Optional[Path] = None
    source_path: Optional[Path] = None

    def folder_args(self) -> List[str]:
        if self.recipe_path is None:
            raise MissingRequiredPathError("recipe")

        args = [self.command_name, path_arg(self.recipe_path)]

        folders = [
            ("--build-folder", self.build_path),
            ("--install-folder", self.install_path),
            ("--package-folder", self.package_path),
            ("--source-folder", self.source_path),
        ]
        for flag, folder in folders:
            if folder is not None:
                args.extend([flag, path_arg(folder)])

        return args


class FolderCommandBuilder:
    """Accumulates the recipe and folder paths of a FolderCommand"""

    def __init__(self):
        self.recipe_path: Optional[Path] = Path(".")
        self.build_path: Optional[Path] = None
        self.install_path: Optional[Path] = None
        self.package_path: Optional[Path] = None
        self.source_path: Optional[Path] = None
        self.environment: Optional[ConanEnvironment] = None

    def with_recipe_path(self, recipe_path: Union[str, Path]):
        self.recipe_path = Path(recipe_path)
        return self

    def with_build_path(self, build_path: Union[str, Path]):
        self.build_path = Path(build_path)
        return self

    def with_install_path(self, install_path: Union[str, Path]):
        self.install_path = Path(install_path)
        return self

    def with_package_path(self, package_path: Union[str, Path]):
        self.package_path = Path(package_path)
        return self

    def with_source_path(self, source_path: Union[str, Path]):
        self.source_path = Path(source_path)
        return self

    def with_environment(self, environment: ConanEnvironment):
        self.environment = environment
        return self

    def _fields(self) -> dict:
        fields = {
            "recipe_path": self.recipe_path,
            "build_path": self.build_path,
            "install_path": self.install_path,
            "package_path": self.package_path,
            "source_path": self.source_path,
        }
        if self.environment is not None:
            fields["environment"] = self.environment
        return fields


__all__ = ["BaseCommand", "FolderCommand", "FolderCommandBuilder", "path_arg"]
