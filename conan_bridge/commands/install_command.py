"""
``conan install`` command, the only one producing a build info report
"""

import os
import logging
from enum import Enum
from pathlib import Path
from typing import ClassVar, Iterable, List, Optional, Tuple, Union

from pydantic import Field

from ..build_info import BUILD_INFO_FILENAME, BuildInfo, BuildSettings
from ..exceptions import MalformedReportError, ProcessExecutionError, ReportIOError
from ..platform import ConanEnvironment, ConanProgram
from .base_command import BaseCommand, path_arg

logger = logging.getLogger(__name__)


class BuildPolicy(str, Enum):
    """When conan may build packages from source (``--build``)"""
    NEVER = "never"
    ALWAYS = "always"
    MISSING = "missing"
    OUTDATED = "outdated"

    def args(self) -> List[str]:
        # A bare -b means "build everything"
        if self is BuildPolicy.ALWAYS:
            return ["-b"]
        return ["-b", self.value]


class InstallCommand(BaseCommand):
    """Installs the requirements of a recipe and writes ``conanbuildinfo.json``"""

    command_name: ClassVar[str] = "install"

    profile_host: Optional[str] = None
    """Profile applied to the host machine"""
    profile_build: Optional[str] = None
    """Profile applied to the build machine"""
    remote: Optional[str] = None
    build_settings: BuildSettings = Field(default_factory=BuildSettings)
    build_options: Tuple[str, ...] = ()
    """Package options, each passed as ``-o``"""
    build_policy: Optional[BuildPolicy] = None
    recipe_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    """Explicit install folder, see resolved_output_dir"""
    update_check: bool = False

    def args(self) -> List[str]:
        args = ["install", "-g", "json"]

        if self.profile_host is not None:
            args.extend(["--profile:host", self.profile_host])

        if self.profile_build is not None:
            args.extend(["--profile:build", self.profile_build])

        if self.remote is not None:
            args.extend(["-r", self.remote])

        if self.update_check:
            args.append("-u")

        if self.build_policy is not None:
            args.extend(self.build_policy.args())

        for option in self.build_options:
            args.extend(["-o", option])

        # conan already installs into its working directory
        output_dir = self.resolved_output_dir()
        if not self._is_working_dir(output_dir):
            args.extend(["-if", path_arg(output_dir)])

        args.extend(self.build_settings.args(self.environment.build_mode))

        if self.recipe_path is not None:
            args.append(path_arg(self.recipe_path))

        return args

    def resolved_output_dir(self) -> Path:
        """The explicit output dir, else ``OUT_DIR``, else the working directory"""
        if self.output_dir is not None:
            return self.output_dir
        if self.environment.out_dir is not None:
            return self.environment.out_dir
        return self.environment.cwd

    def output_file(self) -> Path:
        """Location of the report written by this install"""
        # Relative output dirs are resolved by conan against its working directory
        return self.environment.cwd / self.resolved_output_dir() / BUILD_INFO_FILENAME

    def _is_working_dir(self, path: Path) -> bool:
        cwd = self.environment.cwd
        return os.path.normpath(cwd / path) == os.path.normpath(cwd)

    def generate(self, program: Optional[ConanProgram] = None) -> Optional[BuildInfo]:
        """
        Run ``conan install`` and parse the report it writes

        Returns:
            The report, or None if conan fails or the report cannot be parsed

        Raises:
            InvalidPathEncodingError: A path cannot be rendered
            ProgramNotFoundError: No conan executable could be found
        """
        try:
            status = self.run(program)
        except ProcessExecutionError as e:
            logger.warning(f"conan install could not be started: {e}")
            return None

        if status != 0:
            logger.warning(f"conan install failed with status {status}")
            return None

        try:
            build_info = BuildInfo.from_file(self.output_file())
        except (ReportIOError, MalformedReportError) as e:
            logger.warning(f"failed to parse conan build info: {e}")
            return None

        logger.info(f"Resolved {len(build_info.dependencies)} dependencies")
        return build_info

    def generate_if_no_buildinfo(self, program: Optional[ConanProgram] = None) -> Optional[BuildInfo]:
        """Load an existing report, running ``conan install`` only when there is none"""
        try:
            return BuildInfo.from_file(self.output_file())
        except (ReportIOError, MalformedReportError) as e:
            logger.debug(f"No usable build info yet ({e}), running conan install")
        return self.generate(program)


class InstallCommandBuilder:
    """Builder for InstallCommand"""

    def __init__(self):
        self.profile_host: Optional[str] = None
        self.profile_build: Optional[str] = None
        self.remote: Optional[str] = None
        self.build_settings: Optional[BuildSettings] = None
        self.build_options: Optional[List[str]] = None
        self.build_policy: Optional[BuildPolicy] = None
        self.recipe_path: Optional[Path] = None
        self.output_dir: Optional[Path] = None
        self.update_check = False
        self.environment: Optional[ConanEnvironment] = None

    def with_profile(self, profile: str) -> "InstallCommandBuilder":
        """Apply the profile to the host machine"""
        return self.with_host_profile(profile)

    def with_host_profile(self, profile: str) -> "InstallCommandBuilder":
        self.profile_host = profile
        return self

    def with_build_profile(self, profile: str) -> "InstallCommandBuilder":
        """Apply the profile to the build machine"""
        self.profile_build = profile
        return self

    def with_remote(self, remote: str) -> "InstallCommandBuilder":
        self.remote = remote
        return self

    def with_build_settings(self, build_settings: BuildSettings) -> "InstallCommandBuilder":
        self.build_settings = build_settings
        return self

    def with_build_policy(self, build_policy: Union[BuildPolicy, str]) -> "InstallCommandBuilder":
        self.build_policy = BuildPolicy(build_policy)
        return self

    def with_options(self, options: Iterable[str]) -> "InstallCommandBuilder":
        """Add package options; repeated calls accumulate"""
        if self.build_options is None:
            self.build_options = []
        self.build_options.extend(options)
        return self

    def with_recipe_path(self, recipe_path: Union[str, Path]) -> "InstallCommandBuilder":
        self.recipe_path = Path(recipe_path)
        return self

    def with_output_dir(self, output_dir: Union[str, Path]) -> "InstallCommandBuilder":
        self.output_dir = Path(output_dir)
        return self

    def with_update_check(self, update_check: bool = True) -> "InstallCommandBuilder":
        """Check remotes for newer package revisions (``-u``)"""
        self.update_check = update_check
        return self

    def with_environment(self, environment: ConanEnvironment) -> "InstallCommandBuilder":
        self.environment = environment
        return self

    def build(self) -> InstallCommand:
        fields = {
            "profile_host": self.profile_host,
            "profile_build": self.profile_build,
            "remote": self.remote,
            "build_settings": self.build_settings or BuildSettings(),
            "build_options": tuple(self.build_options or ()),
            "build_policy": self.build_policy,
            "recipe_path": self.recipe_path,
            "output_dir": self.output_dir,
            "update_check": self.update_check,
        }
        if self.environment is not None:
            fields["environment"] = self.environment
        return InstallCommand(**fields)


__all__ = ["BuildPolicy", "InstallCommand", "InstallCommandBuilder"]
