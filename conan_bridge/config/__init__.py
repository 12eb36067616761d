"""
Configuration file support: default conan invocations described in YAML
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from ..build_info import BuildSettings
from ..commands import (
    BuildCommandBuilder,
    BuildPolicy,
    InstallCommandBuilder,
    PackageCommandBuilder,
)
from ..commands.base_command import FolderCommandBuilder
from ..linkage import ConanPackage
from ..platform import ConanEnvironment


class ConfigLoader:
    """Loads a conan bridge configuration file

    The file holds up to four sections, ``install``, ``build``, ``package``
    and ``linkage``; a missing section means defaults, and so does a key
    left empty (YAML null).
    """

    def __init__(self, config_file: Optional[Path] = None, data: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration loader

        Args:
            config_file: YAML file to read
            data: Already parsed configuration, used when no file is given
        """
        self.config_file = Path(config_file) if config_file is not None else None

        if self.config_file is not None:
            if not self.config_file.exists():
                raise FileNotFoundError(f"Config not found: {self.config_file}")
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

        self.config = data or {}
        if not isinstance(self.config, dict):
            raise ValueError("Configuration must be a mapping")

    def get_section(self, name: str) -> Dict[str, Any]:
        section = self.config.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Section '{name}' must be a mapping")
        return section

    def get_install_builder(self, environment: Optional[ConanEnvironment] = None) -> InstallCommandBuilder:
        """
        Create an install builder preloaded from the ``install`` section

        Args:
            environment: Environment the command will run in

        Returns:
            InstallCommandBuilder instance
        """
        section = self.get_section("install")
        builder = InstallCommandBuilder()

        if section.get("profile_host") is not None:
            builder.with_host_profile(str(section["profile_host"]))
        if section.get("profile_build") is not None:
            builder.with_build_profile(str(section["profile_build"]))
        if section.get("remote") is not None:
            builder.with_remote(str(section["remote"]))
        if section.get("build_policy") is not None:
            policy = str(section["build_policy"]).lower()
            try:
                builder.with_build_policy(BuildPolicy(policy))
            except ValueError:
                raise ValueError(f"Unknown build policy: {section['build_policy']}") from None
        if section.get("update_check"):
            builder.with_update_check()
        if section.get("options"):
            builder.with_options(str(option) for option in section["options"])
        if section.get("recipe_path") is not None:
            builder.with_recipe_path(section["recipe_path"])
        if section.get("output_dir") is not None:
            builder.with_output_dir(section["output_dir"])

        settings = section.get("settings") or {}
        if not isinstance(settings, dict):
            raise ValueError("Section 'install.settings' must be a mapping")
        if settings:
            builder.with_build_settings(BuildSettings.model_validate(
                {key: str(value) for key, value in settings.items() if value is not None}
            ))

        if environment is not None:
            builder.with_environment(environment)
        return builder

    def get_build_builder(self, environment: Optional[ConanEnvironment] = None) -> BuildCommandBuilder:
        """Create a build builder preloaded from the ``build`` section"""
        section = self.get_section("build")
        builder = BuildCommandBuilder()
        self._apply_folders(builder, section)
        builder.with_configure(bool(section.get("configure", False)))
        builder.with_build(bool(section.get("build", False)))
        builder.with_install(bool(section.get("install", False)))
        if environment is not None:
            builder.with_environment(environment)
        return builder

    def get_package_builder(self, environment: Optional[ConanEnvironment] = None) -> PackageCommandBuilder:
        """Create a package builder preloaded from the ``package`` section"""
        builder = PackageCommandBuilder()
        self._apply_folders(builder, self.get_section("package"))
        if environment is not None:
            builder.with_environment(environment)
        return builder

    def get_package(self) -> ConanPackage:
        """The package folder described by the ``linkage`` section"""
        section = self.get_section("linkage")
        return ConanPackage(
            path=section.get("package_root") or "package",
            lib_dir=section.get("lib_dir") or "lib",
        )

    def get_recursive_scan(self) -> bool:
        return bool(self.get_section("linkage").get("recursive", False))

    @staticmethod
    def _apply_folders(builder: FolderCommandBuilder, section: Dict[str, Any]) -> None:
        if section.get("recipe_path") is not None:
            builder.with_recipe_path(section["recipe_path"])
        if section.get("build_folder") is not None:
            builder.with_build_path(section["build_folder"])
        if section.get("install_folder") is not None:
            builder.with_install_path(section["install_folder"])
        if section.get("package_folder") is not None:
            builder.with_package_path(section["package_folder"])
        if section.get("source_folder") is not None:
            builder.with_source_path(section["source_folder"])


__all__ = ["ConfigLoader"]
