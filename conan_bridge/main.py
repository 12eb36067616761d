#!/usr/bin/env python3
"""
Command line entry point for the Conan bridge
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .build_info import BuildInfo
from .commands.base_command import BaseCommand
from .config import ConfigLoader
from .exceptions import ConanError
from .linkage import ConanPackage
from .platform import (
    ConanEnvironment,
    ConanProgram,
    get_profile_list,
    get_remote_list,
)
from .utils import Logger


class ConanBridge:
    """Runs the configured conan invocations for a native build"""

    def __init__(self,
                 config: Optional[ConfigLoader] = None,
                 environment: Optional[ConanEnvironment] = None,
                 verbose: bool = False,
                 dry_run: bool = False):
        """
        Initialize the bridge

        Args:
            config: Loaded configuration, defaults to an empty one
            environment: Environment signals, read from the process if omitted
            verbose: Enable verbose output
            dry_run: Print argument vectors instead of running conan
        """
        self.config = config or ConfigLoader()
        self.environment = environment or ConanEnvironment.from_environ()
        self.verbose = verbose
        self.dry_run = dry_run
        self.logger = Logger(verbose=verbose)
        self._program: Optional[ConanProgram] = None

    @property
    def program(self) -> ConanProgram:
        """The conan executable, resolved on first use"""
        if self._program is None:
            self._program = ConanProgram.detect(self.environment)
        return self._program

    def _print_args(self, command: BaseCommand) -> None:
        print(" ".join(["conan", *command.args()]))

    def install(self, emit: bool = True) -> bool:
        """
        Run conan install and print the link directives of the report

        Returns:
            True if a report was produced
        """
        command = self.config.get_install_builder(self.environment).build()
        if self.dry_run:
            self._print_args(command)
            return True

        build_info = command.generate(self.program)
        if build_info is None:
            self.logger.error("conan install did not produce a usable build info report")
            return False

        if emit:
            build_info.emit_link_directives()
        self.logger.success(f"Installed {len(build_info.dependencies)} dependencies")
        return True

    def build(self) -> bool:
        command = self.config.get_build_builder(self.environment).build()
        if self.dry_run:
            self._print_args(command)
            return True
        return command.run(self.program) == 0

    def package(self) -> bool:
        command = self.config.get_package_builder(self.environment).build()
        if self.dry_run:
            self._print_args(command)
            return True
        return command.run(self.program) == 0

    def emit(self, build_info_file: Optional[Path] = None,
             package_dir: Optional[Path] = None,
             recursive: Optional[bool] = None) -> None:
        """
        Print link directives from an existing report or package folder

        Args:
            build_info_file: conanbuildinfo.json to read
            package_dir: Package folder to scan, the configured one if neither is given
            recursive: Scan the whole package tree
        """
        if build_info_file is not None:
            BuildInfo.from_file(build_info_file).emit_link_directives()
            return

        if package_dir is not None:
            package = ConanPackage(package_dir)
        else:
            package = self.config.get_package()
        if recursive is None:
            recursive = self.config.get_recursive_scan()
        package.emit_libs_linkage(recursive=recursive)

    def show_info(self) -> None:
        """Show conan client information"""
        from . import __version__

        program = self.program
        print(f"\nConan Bridge v{__version__}")
        print(f"{'='*50}")
        print(f"Conan: {program.path}")
        print(f"Version: {program.version or 'unknown'}")
        print(f"Working directory: {self.environment.cwd}")

        profiles = get_profile_list(program.path)
        print(f"\nProfiles ({len(profiles)}):")
        for profile in profiles:
            print(f"  - {profile}")

        remotes = get_remote_list(program.path)
        print(f"\nRemotes ({len(remotes)}):")
        for remote in remotes:
            print(f"  - {remote}")


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line interface"""
    parser = argparse.ArgumentParser(
        description="Conan Bridge - conan install/build/package for native builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s install --config conan.yaml   # Install and print link directives
  %(prog)s build --dry-run               # Show the conan build command line
  %(prog)s emit --build-info out/conanbuildinfo.json
  %(prog)s emit --package-dir package --recursive
  %(prog)s info                          # Show conan client information
        """
    )

    parser.add_argument(
        "command",
        choices=["install", "build", "package", "emit", "info"],
        help="Command to execute"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file"
    )

    parser.add_argument(
        "--build-info",
        type=Path,
        help="Report to read (emit command)"
    )

    parser.add_argument(
        "--package-dir",
        type=Path,
        help="Package folder to scan (emit command)"
    )

    parser.add_argument(
        "--recursive",
        action="store_true",
        default=None,
        help="Scan the whole package tree instead of its library folder"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print conan command lines without running them"
    )

    args = parser.parse_args(argv)

    try:
        config = ConfigLoader(args.config) if args.config else ConfigLoader()
        bridge = ConanBridge(config=config, verbose=args.verbose, dry_run=args.dry_run)
    except (OSError, ValueError) as e:
        print(f"Error initializing conan bridge: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "install":
            sys.exit(0 if bridge.install() else 1)

        elif args.command == "build":
            sys.exit(0 if bridge.build() else 1)

        elif args.command == "package":
            sys.exit(0 if bridge.package() else 1)

        elif args.command == "emit":
            bridge.emit(args.build_info, args.package_dir, args.recursive)

        elif args.command == "info":
            bridge.show_info()

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except ConanError as e:
        bridge.logger.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
