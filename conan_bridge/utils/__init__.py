"""
Utility modules for the Conan bridge
"""

import sys
import logging
import subprocess
from pathlib import Path
from typing import Optional, List

from ..exceptions import ProcessExecutionError


LOGGER_NAME = "conan_bridge"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
        'RESET': '\033[0m'
    }

    def format(self, record):
        if sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{reset}"
            record.msg = f"{color}{record.msg}{reset}"

        return super().format(record)


class Logger:
    """Console/file logger for the bridge and its command line interface"""

    SUCCESS = 25  # Between INFO and WARNING

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Configure the package logger

        Args:
            verbose: Enable debug output, including every conan command line
            log_file: Optional log file path
        """
        self.verbose = verbose

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        self.logger.handlers.clear()

        # stdout belongs to the build directives, so the console log goes to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        if verbose:
            fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            fmt = "[%(levelname)s] %(message)s"

        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)

    def success(self, msg: str):
        """Log success message"""
        self.logger.log(self.SUCCESS, msg)


def run_command(cmd: List[str],
                cwd: Optional[Path] = None,
                capture_output: bool = False,
                dry_run: bool = False) -> subprocess.CompletedProcess:
    """
    Run an external command with logging

    The exit status is never checked here: callers decide what a non-zero
    status means.

    Args:
        cmd: Program and arguments
        cwd: Working directory
        capture_output: Capture stdout/stderr as text
        dry_run: Log the command instead of running it

    Returns:
        CompletedProcess instance
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.process")
    cmd_str = " ".join(str(c) for c in cmd)
    logger.debug(f"Running: {cmd_str}")
    if cwd is not None:
        logger.debug(f"  in: {cwd}")

    if dry_run:
        logger.info(f"[DRY RUN] Would run: {cmd_str}")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            capture_output=capture_output,
            text=True
        )
    except OSError as e:
        logger.error(f"Command failed to start: {cmd_str}")
        raise ProcessExecutionError(f"Failed to execute {cmd[0]}: {e}", cmd) from e

    if result.returncode != 0:
        logger.error(f"Command exited with status {result.returncode}: {cmd_str}")
        if capture_output and result.stderr:
            logger.error(f"stderr: {result.stderr}")
    elif capture_output and result.stdout:
        logger.debug(f"Output: {result.stdout}")

    return result


__all__ = ["ColoredFormatter", "Logger", "LOGGER_NAME", "run_command"]
