"""
Shell invocation for npm / ncu / npx / node.

Commands inherit the terminal (npm output is streamed to the operator).
A non-zero exit or a missing binary raises CommandFailure.
"""

import shlex
import shutil
import subprocess
from typing import List, Optional

from ..log import get_logger
from .errors import CommandFailure

logger = get_logger("shell")


def run_command(args: List[str], cwd=None):
    """Run with inherited stdio, raise CommandFailure unless exit code is 0."""
    logger.debug(f"$ {shlex.join(args)}")
    try:
        result = subprocess.run(args, cwd=cwd)
    except (FileNotFoundError, PermissionError) as e:
        raise CommandFailure(args) from e
    if result.returncode != 0:
        raise CommandFailure(args, result.returncode)


def capture_command(args: List[str], cwd=None, timeout: int = 30) -> str:
    """Run and return stripped stdout."""
    logger.debug(f"$ {shlex.join(args)}")
    try:
        result = subprocess.run(args, cwd=cwd, capture_output=True, text=True, timeout=timeout)
    except (FileNotFoundError, PermissionError, subprocess.TimeoutExpired) as e:
        raise CommandFailure(args) from e
    if result.returncode != 0:
        raise CommandFailure(args, result.returncode)
    return result.stdout.strip()


def is_available(binary: str) -> bool:
    return shutil.which(binary) is not None


def ensure_ncu(ncu: str = "ncu", npm: str = "npm", cwd: Optional[str] = None, runner=None):
    """Install npm-check-updates globally when ncu is not on PATH."""
    logger.info("Checking if ncu (npm-check-updates) is installed...")
    if is_available(ncu):
        logger.success("ncu is installed.")
        return
    logger.warn("ncu not found. Installing globally...")
    try:
        (runner or run_command)([npm, "install", "-g", "npm-check-updates"], cwd=cwd)
    except CommandFailure:
        logger.error("Failed to install npm-check-updates globally.")
        raise
    logger.success("ncu installed globally.")


def ncu_scope_filter(scope: str) -> str:
    """ncu regex filter for every package of a scope: '@rplan/' → '/@rplan\\/.*/'."""
    return "/" + scope.replace("/", "\\/") + ".*/"
