"""
Migration errors.

Every fatal condition of a migration run is a MigrationError. The CLI catches
them, prints the message and exits with exit_code. Anything else is a crash.
"""

from typing import List, Optional


class MigrationError(Exception):
    """Base class for conditions that halt a migration run."""

    exit_code = 1


class MissingFile(MigrationError):
    """package.json or a scanned directory does not exist."""

    def __init__(self, path, what: str = "file"):
        self.path = path
        super().__init__(f"{what} not found: {path}")


class UnparsableManifest(MigrationError):
    """A package.json exists but is not a JSON object."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Could not parse {path}{detail}")


class CommandFailure(MigrationError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: List[str], returncode: Optional[int] = None):
        self.command = list(command)
        self.returncode = returncode
        super().__init__(f"Command failed: {' '.join(self.command)}")


class IncompatibilityAbort(MigrationError):
    """The operator declined to continue past incompatible peer dependencies."""


class RuntimeTooOld(MigrationError):
    """The local Node.js runtime is older than the migration target."""

    def __init__(self, found: str, expected: str):
        self.found = found
        self.expected = expected
        super().__init__(
            f"Node.js version is too low. Expected version >={expected}, but found {found}."
        )
