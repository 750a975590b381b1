"""Error types for lunac.

Every failure the CLI can report derives from ``LunacError``.  Library
modules raise these; only ``lunac.cli`` catches and renders them, using
``exit_code`` as the process exit status.
"""
from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path


class LunacError(Exception):
    """Base class for all lunac failures.

    Parameters
    ----------
    message:
        Human-readable description shown to the user.
    """

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class WorkspaceNotFound(LunacError):
    """Raised when no ancestor directory holds a workspace manifest."""

    exit_code = 2

    def __init__(self, start: Path, reason: str | None = None) -> None:
        self.start = start
        detail = reason or f"Searched upward from {start}."
        super().__init__(
            "Could not find Lunaris workspace root.\n"
            f"{detail}\n"
            "lunac must be run from within the Lunaris project directory."
        )


class ManifestReadError(LunacError):
    """Raised when a candidate manifest exists but cannot be read."""

    exit_code = 2

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


class ConfigError(LunacError):
    """Raised for an invalid ``lunac.yaml`` or an unknown profile name."""

    exit_code = 2


class SubprocessSpawnError(LunacError):
    """Raised when the external tool cannot be launched at all."""

    exit_code = 127

    def __init__(self, program: str, reason: str, *, not_executable: bool = False) -> None:
        self.program = program
        if not_executable:
            # shell convention: found but cannot be executed
            self.exit_code = 126
        super().__init__(
            f"Failed to launch {program!r}: {reason}. "
            f"Check that {program} is installed and on your PATH."
        )


class SubprocessFailed(LunacError):
    """Raised when the external tool exits with a non-zero status.

    ``exit_code`` mirrors the child so that shell scripts see the same
    status they would have seen calling the tool directly.  A child
    killed by a signal reports ``128 + signum``, as a shell would.
    """

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.exit_code = 128 - returncode if returncode < 0 else returncode
        program = self.command[0] if self.command else "command"
        super().__init__(
            f"{program} command failed with exit code {returncode}: "
            f"{shlex.join(self.command)}"
        )
