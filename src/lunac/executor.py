"""Child-process execution for the external build tool.

The child inherits stdin, stdout and stderr so that interactive
prompts, colored output and streaming logs pass through untouched.
Nothing is captured; the only result is the exit status.
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from lunac.errors import SubprocessFailed, SubprocessSpawnError

logger = logging.getLogger(__name__)


def run_external(
    args: Sequence[str],
    *,
    program: str = "cargo",
    cwd: Path | None = None,
) -> None:
    """Run ``program`` with ``args`` and wait for it to finish.

    Parameters
    ----------
    args:
        Arguments passed after the program name, in order.
    program:
        Executable name or path, resolved against ``PATH``.
    cwd:
        Working directory for the child.  ``None`` inherits ours.

    Raises
    ------
    SubprocessSpawnError
        If the program cannot be started.
    SubprocessFailed
        If the program exits with a non-zero status.
    """
    command = [program, *args]
    logger.debug("Running %s (cwd=%s)", shlex.join(command), cwd)
    try:
        completed = subprocess.run(command, cwd=cwd, check=False)
    except OSError as exc:
        raise SubprocessSpawnError(
            program,
            exc.strerror or str(exc),
            not_executable=isinstance(exc, PermissionError),
        ) from exc
    logger.debug("%s exited with %d", program, completed.returncode)
    if completed.returncode != 0:
        raise SubprocessFailed(command, completed.returncode)


@dataclass
class Executor:
    """Callable runner bound to one tool and one working directory.

    Parameters
    ----------
    program:
        Build tool executable.
    cwd:
        Workspace root every command runs in.
    dry_run:
        Print each command instead of running it.
    console:
        Where dry-run commands are printed.
    """

    program: str = "cargo"
    cwd: Path | None = None
    dry_run: bool = False
    console: Console = field(default_factory=Console)

    def __call__(self, args: Sequence[str]) -> None:
        if self.dry_run:
            command = shlex.join([self.program, *args])
            self.console.print(f"[dim]would run:[/dim] {escape(command)}", highlight=False, soft_wrap=True)
            return
        run_external(args, program=self.program, cwd=self.cwd)
