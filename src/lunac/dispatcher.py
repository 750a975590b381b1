"""Command dispatcher: maps an ``Invocation`` onto build-tool calls.

The dispatcher never spawns processes itself.  It hands argument
vectors to a ``runner`` callable, normally a ``lunac.executor.Executor``.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from rich.console import Console

from lunac.config import Profile
from lunac.invocation import (
    AddPlugin,
    AlignVersions,
    Build,
    Check,
    Clippy,
    Invocation,
    NewPlugin,
    RemovePlugin,
    Run,
    Test,
    UpdateLinker,
    ValidateManifest,
    build_args,
    update_args,
)

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], None]


class Dispatcher:
    """Execute parsed invocations against one profile.

    Parameters
    ----------
    profile:
        Package, feature and linker settings for the workspace.
    runner:
        Called once per build-tool invocation with the argument vector.
        Must raise on failure; the dispatcher does not inspect results.
    console:
        Destination for placeholder acknowledgements.
    """

    def __init__(
        self,
        profile: Profile,
        runner: Runner,
        console: Console | None = None,
    ) -> None:
        self._profile = profile
        self._runner = runner
        self._console = console or Console()

    @property
    def profile(self) -> Profile:
        return self._profile

    def update(self) -> None:
        """Run the linker updater once; failures propagate unchanged."""
        logger.debug("Updating plugin linker for profile %r", self._profile.name)
        self._runner(update_args(self._profile))

    def dispatch(self, invocation: Invocation) -> None:
        """Carry out ``invocation``.

        Raises
        ------
        lunac.errors.LunacError
            Whatever the runner raises; nothing is retried.
        TypeError
            If ``invocation`` is not an ``Invocation`` variant.
        """
        if isinstance(invocation, Run):
            # the run must see a freshly linked plugin set
            self.update()
            self._runner(build_args(invocation, self._profile))
        elif isinstance(invocation, (Build, Check, Clippy, Test)):
            self._runner(build_args(invocation, self._profile))
        elif isinstance(invocation, UpdateLinker):
            self.update()
        elif isinstance(invocation, AddPlugin):
            self._acknowledge(
                f"Adding plugin: {invocation.plugin}",
                "(Not implemented yet - will install from registry)",
            )
        elif isinstance(invocation, RemovePlugin):
            self._acknowledge(f"Removing plugin: {invocation.plugin}")
        elif isinstance(invocation, AlignVersions):
            self._acknowledge("Aligning plugin versions...")
        elif isinstance(invocation, ValidateManifest):
            self._acknowledge("Validating lunaris.toml...")
        elif isinstance(invocation, NewPlugin):
            self._acknowledge(
                f"Creating new {invocation.plugin_type} plugin: {invocation.name}"
            )
        else:
            raise TypeError(f"Unsupported invocation: {invocation!r}")

    def _acknowledge(self, message: str, note: str = "(Not implemented yet)") -> None:
        # Placeholder for plugin management; accepts input, has no effect.
        self._console.print(message, markup=False, highlight=False, soft_wrap=True)
        self._console.print(f"[dim]{note}[/dim]", highlight=False, soft_wrap=True)
