"""CLI entry point for lunac.

Invoked as::

    lunac [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m lunac.cli.main

Commands
--------
build       Build Lunaris
run         Update the plugin linker, then run Lunaris
check       Check code without building
clippy      Run clippy linter
test        Run tests
update      Update plugin linker
add         Add a plugin dependency (not implemented yet)
remove      Remove a plugin dependency (not implemented yet)
align       Align plugin versions (not implemented yet)
validate    Validate lunaris.toml (not implemented yet)
new         Create new plugin (not implemented yet)
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lunac import (
    BUILTIN_PROFILES,
    AddPlugin,
    AlignVersions,
    Build,
    Check,
    Clippy,
    Dispatcher,
    Executor,
    Invocation,
    LunacError,
    NewPlugin,
    RemovePlugin,
    Run,
    Test,
    UpdateLinker,
    ValidateManifest,
    __version__,
    find_workspace_root,
    get_profile,
    load_config,
)
from lunac.config import DEFAULT_PROFILE
from lunac.invocation import is_stub

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Unknown options and everything after the first positional go to the tool.
_PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


@dataclass
class CliState:
    """Group-level options shared by every subcommand."""

    profile_name: str | None = None
    tool: str | None = None
    directory: Path | None = None
    dry_run: bool = False


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _make_dispatcher(state: CliState, invocation: Invocation) -> Dispatcher:
    """Resolve the workspace and profile needed to run ``invocation``."""
    if is_stub(invocation):
        # Placeholders never reach the tool, so they work outside the tree.
        profile = get_profile(state.profile_name or DEFAULT_PROFILE)
        return Dispatcher(profile, Executor(program=profile.tool), console=console)

    root = find_workspace_root(state.directory)
    profile = load_config(root, state.profile_name)
    program = state.tool or profile.tool
    logger.debug("Using profile %r with %s in %s", profile.name, program, root)
    if profile.features is None and getattr(invocation, "barebones", False):
        logger.warning("Profile %r has no feature set; --barebones has no effect", profile.name)
    runner = Executor(program=program, cwd=root, dry_run=state.dry_run, console=console)
    return Dispatcher(profile, runner, console=console)


def _dispatch(ctx: click.Context, invocation: Invocation) -> None:
    """Run ``invocation``, exiting with the error's code on failure."""
    state = ctx.find_object(CliState) or CliState()
    try:
        _make_dispatcher(state, invocation).dispatch(invocation)
    except LunacError as exc:
        err_console.print(f"[red]Error:[/red] {escape(exc.message)}", soft_wrap=True)
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        sys.exit(130)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="lunac")
@click.option(
    "--profile",
    "profile_name",
    envvar="LUNAC_PROFILE",
    type=click.Choice(sorted(BUILTIN_PROFILES)),
    default=None,
    help="Build profile (default: from lunac.yaml, else lunaris).",
)
@click.option(
    "--tool",
    envvar="LUNAC_TOOL",
    default=None,
    help="Build tool executable (default: cargo).",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Search for the workspace from this directory instead of the current one.",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print commands instead of running them")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    profile_name: str | None,
    tool: str | None,
    directory: Path | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Lunaris compiler - build tool and plugin manager."""
    _configure_logging(verbose)
    ctx.obj = CliState(
        profile_name=profile_name,
        tool=tool,
        directory=directory,
        dry_run=dry_run,
    )


# ---------------------------------------------------------------------------
# build-tool commands
# ---------------------------------------------------------------------------


@cli.command(name="build", context_settings=_PASSTHROUGH)
@click.option("-r", "--release", is_flag=True, default=False, help="Build with release optimizations")
@click.option("--barebones", is_flag=True, default=False, help="Build without the runtime (barebones)")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def build_command(ctx: click.Context, release: bool, barebones: bool, args: tuple[str, ...]) -> None:
    """Build Lunaris.

    ARGS are passed to cargo unchanged.
    """
    _dispatch(ctx, Build(release=release, barebones=barebones, args=tuple(args)))


@cli.command(name="run", context_settings=_PASSTHROUGH)
@click.option("-r", "--release", is_flag=True, default=False, help="Run with release optimizations")
@click.option("--barebones", is_flag=True, default=False, help="Run without the runtime (barebones)")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run_command(ctx: click.Context, release: bool, barebones: bool, args: tuple[str, ...]) -> None:
    """Run Lunaris.

    The plugin linker is updated first; if that fails nothing is run.
    ARGS are passed to cargo unchanged.
    """
    _dispatch(ctx, Run(release=release, barebones=barebones, args=tuple(args)))


@cli.command(name="check", context_settings=_PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def check_command(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Check code without building."""
    _dispatch(ctx, Check(args=tuple(args)))


@cli.command(name="clippy", context_settings=_PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def clippy_command(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run clippy linter."""
    _dispatch(ctx, Clippy(args=tuple(args)))


@cli.command(name="test", context_settings=_PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def tests_command(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run tests.

    Use ``--`` to forward options lunac would otherwise claim, e.g.
    ``lunac test -- --help``.
    """
    _dispatch(ctx, Test(args=tuple(args)))


@cli.command(name="update")
@click.pass_context
def update_command(ctx: click.Context) -> None:
    """Update plugin linker."""
    _dispatch(ctx, UpdateLinker())


# ---------------------------------------------------------------------------
# plugin management (placeholders)
# ---------------------------------------------------------------------------


@cli.command(name="add")
@click.argument("plugin")
@click.pass_context
def add_command(ctx: click.Context, plugin: str) -> None:
    """Add a plugin dependency.

    PLUGIN is a plugin name or path.
    """
    _dispatch(ctx, AddPlugin(plugin=plugin))


@cli.command(name="remove")
@click.argument("plugin")
@click.pass_context
def remove_command(ctx: click.Context, plugin: str) -> None:
    """Remove a plugin dependency."""
    _dispatch(ctx, RemovePlugin(plugin=plugin))


@cli.command(name="align")
@click.pass_context
def align_command(ctx: click.Context) -> None:
    """Align plugin versions."""
    _dispatch(ctx, AlignVersions())


@cli.command(name="validate")
@click.pass_context
def validate_command(ctx: click.Context) -> None:
    """Validate lunaris.toml."""
    _dispatch(ctx, ValidateManifest())


@cli.command(name="new")
@click.argument("plugin_type")
@click.argument("name")
@click.pass_context
def new_command(ctx: click.Context, plugin_type: str, name: str) -> None:
    """Create new plugin.

    PLUGIN_TYPE is the kind of plugin (effect, timeline, codec, etc.).
    """
    _dispatch(ctx, NewPlugin(plugin_type=plugin_type, name=name))


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    table = Table(show_header=False, box=None)
    table.add_row("[bold]lunac[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    table.add_row("Profiles", ", ".join(sorted(BUILTIN_PROFILES)))
    console.print(table)


def main() -> None:
    """Console-script entry point."""
    cli(prog_name="lunac")


if __name__ == "__main__":
    main()
