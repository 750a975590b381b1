"""Parsed command-line requests and their build-tool argument vectors.

Each subcommand is a frozen dataclass carrying only its own fields; the
``Invocation`` union covers all of them.  Downstream code dispatches with
``isinstance`` checks and treats an unmatched type as a programming
error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from lunac.config import Profile


# ---------------------------------------------------------------------------
# Tool-backed commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Build:
    """Compile the project package."""

    release: bool = False
    barebones: bool = False
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Run:
    """Refresh the linker, then build and run the project package."""

    release: bool = False
    barebones: bool = False
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Check:
    """Type-check without producing artifacts."""

    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Clippy:
    """Run the linter."""

    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Test:
    """Run the test suite."""

    __test__ = False  # keep pytest from collecting this class

    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpdateLinker:
    """Run the linker updater on its own."""


# ---------------------------------------------------------------------------
# Plugin-management placeholders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddPlugin:
    plugin: str


@dataclass(frozen=True)
class RemovePlugin:
    plugin: str


@dataclass(frozen=True)
class AlignVersions:
    pass


@dataclass(frozen=True)
class ValidateManifest:
    pass


@dataclass(frozen=True)
class NewPlugin:
    plugin_type: str
    name: str


Invocation = Union[
    Build,
    Run,
    Check,
    Clippy,
    Test,
    UpdateLinker,
    AddPlugin,
    RemovePlugin,
    AlignVersions,
    ValidateManifest,
    NewPlugin,
]

STUB_TYPES: tuple[type, ...] = (
    AddPlugin,
    RemovePlugin,
    AlignVersions,
    ValidateManifest,
    NewPlugin,
)

_ACTIONS: dict[type, str] = {
    Build: "build",
    Run: "run",
    Check: "check",
    Clippy: "clippy",
    Test: "test",
}


def is_stub(invocation: Invocation) -> bool:
    """Return True for placeholder commands that never touch the build tool."""
    return isinstance(invocation, STUB_TYPES)


def build_args(invocation: Invocation, profile: Profile) -> list[str]:
    """Return the build-tool argument vector for ``invocation``.

    The feature pair is appended unless ``barebones`` is set (and only
    when the profile has a feature set); ``--release`` follows; user
    passthrough arguments always come last, untouched.

    Raises
    ------
    TypeError
        If ``invocation`` does not map to a single build-tool call.
    """
    action = _ACTIONS.get(type(invocation))
    if action is None:
        raise TypeError(
            f"{type(invocation).__name__} does not map to a build-tool command"
        )

    cmd_args = [action, "--package", profile.package]
    if isinstance(invocation, (Build, Run)):
        if not invocation.barebones and profile.features is not None:
            cmd_args.extend(["--features", profile.features])
        if invocation.release:
            cmd_args.append("--release")
    cmd_args.extend(invocation.args)
    return cmd_args


def update_args(profile: Profile) -> list[str]:
    """Return the argument vector that runs the linker updater."""
    return [
        "run",
        "-q",
        "-p",
        profile.updater_package,
        "--",
        profile.linker_manifest,
        profile.plugins_dir,
    ]
