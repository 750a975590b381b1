"""lunac — Lunaris build front-end and plugin manager.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from pathlib import Path

    import lunac

    root = lunac.find_workspace_root(Path("crates/linker"))
    profile = lunac.load_config(root)

    runner = lunac.Executor(program=profile.tool, cwd=root)
    lunac.Dispatcher(profile, runner).dispatch(lunac.Build(release=True))

    lunac.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from lunac.config import BUILTIN_PROFILES, Profile, get_profile, load_config
from lunac.dispatcher import Dispatcher
from lunac.errors import (
    ConfigError,
    LunacError,
    ManifestReadError,
    SubprocessFailed,
    SubprocessSpawnError,
    WorkspaceNotFound,
)
from lunac.executor import Executor, run_external
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
from lunac.workspace import find_workspace_root

__all__ = [
    "__version__",
    # workspace
    "find_workspace_root",
    # configuration
    "BUILTIN_PROFILES",
    "Profile",
    "get_profile",
    "load_config",
    # invocations
    "Invocation",
    "Build",
    "Run",
    "Check",
    "Clippy",
    "Test",
    "UpdateLinker",
    "AddPlugin",
    "RemovePlugin",
    "AlignVersions",
    "ValidateManifest",
    "NewPlugin",
    "build_args",
    "update_args",
    # execution
    "Dispatcher",
    "Executor",
    "run_external",
    # errors
    "LunacError",
    "WorkspaceNotFound",
    "ManifestReadError",
    "ConfigError",
    "SubprocessSpawnError",
    "SubprocessFailed",
]
