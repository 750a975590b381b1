"""Workspace root discovery.

``lunac`` can be invoked from any subdirectory of the Lunaris tree.  The
workspace root is the nearest ancestor (including the start directory)
whose ``Cargo.toml`` declares a ``[workspace]`` table.  Member crates
also ship a ``Cargo.toml``, so mere presence of the file is not enough.

Only a substring test is performed; the manifest is never parsed.
"""
from __future__ import annotations

import logging
from pathlib import Path

from lunac.errors import ManifestReadError, WorkspaceNotFound

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"
WORKSPACE_MARKER = "[workspace]"


def is_workspace_root(
    candidate: Path,
    *,
    manifest_name: str = MANIFEST_NAME,
    marker: str = WORKSPACE_MARKER,
) -> bool:
    """Return True if ``candidate`` holds a manifest containing ``marker``.

    Raises
    ------
    ManifestReadError
        If the manifest exists but cannot be read as UTF-8 text.
    """
    manifest = candidate / manifest_name
    if not manifest.exists():
        return False
    try:
        content = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(manifest, str(exc)) from exc
    return marker in content


def find_workspace_root(
    start: Path | None = None,
    *,
    manifest_name: str = MANIFEST_NAME,
    marker: str = WORKSPACE_MARKER,
) -> Path:
    """Return the workspace root at or above ``start``.

    Parameters
    ----------
    start:
        Directory to start searching from.  Defaults to ``Path.cwd()``.
    manifest_name:
        File name checked in each candidate directory.
    marker:
        Literal substring identifying a workspace manifest.

    Returns
    -------
    Path
        Absolute path of the first matching directory.

    Raises
    ------
    WorkspaceNotFound
        If no directory up to the filesystem root matches.
    ManifestReadError
        If a candidate manifest exists but cannot be read.
    """
    try:
        origin = (start or Path.cwd()).resolve()
    except OSError as exc:
        # the working directory was removed or is unreadable
        raise WorkspaceNotFound(
            start or Path("."),
            f"Cannot access the starting directory: {exc.strerror or exc}.",
        ) from exc
    for candidate in (origin, *origin.parents):
        logger.debug("Checking %s for %s", candidate, manifest_name)
        if is_workspace_root(candidate, manifest_name=manifest_name, marker=marker):
            logger.debug("Workspace root resolved to %s", candidate)
            return candidate
    raise WorkspaceNotFound(origin)
