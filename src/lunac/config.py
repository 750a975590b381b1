"""Dispatcher profiles and ``lunac.yaml`` loading.

A ``Profile`` captures everything that differs between the Lunaris
front-end build and the bare core-library build: the cargo package to
scope commands to, whether a feature set is toggled by ``--barebones``,
and where the linker updater finds its inputs.

A workspace may pin or tweak its profile with a ``lunac.yaml`` file at
the workspace root::

    profile: core
    plugins_dir: extra/plugins/
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from lunac.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "lunac.yaml"
DEFAULT_PROFILE = "lunaris"


@dataclass(frozen=True)
class Profile:
    """Named parameter set for the command dispatcher.

    Parameters
    ----------
    name:
        Profile identifier, e.g. ``"lunaris"``.
    package:
        Cargo package every build/check/test command is scoped to.
    features:
        Feature set enabled unless ``--barebones`` is given.  ``None``
        means the profile has no barebones distinction at all.
    linker_manifest:
        First positional argument of the linker updater.
    plugins_dir:
        Second positional argument of the linker updater.
    updater_package:
        Cargo package name of the linker updater binary.
    tool:
        Build tool executable, looked up on ``PATH``.
    """

    name: str
    package: str
    features: str | None = "full"
    linker_manifest: str = "crates/linker/Cargo.toml"
    plugins_dir: str = "plugins/"
    updater_package: str = "linker_updater"
    tool: str = "cargo"

    @property
    def supports_barebones(self) -> bool:
        """Return True if ``--barebones`` changes the build for this profile."""
        return self.features is not None


BUILTIN_PROFILES: dict[str, Profile] = {
    "lunaris": Profile(name="lunaris", package="lunaris"),
    "core": Profile(
        name="core",
        package="lunaris_core",
        features=None,
        linker_manifest="linker/Cargo.toml",
    ),
}

_OVERRIDABLE_FIELDS = frozenset(
    f.name for f in dataclasses.fields(Profile) if f.name != "name"
)


def get_profile(name: str) -> Profile:
    """Return the built-in profile called ``name``.

    Raises
    ------
    ConfigError
        If ``name`` is not a built-in profile.
    """
    try:
        return BUILTIN_PROFILES[name]
    except KeyError:
        available = ", ".join(sorted(BUILTIN_PROFILES))
        raise ConfigError(
            f"Unknown profile {name!r}. Available profiles: {available}"
        ) from None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path} must contain a mapping, got {type(data).__name__}"
        )
    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        raise ConfigError(
            f"{path}: keys must be strings, got {', '.join(map(repr, bad_keys))}"
        )
    return data


def load_config(workspace_root: Path, profile_name: str | None = None) -> Profile:
    """Resolve the effective ``Profile`` for a workspace.

    Parameters
    ----------
    workspace_root:
        Directory that may contain ``lunac.yaml``.
    profile_name:
        Profile requested on the command line; overrides the file's
        ``profile`` key.

    Returns
    -------
    Profile
        The selected built-in profile with any file overrides applied.

    Raises
    ------
    ConfigError
        If the file is malformed, names unknown keys, or selects an
        unknown profile.
    """
    path = workspace_root / CONFIG_FILENAME
    data = _read_config_file(path) if path.is_file() else {}

    unknown = set(data) - _OVERRIDABLE_FIELDS - {"profile"}
    if unknown:
        raise ConfigError(
            f"Unknown key(s) in {path}: {', '.join(sorted(unknown))}"
        )

    selected = profile_name or data.get("profile") or DEFAULT_PROFILE
    profile = get_profile(str(selected))

    overrides = {key: value for key, value in data.items() if key != "profile"}
    for key, value in overrides.items():
        # ``features: null`` turns barebones handling off
        if value is None and key == "features":
            continue
        if not isinstance(value, str):
            raise ConfigError(f"{path}: {key!r} must be a string")
    if overrides:
        logger.debug("Applying overrides from %s: %s", path, sorted(overrides))
        profile = dataclasses.replace(profile, **overrides)
    return profile
