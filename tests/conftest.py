"""Shared test fixtures for lunac.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

WORKSPACE_MANIFEST = """\
[workspace]
members = ["crates/*", "plugins/*"]
resolver = "2"
"""

MEMBER_MANIFEST = """\
[package]
name = "linker"
version = "0.1.0"
edition = "2021"
"""


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """Create a minimal Lunaris workspace and return its root.

    Layout::

        ws/Cargo.toml                 ([workspace])
        ws/crates/linker/Cargo.toml   (member crate, no marker)
        ws/crates/linker/src/
        ws/plugins/
    """
    root = tmp_path / "ws"
    member = root / "crates" / "linker"
    (member / "src").mkdir(parents=True)
    (root / "plugins").mkdir()
    (root / "Cargo.toml").write_text(WORKSPACE_MANIFEST, encoding="utf-8")
    (member / "Cargo.toml").write_text(MEMBER_MANIFEST, encoding="utf-8")
    return root
