"""Unit tests for lunac.workspace — upward workspace-root discovery."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from lunac.errors import LunacError, ManifestReadError, WorkspaceNotFound
from lunac.workspace import find_workspace_root, is_workspace_root


# ===========================================================================
# is_workspace_root
# ===========================================================================


class TestIsWorkspaceRoot:
    def test_marked_manifest(self, workspace: Path) -> None:
        assert is_workspace_root(workspace)

    def test_member_manifest_is_not_root(self, workspace: Path) -> None:
        assert not is_workspace_root(workspace / "crates" / "linker")

    def test_missing_manifest(self, tmp_path: Path) -> None:
        assert not is_workspace_root(tmp_path)

    def test_marker_anywhere_in_file(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = "x"\n\n[workspace]\n', encoding="utf-8"
        )
        assert is_workspace_root(tmp_path)

    def test_custom_manifest_and_marker(self, tmp_path: Path) -> None:
        (tmp_path / "lunaris.toml").write_text("[root]\n", encoding="utf-8")
        assert is_workspace_root(tmp_path, manifest_name="lunaris.toml", marker="[root]")

    def test_directory_named_like_manifest_raises(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").mkdir()
        with pytest.raises(ManifestReadError):
            is_workspace_root(tmp_path)

    def test_undecodable_manifest_raises(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_bytes(b"\xff\xfe[workspace]\x80")
        with pytest.raises(ManifestReadError) as exc_info:
            is_workspace_root(tmp_path)
        assert exc_info.value.path == tmp_path / "Cargo.toml"


# ===========================================================================
# find_workspace_root
# ===========================================================================


class TestFindWorkspaceRoot:
    def test_from_root_itself(self, workspace: Path) -> None:
        assert find_workspace_root(workspace) == workspace.resolve()

    @pytest.mark.parametrize("depth", [1, 2, 3, 6])
    def test_from_nested_directory(self, workspace: Path, depth: int) -> None:
        start = workspace
        for i in range(depth):
            start = start / f"level{i}"
        start.mkdir(parents=True)
        assert find_workspace_root(start) == workspace.resolve()

    def test_skips_member_crate_manifest(self, workspace: Path) -> None:
        start = workspace / "crates" / "linker" / "src"
        assert find_workspace_root(start) == workspace.resolve()

    def test_nearest_workspace_wins(self, workspace: Path) -> None:
        inner = workspace / "vendor" / "other"
        inner.mkdir(parents=True)
        (inner / "Cargo.toml").write_text("[workspace]\n", encoding="utf-8")
        assert find_workspace_root(inner) == inner.resolve()

    def test_defaults_to_cwd(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(workspace / "plugins")
        assert find_workspace_root() == workspace.resolve()

    def test_relative_start_is_resolved(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(workspace / "crates")
        result = find_workspace_root(Path("linker"))
        assert result.is_absolute()
        assert result == workspace.resolve()

    def test_does_not_change_cwd(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        start = workspace / "plugins"
        monkeypatch.chdir(start)
        find_workspace_root()
        assert Path(os.getcwd()) == start.resolve()

    def test_not_found_raises(self, tmp_path: Path) -> None:
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        with pytest.raises(WorkspaceNotFound) as exc_info:
            find_workspace_root(start)
        assert exc_info.value.start == start.resolve()

    def test_member_only_tree_not_found(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text("[package]\nname = \"solo\"\n", encoding="utf-8")
        with pytest.raises(WorkspaceNotFound):
            find_workspace_root(tmp_path)

    def test_not_found_message_guides_user(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceNotFound) as exc_info:
            find_workspace_root(tmp_path)
        message = str(exc_info.value)
        assert "Could not find Lunaris workspace root" in message
        assert "within the Lunaris project directory" in message

    def test_not_found_is_lunac_error(self, tmp_path: Path) -> None:
        with pytest.raises(LunacError) as exc_info:
            find_workspace_root(tmp_path)
        assert exc_info.value.exit_code == 2

    @pytest.mark.skipif(sys.platform == "win32", reason="cannot remove the current directory")
    def test_deleted_cwd_raises_workspace_not_found(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        gone = tmp_path / "gone"
        gone.mkdir()
        monkeypatch.chdir(gone)
        gone.rmdir()
        with pytest.raises(WorkspaceNotFound) as exc_info:
            find_workspace_root()
        assert "Cannot access the starting directory" in str(exc_info.value)
        assert exc_info.value.exit_code == 2

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_unreadable_manifest_raises(self, tmp_path: Path) -> None:
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            pytest.skip("root ignores file permissions")
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[workspace]\n", encoding="utf-8")
        manifest.chmod(0)
        try:
            with pytest.raises(ManifestReadError):
                find_workspace_root(tmp_path)
        finally:
            manifest.chmod(0o644)
