"""Tests for installing hook shims."""

import os
from pathlib import Path

import pytest

from gitguard.install import HOOK_MARKER, install_hook, install_hooks, render_hook


class TestInstallHooks:
    """Tests for install_hooks()."""

    def test_creates_executable_shims(self, git_repo: Path):
        results = install_hooks(git_repo)

        assert [(r.hook, r.action) for r in results] == [("pre-commit", "created"), ("pre-push", "created")]
        for result in results:
            assert result.path.parent == (git_repo / ".git" / "hooks").resolve()
            assert os.access(result.path, os.X_OK)
            assert HOOK_MARKER in result.path.read_text()
        assert 'exec gitguard-pre-push "$@"' in results[1].path.read_text()

    def test_second_install_is_unchanged(self, git_repo: Path):
        install_hooks(git_repo)
        assert {r.action for r in install_hooks(git_repo)} == {"unchanged"}

    def test_keeps_foreign_hook_without_force(self, git_repo: Path):
        hook = git_repo / ".git" / "hooks" / "pre-commit"
        hook.parent.mkdir(parents=True, exist_ok=True)
        hook.write_text("#!/bin/sh\nmake lint\n")

        results = {r.hook: r.action for r in install_hooks(git_repo)}

        assert results["pre-commit"] == "skipped"
        assert hook.read_text() == "#!/bin/sh\nmake lint\n"

    def test_force_overwrites_foreign_hook(self, git_repo: Path):
        hook = git_repo / ".git" / "hooks" / "pre-commit"
        hook.parent.mkdir(parents=True, exist_ok=True)
        hook.write_text("#!/bin/sh\nmake lint\n")

        results = {r.hook: r.action for r in install_hooks(git_repo, force=True)}

        assert results["pre-commit"] == "updated"
        assert hook.read_text() == render_hook("pre-commit")

    def test_rewrites_outdated_gitguard_shim(self, tmp_path: Path):
        (tmp_path / "pre-push").write_text(f"#!/bin/sh\n{HOOK_MARKER}\nexec old-command\n")

        result = install_hook(tmp_path, "pre-push")

        assert result.action == "updated"
        assert not list(tmp_path.glob("*.gitguard.tmp"))


def test_unknown_hook_is_rejected():
    with pytest.raises(ValueError, match="Unknown hook"):
        render_hook("post-merge")
