"""Helpers for building throwaway git repositories in tests."""

from __future__ import annotations

import subprocess
from pathlib import Path


def git(repo: Path, *args: str) -> str:
    """Run a git command in ``repo`` and return stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


def write(repo: Path, relpath: str, content: str) -> Path:
    path = repo / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def commit_file(repo: Path, relpath: str, content: str, message: str = "update") -> str:
    """Write, stage and commit a file; return the new HEAD sha."""
    write(repo, relpath, content)
    git(repo, "add", relpath)
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def chart_yaml(version: str) -> str:
    return f"apiVersion: v2\nname: demo\nversion: {version}\nappVersion: \"1.0\"\n"


def designate_default(repo: Path, branch: str = "main", remote: str = "origin") -> None:
    """Point ``<remote>/HEAD`` at ``branch`` as a clone would, without a real remote."""
    git(repo, "update-ref", f"refs/remotes/{remote}/{branch}", branch)
    git(repo, "symbolic-ref", f"refs/remotes/{remote}/HEAD", f"refs/remotes/{remote}/{branch}")
