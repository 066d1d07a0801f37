"""Pytest configuration and fixtures for gitguard tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import chart_yaml, commit_file, git


@pytest.fixture(autouse=True)
def isolated_git_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's global git config (hooks, signing, init branch) out of tests."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.delenv("GITGUARD_DEBUG", raising=False)


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """A freshly initialized repository on ``main`` with no commits."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-b", "main")
    return repo


@pytest.fixture
def git_repo(empty_repo: Path) -> Path:
    """A repository with one commit on ``main``, checked out on ``feature``."""
    commit_file(empty_repo, "README.md", "# Test Repo\n", message="Initial commit")
    git(empty_repo, "checkout", "-b", "feature")
    return empty_repo


@pytest.fixture
def chart_repo(tmp_path: Path) -> Path:
    """A clone-like repository whose ``main`` (with Chart.yaml 1.2.3) is pushed to origin."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    git(remote, "init", "--bare", "-b", "main")

    repo = tmp_path / "chart"
    repo.mkdir()
    git(repo, "init", "-b", "main")
    commit_file(repo, "Chart.yaml", chart_yaml("1.2.3"), message="Initial chart")
    git(repo, "remote", "add", "origin", str(remote))
    git(repo, "push", "-u", "origin", "main")
    git(repo, "remote", "set-head", "origin", "main")
    return repo
