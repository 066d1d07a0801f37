"""Tests for the "don't commit" marker scan."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import commit_file, git, write

from gitguard.checks.markers import FORBIDDEN_MARKER_RE, check_forbidden_markers
from gitguard.config import RunSettings
from gitguard.git.queries import staged_changes
from gitguard.types import GuardResult


def _scan(repo: Path) -> GuardResult:
    result = GuardResult(hook="pre-commit")
    check_forbidden_markers(RunSettings.load(repo), staged_changes(repo), result)
    return result


@pytest.mark.parametrize(
    "line",
    [
        "DONT COMMIT",
        "# don't_commit this",
        "Don'tCommit",
        "// do not commit",
        "DO_NOT_COMMIT = True",
        "dont-commit",
    ],
)
def test_marker_variants_match(line: str) -> None:
    assert FORBIDDEN_MARKER_RE.search(line)


@pytest.mark.parametrize("line", ["commit often", "do commit this", "documentation"])
def test_plain_text_does_not_match(line: str) -> None:
    assert FORBIDDEN_MARKER_RE.search(line) is None


def test_added_marker_fails_naming_file(git_repo: Path) -> None:
    write(git_repo, "src/app.py", "x = 1  # DONT COMMIT\n")
    git(git_repo, "add", "src/app.py")

    result = _scan(git_repo)

    assert len(result.failures) == 1
    assert "src/app.py" in result.failures[0]


def test_removed_marker_does_not_fail(git_repo: Path) -> None:
    commit_file(git_repo, "src/app.py", "x = 1  # dont commit\ny = 2\n")
    write(git_repo, "src/app.py", "y = 2\n")
    git(git_repo, "add", "src/app.py")

    assert _scan(git_repo).passed


def test_one_failure_per_file(git_repo: Path) -> None:
    write(git_repo, "notes.md", "DONT COMMIT\nalso DONT COMMIT\n")
    write(git_repo, "other.md", "fine\n")
    git(git_repo, "add", "notes.md", "other.md")

    assert _scan(git_repo).failures == ['notes.md: contains a "don\'t commit" marker']


def test_hook_script_is_excluded(git_repo: Path) -> None:
    write(git_repo, "hooks/pre-commit", "grep -i 'dont commit'\n")
    git(git_repo, "add", "hooks/pre-commit")

    assert _scan(git_repo).passed


def test_marker_found_in_repository_without_commits(empty_repo: Path) -> None:
    write(empty_repo, "first.txt", "Don'tCommit\n")
    git(empty_repo, "add", "first.txt")

    result = _scan(empty_repo)

    assert result.failures == ['first.txt: contains a "don\'t commit" marker']


def test_renamed_file_scans_last_commit_diff(git_repo: Path) -> None:
    commit_file(git_repo, "notes.txt", "draft\nDONT COMMIT\n" + "padding line\n" * 10, message="add notes")
    git(git_repo, "mv", "notes.txt", "notes-renamed.txt")

    result = _scan(git_repo)

    assert len(result.failures) == 1
    assert "notes-renamed.txt" in result.failures[0]
    assert "renamed from notes.txt" in result.failures[0]


def test_marker_added_alongside_rename_fails(git_repo: Path) -> None:
    body = "".join(f"line {n}\n" for n in range(30))
    commit_file(git_repo, "a.txt", body, message="add a")
    commit_file(git_repo, "other.txt", "unrelated\n", message="unrelated change")
    git(git_repo, "mv", "a.txt", "b.txt")
    write(git_repo, "b.txt", body + "DONT COMMIT\n")
    git(git_repo, "add", "b.txt")

    result = _scan(git_repo)

    assert result.failures == ['b.txt: contains a "don\'t commit" marker (renamed from a.txt)']
