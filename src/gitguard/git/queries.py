"""Read-only git queries used by the guards.

Every function takes the repository root and returns plain values; command
output is kept in memory and nothing in the repository is modified.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gitguard.errors import PreconditionError
from gitguard.git.exec import ExecError, run_git
from gitguard.types import StagedChange, StagedSet, status_from_code

logger = logging.getLogger(__name__)

# Object id of the empty tree; diffing against it lists everything as added.
EMPTY_TREE_OID = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def resolve_repo_root(repo: Path | None = None) -> Path:
    """Resolve git work tree root from cwd or explicit path."""
    probe = (repo or Path.cwd()).resolve()
    try:
        out = run_git(["rev-parse", "--show-toplevel"], repo_root=probe)
    except (ExecError, OSError) as exc:
        raise PreconditionError(f"not inside a git work tree: {probe}") from exc
    root = out.stdout.strip()
    if not root:
        raise PreconditionError(f"not inside a git work tree: {probe}")
    return Path(root).resolve()


def git_dir(repo_root: Path) -> Path:
    """Return the absolute path of the clone's git directory."""
    out = run_git(["rev-parse", "--absolute-git-dir"], repo_root=repo_root)
    return Path(out.stdout.strip())


def hooks_dir(repo_root: Path) -> Path:
    """Return the directory git reads hooks from (honours core.hooksPath)."""
    out = run_git(["rev-parse", "--git-path", "hooks"], repo_root=repo_root)
    path = Path(out.stdout.strip())
    if not path.is_absolute():
        path = repo_root / path
    return path.resolve()


def current_branch(repo_root: Path) -> str | None:
    """Return the current branch name, or None when detached."""
    out = run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], repo_root=repo_root, check=False)
    branch = out.stdout.strip()
    return branch or None


def rev_exists(repo_root: Path, rev: str) -> bool:
    """Return True when ``rev`` resolves to a commit."""
    out = run_git(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"], repo_root=repo_root, check=False)
    return out.ok


def default_branch(repo_root: Path, remote: str = "origin", configured: str | None = None) -> str | None:
    """Resolve the default branch name.

    Priority order:
      1. Explicitly configured name
      2. ``refs/remotes/<remote>/HEAD`` as set by clone or ``git remote set-head``

    Returns None when the remote designates no default branch.
    """
    if configured:
        return configured

    out = run_git(
        ["symbolic-ref", "--quiet", "--short", f"refs/remotes/{remote}/HEAD"],
        repo_root=repo_root,
        check=False,
    )
    symbolic = out.stdout.strip()
    if out.ok and symbolic:
        prefix = f"{remote}/"
        return symbolic[len(prefix):] if symbolic.startswith(prefix) else symbolic

    return None


def staged_baseline(repo_root: Path) -> str:
    """Return ``HEAD``, or the empty tree when the repository has no commits."""
    return "HEAD" if rev_exists(repo_root, "HEAD") else EMPTY_TREE_OID


def staged_changes(repo_root: Path, baseline: str | None = None) -> StagedSet:
    """Enumerate staged changes against ``baseline`` with rename detection."""
    base = baseline or staged_baseline(repo_root)
    out = run_git(
        ["diff", "--cached", "--name-status", "-z", "-M", base],
        repo_root=repo_root,
    )
    return StagedSet.from_changes(parse_name_status(out.stdout), baseline=base)


def parse_name_status(output: str) -> list[StagedChange]:
    """Parse NUL-separated ``git diff --name-status -z`` output."""
    tokens = output.split("\0")
    changes: list[StagedChange] = []
    index = 0
    while index < len(tokens):
        code = tokens[index]
        index += 1
        if not code:
            continue
        status = status_from_code(code)
        if status in ("renamed", "copied"):
            old_path, new_path = tokens[index], tokens[index + 1]
            index += 2
            changes.append(StagedChange(path=new_path, status=status, old_path=old_path))
            continue
        path = tokens[index]
        index += 1
        if status is None:
            logger.debug("ignoring unmerged/unknown status %r for %s", code, path)
            continue
        changes.append(StagedChange(path=path, status=status))
    return changes


def added_lines(diff_text: str) -> list[str]:
    """Return the content of lines added inside diff hunks."""
    lines: list[str] = []
    in_hunk = False
    for line in diff_text.splitlines():
        if line.startswith("diff --git "):
            in_hunk = False
        elif line.startswith("@@"):
            in_hunk = True
        elif in_hunk and line.startswith("+"):
            lines.append(line[1:])
    return lines


def staged_added_lines(
    repo_root: Path,
    baseline: str,
    paths: list[str],
    *,
    renames: bool = True,
) -> list[str]:
    """Added lines of the staged diff for ``paths``."""
    args = ["diff", "--cached", "--no-color", "--no-ext-diff", "-U0"]
    args.append("-M" if renames else "--no-renames")
    out = run_git([*args, baseline, "--", *paths], repo_root=repo_root)
    return added_lines(out.stdout)


def commit_added_lines(repo_root: Path, old_rev: str, new_rev: str, paths: list[str]) -> list[str]:
    """Added lines of the diff between two commits for ``paths``."""
    out = run_git(
        ["diff", "--no-color", "--no-ext-diff", "-U0", "-M", old_rev, new_rev, "--", *paths],
        repo_root=repo_root,
    )
    return added_lines(out.stdout)


def rev_list(repo_root: Path, args: list[str]) -> list[str]:
    """Run ``git rev-list`` and return commit ids in output order."""
    return run_git(["rev-list", *args], repo_root=repo_root).lines


def show_file(repo_root: Path, rev: str, path: str) -> str | None:
    """Return ``path`` as of ``rev``, or None when it does not exist there."""
    out = run_git(["show", f"{rev}:{path}"], repo_root=repo_root, check=False)
    if not out.ok:
        logger.debug("%s not present at %s", path, rev)
        return None
    return out.stdout
