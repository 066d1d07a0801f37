"""Detect "do not commit" markers in staged additions."""

from __future__ import annotations

import logging
import re
from fnmatch import fnmatch

from gitguard.config import RunSettings
from gitguard.git.queries import commit_added_lines, rev_exists, staged_added_lines
from gitguard.types import GuardResult, RenamedPair, StagedSet

logger = logging.getLogger(__name__)

# "DONT COMMIT", "don't_commit", "Don'tCommit", "do not commit", ...
FORBIDDEN_MARKER_RE = re.compile(r"do[\W_]*n[o'\u2019]?t[\W_]*commit", re.IGNORECASE)


def contains_marker(lines: list[str]) -> bool:
    return any(FORBIDDEN_MARKER_RE.search(line) for line in lines)


def is_excluded(path: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch(path, pattern) for pattern in patterns)


def _renamed_added_lines(settings: RunSettings, staged: StagedSet, pair: RenamedPair) -> list[str]:
    """Staged additions of the rename plus the last commit's additions to either path."""
    repo_root = settings.repo_root
    paths = [pair.old_path, pair.new_path]
    lines = staged_added_lines(repo_root, staged.baseline, paths)
    if rev_exists(repo_root, "HEAD~1"):
        lines += commit_added_lines(repo_root, "HEAD~1", "HEAD", paths)
    else:
        lines += staged_added_lines(repo_root, staged.baseline, [pair.new_path], renames=False)
    return lines


def check_forbidden_markers(settings: RunSettings, staged: StagedSet, result: GuardResult) -> None:
    """Record one failure per staged file whose added lines carry the marker."""
    exclude = settings.config.marker_exclude

    for path in staged.files:
        if is_excluded(path, exclude):
            logger.debug("marker scan skips %s", path)
            continue
        lines = staged_added_lines(settings.repo_root, staged.baseline, [path])
        if contains_marker(lines):
            result.add(f"{path}: contains a \"don't commit\" marker")

    for pair in staged.renamed:
        if is_excluded(pair.new_path, exclude):
            logger.debug("marker scan skips %s", pair.new_path)
            continue
        if contains_marker(_renamed_added_lines(settings, staged, pair)):
            result.add(f"{pair.new_path}: contains a \"don't commit\" marker (renamed from {pair.old_path})")
