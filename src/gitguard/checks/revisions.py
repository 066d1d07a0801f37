"""Enumerate the commits each pushed ref introduces."""

from __future__ import annotations

import logging
from pathlib import Path

from gitguard.git.queries import rev_exists, rev_list
from gitguard.types import RefUpdate, RevisionRange

logger = logging.getLogger(__name__)


def revisions_for(repo_root: Path, update: RefUpdate) -> tuple[str, ...]:
    """Commits introduced by ``update``: none for deletes, full ancestry for new refs."""
    if update.kind == "delete":
        return ()
    if update.kind == "new":
        return tuple(rev_list(repo_root, [update.local_oid]))
    if not rev_exists(repo_root, update.remote_oid):
        # remote tip unknown locally (not fetched); fall back to what no remote-tracking ref has
        return tuple(rev_list(repo_root, [update.local_oid, "--not", "--remotes"]))
    return tuple(rev_list(repo_root, [f"{update.remote_oid}..{update.local_oid}"]))


def examine_revisions(repo_root: Path, updates: list[RefUpdate]) -> list[RevisionRange]:
    """Classify each update and collect its commits.

    No per-commit validation happens here; the returned ranges are handed
    to extensions through ``ExtensionContext.ranges``.
    """
    ranges = []
    for update in updates:
        commits = revisions_for(repo_root, update)
        logger.debug(
            "%s %s -> %s: %d commit(s) to examine",
            update.kind,
            update.local_ref,
            update.remote_ref,
            len(commits),
        )
        ranges.append(RevisionRange(update=update, commits=commits))
    return ranges
