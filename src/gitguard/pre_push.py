"""Pre-push guard: inspect the revisions about to be pushed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gitguard.checks import check_version_bump, examine_revisions
from gitguard.config import RunSettings
from gitguard.errors import InputError
from gitguard.extensions import discover_extensions, run_extensions
from gitguard.git.queries import EMPTY_TREE_OID, resolve_repo_root
from gitguard.types import ExtensionContext, GuardResult, RefUpdate, StagedSet

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-push"


def parse_ref_updates(lines: Iterable[str]) -> list[RefUpdate]:
    """Parse ``<local ref> <local oid> <remote ref> <remote oid>`` lines."""
    updates = []
    for number, line in enumerate(lines, start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 4:
            raise InputError(f"malformed pre-push input on line {number}: {line.strip()!r}")
        local_ref, local_oid, remote_ref, remote_oid = fields
        updates.append(
            RefUpdate(local_ref=local_ref, local_oid=local_oid, remote_ref=remote_ref, remote_oid=remote_oid)
        )
    return updates


def run_pre_push(
    remote: str,
    url: str,
    updates: list[RefUpdate],
    repo: Path | None = None,
) -> GuardResult:
    """Run every pre-push check and return the accumulated result.

    Raises:
        PreconditionError: If ``repo`` (or cwd) is not inside a git work tree
        ConfigError: If the repository config or an extension cannot be loaded
    """
    repo_root = resolve_repo_root(repo)
    settings = RunSettings.load(repo_root)
    result = GuardResult(hook=HOOK_NAME)
    logger.debug("pushing %d ref(s) to %s (%s)", len(updates), remote, url)

    ranges = tuple(examine_revisions(repo_root, updates))
    check_version_bump(settings, remote, updates, result)

    run_extensions(
        discover_extensions(settings),
        lambda: ExtensionContext(
            hook=HOOK_NAME,
            repo_root=repo_root,
            staged=StagedSet(files=(), renamed=(), baseline=EMPTY_TREE_OID),
            failures=tuple(result.failures),
            ref_updates=tuple(updates),
            ranges=ranges,
        ),
        result,
    )
    return result
