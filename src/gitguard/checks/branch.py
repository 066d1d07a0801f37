"""Refuse commits made directly on the default branch."""

from __future__ import annotations

import logging

from gitguard.config import RunSettings
from gitguard.git.queries import current_branch, default_branch
from gitguard.types import GuardResult

logger = logging.getLogger(__name__)


def check_branch_protection(settings: RunSettings, result: GuardResult) -> None:
    """Record a failure when HEAD is the default branch and no override exists."""
    if settings.clone.branch_protection_disabled():
        logger.debug("branch protection disabled by %s", settings.clone.override_sentinel)
        return

    branch = current_branch(settings.repo_root)
    if branch is None:
        logger.debug("detached HEAD; branch protection does not apply")
        return

    protected = default_branch(
        settings.repo_root,
        remote=settings.config.remote,
        configured=settings.config.default_branch,
    )
    if protected is None:
        logger.debug("no default branch designated by %s; branch protection does not apply", settings.config.remote)
        return
    if branch == protected:
        result.add(
            f"Committing directly to the default branch '{protected}' is not allowed. "
            f"Create a topic branch, or disable this check for this clone with: "
            f"touch {settings.clone.override_sentinel}"
        )
