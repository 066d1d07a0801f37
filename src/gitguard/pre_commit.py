"""Pre-commit guard: inspect the staged change set before a commit is made."""

from __future__ import annotations

import logging
from pathlib import Path

from gitguard.checks import check_branch_protection, check_forbidden_markers, check_secret_leaks
from gitguard.config import RunSettings
from gitguard.extensions import discover_extensions, run_extensions
from gitguard.git.queries import resolve_repo_root, staged_changes
from gitguard.types import ExtensionContext, GuardResult

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"


def run_pre_commit(repo: Path | None = None) -> GuardResult:
    """Run every pre-commit check and return the accumulated result.

    Raises:
        PreconditionError: If ``repo`` (or cwd) is not inside a git work tree
        ConfigError: If the repository config or an extension cannot be loaded
    """
    repo_root = resolve_repo_root(repo)
    settings = RunSettings.load(repo_root)
    result = GuardResult(hook=HOOK_NAME)

    check_branch_protection(settings, result)

    staged = staged_changes(repo_root)
    logger.debug(
        "staged against %s: %d file(s), %d rename(s)",
        staged.baseline,
        len(staged.files),
        len(staged.renamed),
    )

    check_forbidden_markers(settings, staged, result)
    check_secret_leaks(settings, staged, result)

    run_extensions(
        discover_extensions(settings),
        lambda: ExtensionContext(
            hook=HOOK_NAME,
            repo_root=repo_root,
            staged=staged,
            failures=tuple(result.failures),
        ),
        result,
    )
    return result
