"""Individual guard checks.

Each check appends human-readable messages to a GuardResult and never
aborts the run; the hook entry points decide pass/fail once all checks ran.
"""

from gitguard.checks.branch import check_branch_protection
from gitguard.checks.manifest import check_version_bump
from gitguard.checks.markers import check_forbidden_markers
from gitguard.checks.revisions import examine_revisions
from gitguard.checks.secrets import check_secret_leaks

__all__ = [
    "check_branch_protection",
    "check_forbidden_markers",
    "check_secret_leaks",
    "check_version_bump",
    "examine_revisions",
]
