"""Console reporting for guard runs.

All hook output goes to stderr so git shows it alongside its own messages.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from gitguard.types import GuardResult

TAG = "[gitguard]"

console = Console(stderr=True, highlight=False, soft_wrap=True)

BANNERS = {
    "pre-commit": "COMMIT REJECTED",
    "pre-push": "PUSH REJECTED",
}

REMINDERS = {
    "pre-commit": (
        "Fix the problems above and re-stage the files (git add) before committing again.",
        "To bypass these checks for a single commit: git commit --no-verify",
    ),
    "pre-push": (
        "Fix the problems above and commit the fixes before pushing again.",
        "To bypass these checks for a single push: git push --no-verify",
    ),
}


def configure_logging(verbose: bool = False) -> None:
    """Route library logging to stderr through rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def status(message: str, style: str = "") -> None:
    console.print(Text(f"{TAG} {message}", style=style))


def report_result(result: GuardResult) -> int:
    """Print the outcome of a run and return the process exit code."""
    if result.passed:
        status(f"{result.hook}: all checks passed", style="green")
        return result.exit_code

    banner = BANNERS.get(result.hook, "CHECKS FAILED")
    console.print(Text(f"{TAG} {banner}", style="bold bright_white on red"))
    for failure in result.failures:
        console.print(Text(f"{TAG} ! {failure}", style="bold red"))
    for line in REMINDERS.get(result.hook, ()):
        status(line, style="yellow")
    return result.exit_code
