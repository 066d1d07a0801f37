"""gitguard CLI - git hook entry points."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from gitguard import __version__
from gitguard.install import install_hooks
from gitguard.pre_commit import run_pre_commit
from gitguard.pre_push import parse_ref_updates, run_pre_push
from gitguard.report import configure_logging, report_result, status

cli = typer.Typer(
    name="gitguard",
    help="gitguard - pre-commit and pre-push guards for git repositories",
    no_args_is_help=True,
)


def _refuse(exc: Exception) -> typer.Exit:
    status(f"! {exc}", style="bold red")
    return typer.Exit(1)


@cli.command("pre-commit")
def pre_commit(
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository path (defaults to current working directory).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="GITGUARD_DEBUG",
        help="Log git commands and check decisions to stderr.",
    ),
) -> None:
    """Check staged changes before a commit is recorded."""
    configure_logging(verbose)
    try:
        result = run_pre_commit(repo)
    except RuntimeError as exc:
        raise _refuse(exc) from exc
    raise typer.Exit(report_result(result))


@cli.command("pre-push")
def pre_push(
    remote: str = typer.Argument(..., help="Name of the remote being pushed to."),
    url: str = typer.Argument(..., help="URL of the remote being pushed to."),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository path (defaults to current working directory).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="GITGUARD_DEBUG",
        help="Log git commands and check decisions to stderr.",
    ),
) -> None:
    """Check outgoing revisions; ref updates are read from stdin."""
    configure_logging(verbose)
    try:
        updates = parse_ref_updates(sys.stdin)
        result = run_pre_push(remote, url, updates, repo)
    except RuntimeError as exc:
        raise _refuse(exc) from exc
    raise typer.Exit(report_result(result))


@cli.command("install")
def install(
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository path (defaults to current working directory).",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite hooks not installed by gitguard."),
) -> None:
    """Install pre-commit and pre-push hook shims into the repository."""
    try:
        results = install_hooks(repo, force=force)
    except (RuntimeError, OSError) as exc:
        raise _refuse(exc) from exc

    for item in results:
        status(f"{item.hook}: {item.action} ({item.path})")
    if any(item.action == "skipped" for item in results):
        status("existing hooks were left in place (use --force to overwrite)", style="yellow")


@cli.command("version")
def version() -> None:
    """Print the gitguard version."""
    typer.echo(__version__)


def pre_commit_main() -> None:
    """Console-script entry point for a bare pre-commit hook."""
    typer.run(pre_commit)


def pre_push_main() -> None:
    """Console-script entry point for a bare pre-push hook."""
    typer.run(pre_push)


if __name__ == "__main__":
    cli()
