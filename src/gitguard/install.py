"""Install gitguard shims into a repository's hooks directory."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from gitguard.git.queries import hooks_dir, resolve_repo_root

HOOK_MARKER = "# installed by gitguard"

HOOK_COMMANDS: dict[str, str] = {
    "pre-commit": "gitguard-pre-commit",
    "pre-push": "gitguard-pre-push",
}

InstallAction = Literal["created", "updated", "unchanged", "skipped"]


@dataclass(frozen=True)
class InstallResult:
    hook: str
    path: Path
    action: InstallAction


def render_hook(hook: str) -> str:
    if hook not in HOOK_COMMANDS:
        raise ValueError(f"Unknown hook: {hook!r}. Valid hooks: {', '.join(sorted(HOOK_COMMANDS))}")
    return "\n".join(
        [
            "#!/bin/sh",
            HOOK_MARKER,
            f'exec {HOOK_COMMANDS[hook]} "$@"',
            "",
        ]
    )


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            prefix=f".{path.name}.",
            suffix=".gitguard.tmp",
        ) as tmp_file:
            tmp_file.write(content)
            tmp_path = Path(tmp_file.name)
        os.chmod(tmp_path, 0o755)
        os.replace(tmp_path, path)
    except Exception:
        if "tmp_path" in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


def install_hook(directory: Path, hook: str, *, force: bool = False) -> InstallResult:
    path = directory / hook
    content = render_hook(hook)

    if path.exists():
        try:
            existing = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to read existing hook {path}: {exc}") from exc
        if existing == content:
            return InstallResult(hook=hook, path=path, action="unchanged")
        if HOOK_MARKER not in existing and not force:
            return InstallResult(hook=hook, path=path, action="skipped")
        action: InstallAction = "updated"
    else:
        action = "created"

    try:
        _atomic_write(path, content)
    except OSError as exc:
        raise OSError(f"Failed to write hook {path}: {exc}") from exc
    return InstallResult(hook=hook, path=path, action=action)


def install_hooks(repo: Path | None = None, *, force: bool = False) -> list[InstallResult]:
    """Write pre-commit and pre-push shims; foreign hooks are kept unless forced."""
    directory = hooks_dir(resolve_repo_root(repo))
    return [install_hook(directory, hook, force=force) for hook in HOOK_COMMANDS]
