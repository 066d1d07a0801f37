"""Require the manifest version to increase with every push."""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path, PurePosixPath

import yaml

from gitguard.config import RunSettings
from gitguard.git.queries import current_branch, default_branch, rev_exists, rev_list, show_file
from gitguard.types import GuardResult, RefUpdate, VersionTriple

logger = logging.getLogger(__name__)

_VERSION_LINE_RE = re.compile(r"""^\s*version\s*[:=]\s*["']?(\d+\.\d+\.\d+)""", re.IGNORECASE | re.MULTILINE)


def _version_field(content: str, suffix: str) -> str | None:
    """Extract the raw version value from manifest text by file type."""
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(content)
        value = data.get("version") if isinstance(data, dict) else None
    elif suffix == ".json":
        data = json.loads(content)
        value = data.get("version") if isinstance(data, dict) else None
    elif suffix == ".toml":
        data = tomllib.loads(content)
        value = (
            data.get("project", {}).get("version")
            or data.get("package", {}).get("version")
            or data.get("tool", {}).get("poetry", {}).get("version")
        )
    else:
        match = _VERSION_LINE_RE.search(content)
        value = match.group(1) if match else None
    return None if value is None else str(value)


def parse_manifest_version(content: str, manifest: str) -> VersionTriple | None:
    """Parse the ``major.minor.patch`` version from manifest content."""
    suffix = PurePosixPath(manifest).suffix.lower()
    try:
        value = _version_field(content, suffix)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.debug("unable to parse %s: %s", manifest, exc)
        return None
    return VersionTriple.parse(value) if value is not None else None


def version_at(repo_root: Path, rev: str, manifest: str) -> VersionTriple | None:
    content = show_file(repo_root, rev, manifest)
    if content is None:
        return None
    return parse_manifest_version(content, manifest)


def pending_revisions(repo_root: Path, updates: list[RefUpdate]) -> list[str]:
    """Commits about to be pushed that no remote-tracking ref has yet, oldest first."""
    tips = [update.local_oid for update in updates if update.kind != "delete"]
    if not tips:
        return []
    return rev_list(repo_root, ["--reverse", "--topo-order", *tips, "--not", "--remotes"])


def _baseline(settings: RunSettings, remote: str, oldest: str) -> tuple[str, str] | None:
    """Pick the revision to compare against and describe it for messages."""
    repo_root = settings.repo_root
    protected = default_branch(repo_root, remote=remote, configured=settings.config.default_branch)
    if protected is None:
        return None

    if current_branch(repo_root) == protected:
        parent = f"{oldest}^"
        if not rev_exists(repo_root, parent):
            return None
        return parent, f"{protected} before this push"

    for candidate in (f"{remote}/{protected}", protected):
        if rev_exists(repo_root, candidate):
            return candidate, candidate
    return None


def check_version_bump(
    settings: RunSettings,
    remote: str,
    updates: list[RefUpdate],
    result: GuardResult,
) -> None:
    """Record a failure when pushed commits do not raise the manifest version."""
    repo_root = settings.repo_root
    manifest = settings.config.manifest
    if not (repo_root / manifest).is_file():
        logger.debug("no %s at repository root; version check skipped", manifest)
        return

    pending = pending_revisions(repo_root, updates)
    if not pending:
        logger.debug("nothing new to push; version check passes")
        return
    oldest, newest = pending[0], pending[-1]

    new_version = version_at(repo_root, newest, manifest)
    if new_version is None:
        result.add(f"{manifest}: no major.minor.patch version found at {newest[:12]}")
        return

    baseline = _baseline(settings, remote, oldest)
    if baseline is None:
        logger.debug("no baseline revision for %s; version check passes", manifest)
        return
    baseline_rev, described = baseline

    old_version = version_at(repo_root, baseline_rev, manifest)
    if old_version is None:
        logger.debug("%s has no version at %s; version check passes", manifest, baseline_rev)
        return

    if new_version <= old_version:
        result.add(
            f"{manifest}: version {new_version} must be greater than {old_version} ({described}). "
            f"Bump the version in {manifest} and amend or add a commit before pushing."
        )
