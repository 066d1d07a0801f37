"""Heuristic secret detection for structured config files.

Detection is best-effort: lines that look like ``password: ...`` in a staged
config file are reported unless they match a known-safe pattern, and any file
can be exempted through the per-clone allow-list.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from gitguard.config import RunSettings
from gitguard.git.queries import staged_added_lines
from gitguard.types import GuardResult, StagedSet

logger = logging.getLogger(__name__)

SCANNED_EXTENSIONS = frozenset({".properties", ".yml", ".yaml", ".json"})

SAFE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"ENC\["),
    re.compile(r"\{cipher\}", re.IGNORECASE),
    re.compile(r"secret[_-]?(key)?[_-]?ref", re.IGNORECASE),
    re.compile(r"secretName"),
    re.compile(r"vault:", re.IGNORECASE),
    re.compile(r"\$\{[^}]+\}"),
)

SECRET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"secret\w*[\"']?\s*[:=]", re.IGNORECASE),
    re.compile(r"private[_-]?key\w*[\"']?\s*[:=]", re.IGNORECASE),
    re.compile(r"passw(or)?d\w*[\"']?\s*[:=]", re.IGNORECASE),
)


def is_scanned(path: str) -> bool:
    return PurePosixPath(path).suffix.lower() in SCANNED_EXTENSIONS


def suspicious_lines(lines: list[str]) -> list[str]:
    """Return lines that look like secret assignments and are not known-safe."""
    hits = []
    for line in lines:
        if any(p.search(line) for p in SAFE_PATTERNS):
            continue
        if any(p.search(line) for p in SECRET_PATTERNS):
            hits.append(line)
    return hits


def is_allowlisted(path: str, allowed: frozenset[str]) -> bool:
    lowered = path.lower()
    return lowered in allowed or PurePosixPath(lowered).name in allowed


def check_secret_leaks(settings: RunSettings, staged: StagedSet, result: GuardResult) -> None:
    """Record one failure per scanned config file that appears to add a secret."""
    candidates: list[tuple[str, list[str]]] = [(path, [path]) for path in staged.files if is_scanned(path)]
    candidates += [
        (pair.new_path, [pair.old_path, pair.new_path]) for pair in staged.renamed if is_scanned(pair.new_path)
    ]
    if not candidates:
        return

    allowed = settings.clone.allowed_secret_files()
    for path, diff_paths in candidates:
        hits = suspicious_lines(staged_added_lines(settings.repo_root, staged.baseline, diff_paths))
        if not hits:
            continue
        if is_allowlisted(path, allowed):
            logger.debug("%s matched secret patterns but is allow-listed", path)
            continue
        result.add(
            f"{path}: possible secret in config ({len(hits)} suspicious line(s) added). "
            f"If this is a false positive, add the filename to {settings.clone.secret_allowlist}"
        )
