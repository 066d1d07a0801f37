"""Value types shared by the pre-commit and pre-push guards."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, NamedTuple

ChangeStatus = Literal["added", "modified", "copied", "renamed", "deleted", "type_changed"]
UpdateKind = Literal["delete", "new", "update"]

_STATUS_CODES: dict[str, ChangeStatus] = {
    "A": "added",
    "M": "modified",
    "C": "copied",
    "R": "renamed",
    "D": "deleted",
    "T": "type_changed",
}


def status_from_code(code: str) -> ChangeStatus | None:
    """Map a `git diff --name-status` code (e.g. ``R100``) to a status."""
    return _STATUS_CODES.get(code[:1])


def is_null_oid(oid: str) -> bool:
    """Return True for the all-zero object id git uses for missing refs."""
    return bool(oid) and set(oid) == {"0"}


@dataclass(frozen=True)
class StagedChange:
    """One entry of the staged change set."""

    path: str
    status: ChangeStatus
    old_path: str | None = None


@dataclass(frozen=True)
class RenamedPair:
    """A staged rename from ``old_path`` to ``new_path``."""

    old_path: str
    new_path: str


@dataclass(frozen=True)
class StagedSet:
    """Staged files split into non-deleted paths and renames."""

    files: tuple[str, ...]
    renamed: tuple[RenamedPair, ...]
    baseline: str

    @classmethod
    def from_changes(cls, changes: list[StagedChange], baseline: str) -> StagedSet:
        files: list[str] = []
        renamed: list[RenamedPair] = []
        for change in changes:
            if change.status == "renamed":
                renamed.append(RenamedPair(old_path=change.old_path or change.path, new_path=change.path))
            elif change.status != "deleted":
                files.append(change.path)
        return cls(files=tuple(files), renamed=tuple(renamed), baseline=baseline)


@dataclass(frozen=True)
class RefUpdate:
    """One line of pre-push input: a ref about to be updated on the remote."""

    local_ref: str
    local_oid: str
    remote_ref: str
    remote_oid: str

    @property
    def kind(self) -> UpdateKind:
        if is_null_oid(self.local_oid):
            return "delete"
        if is_null_oid(self.remote_oid):
            return "new"
        return "update"


@dataclass(frozen=True)
class RevisionRange:
    """Commits introduced by a single ref update."""

    update: RefUpdate
    commits: tuple[str, ...]


_TRIPLE_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class VersionTriple(NamedTuple):
    """Semantic version core; tuple ordering gives major, minor, patch comparison."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> VersionTriple | None:
        """Parse the first ``X.Y.Z`` found in ``text``; ignore pre-release suffixes."""
        match = _TRIPLE_RE.search(text)
        if match is None:
            return None
        return cls(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class GuardResult:
    """Ordered, append-only failure accumulator for a single guard run."""

    hook: str
    failures: list[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        self.failures.append(message)

    def extend(self, messages: list[str]) -> None:
        for message in messages:
            self.add(message)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


@dataclass(frozen=True)
class ExtensionContext:
    """Run state handed to extensions."""

    hook: str
    repo_root: Path
    staged: StagedSet
    failures: tuple[str, ...]
    ref_updates: tuple[RefUpdate, ...] = ()
    ranges: tuple[RevisionRange, ...] = ()
