"""Repository configuration and per-clone settings.

Supports .gitguard/config.toml or .gitguard/config.yaml at the work tree root
for settings shared through the repository, and a ``gitguard`` directory
inside the clone's git directory for settings that must never be committed.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

import yaml

from gitguard.errors import ConfigError
from gitguard.git.queries import git_dir

DEFAULT_MANIFEST = "Chart.yaml"
DEFAULT_MARKER_EXCLUDE = ("pre-commit", "*/pre-commit")

OVERRIDE_SENTINEL_NAME = "allow-default-branch-commits"
SECRET_ALLOWLIST_NAME = "secret-allowlist"
LOCAL_EXTENSION_NAME = "extension.py"


@dataclass(frozen=True)
class GuardConfig:
    """Settings shared by both hooks."""

    default_branch: str | None = None
    remote: str = "origin"
    manifest: str = DEFAULT_MANIFEST
    marker_exclude: tuple[str, ...] = DEFAULT_MARKER_EXCLUDE
    extensions: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "GuardConfig":
        """Parse and validate config dict into GuardConfig."""
        if not isinstance(data, dict):
            raise TypeError("top-level config must be a mapping")

        default_branch = data.get("default_branch")
        if default_branch is not None and not isinstance(default_branch, str):
            raise TypeError("default_branch must be a string")

        remote = data.get("remote", "origin")
        manifest = data.get("manifest", DEFAULT_MANIFEST)
        if not isinstance(remote, str) or not isinstance(manifest, str):
            raise TypeError("remote and manifest must be strings")

        return cls(
            default_branch=default_branch or None,
            remote=remote,
            manifest=manifest,
            marker_exclude=_string_tuple(data, "marker_exclude", DEFAULT_MARKER_EXCLUDE),
            extensions=_string_tuple(data, "extensions", ()),
        )


def _string_tuple(data: dict, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return tuple(value)


def load_config(repo_root: Path) -> GuardConfig:
    """Load configuration from .gitguard/config.toml or .gitguard/config.yaml.

    Priority order:
    1. .gitguard/config.toml (preferred)
    2. .gitguard/config.yaml (fallback)

    Returns defaults when neither file exists.

    Raises:
        ConfigError: If a config file is malformed or invalid
    """
    config_dir = repo_root / ".gitguard"

    toml_path = config_dir / "config.toml"
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
            return GuardConfig.from_dict(data)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed TOML config at {toml_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config structure in {toml_path}: {e}") from e

    yaml_path = config_dir / "config.yaml"
    if yaml_path.exists():
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return GuardConfig.from_dict(data)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML config at {yaml_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config structure in {yaml_path}: {e}") from e

    return GuardConfig()


@dataclass(frozen=True)
class ClonePaths:
    """Per-clone files kept inside the git directory, never committed."""

    root: Path

    @classmethod
    def for_git_dir(cls, git_dir: Path) -> "ClonePaths":
        return cls(root=git_dir / "gitguard")

    @property
    def override_sentinel(self) -> Path:
        return self.root / OVERRIDE_SENTINEL_NAME

    @property
    def secret_allowlist(self) -> Path:
        return self.root / SECRET_ALLOWLIST_NAME

    @property
    def local_extension(self) -> Path:
        return self.root / LOCAL_EXTENSION_NAME

    def branch_protection_disabled(self) -> bool:
        return self.override_sentinel.exists()

    def allowed_secret_files(self) -> frozenset[str]:
        """Lower-cased filenames exempt from the secret scan."""
        path = self.secret_allowlist
        if not path.is_file():
            return frozenset()
        entries = set()
        for line in path.read_text(encoding="utf-8").splitlines():
            entry = line.strip()
            if entry and not entry.startswith("#"):
                entries.add(entry.lower())
        return frozenset(entries)


@dataclass(frozen=True)
class RunSettings:
    """Where a guard run is executing and how it is configured."""

    repo_root: Path
    config: GuardConfig
    clone: ClonePaths

    @classmethod
    def load(cls, repo_root: Path) -> "RunSettings":
        return cls(
            repo_root=repo_root,
            config=load_config(repo_root),
            clone=ClonePaths.for_git_dir(git_dir(repo_root)),
        )
