"""Extension API for project-specific checks.

An extension is any callable taking an ``ExtensionContext`` and returning an
iterable of failure messages. Extensions are discovered from three places:

* the ``gitguard.extensions`` entry-point group, so installed packages can
  register checks automatically;
* ``module:function`` references listed under ``extensions`` in the config;
* an optional ``extension.py`` in the clone's ``gitguard`` directory that
  defines ``check(context)``.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from gitguard.config import RunSettings
from gitguard.errors import ConfigError
from gitguard.types import ExtensionContext, GuardResult

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "gitguard.extensions"
LOCAL_EXTENSION_FUNCTION = "check"

ExtensionFn = Callable[[ExtensionContext], Iterable[str]]


@dataclass(frozen=True)
class Extension:
    """A named extension callable."""

    name: str
    fn: ExtensionFn


def _entry_point_extensions() -> Iterator[Extension]:
    from importlib.metadata import entry_points

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            fn = ep.load()
        except (ImportError, AttributeError) as exc:
            raise ConfigError(f"Unable to load extension {ep.name!r} ({ep.value}): {exc}") from exc
        yield Extension(name=ep.name, fn=fn)


def _configured_extension(reference: str) -> Extension:
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Invalid extension reference {reference!r}: expected 'module:function'")
    try:
        module = importlib.import_module(module_name)
        fn = getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        raise ConfigError(f"Unable to load extension {reference!r}: {exc}") from exc
    return Extension(name=reference, fn=fn)


def _local_extension(path: Path) -> Extension | None:
    if not path.is_file():
        return None
    spec = importlib.util.spec_from_file_location("gitguard_local_extension", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Unable to load local extension {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigError(f"Unable to load local extension {path}: {exc}") from exc
    fn = getattr(module, LOCAL_EXTENSION_FUNCTION, None)
    if not callable(fn):
        raise ConfigError(f"Local extension {path} must define {LOCAL_EXTENSION_FUNCTION}(context)")
    return Extension(name=str(path), fn=fn)


def discover_extensions(settings: RunSettings) -> list[Extension]:
    """Return all extensions for this run in invocation order."""
    found = list(_entry_point_extensions())
    found += [_configured_extension(ref) for ref in settings.config.extensions]
    local = _local_extension(settings.clone.local_extension)
    if local is not None:
        found.append(local)
    return found


def run_extensions(
    extensions: list[Extension],
    context_factory: Callable[[], ExtensionContext],
    result: GuardResult,
) -> None:
    """Invoke each extension and append whatever it reports.

    An extension that raises is reported as an ordinary failure so the
    remaining extensions still run.
    """
    for extension in extensions:
        logger.debug("running extension %s", extension.name)
        try:
            messages = [str(message) for message in extension.fn(context_factory())]
        except Exception as exc:
            result.add(f"extension '{extension.name}' failed: {exc}")
            continue
        result.extend(messages)
