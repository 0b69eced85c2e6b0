from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Dict, List, Optional, Sequence, Union

from .emitter import EventRegistry
from .registry import (
    Command,
    CommandRegistry,
    Event,
    HANDLER_TYPES,
    ResponseHandler,
    ResponseRegistry,
)

logger = logging.getLogger(__name__)

PackageRef = Union[str, ModuleType]


class ModuleLoadError(RuntimeError):
    """A command/event/handler module failed to import. Fatal at boot."""

    def __init__(self, mod_path: str, cause: BaseException) -> None:
        super().__init__(f"failed to import {mod_path}: {cause}")
        self.mod_path = mod_path
        self.cause = cause


def _as_package(package: PackageRef) -> ModuleType:
    if isinstance(package, ModuleType):
        return package
    return importlib.import_module(package)


def _import(mod_path: str) -> ModuleType:
    try:
        return importlib.import_module(mod_path)
    except Exception as e:
        logger.exception("module import failed: %s", mod_path)
        raise ModuleLoadError(mod_path, e) from e


def _module_names(package: ModuleType) -> List[str]:
    """
    The package's explicit MODULES manifest if it has one, otherwise its
    (non-private) modules in name order.
    """
    manifest: Optional[Sequence[str]] = getattr(package, "MODULES", None)
    if manifest is not None:
        return list(manifest)
    found = [
        info.name
        for info in pkgutil.iter_modules(package.__path__)
        if not info.ispkg and not info.name.startswith("_")
    ]
    return sorted(found)


def _subpackage_names(package: ModuleType) -> List[str]:
    found = [
        info.name
        for info in pkgutil.iter_modules(package.__path__)
        if info.ispkg and not info.name.startswith("_")
    ]
    return sorted(found)


def _should_load(name: str, allow: Optional[Sequence[str]], deny: Optional[Sequence[str]]) -> bool:
    if allow is not None:
        return name in set(allow)
    if deny is not None:
        return name not in set(deny)
    return True


def command_from_module(mod: ModuleType) -> Optional[Command]:
    name = getattr(mod, "name", None)
    execute = getattr(mod, "execute", None)
    if not isinstance(name, str) or not name or not callable(execute):
        return None
    return Command(
        name=name,
        execute=execute,
        description=getattr(mod, "description", ""),
        prefix_execute=getattr(mod, "prefix_execute", None),
        aliases=tuple(getattr(mod, "aliases", ()) or ()),
        permission_level=int(getattr(mod, "permission_level", 0) or 0),
        upload=bool(getattr(mod, "upload", True)),
        options=tuple(getattr(mod, "options", ()) or ()),
        cacheable=getattr(mod, "cacheable", None),
    )


def event_from_module(mod: ModuleType) -> Optional[Event]:
    name = getattr(mod, "name", None)
    execute = getattr(mod, "execute", None)
    if not isinstance(name, str) or not name or not callable(execute):
        return None
    return Event(name=name, execute=execute, once=bool(getattr(mod, "once", False)))


def handler_from_module(mod: ModuleType, kind: str) -> Optional[ResponseHandler]:
    name = getattr(mod, "name", None)
    execute = getattr(mod, "execute", None)
    if not isinstance(name, str) or not name or not callable(execute):
        return None
    return ResponseHandler(name=name, kind=kind, execute=execute)


def load_commands(
    registry: CommandRegistry,
    package: PackageRef,
    *,
    allow: Optional[Sequence[str]] = None,
    deny: Optional[Sequence[str]] = None,
) -> Dict[str, str]:
    """
    Load command modules of `package` into `registry`.

    Each module declares `name` and `execute` at module level; optional
    declarations are description, aliases, permission_level, upload,
    options, prefix_execute and cacheable. Modules missing a required
    declaration are skipped with a warning. Import errors abort the load.

    Returns a per-module status report.
    """
    pkg = _as_package(package)
    results: Dict[str, str] = {}

    for mod_name in _module_names(pkg):
        if not _should_load(mod_name, allow, deny):
            results[mod_name] = "skipped (allow/deny)"
            continue

        mod = _import(f"{pkg.__name__}.{mod_name}")
        command = command_from_module(mod)
        if command is None:
            logger.warning("command module %s is missing `name` or `execute`; skipped", mod.__name__)
            results[mod_name] = "skipped (missing fields)"
            continue

        registry.add(command)
        results[mod_name] = f"registered ({command.name})"

    summary = ", ".join(f"{k}={v}" for k, v in results.items())
    logger.info("command registration summary: %s", summary or "(none)")
    return results


def load_events(registry: EventRegistry, package: PackageRef) -> Dict[str, str]:
    """
    Load event modules from the category subpackages of `package`.
    """
    pkg = _as_package(package)
    results: Dict[str, str] = {}

    for category in _subpackage_names(pkg):
        sub = _import(f"{pkg.__name__}.{category}")
        for mod_name in _module_names(sub):
            key = f"{category}.{mod_name}"
            mod = _import(f"{sub.__name__}.{mod_name}")
            event = event_from_module(mod)
            if event is None:
                logger.warning("event module %s is missing `name` or `execute`; skipped", mod.__name__)
                results[key] = "skipped (missing fields)"
                continue
            if registry.register(event):
                results[key] = f"bound ({event.name}{', once' if event.once else ''})"
            else:
                results[key] = f"duplicate ({event.name})"

    summary = ", ".join(f"{k}={v}" for k, v in results.items())
    logger.info("event registration summary: %s", summary or "(none)")
    return results


def load_responses(registry: ResponseRegistry, package: PackageRef) -> Dict[str, str]:
    """
    Load response handlers; the subpackage name is the handler kind.
    """
    pkg = _as_package(package)
    results: Dict[str, str] = {}

    for kind in _subpackage_names(pkg):
        if kind not in HANDLER_TYPES:
            logger.warning("unknown response handler group '%s' in %s; loading anyway", kind, pkg.__name__)
        sub = _import(f"{pkg.__name__}.{kind}")
        for mod_name in _module_names(sub):
            key = f"{kind}.{mod_name}"
            mod = _import(f"{sub.__name__}.{mod_name}")
            handler = handler_from_module(mod, kind)
            if handler is None:
                logger.warning("handler module %s is missing `name` or `execute`; skipped", mod.__name__)
                results[key] = "skipped (missing fields)"
                continue
            registry.add(handler)
            results[key] = f"registered ({handler.name})"

    summary = ", ".join(f"{k}={v}" for k, v in results.items())
    logger.info("response handler registration summary: %s", summary or "(none)")
    return results


__all__ = [
    "ModuleLoadError",
    "command_from_module",
    "event_from_module",
    "handler_from_module",
    "load_commands",
    "load_events",
    "load_responses",
]
