from __future__ import annotations

from typing import Any, Dict, List

import discord

from .registry import Command, CommandRegistry

# Commands gated on these levels are listed on the web help page.
CACHEABLE_LEVELS = frozenset(
    {
        discord.Permissions(administrator=True).value,
        discord.Permissions(deafen_members=True).value,
    }
)


def is_cacheable(command: Command) -> bool:
    if command.cacheable is not None:
        return command.cacheable
    return command.permission_level in CACHEABLE_LEVELS


def command_metadata(command: Command) -> Dict[str, Any]:
    return {
        "name": command.name,
        "description": command.description,
        "aliases": list(command.aliases),
        "permission_level": command.permission_level,
        "slash": command.upload,
        "prefix": command.prefix_execute is not None,
        "options": [dict(o) for o in command.options],
    }


def build_catalogue(registry: CommandRegistry, version: str) -> Dict[str, Any]:
    """
    Snapshot of the cacheable commands, sorted by name.
    """
    items: List[Dict[str, Any]] = [
        command_metadata(cmd) for cmd in sorted(registry.all(), key=lambda c: c.name) if is_cacheable(cmd)
    ]
    return {"version": version, "count": len(items), "commands": items}


__all__ = ["CACHEABLE_LEVELS", "is_cacheable", "command_metadata", "build_catalogue"]
