from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Executor signatures (ctx is the BotContext):
#   slash:   execute(ctx, interaction)
#   prefix:  prefix_execute(ctx, message, args)
#   event:   execute(ctx, *gateway_args)
#   handler: execute(ctx, interaction, *extra)
Executor = Callable[..., Awaitable[Any]]

# permission_level == GUILD_ONLY uploads the command to the configured guild only
GUILD_ONLY = -1

HANDLER_TYPES: Sequence[str] = ("autocomplete", "buttons", "selects", "modals")


@dataclass(frozen=True)
class Command:
    name: str
    execute: Executor
    description: str = ""
    prefix_execute: Optional[Executor] = None
    aliases: Sequence[str] = ()
    permission_level: int = 0
    upload: bool = True
    options: Sequence[Dict[str, Any]] = ()
    # None: decided by permission level in the catalogue
    cacheable: Optional[bool] = None

    @property
    def requires_permission(self) -> bool:
        return self.permission_level > 0

    def definition(self) -> Dict[str, Any]:
        """
        Slash-command payload for the application command endpoints.
        """
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description or self.name,
            "type": 1,
        }
        if self.options:
            payload["options"] = [dict(o) for o in self.options]
        if self.requires_permission:
            payload["default_member_permissions"] = str(self.permission_level)
        return payload


@dataclass(frozen=True)
class Event:
    name: str
    execute: Executor
    once: bool = False


@dataclass(frozen=True)
class ResponseHandler:
    name: str
    kind: str
    execute: Executor


class CommandRegistry:
    """
    name -> Command plus alias -> canonical name.

    Populated once at boot, read-only afterwards.
    """

    def __init__(self) -> None:
        self.commands: Dict[str, Command] = {}
        self.aliases: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def add(self, command: Command) -> None:
        # Last loaded wins; collisions are not reported.
        self.commands[command.name] = command
        for alias in command.aliases:
            a = (alias or "").strip().lower()
            if a:
                self.aliases[a] = command.name
        logger.debug("registered command: %s (aliases=%s)", command.name, list(command.aliases))

    def get(self, name: str) -> Optional[Command]:
        return self.commands.get(name)

    def resolve(self, token: str) -> Optional[Command]:
        """
        Exact command name first, then the first alias (registration order)
        that contains `token` as a substring.

        The substring scan is asymmetric: `"pi"` resolves through alias
        `"ping"`. Kept as-is until the intended matching rule is confirmed.
        """
        if not token:
            return None

        command = self.commands.get(token)
        if command is not None:
            return command

        for alias, target in self.aliases.items():
            if token in alias:
                return self.commands.get(target)
        return None

    def all(self) -> List[Command]:
        return list(self.commands.values())


class ResponseRegistry:
    """
    Response handlers grouped by kind (autocomplete, buttons, selects, modals).
    """

    def __init__(self) -> None:
        self.groups: Dict[str, Dict[str, ResponseHandler]] = {k: {} for k in HANDLER_TYPES}

    def add(self, handler: ResponseHandler) -> None:
        self.groups.setdefault(handler.kind, {})[handler.name] = handler
        logger.debug("registered %s handler: %s", handler.kind, handler.name)

    def get(self, kind: str, name: str) -> Optional[ResponseHandler]:
        return self.groups.get(kind, {}).get(name)

    def names(self, kind: str) -> List[str]:
        return list(self.groups.get(kind, {}).keys())


__all__ = [
    "Executor",
    "GUILD_ONLY",
    "HANDLER_TYPES",
    "Command",
    "Event",
    "ResponseHandler",
    "CommandRegistry",
    "ResponseRegistry",
]
