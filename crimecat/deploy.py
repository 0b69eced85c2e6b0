"""
Slash-command deployment.

Pushes the definitions of every command flagged `upload` to Discord's
bulk-overwrite endpoints:

  PUT /applications/{app}/commands                   (global)
  PUT /applications/{app}/guilds/{guild}/commands    (permission_level == -1)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from .config import Settings, settings
from .discord.bot import COMMANDS_PACKAGE
from .discord.loader import load_commands
from .discord.registry import GUILD_ONLY, CommandRegistry
from .services.http import api_request, create_client, is_ok, truncate

logger = logging.getLogger(__name__)

SCOPES = ("all", "global", "guild")


@dataclass
class DeployResult:
    scope: str
    global_count: int = 0
    guild_count: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def split_definitions(commands: Iterable[Any]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    (global_definitions, guild_definitions) for the uploadable commands.
    """
    global_defs: List[Dict[str, Any]] = []
    guild_defs: List[Dict[str, Any]] = []
    for cmd in commands:
        if not cmd.upload:
            continue
        if cmd.permission_level == GUILD_ONLY:
            guild_defs.append(cmd.definition())
        else:
            global_defs.append(cmd.definition())
    return global_defs, guild_defs


async def _put(api: httpx.AsyncClient, path: str, defs: List[Dict[str, Any]], label: str) -> Optional[str]:
    code, text, data = await api_request(api, "PUT", path, json=defs, timeout=30)
    if is_ok(code):
        logger.info("deployed %s %s command(s)", len(defs), label)
        return None
    detail = data.get("message") if isinstance(data, dict) else None
    msg = f"{label} deploy failed ({code}): {detail or truncate(text)}"
    logger.error(msg)
    return msg


async def deploy_commands(
    commands: Iterable[Any],
    cfg: Settings = settings,
    *,
    scope: str = "all",
    api: Optional[httpx.AsyncClient] = None,
) -> DeployResult:
    """
    Deploy the uploadable commands. `api` defaults to a client for
    cfg.discord_api_base authenticated with the bot token.
    """
    if scope not in SCOPES:
        raise ValueError(f"scope must be one of {', '.join(SCOPES)}")

    result = DeployResult(scope=scope)
    app_id = cfg.discord_application_id
    if not app_id:
        result.errors.append("DISCORD_APPLICATION_ID is not set.")
        return result

    global_defs, guild_defs = split_definitions(commands)

    owns_client = api is None
    if api is None:
        api = create_client(cfg.discord_api_base)
        api.headers["Authorization"] = f"Bot {cfg.discord_bot_token}"

    try:
        if scope in ("all", "global"):
            err = await _put(api, f"/applications/{app_id}/commands", global_defs, "global")
            if err:
                result.errors.append(err)
            else:
                result.global_count = len(global_defs)

        if scope in ("all", "guild"):
            if not cfg.discord_guild_id:
                if guild_defs or scope == "guild":
                    result.errors.append("DISCORD_GUILD_ID is not set; guild commands not deployed.")
            else:
                path = f"/applications/{app_id}/guilds/{cfg.discord_guild_id}/commands"
                err = await _put(api, path, guild_defs, "guild")
                if err:
                    result.errors.append(err)
                else:
                    result.guild_count = len(guild_defs)
    finally:
        if owns_client:
            await api.aclose()

    return result


def run_deploy(scope: str = "all", cfg: Optional[Settings] = None) -> int:
    """
    One-shot entrypoint: load command modules, deploy, return an exit code.
    """
    cfg = cfg or settings
    logging.basicConfig(level=getattr(logging, str(cfg.log_level).upper(), logging.INFO))

    registry = CommandRegistry()
    load_commands(registry, COMMANDS_PACKAGE, allow=cfg.commands_allow, deny=cfg.commands_deny)

    result = asyncio.run(deploy_commands(registry.all(), cfg, scope=scope))
    if result.ok:
        logger.info("deploy complete: global=%s guild=%s", result.global_count, result.guild_count)
        return 0
    for err in result.errors:
        logger.error("deploy error: %s", err)
    return 1


__all__ = ["SCOPES", "DeployResult", "split_definitions", "deploy_commands", "run_deploy"]
