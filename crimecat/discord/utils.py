from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import discord

logger = logging.getLogger(__name__)

# Sub-command (1) and sub-command group (2) options nest further options.
_NESTING_OPTION_TYPES = (1, 2)


def iter_options(options: Optional[List[Dict[str, Any]]]) -> Iterator[Dict[str, Any]]:
    """
    Depth-first walk over interaction options, descending into sub-commands.
    """
    for opt in options or []:
        if not isinstance(opt, dict):
            continue
        if opt.get("type") in _NESTING_OPTION_TYPES:
            yield from iter_options(opt.get("options"))
        else:
            yield opt


def _interaction_options(interaction: Any) -> List[Dict[str, Any]]:
    data = getattr(interaction, "data", None) or {}
    return data.get("options") or []


def get_option(interaction: Any, name: str, default: Any = None) -> Any:
    for opt in iter_options(_interaction_options(interaction)):
        if opt.get("name") == name:
            return opt.get("value", default)
    return default


def focused_option(interaction: Any) -> Optional[Tuple[str, str]]:
    """
    (name, current_value) of the option being autocompleted, or None.
    """
    for opt in iter_options(_interaction_options(interaction)):
        if opt.get("focused"):
            value = opt.get("value")
            return str(opt.get("name") or ""), "" if value is None else str(value)
    return None


def modal_values(interaction: Any) -> Dict[str, str]:
    """
    custom_id -> value for every text input in a modal submission.
    """
    out: Dict[str, str] = {}
    data = getattr(interaction, "data", None) or {}
    for row in data.get("components") or []:
        for comp in (row or {}).get("components") or []:
            cid = comp.get("custom_id")
            if cid:
                out[cid] = comp.get("value") or ""
    return out


def has_permission_level(member: Any, level: int) -> bool:
    """
    Fail-closed permission gate.

    - level <= 0: no requirement
    - otherwise the member must be a guild Member holding every bit in
      `level`; Administrator satisfies any level
    """
    if level <= 0:
        return True
    if not isinstance(member, discord.Member):
        return False

    perms = member.guild_permissions
    if perms.administrator:
        return True
    return discord.Permissions(level).is_subset(perms)


def is_deletable(message: Any) -> bool:
    """
    Own messages are always deletable; others need Manage Messages.
    """
    guild = getattr(message, "guild", None)
    if guild is None:
        return False
    me = guild.me
    if me is not None and getattr(message.author, "id", None) == me.id:
        return True
    try:
        return bool(message.channel.permissions_for(me).manage_messages)
    except Exception:
        logger.debug("permission lookup failed for message %s", getattr(message, "id", None))
        return False


async def safe_reply(interaction: Any, content: str, *, ephemeral: bool = True) -> None:
    """
    Reply or follow up depending on whether the response was already used.
    """
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=ephemeral)
    else:
        await interaction.response.send_message(content, ephemeral=ephemeral)


__all__ = [
    "iter_options",
    "get_option",
    "focused_option",
    "modal_values",
    "has_permission_level",
    "is_deletable",
    "safe_reply",
]
