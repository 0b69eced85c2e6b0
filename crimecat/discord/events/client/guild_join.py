from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import discord

    from ...context import BotContext

logger = logging.getLogger(__name__)

name = "guild_join"


async def execute(ctx: "BotContext", guild: "discord.Guild") -> None:
    logger.info(
        "joined guild %s (%s), members=%s, total guilds=%s",
        guild.name,
        guild.id,
        getattr(guild, "member_count", None),
        len(ctx.client.guilds),
    )
