from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ....services.http import truncate

if TYPE_CHECKING:
    from ...context import BotContext

logger = logging.getLogger(__name__)

name = "dm_message"


def _forward_text(message: discord.Message) -> str:
    body = truncate(message.content or "", 1500) or "(내용 없음)"
    files = "\n".join(a.url for a in message.attachments)
    return f"📨 **DM** from {message.author} (`{message.author.id}`)\n{body}" + (f"\n{files}" if files else "")


async def execute(ctx: "BotContext", message: discord.Message) -> None:
    """
    Remember the author as the `답장` target and forward to the operator channel.
    """
    ctx.dm_reply_target = message.author.id
    logger.info("DM from %s (%s): %s", message.author, message.author.id, truncate(message.content or "", 200))

    channel_id = ctx.settings.operator_channel_id
    if not channel_id:
        return

    channel = ctx.client.get_channel(channel_id)
    if channel is None:
        logger.warning("operator channel %s not found; DM not forwarded", channel_id)
        return
    await channel.send(_forward_text(message))
