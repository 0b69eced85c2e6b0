from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import discord

from ..utils import get_option

if TYPE_CHECKING:
    from ..context import BotContext

logger = logging.getLogger(__name__)

name = "답장"
description = "마지막으로 봇에게 DM을 보낸 사용자에게 답장합니다."
aliases = ["reply"]
upload = False
permission_level = discord.Permissions(administrator=True).value
cacheable = False

CONTENT_OPTION = "내용"

options = [
    {
        "type": 3,  # STRING
        "name": CONTENT_OPTION,
        "description": "보낼 내용",
        "required": True,
        "max_length": 1800,
    }
]


async def send_reply(ctx: "BotContext", content: str) -> str:
    """
    DM the last DM author. Returns a status line for the operator.
    """
    target_id: Optional[int] = ctx.dm_reply_target
    if target_id is None:
        return "ℹ️ 답장할 DM이 없습니다."
    if not content.strip():
        return "❌ 보낼 내용을 입력해주세요."

    user = ctx.client.get_user(target_id) or await ctx.client.fetch_user(target_id)
    try:
        await user.send(content)
    except discord.HTTPException as e:
        logger.warning("DM reply to %s failed: %s", target_id, e)
        return f"❌ <@{target_id}> 님에게 DM을 보낼 수 없습니다."
    return f"✉️ <@{target_id}> 님에게 답장을 보냈습니다."


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    content = str(get_option(interaction, CONTENT_OPTION, "") or "")
    await interaction.response.defer(ephemeral=True)
    await interaction.followup.send(await send_reply(ctx, content), ephemeral=True)


async def prefix_execute(ctx: "BotContext", message: discord.Message, args: List[str]) -> None:
    await message.channel.send(await send_reply(ctx, " ".join(args)))
