from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ....services.http import truncate
from ...commands.inquiry import CONTENT_FIELD
from ...utils import modal_values

if TYPE_CHECKING:
    import discord

    from ...context import BotContext
    from ...custom_id import CustomId

logger = logging.getLogger(__name__)

name = "inquiry"


async def execute(ctx: "BotContext", interaction: "discord.Interaction", cid: "CustomId") -> None:
    content = modal_values(interaction).get(CONTENT_FIELD, "").strip()
    if not content:
        await interaction.response.send_message("❌ 내용이 비어 있습니다.", ephemeral=True)
        return

    channel_id = ctx.settings.operator_channel_id
    channel = ctx.client.get_channel(channel_id) if channel_id else None
    if channel is None:
        logger.warning("inquiry from %s dropped: operator channel not configured", interaction.user.id)
        await interaction.response.send_message("⚠️ 지금은 문의를 받을 수 없습니다.", ephemeral=True)
        return

    guild = f"{interaction.guild.name} (`{interaction.guild.id}`)" if interaction.guild else "DM"
    await channel.send(
        f"📝 **문의** from {interaction.user} (`{interaction.user.id}`) · {guild}\n{truncate(content, 1800)}"
    )
    # The sender becomes the reply target, same as a DM.
    ctx.dm_reply_target = interaction.user.id
    await interaction.response.send_message("✅ 문의가 전달되었습니다. 답변은 DM으로 드릴게요.", ephemeral=True)
