from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ....services.backend import delete_conversation_history
from ...utils import has_permission_level

if TYPE_CHECKING:
    from ...context import BotContext
    from ...custom_id import CustomId

logger = logging.getLogger(__name__)

name = "forget_confirm"

_ADMIN = discord.Permissions(administrator=True).value


async def execute(ctx: "BotContext", interaction: discord.Interaction, cid: "CustomId") -> None:
    guild_id, subject = cid.head, cid.other
    if interaction.guild is None or str(interaction.guild.id) != guild_id:
        await interaction.response.send_message("❌ 다른 서버의 요청입니다.", ephemeral=True)
        return
    if not has_permission_level(interaction.user, _ADMIN):
        await interaction.response.send_message("🚫 관리자만 삭제할 수 있습니다.", ephemeral=True)
        return
    if ctx.api is None:
        await interaction.response.send_message("❌ 백엔드 연결이 준비되지 않았습니다.", ephemeral=True)
        return

    await interaction.response.defer(ephemeral=True)
    ok = await delete_conversation_history(ctx.api, subject, guild_id)
    if not ok:
        await interaction.followup.send("❌ 대화 기록 삭제에 실패했습니다.", ephemeral=True)
        return

    logger.info("conversation history deleted: subject=%s guild=%s by=%s", subject, guild_id, interaction.user.id)
    await interaction.followup.send(f"🗑️ **{subject}** 의 대화 기록을 삭제했습니다.", ephemeral=True)
