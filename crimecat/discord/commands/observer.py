from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import discord

from ...services.backend import get_observer_role, set_observer_role
from ..utils import get_option

if TYPE_CHECKING:
    from ..context import BotContext

logger = logging.getLogger(__name__)

name = "관전자"
description = "이 서버의 관전자 역할을 확인하거나 설정합니다."
aliases = ["observer"]
permission_level = discord.Permissions(manage_roles=True).value

ROLE_OPTION = "역할"

options = [
    {
        "type": 8,  # ROLE
        "name": ROLE_OPTION,
        "description": "관전자로 지정할 역할 (비우면 현재 설정을 보여줍니다)",
        "required": False,
    }
]


async def _show_or_set(ctx: "BotContext", guild: discord.Guild, role_id: Optional[int]) -> str:
    if ctx.api is None:
        return "❌ 백엔드 연결이 준비되지 않았습니다."

    if role_id is None:
        current = await get_observer_role(ctx.api, guild.id)
        if not current:
            return "ℹ️ 관전자 역할이 설정되어 있지 않습니다."
        return f"👀 현재 관전자 역할: <@&{current}>"

    if guild.get_role(role_id) is None:
        return "❌ 이 서버에 없는 역할입니다."

    ok = await set_observer_role(ctx.api, guild.id, role_id)
    if not ok:
        return "❌ 관전자 역할 설정에 실패했습니다. 잠시 후 다시 시도해주세요."
    logger.info("observer role set: guild=%s role=%s", guild.id, role_id)
    return f"✅ 관전자 역할이 <@&{role_id}> 로 설정되었습니다."


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    if interaction.guild is None:
        await interaction.response.send_message("❌ 서버에서만 사용할 수 있습니다.", ephemeral=True)
        return

    raw = get_option(interaction, ROLE_OPTION)
    role_id = int(raw) if raw else None

    await interaction.response.defer(ephemeral=True)
    msg = await _show_or_set(ctx, interaction.guild, role_id)
    await interaction.followup.send(msg, ephemeral=True)


async def prefix_execute(ctx: "BotContext", message: discord.Message, args: List[str]) -> None:
    role_id = message.role_mentions[0].id if message.role_mentions else None
    if role_id is None and args and args[0].isdigit():
        role_id = int(args[0])
    msg = await _show_or_set(ctx, message.guild, role_id)
    await message.channel.send(msg)
