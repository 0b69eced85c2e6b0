from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from ...deploy import deploy_commands
from ..utils import get_option

if TYPE_CHECKING:
    from ..context import BotContext

name = "배포"
description = "슬래시 명령어를 배포합니다."
permission_level = discord.Permissions(administrator=True).value
cacheable = False

SCOPE_OPTION = "범위"

options = [
    {
        "type": 3,  # STRING
        "name": SCOPE_OPTION,
        "description": "배포할 명령어의 범위",
        "required": True,
        "choices": [
            {"name": "전체", "value": "all"},
            {"name": "글로벌 명령어만", "value": "global"},
            {"name": "서버 명령어만", "value": "guild"},
        ],
    }
]


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    scope = str(get_option(interaction, SCOPE_OPTION, "all") or "all")
    await interaction.response.defer(ephemeral=True)

    result = await deploy_commands(ctx.commands.all(), ctx.settings, scope=scope)

    embed = discord.Embed(
        title="✅ 명령어 배포 완료" if result.ok else "❌ 명령어 배포 실패",
        color=0x00FF00 if result.ok else 0xFF0000,
    )
    embed.add_field(name="글로벌", value=f"{result.global_count}개", inline=True)
    embed.add_field(name="서버", value=f"{result.guild_count}개", inline=True)
    if result.errors:
        embed.add_field(name="오류", value="\n".join(result.errors)[:1000], inline=False)

    await interaction.followup.send(embed=embed, ephemeral=True)
