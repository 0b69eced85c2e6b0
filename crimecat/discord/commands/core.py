from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    import discord

    from ..context import BotContext

name = "ping"
description = "봇 상태와 응답 속도를 확인합니다."
aliases = ["핑"]


def _status_line(ctx: "BotContext") -> str:
    latency = getattr(ctx.client, "latency", None)
    ms = f"{latency * 1000:.0f}ms" if isinstance(latency, (int, float)) and not math.isnan(latency) else "n/a"
    guilds = len(getattr(ctx.client, "guilds", []) or [])
    return f"🏓 Pong! 지연시간: {ms} · 서버 수: {guilds} · 버전: {ctx.settings.bot_version}"


async def execute(ctx: "BotContext", interaction: "discord.Interaction") -> None:
    await interaction.response.send_message(_status_line(ctx), ephemeral=True)


async def prefix_execute(ctx: "BotContext", message: "discord.Message", args: List[Any]) -> None:
    await message.channel.send(_status_line(ctx))
