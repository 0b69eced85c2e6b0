from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import discord

from ..custom_id import encode_custom_id

if TYPE_CHECKING:
    from ..context import BotContext

name = "도움말"
description = "사용할 수 있는 명령어 목록을 보여줍니다."
aliases = ["help", "명령어"]
cacheable = False


def _lines(*items: str) -> str:
    return "\n".join([s for s in items if s])


def render_help(ctx: "BotContext") -> str:
    prefix = ctx.settings.prefix
    rows: List[str] = []
    for cmd in sorted(ctx.commands.all(), key=lambda c: c.name):
        alias_str = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
        modes = "/" if cmd.upload else ""
        if cmd.prefix_execute is not None:
            modes += prefix
        rows.append(f"- `{modes or '/'}{cmd.name}`{alias_str}: {cmd.description or '설명 없음'}")

    return _lines(
        "📖 **CrimeCat 명령어**",
        "",
        *rows,
        "",
        f"텍스트 명령어는 `{prefix}` 로 시작합니다.",
    )


def _ad_view(ctx: "BotContext") -> Optional[discord.ui.View]:
    ad = ctx.ad_rotation.current
    if ad is None:
        return None
    view = discord.ui.View(timeout=600)
    view.add_item(
        discord.ui.Button(
            label=f"📢 {ad.title}"[:80],
            style=discord.ButtonStyle.secondary,
            custom_id=encode_custom_id(ad.id, "advertisement", "click"),
        )
    )
    return view


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    view = _ad_view(ctx)
    if view is None:
        await interaction.response.send_message(render_help(ctx), ephemeral=True)
    else:
        await interaction.response.send_message(render_help(ctx), ephemeral=True, view=view)


async def prefix_execute(ctx: "BotContext", message: discord.Message, args: List[str]) -> None:
    view = _ad_view(ctx)
    if view is None:
        await message.channel.send(render_help(ctx))
    else:
        await message.channel.send(render_help(ctx), view=view)
