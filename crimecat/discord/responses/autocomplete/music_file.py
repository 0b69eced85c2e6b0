from __future__ import annotations

from typing import TYPE_CHECKING, List

from discord import app_commands

from ...music import list_music_files

if TYPE_CHECKING:
    import discord

    from ...context import BotContext

name = "파일명"


async def execute(ctx: "BotContext", interaction: "discord.Interaction", current: str) -> List[app_commands.Choice[str]]:
    """
    Every matching file in name order; the router keeps the first 25.
    """
    needle = (current or "").strip().lower()
    files = list_music_files(ctx.settings.music_data_dir, interaction.user.id)
    return [
        app_commands.Choice(name=p.stem[:100], value=p.name[:100])
        for p in files
        if not needle or needle in p.name.lower()
    ]
