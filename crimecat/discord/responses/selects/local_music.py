from __future__ import annotations

from typing import TYPE_CHECKING

from ...music import describe_file, find_music_file

if TYPE_CHECKING:
    import discord

    from ...context import BotContext
    from ...custom_id import CustomId

name = "local_music"


async def execute(ctx: "BotContext", interaction: "discord.Interaction", cid: "CustomId") -> None:
    # The menu lists one user's folder; only that user may use it.
    if str(interaction.user.id) != cid.head:
        await interaction.response.send_message("❌ 본인의 파일 목록만 사용할 수 있습니다.", ephemeral=True)
        return

    values = (interaction.data or {}).get("values") or []
    if not values:
        await interaction.response.send_message("❌ 선택된 파일이 없습니다.", ephemeral=True)
        return

    base = ctx.settings.music_data_dir
    path = find_music_file(base, interaction.user.id, values[0])
    if path is None:
        await interaction.response.send_message("❌ 파일이 삭제되었거나 찾을 수 없습니다.", ephemeral=True)
        return
    await interaction.response.send_message(describe_file(path, base_dir=base, user_id=interaction.user.id), ephemeral=True)
