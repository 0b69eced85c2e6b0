from __future__ import annotations

from typing import TYPE_CHECKING, List

import discord

from ..custom_id import encode_custom_id
from ..music import describe_file, find_music_file, list_music_files
from ..utils import get_option

if TYPE_CHECKING:
    from ..context import BotContext

name = "음악파일"
description = "업로드한 음악 파일을 찾아 정보를 보여줍니다."
aliases = ["음악", "music"]

FILE_OPTION = "파일명"
SELECT_LIMIT = 25

options = [
    {
        "type": 3,  # STRING
        "name": FILE_OPTION,
        "description": "확인할 음악 파일",
        "required": True,
        "autocomplete": True,
    }
]


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    file_name = str(get_option(interaction, FILE_OPTION, "") or "")
    base = ctx.settings.music_data_dir
    path = find_music_file(base, interaction.user.id, file_name)
    if path is None:
        await interaction.response.send_message(f"❌ `{file_name}` 파일을 찾을 수 없습니다.", ephemeral=True)
        return
    await interaction.response.send_message(
        describe_file(path, base_dir=base, user_id=interaction.user.id),
        ephemeral=True,
    )


def file_select(user_id: int, names: List[str]) -> discord.ui.View:
    view = discord.ui.View(timeout=300)
    view.add_item(
        discord.ui.Select(
            custom_id=encode_custom_id(user_id, "local_music"),
            placeholder="음악 파일을 선택하세요",
            options=[discord.SelectOption(label=n[:100], value=n[:100]) for n in names[:SELECT_LIMIT]],
        )
    )
    return view


async def prefix_execute(ctx: "BotContext", message: discord.Message, args: List[str]) -> None:
    base = ctx.settings.music_data_dir
    if args:
        path = find_music_file(base, message.author.id, " ".join(args))
        if path is None:
            await message.channel.send(f"❌ `{' '.join(args)}` 파일을 찾을 수 없습니다.")
            return
        await message.channel.send(describe_file(path, base_dir=base, user_id=message.author.id))
        return

    files = list_music_files(base, message.author.id)
    if not files:
        await message.channel.send("📭 업로드한 음악 파일이 없습니다.")
        return
    await message.channel.send(
        f"🎶 {message.author.mention} 님의 음악 파일 ({len(files)}개)",
        view=file_select(message.author.id, [p.name for p in files]),
    )
