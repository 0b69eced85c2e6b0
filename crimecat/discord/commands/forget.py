from __future__ import annotations

from typing import TYPE_CHECKING, List

import discord

from ..custom_id import encode_custom_id
from ..utils import get_option

if TYPE_CHECKING:
    from ..context import BotContext

name = "기록삭제"
description = "심문 대상과의 AI 대화 기록을 삭제합니다."
aliases = ["forget"]
permission_level = discord.Permissions(administrator=True).value

SUBJECT_OPTION = "대상"
# Keeps the subject inside the 100-character custom_id.
SUBJECT_MAX_LENGTH = 40

options = [
    {
        "type": 3,  # STRING
        "name": SUBJECT_OPTION,
        "description": "대화 기록을 지울 심문 대상 이름",
        "required": True,
        "max_length": SUBJECT_MAX_LENGTH,
    }
]


def confirm_view(guild_id: int, subject: str) -> discord.ui.View:
    view = discord.ui.View(timeout=120)
    view.add_item(
        discord.ui.Button(
            label="삭제",
            style=discord.ButtonStyle.danger,
            custom_id=encode_custom_id(guild_id, "forget_confirm", "", subject),
        )
    )
    return view


def _prompt(subject: str) -> str:
    return f"⚠️ **{subject}** 의 대화 기록을 삭제할까요? 되돌릴 수 없습니다."


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    subject = str(get_option(interaction, SUBJECT_OPTION, "") or "").strip()
    if interaction.guild is None or not subject:
        await interaction.response.send_message("❌ 서버에서 대상 이름과 함께 사용해주세요.", ephemeral=True)
        return
    await interaction.response.send_message(
        _prompt(subject),
        view=confirm_view(interaction.guild.id, subject),
        ephemeral=True,
    )


async def prefix_execute(ctx: "BotContext", message: discord.Message, args: List[str]) -> None:
    subject = " ".join(args).strip()
    if not subject or len(subject) > SUBJECT_MAX_LENGTH:
        await message.channel.send(f"사용법: `{ctx.settings.prefix}{name} <대상>` (대상은 {SUBJECT_MAX_LENGTH}자 이내)")
        return
    await message.channel.send(_prompt(subject), view=confirm_view(message.guild.id, subject))
