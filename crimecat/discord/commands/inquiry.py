from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from ..custom_id import encode_custom_id

if TYPE_CHECKING:
    from ..context import BotContext

name = "문의"
description = "운영진에게 문의나 건의사항을 보냅니다."

CONTENT_FIELD = "content"


def inquiry_modal(user_id: int) -> discord.ui.Modal:
    modal = discord.ui.Modal(title="운영진 문의", custom_id=encode_custom_id(user_id, "inquiry"), timeout=600)
    modal.add_item(
        discord.ui.TextInput(
            label="내용",
            custom_id=CONTENT_FIELD,
            style=discord.TextStyle.long,
            min_length=5,
            max_length=1000,
        )
    )
    return modal


async def execute(ctx: "BotContext", interaction: discord.Interaction) -> None:
    await interaction.response.send_modal(inquiry_modal(interaction.user.id))
