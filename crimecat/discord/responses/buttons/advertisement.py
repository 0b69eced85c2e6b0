from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ....services.backend import track_ad_click

if TYPE_CHECKING:
    import discord

    from ...context import BotContext
    from ...custom_id import CustomId

logger = logging.getLogger(__name__)

name = "advertisement"


async def execute(ctx: "BotContext", interaction: "discord.Interaction", cid: "CustomId") -> None:
    ad_id = cid.head
    ad = next((a for a in ctx.ad_rotation.ads if a.id == ad_id), None)

    if ctx.api is not None:
        # Click tracking is best-effort; the user still gets the ad.
        await track_ad_click(ctx.api, ad_id, interaction.user.id)

    if ad is None:
        await interaction.response.send_message("ℹ️ 종료된 광고입니다.", ephemeral=True)
        return

    text = f"📢 **{ad.title}**"
    if ad.link:
        text += f"\n{ad.link}"
    await interaction.response.send_message(text, ephemeral=True)
