from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

import discord

from ..services.backend import Advertisement, fetch_active_ads, track_ad_exposure

if TYPE_CHECKING:
    from .context import BotContext

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY = "/도움말"


async def rotate_once(ctx: "BotContext") -> Optional[Advertisement]:
    """
    Show the next active ad in the bot's presence and record the exposure.

    The ad list is refetched whenever the rotation wraps around (or is empty).
    """
    if ctx.api is None:
        return None

    rotation = ctx.ad_rotation
    if not rotation.ads or rotation.index == len(rotation.ads) - 1:
        rotation.replace(await fetch_active_ads(ctx.api))
        ad = rotation.current
    else:
        ad = rotation.advance()

    if ad is None:
        await ctx.client.change_presence(activity=discord.Game(name=DEFAULT_ACTIVITY))
        return None

    await ctx.client.change_presence(activity=discord.Game(name=f"📢 {ad.title}"))
    await track_ad_exposure(ctx.api, ad.id)
    return ad


async def rotation_loop(ctx: "BotContext") -> None:
    while True:
        try:
            await rotate_once(ctx)
        except Exception:
            logger.exception("advertisement rotation failed")
        await asyncio.sleep(float(ctx.settings.ad_rotation_interval_s))


__all__ = ["DEFAULT_ACTIVITY", "rotate_once", "rotation_loop"]
