from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...advertising import rotation_loop
from ....services.bot_list import shard_count, stats_loop

if TYPE_CHECKING:
    from ...context import BotContext

logger = logging.getLogger(__name__)

name = "ready"
once = True


async def execute(ctx: "BotContext") -> None:
    client = ctx.client
    cfg = ctx.settings
    logger.info(
        "CrimeCatBot ready as %s (guilds=%s, prefix=%r, backend=%s)",
        str(client.user),
        len(client.guilds),
        cfg.prefix,
        cfg.backend_api_base,
    )

    if not ctx.has_task("ad-rotation"):
        ctx.spawn(rotation_loop(ctx), name="ad-rotation")

    if cfg.bot_list_token and client.user is not None and not ctx.has_task("bot-list-stats"):
        ctx.spawn(
            stats_loop(
                ctx.api,
                base_url=cfg.bot_list_api_base,
                bot_id=client.user.id,
                token=cfg.bot_list_token,
                counts=lambda: (len(client.guilds), shard_count(client)),
                interval_s=cfg.bot_list_interval_s,
            ),
            name="bot-list-stats",
        )
    elif not cfg.bot_list_token:
        logger.info("BOT_LIST_TOKEN not set; bot list stats disabled")
