from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .custom_id import decode_custom_id
from .interactions import COMMAND_FAILED_MSG
from .utils import safe_reply

if TYPE_CHECKING:
    from .context import BotContext

logger = logging.getLogger(__name__)


async def dispatch_component(ctx: "BotContext", interaction: Any, kind: str) -> bool:
    """
    Decode the interaction's custom_id and hand it to the `kind` response
    handler it names. Returns False when no handler matches.
    """
    data = getattr(interaction, "data", None) or {}
    raw = str(data.get("custom_id") or "")
    cid = decode_custom_id(raw)

    handler = ctx.responses.get(kind, cid.handler)
    if handler is None:
        logger.warning("no %s handler for custom_id '%s'", kind, raw)
        return False

    try:
        await handler.execute(ctx, interaction, cid)
    except Exception:
        logger.exception("%s handler '%s' failed (custom_id=%s)", kind, cid.handler, raw)
        try:
            await safe_reply(interaction, COMMAND_FAILED_MSG, ephemeral=True)
        except Exception:
            logger.exception("failed to send error reply for %s handler '%s'", kind, cid.handler)
    return True


__all__ = ["dispatch_component"]
