from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

import discord

from .emitter import DM_MESSAGE
from .utils import has_permission_level, is_deletable

if TYPE_CHECKING:
    from .context import BotContext

logger = logging.getLogger(__name__)

PREFIX_FAILED_MSG = "❌ 명령어를 실행하는 중 오류가 발생했습니다."


def parse_prefixed(content: str, prefix: str) -> Optional[Tuple[str, List[str]]]:
    """
    "!Ping a b" -> ("ping", ["a", "b"]); None without the prefix.
    """
    if not prefix or not (content or "").startswith(prefix):
        return None
    parts = content[len(prefix):].strip().split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


class PrefixMessageRouter:
    """
    Text-command path for message-create events.

    Order: bots ignored -> DMs go to the dm_message event -> prefix parse
    -> alias resolution -> permission gate -> prefix executor -> delete
    the trigger message. Unknown commands and missing permissions are
    silent no-ops and leave the message in place.
    """

    def __init__(self, ctx: "BotContext") -> None:
        self.ctx = ctx

    async def route(self, message: discord.Message) -> None:
        try:
            await self._route(message)
        except Exception:
            logger.exception("prefix router failed (message=%s)", getattr(message, "id", None))

    async def _route(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        if message.guild is None:
            await self.ctx.emitter.emit(DM_MESSAGE, message)
            return

        parsed = parse_prefixed(message.content or "", self.ctx.settings.prefix)
        if parsed is None:
            return
        token, args = parsed

        command = self.ctx.commands.resolve(token)
        if command is None or command.prefix_execute is None:
            return

        if command.requires_permission and not has_permission_level(message.author, command.permission_level):
            logger.info("prefix command '%s' declined for user %s (permission)", command.name, message.author.id)
            return

        try:
            await command.prefix_execute(self.ctx, message, args)
        except Exception:
            logger.exception("prefix command '%s' failed", command.name)
            await message.channel.send(PREFIX_FAILED_MSG)

        if is_deletable(message) and not message.is_system():
            await message.delete()


__all__ = ["PREFIX_FAILED_MSG", "parse_prefixed", "PrefixMessageRouter"]
