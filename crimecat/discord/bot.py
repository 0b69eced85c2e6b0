from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Set

import discord

from ..config import Settings, settings
from ..services.http import create_client
from .context import BotContext
from .interactions import InteractionRouter
from .loader import load_commands, load_events, load_responses
from .messages import PrefixMessageRouter

logger = logging.getLogger(__name__)

COMMANDS_PACKAGE = "crimecat.discord.commands"
EVENTS_PACKAGE = "crimecat.discord.events"
RESPONSES_PACKAGE = "crimecat.discord.responses"


def build_context(cfg: Settings, client: Any = None) -> BotContext:
    """
    Create the context and populate every registry.

    Import errors in command/event/handler modules propagate: the bot must
    not come up half loaded.
    """
    ctx = BotContext(cfg, client=client)
    load_commands(ctx.commands, COMMANDS_PACKAGE, allow=cfg.commands_allow, deny=cfg.commands_deny)
    load_events(ctx.events, EVENTS_PACKAGE)
    load_responses(ctx.responses, RESPONSES_PACKAGE)
    return ctx


class CrimeCatBot(discord.Client):
    """
    CrimeCat community bot.

    Notes:
    - No CommandTree: slash commands are routed by InteractionRouter and
      pushed to Discord by the deploy script.
    - Gateway events are forwarded into the context's EventEmitter, where
      the event modules are bound.
    - self.ctx.api is the httpx client for backend calls.
    """

    def __init__(self, cfg: Settings = settings) -> None:
        intents = discord.Intents.default()
        intents.guilds = True
        intents.members = True
        intents.message_content = True
        intents.dm_messages = True

        super().__init__(intents=intents)

        self.ctx = build_context(cfg, client=self)
        self.interaction_router = InteractionRouter(self.ctx)
        self.message_router = PrefixMessageRouter(self.ctx)
        self._event_tasks: Set[asyncio.Task] = set()

    async def setup_hook(self) -> None:
        if self.ctx.api is None:
            self.ctx.api = create_client(self.ctx.settings.backend_api_base, token=self.ctx.settings.backend_token)
        logger.info(
            "CrimeCatBot set up: commands=%s aliases=%s events=%s prefix=%r",
            len(self.ctx.commands),
            len(self.ctx.commands.aliases),
            len(self.ctx.events),
            self.ctx.settings.prefix,
        )

    async def close(self) -> None:
        await self.ctx.close()
        await super().close()

    def dispatch(self, event: str, /, *args: Any, **kwargs: Any) -> None:
        super().dispatch(event, *args, **kwargs)
        if self.ctx.emitter.listener_count(event) == 0:
            return
        task = asyncio.create_task(self.ctx.emitter.emit(event, *args), name=f"crimecat:{event}")
        self._event_tasks.add(task)
        task.add_done_callback(self._event_tasks.discard)

    async def on_message(self, message: discord.Message) -> None:
        await self.message_router.route(message)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        await self.interaction_router.route(interaction)


# ---------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------


def run_bot(cfg: Optional[Settings] = None) -> None:
    cfg = cfg or settings
    logging.basicConfig(level=getattr(logging, str(cfg.log_level).upper(), logging.INFO))
    cfg.validate_for_boot()
    if not cfg.discord_bot_token:
        logger.warning("DISCORD_BOT_TOKEN is empty; Discord login will fail.")
    bot = CrimeCatBot(cfg)
    bot.run(cfg.discord_bot_token, log_handler=None)


if __name__ == "__main__":
    run_bot()
