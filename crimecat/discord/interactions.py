from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

import discord
from discord import app_commands

from .emitter import BUTTON_CLICK, MODAL_SUBMIT, SELECT_MENU
from .utils import focused_option, safe_reply

if TYPE_CHECKING:
    from .context import BotContext

logger = logging.getLogger(__name__)

AUTOCOMPLETE_LIMIT = 25  # Discord rejects more choices than this
COMMAND_FAILED_MSG = "❌ 명령어를 실행하는 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."


class InteractionRouter:
    """
    Routes one inbound interaction by kind:

      application command -> command registry (by name)
      component           -> button_click / select_menu events
      autocomplete        -> `autocomplete` handler for the focused option
      modal submit        -> modal_submit event

    Every branch contains its own failures; nothing escapes route().
    """

    def __init__(self, ctx: "BotContext") -> None:
        self.ctx = ctx

    async def route(self, interaction: discord.Interaction) -> None:
        kind = interaction.type
        if kind == discord.InteractionType.application_command:
            await self._application_command(interaction)
        elif kind == discord.InteractionType.component:
            await self._component(interaction)
        elif kind == discord.InteractionType.autocomplete:
            await self._autocomplete(interaction)
        elif kind == discord.InteractionType.modal_submit:
            await self._emit(MODAL_SUBMIT, interaction)
        else:
            logger.warning("unhandled interaction type: %s (id=%s)", kind, getattr(interaction, "id", None))

    async def _application_command(self, interaction: discord.Interaction) -> None:
        data = interaction.data or {}
        name = data.get("name")
        command = self.ctx.commands.get(name) if name else None
        if command is None:
            logger.warning("no command registered for '%s'", name)
            return

        try:
            await command.execute(self.ctx, interaction)
        except Exception:
            logger.exception("command '%s' failed (user=%s)", name, getattr(interaction.user, "id", None))
            try:
                await safe_reply(interaction, COMMAND_FAILED_MSG, ephemeral=True)
            except Exception:
                logger.exception("failed to send error reply for '%s'", name)

    async def _component(self, interaction: discord.Interaction) -> None:
        data = interaction.data or {}
        raw_type = data.get("component_type")
        if raw_type == discord.ComponentType.button.value:
            await self._emit(BUTTON_CLICK, interaction)
        elif raw_type == discord.ComponentType.string_select.value:
            await self._emit(SELECT_MENU, interaction)
        else:
            logger.warning("unhandled component type: %s (custom_id=%s)", raw_type, data.get("custom_id"))

    async def _autocomplete(self, interaction: discord.Interaction) -> None:
        focused = focused_option(interaction)
        if focused is None:
            logger.debug("autocomplete without a focused option (command=%s)", (interaction.data or {}).get("name"))
            return

        option_name, current = focused
        handler = self.ctx.responses.get("autocomplete", option_name)
        if handler is None:
            logger.debug("no autocomplete handler for option '%s'", option_name)
            return

        try:
            choices: List[app_commands.Choice[Any]] = list(await handler.execute(self.ctx, interaction, current) or [])
            await interaction.response.autocomplete(choices[:AUTOCOMPLETE_LIMIT])
        except Exception:
            logger.exception("autocomplete handler '%s' failed", option_name)

    async def _emit(self, event_name: str, interaction: discord.Interaction) -> None:
        try:
            count = await self.ctx.emitter.emit(event_name, interaction)
        except Exception:
            logger.exception("dispatch of %s failed", event_name)
            return
        if count == 0:
            logger.warning("no listener for %s (custom_id=%s)", event_name, (interaction.data or {}).get("custom_id"))


__all__ = ["AUTOCOMPLETE_LIMIT", "COMMAND_FAILED_MSG", "InteractionRouter"]
