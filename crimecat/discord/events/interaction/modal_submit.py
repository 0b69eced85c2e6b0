from __future__ import annotations

from typing import TYPE_CHECKING

from ...components import dispatch_component
from ...emitter import MODAL_SUBMIT

if TYPE_CHECKING:
    import discord

    from ...context import BotContext

name = MODAL_SUBMIT


async def execute(ctx: "BotContext", interaction: "discord.Interaction") -> None:
    await dispatch_component(ctx, interaction, "modals")
