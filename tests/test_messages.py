"""Tests for the prefix-message router."""

from __future__ import annotations

from unittest.mock import AsyncMock

import discord
import pytest

from crimecat.discord.context import BotContext
from crimecat.discord.emitter import DM_MESSAGE
from crimecat.discord.messages import PREFIX_FAILED_MSG, PrefixMessageRouter, parse_prefixed
from crimecat.discord.registry import Command, Event
from tests.fakes import make_member, make_message

MANAGE_ROLES = discord.Permissions(manage_roles=True).value


def _add(ctx: BotContext, name: str, *aliases: str, level: int = 0, prefix: object = None) -> AsyncMock:
    prefix_execute = prefix if prefix is not None else AsyncMock()
    ctx.commands.add(
        Command(name=name, execute=AsyncMock(), prefix_execute=prefix_execute, aliases=aliases, permission_level=level)
    )
    return prefix_execute


def test_parse_prefixed() -> None:
    assert parse_prefixed("!Ping a  b", "!") == ("ping", ["a", "b"])
    assert parse_prefixed("!", "!") == ("", [])
    assert parse_prefixed("ping", "!") is None
    assert parse_prefixed("?ping", "!") is None
    assert parse_prefixed(">>help", ">>") == ("help", [])


@pytest.mark.anyio
async def test_bot_authors_are_ignored(ctx: BotContext) -> None:
    handler = _add(ctx, "ping")
    message = make_message("!ping", author=make_member(bot=True))

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_not_awaited()
    message.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_dm_goes_only_to_dm_event(ctx: BotContext) -> None:
    handler = _add(ctx, "ping")
    listener = AsyncMock()
    ctx.events.register(Event(name=DM_MESSAGE, execute=listener))
    message = make_message("!ping", in_guild=False)

    await PrefixMessageRouter(ctx).route(message)

    listener.assert_awaited_once_with(ctx, message)
    handler.assert_not_awaited()


@pytest.mark.anyio
async def test_message_without_prefix_is_ignored(ctx: BotContext) -> None:
    handler = _add(ctx, "ping")
    message = make_message("ping")

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_not_awaited()
    message.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_unknown_command_leaves_message_in_place(ctx: BotContext) -> None:
    _add(ctx, "ping")
    message = make_message("!zzz")

    await PrefixMessageRouter(ctx).route(message)

    message.delete.assert_not_awaited()
    message.channel.send.assert_not_awaited()


@pytest.mark.anyio
async def test_alias_runs_prefix_executor_and_deletes_trigger(ctx: BotContext) -> None:
    handler = _add(ctx, "ping", "핑")
    message = make_message("!핑 one two")

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_awaited_once_with(ctx, message, ["one", "two"])
    message.delete.assert_awaited_once()


@pytest.mark.anyio
async def test_command_without_prefix_executor_is_a_noop(ctx: BotContext) -> None:
    ctx.commands.add(Command(name="문의", execute=AsyncMock()))
    message = make_message("!문의")

    await PrefixMessageRouter(ctx).route(message)

    message.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_permission_gate_blocks_silently(ctx: BotContext) -> None:
    handler = _add(ctx, "관전자", level=MANAGE_ROLES)
    message = make_message("!관전자", author=make_member(perms=discord.Permissions(send_messages=True)))

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_not_awaited()
    message.delete.assert_not_awaited()
    message.channel.send.assert_not_awaited()


@pytest.mark.anyio
@pytest.mark.parametrize(
    "perms",
    [discord.Permissions(manage_roles=True), discord.Permissions(administrator=True)],
)
async def test_permission_gate_passes(ctx: BotContext, perms: discord.Permissions) -> None:
    handler = _add(ctx, "관전자", level=MANAGE_ROLES)
    message = make_message("!관전자", author=make_member(perms=perms))

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_awaited_once()


@pytest.mark.anyio
async def test_failing_executor_replies_and_still_deletes(ctx: BotContext) -> None:
    _add(ctx, "ping", prefix=AsyncMock(side_effect=RuntimeError("boom")))
    message = make_message("!ping")

    await PrefixMessageRouter(ctx).route(message)

    message.channel.send.assert_awaited_once_with(PREFIX_FAILED_MSG)
    message.delete.assert_awaited_once()


@pytest.mark.anyio
async def test_no_delete_without_manage_messages(ctx: BotContext) -> None:
    handler = _add(ctx, "ping")
    message = make_message("!ping", manage_messages=False)

    await PrefixMessageRouter(ctx).route(message)

    handler.assert_awaited_once()
    message.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_system_messages_are_not_deleted(ctx: BotContext) -> None:
    _add(ctx, "ping")
    message = make_message("!ping")
    message.is_system.return_value = True

    await PrefixMessageRouter(ctx).route(message)

    message.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_delete_failure_is_contained(ctx: BotContext) -> None:
    _add(ctx, "ping")
    message = make_message("!ping")
    message.delete.side_effect = RuntimeError("Unknown Message")

    await PrefixMessageRouter(ctx).route(message)
