"""Tests for gateway forwarding, the ready event and background task ownership."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from crimecat.discord.bot import CrimeCatBot
from crimecat.discord.context import BotContext
from crimecat.discord.events.client import ready
from tests.fakes import make_ctx, make_settings


async def _idle(*args: Any, **kwargs: Any) -> None:
    await asyncio.Event().wait()


def _task_names(ctx: BotContext) -> List[str]:
    return sorted(t.get_name() for t in ctx._tasks if not t.done())


class TestGatewayForwarding:
    @pytest.mark.anyio
    async def test_dispatch_forwards_event_to_emitter(self) -> None:
        bot = CrimeCatBot(make_settings())
        seen: List[Any] = []

        async def listener(guild: Any) -> None:
            seen.append(guild)

        bot.ctx.emitter.on("guild_join", listener)
        guild = MagicMock(id=500, member_count=12)
        guild.name = "crimecat-test"

        bot.dispatch("guild_join", guild)
        await asyncio.gather(*bot._event_tasks)

        assert seen == [guild]

    @pytest.mark.anyio
    async def test_dispatch_without_listeners_schedules_nothing(self) -> None:
        bot = CrimeCatBot(make_settings())

        bot.dispatch("typing", MagicMock(), MagicMock(), None)

        assert not bot._event_tasks

    @pytest.mark.anyio
    async def test_bundled_events_are_bound_on_construction(self) -> None:
        bot = CrimeCatBot(make_settings())
        for event in ("ready", "guild_join", "dm_message", "button_click", "select_menu", "modal_submit"):
            assert bot.ctx.emitter.listener_count(event) == 1


class TestReady:
    @staticmethod
    def _ctx(**overrides: Any) -> BotContext:
        ctx = make_ctx(**overrides)
        ctx.client.user = MagicMock(id=99)
        ctx.client.guilds = []
        return ctx

    @pytest.mark.anyio
    async def test_starts_rotation_and_stats_once(self) -> None:
        ctx = self._ctx(bot_list_token="list-token")

        with patch.object(ready, "rotation_loop", MagicMock(side_effect=_idle)) as rotation, patch.object(
            ready, "stats_loop", MagicMock(side_effect=_idle)
        ) as stats:
            await ready.execute(ctx)
            await ready.execute(ctx)

        try:
            assert _task_names(ctx) == ["ad-rotation", "bot-list-stats"]
            rotation.assert_called_once_with(ctx)
            stats.assert_called_once()
            assert stats.call_args.kwargs["bot_id"] == 99
            assert stats.call_args.kwargs["token"] == "list-token"
        finally:
            await ctx.close()

    @pytest.mark.anyio
    async def test_without_list_token_only_rotation_runs(self) -> None:
        ctx = self._ctx()

        with patch.object(ready, "rotation_loop", MagicMock(side_effect=_idle)), patch.object(
            ready, "stats_loop", MagicMock(side_effect=_idle)
        ) as stats:
            await ready.execute(ctx)

        try:
            assert _task_names(ctx) == ["ad-rotation"]
            stats.assert_not_called()
        finally:
            await ctx.close()


class TestBackgroundTasks:
    @pytest.mark.anyio
    async def test_close_cancels_tasks_and_closes_api(self, ctx: BotContext) -> None:
        api = MagicMock()
        api.aclose = AsyncMock()
        ctx.api = api
        task = ctx.spawn(_idle(), name="ad-rotation")
        await asyncio.sleep(0)
        assert ctx.has_task("ad-rotation")

        await ctx.close()

        assert task.cancelled()
        assert not ctx.has_task("ad-rotation")
        api.aclose.assert_awaited_once()
        assert ctx.api is None

    @pytest.mark.anyio
    async def test_failed_task_is_logged_and_dropped(self, ctx: BotContext, caplog: pytest.LogCaptureFixture) -> None:
        async def broken() -> None:
            raise RuntimeError("backend down")

        task = ctx.spawn(broken(), name="bot-list-stats")
        with caplog.at_level(logging.ERROR):
            await asyncio.gather(task, return_exceptions=True)
            await asyncio.sleep(0)

        assert not ctx.has_task("bot-list-stats")
        assert "background task bot-list-stats failed" in caplog.text
