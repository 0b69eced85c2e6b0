"""Tests for the bundled command executors."""

from __future__ import annotations

import json
from typing import Callable, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import httpx
import pytest

from crimecat.deploy import DeployResult
from crimecat.discord.commands import core, forget, observer
from crimecat.discord.commands import deploy as deploy_command
from crimecat.discord.commands import help as help_command
from crimecat.discord.context import BotContext
from crimecat.discord.custom_id import decode_custom_id
from crimecat.discord.registry import Command
from crimecat.services.backend import Advertisement
from tests.fakes import make_interaction, make_message

IT = discord.InteractionType

Handler = Callable[[httpx.Request], httpx.Response]


def _backend(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://backend.test", transport=httpx.MockTransport(handler))


def _observer_interaction(role_id: Optional[int] = None, *, known_role: bool = True) -> MagicMock:
    options = [] if role_id is None else [{"type": 8, "name": observer.ROLE_OPTION, "value": str(role_id)}]
    interaction = make_interaction(IT.application_command, {"name": observer.name, "options": options})
    interaction.guild.get_role = MagicMock(return_value=MagicMock() if known_role else None)
    return interaction


def _followup_text(interaction: MagicMock) -> str:
    return interaction.followup.send.await_args.args[0]


class TestObserver:
    @pytest.mark.anyio
    async def test_show_when_unset(self, ctx: BotContext) -> None:
        ctx.api = _backend(lambda r: httpx.Response(404, json={"message": "not found"}))
        interaction = _observer_interaction()

        async with ctx.api:
            await observer.execute(ctx, interaction)

        interaction.response.defer.assert_awaited_once_with(ephemeral=True)
        assert "설정되어 있지 않습니다" in _followup_text(interaction)

    @pytest.mark.anyio
    async def test_show_current_role(self, ctx: BotContext) -> None:
        ctx.api = _backend(lambda r: httpx.Response(200, json={"roleSnowflake": 777}))
        interaction = _observer_interaction()

        async with ctx.api:
            await observer.execute(ctx, interaction)

        assert "<@&777>" in _followup_text(interaction)

    @pytest.mark.anyio
    async def test_set_role(self, ctx: BotContext) -> None:
        sent: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200, json={})

        ctx.api = _backend(handler)
        interaction = _observer_interaction(888)

        async with ctx.api:
            await observer.execute(ctx, interaction)

        assert sent[0].method == "PUT"
        assert sent[0].url.path == "/bot/v1/guilds/500/observer"
        assert json.loads(sent[0].content) == {"roleSnowflake": "888"}
        assert _followup_text(interaction).startswith("✅")

    @pytest.mark.anyio
    async def test_role_from_another_guild_is_rejected(self, ctx: BotContext) -> None:
        sent: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200, json={})

        ctx.api = _backend(handler)
        interaction = _observer_interaction(888, known_role=False)

        async with ctx.api:
            await observer.execute(ctx, interaction)

        assert sent == []
        assert "없는 역할" in _followup_text(interaction)

    @pytest.mark.anyio
    async def test_failed_set_is_reported(self, ctx: BotContext) -> None:
        ctx.api = _backend(lambda r: httpx.Response(500, json={"message": "db down"}))
        interaction = _observer_interaction(888)

        async with ctx.api:
            await observer.execute(ctx, interaction)

        assert "실패" in _followup_text(interaction)

    @pytest.mark.anyio
    async def test_backend_not_ready(self, ctx: BotContext) -> None:
        interaction = _observer_interaction(888)

        await observer.execute(ctx, interaction)

        assert "준비되지 않았습니다" in _followup_text(interaction)

    @pytest.mark.anyio
    async def test_outside_guild(self, ctx: BotContext) -> None:
        interaction = make_interaction(IT.application_command, {"name": observer.name}, guild_id=None)

        await observer.execute(ctx, interaction)

        interaction.response.defer.assert_not_awaited()
        interaction.response.send_message.assert_awaited_once()

    @pytest.mark.anyio
    async def test_prefix_uses_role_mention(self, ctx: BotContext) -> None:
        ctx.api = _backend(lambda r: httpx.Response(200, json={}))
        message = make_message("!관전자 @observers")
        message.guild.id = 500
        message.guild.get_role = MagicMock(return_value=MagicMock())
        message.role_mentions = [MagicMock(id=888)]

        async with ctx.api:
            await observer.prefix_execute(ctx, message, ["<@&888>"])

        assert "<@&888>" in message.channel.send.await_args.args[0]


class TestDeployCommand:
    @pytest.mark.anyio
    async def test_success_embed(self, ctx: BotContext) -> None:
        interaction = make_interaction(
            IT.application_command,
            {"name": deploy_command.name, "options": [{"type": 3, "name": deploy_command.SCOPE_OPTION, "value": "global"}]},
        )
        result = DeployResult(scope="global", global_count=6)

        with patch.object(deploy_command, "deploy_commands", AsyncMock(return_value=result)) as run:
            await deploy_command.execute(ctx, interaction)

        run.assert_awaited_once_with(ctx.commands.all(), ctx.settings, scope="global")
        embed = interaction.followup.send.await_args.kwargs["embed"]
        assert embed.title == "✅ 명령어 배포 완료"
        assert [(f.name, f.value) for f in embed.fields] == [("글로벌", "6개"), ("서버", "0개")]

    @pytest.mark.anyio
    async def test_failure_embed_lists_errors(self, ctx: BotContext) -> None:
        interaction = make_interaction(IT.application_command, {"name": deploy_command.name})
        result = DeployResult(scope="all", global_count=2, errors=["guild deploy failed (403): Missing Access"])

        with patch.object(deploy_command, "deploy_commands", AsyncMock(return_value=result)) as run:
            await deploy_command.execute(ctx, interaction)

        assert run.await_args.kwargs["scope"] == "all"
        embed = interaction.followup.send.await_args.kwargs["embed"]
        assert embed.title == "❌ 명령어 배포 실패"
        assert "Missing Access" in embed.fields[-1].value


class TestHelp:
    def test_render_help_lists_modes_and_aliases(self, ctx: BotContext) -> None:
        ctx.commands.add(
            Command(name="ping", execute=AsyncMock(), prefix_execute=AsyncMock(), aliases=("핑",), description="pong")
        )
        ctx.commands.add(Command(name="문의", execute=AsyncMock(), description="contact"))
        ctx.commands.add(Command(name="답장", execute=AsyncMock(), prefix_execute=AsyncMock(), upload=False))

        text = help_command.render_help(ctx)

        assert "- `/!ping` (핑): pong" in text
        assert "- `/문의`: contact" in text
        assert "- `!답장`: 설명 없음" in text

    @pytest.mark.anyio
    async def test_no_ad_means_no_button(self, ctx: BotContext) -> None:
        assert help_command._ad_view(ctx) is None

        interaction = make_interaction(IT.application_command, {"name": help_command.name})
        await help_command.execute(ctx, interaction)

        assert "view" not in interaction.response.send_message.await_args.kwargs

    @pytest.mark.anyio
    async def test_active_ad_adds_button(self, ctx: BotContext) -> None:
        ctx.ad_rotation.replace([Advertisement(id="ad-1", title="Night Train")])

        view = help_command._ad_view(ctx)

        assert view is not None
        (button,) = view.children
        assert button.label == "📢 Night Train"
        cid = decode_custom_id(button.custom_id)
        assert (cid.head, cid.handler, cid.option) == ("ad-1", "advertisement", "click")

    @pytest.mark.anyio
    async def test_prefix_help_sends_ad_view(self, ctx: BotContext) -> None:
        ctx.ad_rotation.replace([Advertisement(id="ad-1", title="Night Train")])
        message = make_message("!도움말")

        await help_command.prefix_execute(ctx, message, [])

        assert isinstance(message.channel.send.await_args.kwargs["view"], discord.ui.View)


@pytest.mark.anyio
async def test_ping_prefix_reports_latency_and_guilds(ctx: BotContext) -> None:
    ctx.client.latency = 0.042
    ctx.client.guilds = [object(), object(), object()]
    message = make_message("!ping")

    await core.prefix_execute(ctx, message, [])

    text = message.channel.send.await_args.args[0]
    assert "42ms" in text
    assert "서버 수: 3" in text
    assert ctx.settings.bot_version in text


class TestForgetPrefix:
    @pytest.mark.anyio
    async def test_overlong_subject_gets_usage(self, ctx: BotContext) -> None:
        message = make_message("!기록삭제 " + "가" * 120)

        await forget.prefix_execute(ctx, message, ["가" * 120])

        (text,), kwargs = message.channel.send.await_args
        assert text.startswith("사용법")
        assert "view" not in kwargs

    @pytest.mark.anyio
    async def test_subject_at_limit_gets_confirm_button(self, ctx: BotContext) -> None:
        subject = "가" * forget.SUBJECT_MAX_LENGTH
        message = make_message("!기록삭제 " + subject)
        message.guild.id = 500

        await forget.prefix_execute(ctx, message, [subject])

        view = message.channel.send.await_args.kwargs["view"]
        (button,) = view.children
        assert decode_custom_id(button.custom_id).other == subject
