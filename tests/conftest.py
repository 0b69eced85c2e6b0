from __future__ import annotations

import pytest

from crimecat.discord.context import BotContext
from tests.fakes import make_ctx


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def ctx() -> BotContext:
    return make_ctx()
