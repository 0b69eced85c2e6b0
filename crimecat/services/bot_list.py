from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Tuple

import httpx

from .http import api_request, is_ok, truncate

logger = logging.getLogger(__name__)


async def post_bot_stats(
    api: httpx.AsyncClient,
    *,
    base_url: str,
    bot_id: int | str,
    token: str,
    servers: int,
    shards: int = 1,
) -> bool:
    """
    POST {base_url}/bots/{id}/stats with {servers, shards}.

    The list site expects the raw token in Authorization (no scheme).
    """
    url = f"{base_url.rstrip('/')}/bots/{bot_id}/stats"
    code, text, data = await api_request(
        api,
        "POST",
        url,
        json={"servers": int(servers), "shards": int(shards)},
        headers={"Authorization": token},
    )
    if not is_ok(code):
        detail = data.get("message") if isinstance(data, dict) else None
        logger.error("bot list stats update failed (%s): %s", code, detail or truncate(text))
        return False
    logger.info("bot list stats updated: servers=%s shards=%s", servers, shards)
    return True


async def stats_loop(
    api: httpx.AsyncClient,
    *,
    base_url: str,
    bot_id: int | str,
    token: str,
    counts: Callable[[], Tuple[int, int]],
    interval_s: float,
) -> None:
    """
    Post stats now and then every `interval_s` until cancelled.
    `counts()` returns (servers, shards) at call time.
    """
    while True:
        servers, shards = counts()
        await post_bot_stats(api, base_url=base_url, bot_id=bot_id, token=token, servers=servers, shards=shards)
        await asyncio.sleep(float(interval_s))


def shard_count(client: Any) -> int:
    n = getattr(client, "shard_count", None)
    return int(n) if n else 1


__all__ = ["post_bot_stats", "stats_loop", "shard_count"]
