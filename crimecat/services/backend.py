from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .http import api_request, is_ok, truncate

logger = logging.getLogger(__name__)

# Backend calls report failure as False / None / []; they never raise.


@dataclass(frozen=True)
class Advertisement:
    id: str
    title: str
    link: str = ""


def history_key(subject_name: str, guild_id: int | str) -> str:
    """
    Conversation-history field: "{subjectName}_{guildId}".
    """
    return f"{(subject_name or '').strip()}_{guild_id}"


def _log_failure(action: str, code: int, text: str, data: Any) -> None:
    detail = data.get("message") or data.get("detail") if isinstance(data, dict) else None
    logger.error("backend %s failed (%s): %s", action, code, detail or truncate(text))


def _parse_ad(raw: Any) -> Optional[Advertisement]:
    if not isinstance(raw, dict):
        return None
    ad_id = raw.get("id") or raw.get("requestId")
    title = raw.get("themeName") or raw.get("title")
    if not ad_id or not title:
        return None
    return Advertisement(id=str(ad_id), title=str(title), link=str(raw.get("link") or ""))


async def fetch_active_ads(api: httpx.AsyncClient) -> List[Advertisement]:
    code, text, data = await api_request(api, "GET", "/bot/v1/theme-ads/active")
    if not is_ok(code):
        _log_failure("fetch active ads", code, text, data)
        return []
    items = data.get("ads") if isinstance(data, dict) else data
    if not isinstance(items, list):
        return []
    return [ad for ad in (_parse_ad(x) for x in items) if ad is not None]


async def track_ad_exposure(api: httpx.AsyncClient, ad_id: str) -> bool:
    code, text, data = await api_request(api, "POST", f"/bot/v1/theme-ads/{ad_id}/exposure")
    if not is_ok(code):
        _log_failure(f"ad exposure ({ad_id})", code, text, data)
        return False
    return True


async def track_ad_click(api: httpx.AsyncClient, ad_id: str, user_id: int | str) -> bool:
    code, text, data = await api_request(
        api,
        "POST",
        f"/bot/v1/theme-ads/{ad_id}/click",
        json={"userSnowflake": str(user_id)},
    )
    if not is_ok(code):
        _log_failure(f"ad click ({ad_id})", code, text, data)
        return False
    return True


async def get_observer_role(api: httpx.AsyncClient, guild_id: int | str) -> Optional[str]:
    code, text, data = await api_request(api, "GET", f"/bot/v1/guilds/{guild_id}/observer")
    if code == 404:
        return None
    if not is_ok(code) or not isinstance(data, dict):
        _log_failure(f"get observer ({guild_id})", code, text, data)
        return None
    role = data.get("roleSnowflake")
    return str(role) if role else None


async def set_observer_role(api: httpx.AsyncClient, guild_id: int | str, role_id: int | str) -> bool:
    payload: Dict[str, Any] = {"roleSnowflake": str(role_id)}
    code, text, data = await api_request(api, "PUT", f"/bot/v1/guilds/{guild_id}/observer", json=payload)
    if not is_ok(code):
        _log_failure(f"set observer ({guild_id})", code, text, data)
        return False
    return True


async def delete_conversation_history(api: httpx.AsyncClient, subject_name: str, guild_id: int | str) -> bool:
    key = history_key(subject_name, guild_id)
    code, text, data = await api_request(api, "DELETE", f"/bot/v1/ai-history/{key}")
    if not is_ok(code):
        _log_failure(f"delete history ({key})", code, text, data)
        return False
    return True


__all__ = [
    "Advertisement",
    "history_key",
    "fetch_active_ads",
    "track_ad_exposure",
    "track_ad_click",
    "get_observer_role",
    "set_observer_role",
    "delete_conversation_history",
]
