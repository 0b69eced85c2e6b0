from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

# NOTE:
# Keep this module dependency-light (no discord import).
# Every bot -> backend / bot-list HTTP call goes through api_request.

JsonPayload = Union[Dict[str, Any], list, None]


def create_client(base_url: str = "", *, timeout: Optional[float] = None, token: str = "") -> httpx.AsyncClient:
    headers = {"User-Agent": settings.http_user_agent}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    limits = httpx.Limits(max_connections=25, max_keepalive_connections=10)
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=float(timeout if timeout is not None else settings.http_timeout_s),
        headers=headers,
        limits=limits,
        follow_redirects=True,
    )


def truncate(s: str, limit: int = 500) -> str:
    if not s:
        return ""
    if len(s) <= limit:
        return s
    return s[: max(0, limit - 3)] + "..."


def is_ok(code: int) -> bool:
    return 200 <= code < 300


def _safe_json(r: httpx.Response) -> JsonPayload:
    """
    Best-effort JSON parse: dict or list payloads, otherwise None.
    """
    try:
        payload = r.json()
    except Exception:
        return None
    return payload if isinstance(payload, (dict, list)) else None


async def api_request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Tuple[int, str, JsonPayload]:
    """
    Low-level request helper.
    Returns: (status_code, response_text, json_or_none)

    Transport failures never raise; they map to 408 (timeout),
    503 (network) or 500 (anything else).
    """
    m = (method or "GET").strip().upper()
    p = path if (path or "").startswith(("/", "http://", "https://")) else f"/{path}"

    kwargs: Dict[str, Any] = {"params": params, "json": json, "headers": headers}
    if timeout is not None:
        kwargs["timeout"] = float(timeout)

    try:
        r = await client.request(m, p, **kwargs)
    except httpx.TimeoutException:
        logger.warning("request timed out: %s %s", m, p)
        return 408, "Request timed out.", None
    except httpx.RequestError as e:
        logger.warning("network error: %s %s: %s", m, p, e)
        return 503, f"Network error: {e}", None
    except Exception as e:
        logger.exception("unexpected error during request (%s %s): %s", m, p, e)
        return 500, f"Unexpected error: {e}", None

    return r.status_code, r.text, _safe_json(r)


__all__ = ["create_client", "api_request", "truncate", "is_ok"]
