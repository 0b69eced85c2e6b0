from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .config import settings
from .discord.bot import build_context
from .discord.catalogue import build_catalogue
from .discord.context import BotContext

logger = logging.getLogger(__name__)


def create_app(ctx: Optional[BotContext] = None) -> FastAPI:
    """
    Read-only ops API over the loaded command/event registries.

    The context is built without a Discord client: modules are imported and
    registered exactly as the bot would, nothing connects to the gateway.
    """
    ctx = ctx or build_context(settings)
    cfg = ctx.settings

    app = FastAPI(title="CrimeCat Bot Ops API", version=cfg.bot_version)

    # Same envelope shape as /health so callers can branch on "ok".
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):  # noqa: ANN001
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "status": exc.status_code, "detail": exc.detail, "path": request.url.path},
        )

    # --- Health / meta ---
    @app.get("/health", tags=["meta"])
    def health() -> Dict[str, Any]:
        return {
            "ok": True,
            "commands": len(ctx.commands),
            "aliases": len(ctx.commands.aliases),
            "events": len(ctx.events),
        }

    @app.get("/version", tags=["meta"])
    def version() -> Dict[str, Any]:
        return {"version": cfg.bot_version}

    # --- Registries ---
    @app.get("/commands", tags=["registry"])
    def commands() -> Dict[str, Any]:
        return build_catalogue(ctx.commands, cfg.bot_version)

    @app.get("/commands/{name}", tags=["registry"])
    def command(name: str) -> Dict[str, Any]:
        cmd = ctx.commands.resolve(name.strip().lower())
        if cmd is None:
            raise HTTPException(status_code=404, detail=f"unknown command: {name}")
        return cmd.definition()

    @app.get("/events", tags=["registry"])
    def events() -> Dict[str, Any]:
        return {
            "events": [{"name": e.name, "once": e.once} for e in ctx.events.events.values()],
            "handlers": {kind: ctx.responses.names(kind) for kind in ctx.responses.groups},
        }

    return app


def run() -> None:
    logging.basicConfig(level=getattr(logging, str(settings.log_level).upper(), logging.INFO))
    import uvicorn

    settings.validate_for_boot()
    uvicorn.run(create_app(), host=settings.host, port=int(settings.port))
