from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Coroutine, List, Optional, Set

import httpx

from ..config import Settings
from ..services.backend import Advertisement
from .emitter import EventEmitter, EventRegistry
from .registry import CommandRegistry, ResponseRegistry

logger = logging.getLogger(__name__)


@dataclass
class AdRotation:
    ads: List[Advertisement] = field(default_factory=list)
    index: int = 0

    @property
    def current(self) -> Optional[Advertisement]:
        if not self.ads:
            return None
        return self.ads[self.index % len(self.ads)]

    def advance(self) -> Optional[Advertisement]:
        if not self.ads:
            return None
        self.index = (self.index + 1) % len(self.ads)
        return self.current

    def replace(self, ads: List[Advertisement]) -> None:
        self.ads = list(ads)
        self.index = 0


class BotContext:
    """
    Process-wide services handed to every command, event and handler.

    Built once at startup. The registries are read-only after boot; the
    only mutable state is `dm_reply_target` (last writer wins) and the
    advertisement rotation.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: Any = None,
        api: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings
        self.client = client
        self.api = api

        self.commands = CommandRegistry()
        self.responses = ResponseRegistry()
        self.emitter = EventEmitter()
        self.events = EventRegistry(self.emitter, self)

        # User id of the last DM author; `답장` replies there.
        self.dm_reply_target: Optional[int] = None
        self.ad_rotation = AdRotation()

        self._tasks: Set[asyncio.Task] = set()

    # -------------------------
    # Background tasks
    # -------------------------

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task:
        """
        Run `coro` as a task owned by the context; failures are logged.
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("background task %s failed", task.get_name(), exc_info=exc)

    def has_task(self, name: str) -> bool:
        return any(t.get_name() == name and not t.done() for t in self._tasks)

    async def close(self) -> None:
        tasks = list(self._tasks)
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

        if self.api is not None:
            try:
                await self.api.aclose()
            except Exception:
                logger.exception("backend client close failed")
            self.api = None


__all__ = ["AdRotation", "BotContext"]
