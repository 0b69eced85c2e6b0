from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .registry import Event, Executor

logger = logging.getLogger(__name__)

# Fixed event keys emitted by the routers
DM_MESSAGE = "dm_message"
BUTTON_CLICK = "button_click"
SELECT_MENU = "select_menu"
MODAL_SUBMIT = "modal_submit"


class EventEmitter:
    """
    Minimal async event emitter.

    Listeners run in registration order; each one is isolated so a failing
    listener is logged and the next one still runs. There is no off().
    """

    def __init__(self) -> None:
        # name -> [(listener, once)]
        self._listeners: Dict[str, List[Tuple[Executor, bool]]] = {}

    def on(self, name: str, listener: Executor) -> None:
        self._listeners.setdefault(name, []).append((listener, False))

    def once(self, name: str, listener: Executor) -> None:
        self._listeners.setdefault(name, []).append((listener, True))

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, []))

    def event_names(self) -> List[str]:
        return [k for k, v in self._listeners.items() if v]

    async def emit(self, name: str, *args: Any) -> int:
        """
        Invoke every listener for `name`. Returns how many were invoked.
        """
        entries = list(self._listeners.get(name, []))
        if not entries:
            return 0

        # Single-shot listeners leave before they run so re-entrant emits skip them.
        remaining = [e for e in self._listeners.get(name, []) if not e[1]]
        self._listeners[name] = remaining

        for listener, _ in entries:
            try:
                await listener(*args)
            except Exception:
                logger.exception("event listener failed: %s (%s)", name, getattr(listener, "__qualname__", listener))
        return len(entries)


class EventRegistry:
    """
    name -> Event. The first event registered under a name is the only one
    bound to the emitter; later duplicates are skipped.
    """

    def __init__(self, emitter: EventEmitter, ctx: Optional[Any] = None) -> None:
        self.emitter = emitter
        self.ctx = ctx
        self.events: Dict[str, Event] = {}

    def __len__(self) -> int:
        return len(self.events)

    def __contains__(self, name: object) -> bool:
        return name in self.events

    def register(self, event: Event) -> bool:
        if event.name in self.events:
            logger.warning("duplicate event '%s' skipped (already bound)", event.name)
            return False

        self.events[event.name] = event
        listener = self._listener_for(event)
        if event.once:
            self.emitter.once(event.name, listener)
        else:
            self.emitter.on(event.name, listener)
        logger.debug("bound event: %s (once=%s)", event.name, event.once)
        return True

    def _listener_for(self, event: Event) -> Executor:
        async def _listener(*args: Any) -> None:
            await event.execute(self.ctx, *args)

        _listener.__qualname__ = f"event:{event.name}"
        return _listener


__all__ = [
    "DM_MESSAGE",
    "BUTTON_CLICK",
    "SELECT_MENU",
    "MODAL_SUBMIT",
    "EventEmitter",
    "EventRegistry",
]
