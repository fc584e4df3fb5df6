"""Cancellable delayed actions on the running asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledAction:
    """Handle for one delayed callback; cancelling twice is harmless."""

    def __init__(self, handle: Optional[asyncio.TimerHandle], label: str):
        self._handle = handle
        self.label = label
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        if self.cancelled or self.fired:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
        logger.debug("Cancelled scheduled action %s", self.label)

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class LoopScheduler:
    """Schedules plain callbacks ``delay`` seconds from now."""

    def schedule(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledAction:
        loop = asyncio.get_running_loop()
        action = ScheduledAction(None, label or getattr(callback, "__name__", "action"))

        def _fire() -> None:
            if action.cancelled:
                return
            action.fired = True
            callback()

        action._handle = loop.call_later(max(delay, 0.0), _fire)
        return action
