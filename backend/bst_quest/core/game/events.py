"""Listener registry for game transitions.

The presentation layer subscribes once and receives a payload per
transition or marker step. Transient visual cues (success/error pulses)
travel through here as events; the snapshot only reports whether they are
still live.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

EventCallback = Callable[[Dict[str, Any]], None]


class GameEventBus:
    """Central dispatcher for game events."""

    SUPPORTED_TYPES = {
        "marker_moved",
        "challenge",
        "inserted",
        "answer_correct",
        "answer_wrong",
        "high_score",
        "game_over",
        "reset",
    }

    def __init__(self) -> None:
        self._listeners: List[EventCallback] = []

    # ------------------------------------------------------------------
    # Registration lifecycle
    # ------------------------------------------------------------------
    def subscribe(self, callback: EventCallback) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def emit(self, event_type: str, snapshot: Dict[str, Any], **extra: Any) -> None:
        if event_type not in self.SUPPORTED_TYPES:
            raise ValueError(f"Unsupported event type: {event_type}")

        payload = {"type": event_type, "snapshot": snapshot, **extra}
        for callback in list(self._listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener %r failed on %s", callback, event_type)
