"""Shared accessor for the single live game session.

Routes import this instead of each other so the session survives across
requests without circular imports.
"""
from __future__ import annotations

from threading import Lock
from typing import Optional

from bst_quest.core.settings import GameSettings, load_settings

from .high_score import HighScoreRepository
from .machine import GameStateMachine

__all__ = ["get_game", "start_game", "get_settings", "reset_registry"]

_lock = Lock()
_settings: Optional[GameSettings] = None
_instance: Optional[GameStateMachine] = None


def get_settings() -> GameSettings:
    global _settings
    with _lock:
        if _settings is None:
            _settings = load_settings()
        return _settings


def start_game(
    name: Optional[str] = None,
    viewport_width: Optional[float] = None,
) -> GameStateMachine:
    """Replace the current session with a fresh one.

    Any auto-reset still scheduled by the previous session is cancelled.
    """

    global _instance
    settings = get_settings()
    repository = HighScoreRepository(settings.high_score_path, settings.high_score_key)
    with _lock:
        if _instance is not None:
            _instance.close()
        _instance = GameStateMachine(
            settings,
            repository,
            operator=name,
            viewport_width=viewport_width,
        )
        return _instance


def get_game() -> GameStateMachine:
    """Return the live session, starting a guest session on first use."""

    with _lock:
        current = _instance
    if current is None:
        return start_game()
    return current


def reset_registry(settings: Optional[GameSettings] = None) -> None:
    """Forget the cached session and settings (primarily for tests)."""

    global _instance, _settings
    with _lock:
        if _instance is not None:
            _instance.close()
        _instance = None
        _settings = settings
