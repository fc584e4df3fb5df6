# backend/bst_quest/core/game/__init__.py
from .errors import GameBusyError, GameError, GameStateError
from .events import GameEventBus
from .high_score import HighScoreRepository
from .machine import GameStateMachine, parse_value
from .scheduler import LoopScheduler, ScheduledAction
from .state import EdgeView, GameMode, GameSnapshot, NodeView, Point, TreeSnapshot

__all__ = [
    "GameBusyError",
    "GameError",
    "GameStateError",
    "GameEventBus",
    "HighScoreRepository",
    "GameStateMachine",
    "parse_value",
    "LoopScheduler",
    "ScheduledAction",
    "EdgeView",
    "GameMode",
    "GameSnapshot",
    "NodeView",
    "Point",
    "TreeSnapshot",
]
