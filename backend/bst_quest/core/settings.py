"""Game configuration read from the environment (``.env`` supported)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from bst_quest.core.tree.engine import LayoutParams

load_dotenv()

logger = logging.getLogger(__name__)

SIDEBAR_WIDTH = 320
DEFAULT_HIGH_SCORE_PATH = Path.home() / ".bst_quest" / "high_score.json"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


def origin_x_for(viewport_width: float) -> float:
    """Horizontal root position: centre of the area left of the sidebar."""

    return (viewport_width - SIDEBAR_WIDTH) / 2


@dataclass(frozen=True)
class GameSettings:
    challenge_threshold: int = 5
    start_lives: int = 5
    walk_step_delay: float = 0.45
    reset_delay: float = 3.0
    success_pulse: float = 0.5
    error_pulse: float = 0.6
    viewport_width: float = 1280.0
    origin_y: float = 80.0
    initial_spacing: float = 200.0
    spacing_divisor: float = 1.6
    level_step: float = 80.0
    depth_lift: float = 25.0
    high_score_path: Path = DEFAULT_HIGH_SCORE_PATH
    high_score_key: str = "bst_high_score"

    def layout_params(self, viewport_width: Optional[float] = None) -> LayoutParams:
        width = self.viewport_width if viewport_width is None else viewport_width
        return LayoutParams(
            origin_x=origin_x_for(width),
            origin_y=self.origin_y,
            initial_spacing=self.initial_spacing,
            spacing_divisor=self.spacing_divisor,
            level_step=self.level_step,
            depth_lift=self.depth_lift,
        )


def load_settings() -> GameSettings:
    defaults = GameSettings()
    return GameSettings(
        challenge_threshold=_env_int("BST_CHALLENGE_THRESHOLD", defaults.challenge_threshold),
        start_lives=_env_int("BST_START_LIVES", defaults.start_lives),
        walk_step_delay=_env_float("BST_WALK_STEP_DELAY", defaults.walk_step_delay),
        reset_delay=_env_float("BST_RESET_DELAY", defaults.reset_delay),
        success_pulse=_env_float("BST_SUCCESS_PULSE", defaults.success_pulse),
        error_pulse=_env_float("BST_ERROR_PULSE", defaults.error_pulse),
        viewport_width=_env_float("BST_VIEWPORT_WIDTH", defaults.viewport_width),
        origin_y=_env_float("BST_ORIGIN_Y", defaults.origin_y),
        initial_spacing=_env_float("BST_INITIAL_SPACING", defaults.initial_spacing),
        spacing_divisor=_env_float("BST_SPACING_DIVISOR", defaults.spacing_divisor),
        level_step=_env_float("BST_LEVEL_STEP", defaults.level_step),
        depth_lift=_env_float("BST_DEPTH_LIFT", defaults.depth_lift),
        high_score_path=Path(os.getenv("BST_HIGH_SCORE_PATH") or defaults.high_score_path),
        high_score_key=os.getenv("BST_HIGH_SCORE_KEY") or defaults.high_score_key,
    )
