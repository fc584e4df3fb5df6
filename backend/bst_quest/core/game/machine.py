"""Turn-based insertion game on top of the tree engine.

One actor handles one action at a time. An insertion is always preceded by
a marker walk down the search path; the walk yields control after every
step (``await sleep``) and the tree is only mutated once the walk has run to
completion. Actions that arrive while a walk is still in flight are
rejected rather than queued.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from bst_quest.core.settings import GameSettings
from bst_quest.core.tree.engine import Coord, TreeEngine
from bst_quest.core.tree.traversal import Direction, direction_for, search_path

from .errors import GameBusyError, GameStateError
from .events import GameEventBus
from .high_score import HighScoreRepository
from .scheduler import LoopScheduler, ScheduledAction
from .state import EdgeView, GameMode, GameSnapshot, NodeView, Point, TreeSnapshot

logger = logging.getLogger(__name__)

GUEST_OPERATOR = "GUEST_USER"
XP_PER_POINT = 100

STATUS_IDLE = "SYSTEM_IDLE"
STATUS_CHALLENGE = "CHALLENGE: {name}, WHERE DOES {value} GO?"
STATUS_INSERTED = "DATA_STABILIZED. WELL DONE, {name}."
STATUS_CORRECT = "CRITICAL_HIT! +100XP"
STATUS_WRONG = "SYSTEM_COMPROMISED: -1 LIFE"
STATUS_GAME_OVER = "CRITICAL_ERROR: {name} EXPIRED. REBOOTING..."
STATUS_RESET = "SYSTEM_REBOOTED // MEMORY_PURGED"

SleepFn = Callable[[float], Awaitable[Any]]


def normalize_operator(name: Optional[str]) -> str:
    if name is None:
        return GUEST_OPERATOR
    cleaned = str(name).strip()
    return cleaned or GUEST_OPERATOR


def parse_value(raw: Any) -> Optional[int]:
    """Integer from user input, or None when the input is not a number.

    Decimals are truncated toward zero, matching a numeric input field.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")):
            return None
        return int(raw)

    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number)


class GameStateMachine:
    """Lives, score and challenge bookkeeping for one operator session."""

    def __init__(
        self,
        settings: GameSettings,
        repository: HighScoreRepository,
        *,
        operator: Optional[str] = None,
        viewport_width: Optional[float] = None,
        events: Optional[GameEventBus] = None,
        scheduler: Optional[LoopScheduler] = None,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.operator = normalize_operator(operator)
        self.events = events or GameEventBus()
        self.scheduler = scheduler or LoopScheduler()
        self._sleep = sleep
        self._clock = clock

        self.tree = TreeEngine(settings.layout_params(viewport_width))
        self.high_score = repository.load()
        self.lives = settings.start_lives
        self.score = 0
        self.mode = GameMode.NORMAL
        self.pending_value: Optional[int] = None
        self.status = STATUS_IDLE
        self.game_over = False
        self.marker: Coord = self.tree.anchor

        self._walking = False
        self._generation = 0
        self._jump_until = 0.0
        self._glitch_until = 0.0
        self._scheduled_reset: Optional[ScheduledAction] = None

        logger.info("Session started for %s (high score %s)", self.operator, self.high_score)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    @property
    def xp(self) -> int:
        return self.score * XP_PER_POINT

    @property
    def walking(self) -> bool:
        return self._walking

    @property
    def jumping(self) -> bool:
        return self._clock() < self._jump_until

    @property
    def glitched(self) -> bool:
        return self._clock() < self._glitch_until

    @property
    def reset_pending(self) -> bool:
        return self._scheduled_reset is not None and self._scheduled_reset.pending

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            operator=self.operator,
            lives=self.lives,
            score=self.score,
            xp=self.xp,
            high_score=self.high_score,
            status=self.status,
            mode=self.mode,
            pending_value=self.pending_value,
            game_over=self.game_over,
            walking=self._walking,
            jumping=self.jumping,
            glitched=self.glitched,
            marker=Point(x=self.marker[0], y=self.marker[1]),
            tree=self.tree_snapshot(),
        )

    def tree_snapshot(self) -> TreeSnapshot:
        return TreeSnapshot(
            nodes=[
                NodeView(id=node.id, value=node.value, x=node.x, y=node.y)
                for node in self.tree.nodes()
            ],
            edges=[
                EdgeView(start=Point(x=a[0], y=a[1]), end=Point(x=b[0], y=b[1]))
                for a, b in self.tree.edges()
            ],
        )

    # ------------------------------------------------------------------
    # Commands from the presentation layer
    # ------------------------------------------------------------------
    async def request_insert(self, raw: Any) -> GameSnapshot:
        value = parse_value(raw)
        if value is None:
            return self.snapshot()

        self._ensure_idle()
        if self.mode is GameMode.AWAITING_ANSWER:
            raise GameStateError(
                f"Answer the pending challenge for {self.pending_value} first"
            )

        if self.tree.count() >= self.settings.challenge_threshold:
            self.mode = GameMode.AWAITING_ANSWER
            self.pending_value = value
            self.status = STATUS_CHALLENGE.format(name=self.operator, value=value)
            logger.info("Challenge issued for %s", value)
            self._emit("challenge", value=value)
            return self.snapshot()

        await self._commit(value)
        return self.snapshot()

    async def request_answer(self, direction: Union[Direction, str]) -> GameSnapshot:
        direction = Direction(direction)
        self._ensure_idle()
        if self.mode is not GameMode.AWAITING_ANSWER or self.pending_value is None:
            raise GameStateError("No challenge is waiting for an answer")

        value = self.pending_value
        expected = direction_for(self.tree.root, value)
        now = self._clock()

        if direction is expected:
            self.score += 1
            self.status = STATUS_CORRECT
            self._jump_until = now + self.settings.success_pulse
            self._emit("answer_correct", value=value, direction=direction.value)
            if self.xp > self.high_score:
                self._record_high_score(self.xp)
        else:
            self.lives -= 1
            self.status = STATUS_WRONG
            self._glitch_until = now + self.settings.error_pulse
            if self.lives <= 0:
                # visible for the whole walk; the reset is scheduled after it
                self.game_over = True
            self._emit(
                "answer_wrong",
                value=value,
                direction=direction.value,
                expected=expected.value,
            )

        self.mode = GameMode.NORMAL
        self.pending_value = None

        await self._commit(value)

        if self.game_over:
            self._enter_game_over()
        return self.snapshot()

    def request_reset(self) -> GameSnapshot:
        self._reset("manual")
        return self.snapshot()

    def resize(self, viewport_width: float) -> GameSnapshot:
        """Recompute layout for a new viewport; the marker returns home.

        Rejected while a walk is in flight, since the walk follows the
        coordinates computed before it started.
        """

        self._ensure_idle()
        self.tree.relayout(self.settings.layout_params(viewport_width))
        self.marker = self.tree.anchor
        return self.snapshot()

    def close(self) -> None:
        """Drop any scheduled work; used when the session is replaced."""

        self._cancel_scheduled_reset()
        self._generation += 1

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _ensure_idle(self) -> None:
        if self._walking:
            raise GameBusyError("A marker walk is still in progress")

    async def _commit(self, value: int) -> None:
        generation = self._generation
        self._walking = True
        try:
            for position in search_path(self.tree.root, value, self.tree.anchor):
                if generation != self._generation:
                    logger.info("Walk for %s abandoned after reset", value)
                    return
                self.marker = position
                logger.debug("Marker at %s for %s", position, value)
                self._emit("marker_moved", value=value)
                await self._sleep(self.settings.walk_step_delay)
        finally:
            self._walking = False

        if generation != self._generation:
            logger.info("Insertion of %s dropped after reset", value)
            return

        added = self.tree.commit(value)
        self.status = STATUS_INSERTED.format(name=self.operator)
        self._emit("inserted", value=value, added=added)

    def _record_high_score(self, xp: int) -> None:
        self.high_score = xp
        try:
            self.repository.save(xp)
        except OSError:
            logger.exception("Could not persist high score to %s", self.repository.path)
        self._emit("high_score", high_score=xp)

    def _enter_game_over(self) -> None:
        self.game_over = True
        self.status = STATUS_GAME_OVER.format(name=self.operator)
        logger.info("Game over for %s, reset in %.1fs", self.operator, self.settings.reset_delay)
        self._emit("game_over")

        self._cancel_scheduled_reset()
        generation = self._generation

        def _auto_reset() -> None:
            if generation != self._generation:
                return
            self._reset("auto")

        self._scheduled_reset = self.scheduler.schedule(
            self.settings.reset_delay, _auto_reset, label="auto_reset"
        )

    def _cancel_scheduled_reset(self) -> None:
        if self._scheduled_reset is not None:
            self._scheduled_reset.cancel()
            self._scheduled_reset = None

    def _reset(self, reason: str) -> None:
        self._cancel_scheduled_reset()
        self._generation += 1

        self.tree.clear()
        self.lives = self.settings.start_lives
        self.score = 0
        self.mode = GameMode.NORMAL
        self.pending_value = None
        self.game_over = False
        self.marker = self.tree.anchor
        self._jump_until = 0.0
        self._glitch_until = 0.0
        self.status = STATUS_RESET

        logger.info("Game reset (%s) for %s", reason, self.operator)
        self._emit("reset", reason=reason)

    def _emit(self, event_type: str, **extra: Any) -> None:
        self.events.emit(event_type, self.snapshot().to_payload(), **extra)
