from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Optional, Union
import logging

from bst_quest.core.game import GameError
from bst_quest.core.game.registry import get_game, start_game
from bst_quest.core.tree import Direction

# every route is async so the session is only touched from the event loop
router = APIRouter(prefix="/game", tags=["Game"])
logger = logging.getLogger("uvicorn.error")


# ============================================================
# MODELS
# ============================================================
class SessionInput(BaseModel):
    name: Optional[str] = None
    viewport_width: Optional[float] = Field(default=None, gt=0)


class InsertInput(BaseModel):
    # raw text from the input box; non-numbers are ignored by the game
    value: Optional[Union[int, float, str]] = None


class AnswerInput(BaseModel):
    direction: Direction


class ViewportInput(BaseModel):
    viewport_width: float = Field(gt=0)


def _ok(game):
    return {"status": "ok", "state": game.snapshot().to_payload()}


def _rejected(exc: GameError):
    logger.warning("[Game] rejected: %s", exc)
    return JSONResponse(status_code=409, content={"status": "error", "msg": str(exc)})


# ============================================================
# SESSION
# ============================================================
@router.post("/session")
async def create_session(inp: SessionInput):
    game = start_game(inp.name, inp.viewport_width)
    return _ok(game)


@router.get("/state")
async def get_state():
    return _ok(get_game())


# ============================================================
# ACTIONS
# ============================================================
@router.post("/insert")
async def insert_value(inp: InsertInput):
    game = get_game()
    try:
        await game.request_insert(inp.value)
    except GameError as exc:
        return _rejected(exc)
    return _ok(game)


@router.post("/answer")
async def answer_challenge(inp: AnswerInput):
    game = get_game()
    try:
        await game.request_answer(inp.direction)
    except GameError as exc:
        return _rejected(exc)
    return _ok(game)


@router.post("/reset")
async def reset_game():
    game = get_game()
    game.request_reset()
    return _ok(game)


@router.post("/viewport")
async def update_viewport(inp: ViewportInput):
    game = get_game()
    try:
        game.resize(inp.viewport_width)
    except GameError as exc:
        return _rejected(exc)
    return _ok(game)
