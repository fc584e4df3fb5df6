"""Snapshot models handed to the presentation layer."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class GameMode(str, Enum):
    NORMAL = "normal"
    AWAITING_ANSWER = "awaiting_answer"


class Point(BaseModel):
    x: float
    y: float


class NodeView(BaseModel):
    id: str
    value: int
    x: float
    y: float


class EdgeView(BaseModel):
    # ``from`` is a keyword, so the field is aliased on the wire.
    start: Point = Field(alias="from")
    end: Point = Field(alias="to")

    model_config = {"populate_by_name": True}


class TreeSnapshot(BaseModel):
    nodes: List[NodeView] = Field(default_factory=list)
    edges: List[EdgeView] = Field(default_factory=list)


class GameSnapshot(BaseModel):
    """Everything the UI needs to draw one frame."""

    operator: str
    lives: int
    score: int
    xp: int
    high_score: int
    status: str
    mode: GameMode
    pending_value: Optional[int] = None
    game_over: bool = False
    walking: bool = False
    jumping: bool = False
    glitched: bool = False
    marker: Point
    tree: TreeSnapshot = Field(default_factory=TreeSnapshot)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
