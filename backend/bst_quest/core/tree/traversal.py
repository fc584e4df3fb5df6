"""Search walk used to animate the marker and to score challenges."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from .engine import Coord
from .node import Node


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"


def search_path(root: Optional[Node], value: int, anchor: Coord) -> List[Coord]:
    """Coordinates visited while descending towards ``value``.

    Always starts at ``anchor``. Stops at the insertion slot or on an exact
    match (the matching node is included).
    """

    path: List[Coord] = [anchor]
    current = root
    while current is not None:
        path.append((current.x, current.y))
        if value < current.value:
            current = current.left
        elif value > current.value:
            current = current.right
        else:
            break
    return path


def direction_for(root: Optional[Node], value: int) -> Direction:
    """First branch off the root for ``value``.

    Only the root is consulted. Values not below the root (including an
    equal value) go RIGHT; an empty tree answers LEFT.
    """

    if root is None:
        return Direction.LEFT
    return Direction.LEFT if value < root.value else Direction.RIGHT
