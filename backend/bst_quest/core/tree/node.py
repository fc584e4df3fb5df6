from __future__ import annotations

from typing import Any, Dict, Optional


class Node:
    """Single BST node. ``x``/``y`` are display coordinates set by layout."""

    __slots__ = ("id", "value", "left", "right", "x", "y")

    def __init__(self, node_id: str, value: int):
        self.id = node_id
        self.value = value
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None
        self.x = 0.0
        self.y = 0.0

    def export(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "x": self.x, "y": self.y}

    def __repr__(self) -> str:
        return f"Node({self.id!r}, {self.value})"
