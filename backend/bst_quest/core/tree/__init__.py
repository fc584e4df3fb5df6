# backend/bst_quest/core/tree/__init__.py
from .node import Node
from .engine import LayoutParams, TreeEngine, edges, flatten, insert, layout, node_count
from .traversal import Direction, direction_for, search_path

__all__ = [
    "Node",
    "LayoutParams",
    "TreeEngine",
    "insert",
    "layout",
    "flatten",
    "edges",
    "node_count",
    "Direction",
    "direction_for",
    "search_path",
]
