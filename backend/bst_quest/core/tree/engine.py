"""Unbalanced binary search tree with display layout.

The tree is owned by a single ``TreeEngine`` and mutated in place; callers
that need an independent copy of the shape should read ``flatten`` /
``edges`` output instead of holding node references across commits.
Walks are iterative so that degenerate (sorted-input) trees never hit the
interpreter recursion limit.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .node import Node

logger = logging.getLogger(__name__)

Coord = Tuple[float, float]
Edge = Tuple[Coord, Coord]


@dataclass(frozen=True)
class LayoutParams:
    """Coordinates for the root and how they shrink/shift per depth."""

    origin_x: float = 480.0
    origin_y: float = 80.0
    initial_spacing: float = 200.0
    spacing_divisor: float = 1.6
    level_step: float = 80.0
    depth_lift: float = 25.0

    @property
    def anchor(self) -> Coord:
        return (self.origin_x, self.origin_y)


# ------------------------------------------------------------------
# Pure operations on a root reference
# ------------------------------------------------------------------
def insert(root: Optional[Node], value: int, new_id: Callable[[], str]) -> Node:
    """Insert ``value`` and return the (possibly new) root.

    Equal values are ignored. ``new_id`` is only called when a node is
    actually created.
    """

    if root is None:
        return Node(new_id(), value)

    current = root
    while True:
        if value < current.value:
            if current.left is None:
                current.left = Node(new_id(), value)
                return root
            current = current.left
        elif value > current.value:
            if current.right is None:
                current.right = Node(new_id(), value)
                return root
            current = current.right
        else:
            return root


def layout(root: Optional[Node], params: LayoutParams = LayoutParams()) -> None:
    """Assign ``x``/``y`` to every node from the tree shape alone."""

    if root is None:
        return

    stack: List[Tuple[Node, float, float, int]] = [
        (root, params.origin_x, params.initial_spacing, 0)
    ]
    while stack:
        node, x, spacing, depth = stack.pop()
        node.x = x
        node.y = params.origin_y + depth * params.level_step - depth * params.depth_lift

        child_spacing = spacing / params.spacing_divisor
        # right pushed first so left is assigned first (pre-order)
        if node.right is not None:
            stack.append((node.right, x + spacing, child_spacing, depth + 1))
        if node.left is not None:
            stack.append((node.left, x - spacing, child_spacing, depth + 1))


def _preorder(root: Optional[Node]) -> Iterator[Tuple[Optional[Node], Node]]:
    """Yield ``(parent, node)`` pairs in pre-order."""

    if root is None:
        return
    stack: List[Tuple[Optional[Node], Node]] = [(None, root)]
    while stack:
        parent, node = stack.pop()
        yield parent, node
        if node.right is not None:
            stack.append((node, node.right))
        if node.left is not None:
            stack.append((node, node.left))


def flatten(root: Optional[Node]) -> List[Node]:
    """Nodes in pre-order (node, left subtree, right subtree)."""

    return [node for _, node in _preorder(root)]


def edges(root: Optional[Node]) -> List[Edge]:
    """One ``(parent_xy, child_xy)`` pair per link, in pre-order of the child.

    Coordinates are whatever the last ``layout`` call assigned.
    """

    return [
        ((parent.x, parent.y), (node.x, node.y))
        for parent, node in _preorder(root)
        if parent is not None
    ]


def node_count(root: Optional[Node]) -> int:
    return sum(1 for _ in _preorder(root))


# ------------------------------------------------------------------
# Owner of the live tree
# ------------------------------------------------------------------
class TreeEngine:
    """Single owner of the game's tree: insert + relayout as one commit."""

    def __init__(self, params: LayoutParams = LayoutParams()):
        self.params = params
        self.root: Optional[Node] = None
        self._ids = itertools.count(1)

    def _next_id(self) -> str:
        return f"n{next(self._ids)}"

    def commit(self, value: int) -> bool:
        """Insert ``value`` and relayout. Returns False for duplicates."""

        before = node_count(self.root)
        self.root = insert(self.root, value, self._next_id)
        layout(self.root, self.params)
        added = node_count(self.root) != before
        if not added:
            logger.debug("Duplicate value %s ignored", value)
        return added

    def relayout(self, params: LayoutParams) -> None:
        self.params = params
        layout(self.root, params)

    def clear(self) -> None:
        self.root = None

    def nodes(self) -> List[Node]:
        return flatten(self.root)

    def edges(self) -> List[Edge]:
        return edges(self.root)

    def count(self) -> int:
        return node_count(self.root)

    @property
    def anchor(self) -> Coord:
        return self.params.anchor

    def export_state(self):
        return {
            "nodes": [node.export() for node in self.nodes()],
            "edges": [
                {"from": {"x": a[0], "y": a[1]}, "to": {"x": b[0], "y": b[1]}}
                for a, b in self.edges()
            ],
        }
