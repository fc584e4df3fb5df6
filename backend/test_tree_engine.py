import itertools
import random

import pytest

from bst_quest.core.tree import LayoutParams, TreeEngine, edges, flatten, insert, layout, node_count
from bst_quest.core.tree.node import Node


def _ids():
    counter = itertools.count(1)
    return lambda: f"t{next(counter)}"


def _build(values, new_id=None):
    new_id = new_id or _ids()
    root = None
    for value in values:
        root = insert(root, value, new_id)
    return root


def _assert_bst(node, low=None, high=None):
    if node is None:
        return
    if low is not None:
        assert node.value > low
    if high is not None:
        assert node.value < high
    _assert_bst(node.left, low, node.value)
    _assert_bst(node.right, node.value, high)


def test_insert_into_empty_tree_creates_leaf():
    root = insert(None, 10, _ids())
    assert root.value == 10
    assert root.left is None
    assert root.right is None
    assert root.id == "t1"


def test_insert_branches_left_and_right():
    root = _build([10, 5, 15])
    assert root.value == 10
    assert root.left.value == 5
    assert root.right.value == 15


def test_duplicate_insert_leaves_tree_unchanged():
    new_id = _ids()
    root = _build([10, 5, 15, 7], new_id)
    before = [(n.id, n.value) for n in flatten(root)]

    same_root = insert(root, 7, new_id)
    same_root = insert(same_root, 10, new_id)

    assert same_root is root
    assert [(n.id, n.value) for n in flatten(root)] == before
    # no id consumed for ignored values
    assert new_id() == "t5"


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_insert_sequences_keep_bst_invariant(seed):
    rng = random.Random(seed)
    values = [rng.randint(-50, 50) for _ in range(80)]
    root = _build(values)

    _assert_bst(root)
    assert node_count(root) == len(set(values))


def test_flatten_is_preorder():
    root = _build([10, 5, 15, 3, 7, 12, 20])
    assert [n.value for n in flatten(root)] == [10, 5, 3, 7, 15, 12, 20]
    assert flatten(None) == []


def test_layout_places_root_at_origin_and_lifts_deeper_rows():
    root = _build([10, 5, 15, 3])
    layout(root, LayoutParams(origin_x=480, origin_y=80))

    assert (root.x, root.y) == (480, 80)
    assert (root.left.x, root.left.y) == (280, 135)
    assert (root.right.x, root.right.y) == (680, 135)
    assert root.left.left.x == pytest.approx(155)
    assert root.left.left.y == pytest.approx(190)


def test_layout_depends_only_on_shape():
    params = LayoutParams(origin_x=100, origin_y=40, initial_spacing=64, spacing_divisor=2)
    first = _build([8, 4, 12, 2, 6])
    second = _build([8, 12, 4, 6, 2])

    layout(first, params)
    coords_once = [(n.value, n.x, n.y) for n in flatten(first)]
    layout(first, params)
    assert [(n.value, n.x, n.y) for n in flatten(first)] == coords_once

    layout(second, params)
    assert [(n.value, n.x, n.y) for n in flatten(second)] == coords_once


def test_edges_follow_preorder_of_child_and_match_node_count():
    root = _build([10, 5, 15, 3, 7])
    layout(root)

    pairs = edges(root)
    assert len(pairs) == len(flatten(root)) - 1

    by_value = {n.value: (n.x, n.y) for n in flatten(root)}
    assert pairs == [
        (by_value[10], by_value[5]),
        (by_value[5], by_value[3]),
        (by_value[5], by_value[7]),
        (by_value[10], by_value[15]),
    ]
    assert edges(None) == []


def test_degenerate_tree_does_not_recurse():
    root = _build(range(1500))
    layout(root)
    assert node_count(root) == 1500
    assert len(edges(root)) == 1499


def test_tree_engine_commit_and_clear():
    engine = TreeEngine(LayoutParams(origin_x=0, origin_y=0))

    assert engine.commit(10) is True
    assert engine.commit(4) is True
    assert engine.commit(10) is False
    assert engine.count() == 2
    assert [n.id for n in engine.nodes()] == ["n1", "n2"]
    assert engine.root.left.x == -200

    state = engine.export_state()
    assert state["edges"] == [{"from": {"x": 0, "y": 0}, "to": {"x": -200, "y": 55}}]

    engine.clear()
    assert engine.root is None
    assert engine.count() == 0
    assert engine.commit(1) is True
    assert engine.nodes()[0].id == "n3"


def test_node_export_has_display_fields():
    node = Node("n9", 3)
    assert node.export() == {"id": "n9", "value": 3, "x": 0.0, "y": 0.0}
