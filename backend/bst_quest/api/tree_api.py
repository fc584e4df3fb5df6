from fastapi import APIRouter

from bst_quest.core.game.registry import get_game
from bst_quest.core.tree import direction_for, search_path

router = APIRouter(prefix="/tree", tags=["Tree"])


@router.get("/state")
async def get_tree_state():
    game = get_game()
    return game.tree_snapshot().model_dump(mode="json", by_alias=True)


@router.get("/path/{value}")
async def preview_path(value: int):
    """Path the marker would walk for ``value``; nothing is inserted."""
    game = get_game()
    root = game.tree.root
    path = search_path(root, value, game.tree.anchor)
    return {
        "value": value,
        "path": [{"x": x, "y": y} for x, y in path],
        "first_branch": direction_for(root, value).value if root is not None else None,
    }
