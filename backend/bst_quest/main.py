# backend/bst_quest/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bst_quest import __version__

# Routers
from bst_quest.api.game_api import router as game_router
from bst_quest.api.tree_api import router as tree_router

# Core
from bst_quest.core.game.registry import get_game, get_settings

logger = logging.getLogger("uvicorn.error")


# -----------------------------
# App
# -----------------------------
app = FastAPI(title="BST Quest · Binary Search Tree Insertion Game", version=__version__)


# -----------------------------
# CORS (browser front-end runs on another origin)
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# Routers
# -----------------------------
app.include_router(game_router, tags=["Game"])
app.include_router(tree_router, tags=["Tree"])


_settings = get_settings()
logger.info(">>> BST Quest loaded: GAME + TREE")
logger.info(">>> Challenge threshold: %s, lives: %s", _settings.challenge_threshold, _settings.start_lives)
logger.info(">>> High score file: %s", _settings.high_score_path)


# -----------------------------
# Home / status
# -----------------------------
@app.get("/")
def home():
    game = get_game()
    return {
        "status": "running",
        "routes": [
            "/game/session",
            "/game/state",
            "/game/insert",
            "/game/answer",
            "/game/reset",
            "/game/viewport",
            "/tree/state",
            "/tree/path/{value}",
        ],
        "operator": game.operator,
        "mode": game.mode.value,
    }


@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "service": "BST Quest Backend",
        "version": __version__,
    }
