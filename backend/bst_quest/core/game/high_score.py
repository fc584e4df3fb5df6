"""Local persistence for the single high-score scalar."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock

logger = logging.getLogger(__name__)


class HighScoreRepository:
    """JSON file holding ``{key: int}``; other keys in the file are kept."""

    def __init__(self, path: Path, key: str = "bst_high_score") -> None:
        self._path = Path(path)
        self._key = key
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        raw = self._read()
        value = raw.get(self._key, 0)
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        logger.warning("High score %r in %s is not an integer, using 0", value, self._path)
        return 0

    def save(self, value: int) -> None:
        with self._lock:
            data = self._read()
            data[self._key] = int(value)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, ValueError):
            logger.warning("Unreadable high score file %s, using 0", self._path)
            return {}
        if not isinstance(raw, dict):
            return {}
        return raw
