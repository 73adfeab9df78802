"""Persistent high score.

Stores best scores in ~/.tower-defense/scores.json.
"""

import json
import os
import threading

_SCORES_DIR = os.path.expanduser("~/.tower-defense")
_SCORES_FILE = os.path.join(_SCORES_DIR, "scores.json")


class HighScoreStore:
    """A single key-value slot per game name in a JSON file."""

    def __init__(self, path: str = _SCORES_FILE, game: str = "tower_defense"):
        self.path = path
        self.game = game
        self._lock = threading.Lock()

    def _load_all(self) -> dict:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, default: int = 0) -> int:
        """Load the best score. Returns default if no record."""
        value = self._load_all().get(self.game, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def save(self, score: int) -> None:
        """Save the best score."""
        with self._lock:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            data = self._load_all()
            data[self.game] = int(score)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)


class MemoryScoreStore:
    """In-process slot for hosts that do not persist anything."""

    def __init__(self, score: int = 0):
        self.score = score

    def load(self, default: int = 0) -> int:
        return self.score or default

    def save(self, score: int) -> None:
        self.score = score
