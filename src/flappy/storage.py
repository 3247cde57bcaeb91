# src/flappy/storage.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Union

from .config import HIGH_SCORE_FILE, HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class HighScoreStore:
    """
    Single-slot best-score persistence backed by a small JSON file.
    Reading never fails: anything missing or malformed reads as 0.
    """
    def __init__(self, path: Union[str, Path] = HIGH_SCORE_FILE, key: str = HIGH_SCORE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = int(data[self.key])
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning(f"Ignoring unreadable high score file {self.path}: {e}")
            return 0
        if value < 0:
            logger.warning(f"Ignoring negative high score {value} in {self.path}")
            return 0
        return value

    def save(self, value: int) -> bool:
        """Write the best score. Returns False (and logs) instead of raising on I/O errors."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: int(value)}, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save high score to {self.path}: {e}")
            return False
        logger.info(f"High score {value} saved to {self.path}")
        return True
