from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(os.getenv("FRY_STACK_HOME", Path.home() / ".fry_stack")) / "highscore.json"


class HighScoreStore:
    """Best score kept in a small JSON file.

    The engine never touches this; the host reads the stored value for
    display and calls `record` with the session score.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH
        self._best: Optional[int] = None

    def load(self) -> int:
        if self._best is not None:
            return self._best
        best = 0
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            best = max(0, int(data.get("high_score", 0)))
        except FileNotFoundError:
            pass
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("ignoring unreadable high score file %s: %s", self.path, exc)
        self._best = best
        return best

    def record(self, score: int) -> int:
        """Store `score` if it beats the current best. Returns the best score."""
        best = self.load()
        if score <= best:
            return best
        self._best = int(score)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump({"high_score": self._best}, f)
        except OSError as exc:
            logger.warning("could not save high score to %s: %s", self.path, exc)
        return self._best
