from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

LEVEL_DURATION_MS = 20_000
LEVEL_TICK_MS = 1_000
MIN_DROP_INTERVAL_MS = 100


@dataclass(frozen=True)
class Difficulty:
    name: str
    initial_interval: int
    speedup: int


DIFFICULTIES: Dict[str, Difficulty] = {
    "easy": Difficulty("Easy", initial_interval=1200, speedup=60),
    "normal": Difficulty("Normal", initial_interval=1000, speedup=75),
    "hard": Difficulty("Hard", initial_interval=700, speedup=90),
}


def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown difficulty '{name}', expected one of {sorted(DIFFICULTIES)}") from None


def drop_interval(difficulty: Difficulty, level: int) -> int:
    """Milliseconds between gravity steps at `level`."""
    return max(difficulty.initial_interval - (level - 1) * difficulty.speedup, MIN_DROP_INTERVAL_MS)


class LevelClock:
    """Time-driven level progression.

    The countdown loses one second per `tick()`; when it runs out the level
    goes up by one and the countdown starts over. Levels never go down.
    """

    def __init__(self, difficulty: Difficulty, level_duration_ms: int = LEVEL_DURATION_MS) -> None:
        if level_duration_ms < LEVEL_TICK_MS:
            raise ValueError(f"level duration must be at least {LEVEL_TICK_MS} ms")
        self.difficulty = difficulty
        self.level_duration_ms = int(level_duration_ms)
        self.level = 1
        self.countdown_ms = self.level_duration_ms

    def reset(self) -> None:
        self.level = 1
        self.countdown_ms = self.level_duration_ms

    def tick(self) -> bool:
        """Advance one second. Returns True when the level went up."""
        self.countdown_ms -= LEVEL_TICK_MS
        if self.countdown_ms <= 0:
            self.level += 1
            self.countdown_ms = self.level_duration_ms
            return True
        return False

    @property
    def seconds_remaining(self) -> int:
        return self.countdown_ms // 1000

    @property
    def drop_interval(self) -> int:
        return drop_interval(self.difficulty, self.level)
