from __future__ import annotations

from enum import Enum, IntEnum


class GameState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(IntEnum):
    """Discrete input commands accepted by `GameSession.on_input`."""

    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    TOGGLE_PAUSE = 5


class GameEvent(Enum):
    """Feedback events for audio and other observers."""

    ROTATED = "rotate"
    LOCKED = "lock"
    CLEARED = "clear"
    GAME_OVER = "game_over"
