from __future__ import annotations

from .clock import LEVEL_TICK_MS
from .core import GameSession
from .events import GameState


class GameScheduler:
    """Turns elapsed host time into drop and level ticks for a session.

    Time only accumulates while the session is PLAYING, so pausing keeps
    whatever partial progress was made toward the next tick. The drop timer
    is rearmed whenever the level (and with it the interval) changes, and
    both timers restart when a new game begins.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.drop_elapsed_ms = 0
        self.level_elapsed_ms = 0
        self._game = session.games_started

    def reset(self) -> None:
        self.drop_elapsed_ms = 0
        self.level_elapsed_ms = 0
        self._game = self.session.games_started

    def advance(self, elapsed_ms: int) -> int:
        """Feed `elapsed_ms` of wall time. Returns the number of drop ticks fired."""
        session = self.session
        if session.games_started != self._game:
            self.reset()
        if session.state is not GameState.PLAYING or elapsed_ms <= 0:
            return 0

        self.level_elapsed_ms += int(elapsed_ms)
        while self.level_elapsed_ms >= LEVEL_TICK_MS and session.state is GameState.PLAYING:
            self.level_elapsed_ms -= LEVEL_TICK_MS
            if session.on_level_tick():
                self.drop_elapsed_ms = 0

        drops = 0
        self.drop_elapsed_ms += int(elapsed_ms)
        while self.drop_elapsed_ms >= session.drop_interval and session.state is GameState.PLAYING:
            self.drop_elapsed_ms -= session.drop_interval
            session.on_drop_tick()
            drops += 1
        return drops
