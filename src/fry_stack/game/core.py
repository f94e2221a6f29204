from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import controller
from .clock import LEVEL_DURATION_MS, Difficulty, LevelClock, get_difficulty
from .events import Command, GameEvent, GameState
from .grid import GameGrid
from .pieces import Piece, PieceCatalog, SpawnWeights
from .rules import ClearEngine, ClearPolicy, ClearResult, ScoringRules

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    difficulty: str = "normal"
    clear_policy: ClearPolicy = ClearPolicy.CLASSIC
    spawn_weights: SpawnWeights = field(default_factory=SpawnWeights)
    level_duration_ms: int = LEVEL_DURATION_MS


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the renderer once per frame."""

    board: np.ndarray
    active: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    high_score: int
    level: int
    level_countdown_seconds: int
    state: GameState
    difficulty: Difficulty


class GameSession:
    """Owns one game: board, pieces, score, level clock and state.

    Hosts drive it through `on_drop_tick`, `on_level_tick` and `on_input`.
    Every call runs to completion; illegal or blocked commands change
    nothing. Events produced along the way are collected until the host
    calls `pop_events`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.catalog = PieceCatalog(self.config.width, self.config.spawn_weights, rng=self.rng)
        self.clear_engine = ClearEngine(self.config.clear_policy, rules)
        self.clock = LevelClock(get_difficulty(self.config.difficulty), self.config.level_duration_ms)
        self.state = GameState.IDLE
        self.score = 0
        self.lines_cleared_total = 0
        self.games_started = 0
        self.active: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.last_clear: Optional[ClearResult] = None
        self._events: List[GameEvent] = []

    # ---------- State machine ----------
    @property
    def level(self) -> int:
        return self.clock.level

    @property
    def difficulty(self) -> Difficulty:
        return self.clock.difficulty

    @property
    def drop_interval(self) -> int:
        return self.clock.drop_interval

    def select_difficulty(self, name: str) -> bool:
        difficulty = get_difficulty(name)
        if self.state not in (GameState.IDLE, GameState.GAME_OVER):
            return False
        self.clock.difficulty = difficulty
        return True

    def start(self) -> bool:
        if self.state not in (GameState.IDLE, GameState.GAME_OVER):
            return False
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.last_clear = None
        self.clock.reset()
        self.active = self.catalog.next()
        self.next_piece = self.catalog.next()
        self.games_started += 1
        self._set_state(GameState.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.PLAYING:
            self._set_state(GameState.PAUSED)
        elif self.state is GameState.PAUSED:
            self._set_state(GameState.PLAYING)
        else:
            return False
        return True

    def _set_state(self, state: GameState) -> None:
        logger.debug("state %s -> %s", self.state.value, state.value)
        self.state = state

    # ---------- Host entry points ----------
    def on_drop_tick(self) -> bool:
        if self.state is not GameState.PLAYING:
            return False
        return controller.soft_drop_step(self)

    def on_level_tick(self) -> bool:
        if self.state is not GameState.PLAYING:
            return False
        leveled = self.clock.tick()
        if leveled:
            logger.debug("level %d, drop interval %d ms", self.clock.level, self.clock.drop_interval)
        return leveled

    def on_input(self, command: Command) -> bool:
        command = Command(command)
        if command is Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        if self.state is not GameState.PLAYING:
            return False
        if command is Command.MOVE_LEFT:
            return controller.translate(self, -1)
        if command is Command.MOVE_RIGHT:
            return controller.translate(self, 1)
        if command is Command.ROTATE:
            return controller.rotate(self)
        if command is Command.SOFT_DROP:
            return controller.soft_drop_step(self)
        controller.hard_drop(self)
        return True

    # ---------- Lock and clear ----------
    def lock_active_piece(self) -> ClearResult:
        """Lock, clear and respawn as one step."""
        piece = self.active
        assert piece is not None and self.next_piece is not None
        self.grid.place(piece.shape.cells, piece.row, piece.col)
        self.emit(GameEvent.LOCKED)
        self.active = self.next_piece
        self.next_piece = self.catalog.next()

        result = self.clear_engine.clear(self.grid)
        self.last_clear = result
        if result.lines:
            self.score += result.points
            self.lines_cleared_total += result.lines
            self.emit(GameEvent.CLEARED)
            logger.debug("cleared %d line(s) for %d points", result.lines, result.points)

        self.check_spawn()
        return result

    def check_spawn(self) -> bool:
        """Move to GAME_OVER if the active piece cannot sit at its spawn."""
        piece = self.active
        if piece is None or self.grid.is_occupiable(piece.shape.cells, piece.row, piece.col):
            return True
        self._set_state(GameState.GAME_OVER)
        self.emit(GameEvent.GAME_OVER)
        return False

    # ---------- Observers ----------
    def emit(self, event: GameEvent) -> None:
        self._events.append(event)

    def pop_events(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    def render_board(self) -> np.ndarray:
        piece = self.active
        if piece is None or self.state is GameState.IDLE:
            return self.grid.clone_state()
        return self.grid.overlay(piece.shape.cells, piece.row, piece.col)

    def snapshot(self, high_score: int = 0) -> GameSnapshot:
        return GameSnapshot(
            board=self.render_board(),
            active=self.active,
            next_piece=self.next_piece,
            score=self.score,
            high_score=max(int(high_score), self.score),
            level=self.clock.level,
            level_countdown_seconds=self.clock.seconds_remaining,
            state=self.state,
            difficulty=self.clock.difficulty,
        )
