"""Game module for Fry Stack.

Exports the core engine and supporting classes:
- GameGrid: Board representation, collision queries and line removal
- PieceShape, Piece, PieceCatalog: Shapes and the weighted piece source
- ClearEngine, ClearPolicy, ScoringRules: Post-lock clearing and scoring
- LevelClock, Difficulty: Time-driven level progression and drop speed
- GameSession: State machine owning one game
- GameScheduler: Converts host time into drop and level ticks
"""

from .cells import CellType, ITEM_KINDS, PRIMARY_ITEM
from .grid import GameGrid
from .pieces import InvalidShapeError, Piece, PieceCatalog, PieceDef, PieceShape, SpawnWeights
from .rules import ClearEngine, ClearPolicy, ClearResult, LineMatch, ScoringRules
from .clock import DIFFICULTIES, Difficulty, LevelClock, drop_interval
from .events import Command, GameEvent, GameState
from .core import GameConfig, GameSession, GameSnapshot
from .scheduler import GameScheduler

__all__ = [
    "CellType",
    "ITEM_KINDS",
    "PRIMARY_ITEM",
    "GameGrid",
    "InvalidShapeError",
    "Piece",
    "PieceCatalog",
    "PieceDef",
    "PieceShape",
    "SpawnWeights",
    "ClearEngine",
    "ClearPolicy",
    "ClearResult",
    "LineMatch",
    "ScoringRules",
    "DIFFICULTIES",
    "Difficulty",
    "LevelClock",
    "drop_interval",
    "Command",
    "GameEvent",
    "GameState",
    "GameConfig",
    "GameSession",
    "GameSnapshot",
    "GameScheduler",
]
