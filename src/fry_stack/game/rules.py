from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .cells import PRIMARY_ITEM, CellType, is_item
from .grid import GameGrid


class ClearPolicy(str, Enum):
    """Which lines count as complete after a lock.

    CLASSIC           full row of fries, or three identical items side by side
    HYBRID            full row of fries, or a full row mixing fries with at least
                      three of one single item kind
    ROWS_AND_COLUMNS  CLASSIC applied to rows and to columns
    """

    CLASSIC = "classic"
    HYBRID = "hybrid"
    ROWS_AND_COLUMNS = "rows_and_columns"


@dataclass(frozen=True)
class LineMatch:
    """Why a line was marked. `item` is None for a full-fry clear."""

    index: int
    item: Optional[CellType] = None

    @property
    def is_item_combo(self) -> bool:
        return self.item is not None


@dataclass
class ScoringRules:
    line_base: int = 100
    primary_item: CellType = PRIMARY_ITEM
    primary_item_bonus: int = 150
    item_bonus: int = 50

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return self.line_base * lines * lines

    def bonus_for_item(self, kind: Optional[CellType]) -> int:
        if kind is None:
            return 0
        if kind == self.primary_item:
            return self.primary_item_bonus
        return self.item_bonus


@dataclass(frozen=True)
class ClearResult:
    rows: Tuple[LineMatch, ...] = ()
    columns: Tuple[LineMatch, ...] = ()
    points: int = 0

    @property
    def lines(self) -> int:
        return len(self.rows) + len(self.columns)

    @property
    def row_indices(self) -> Tuple[int, ...]:
        return tuple(m.index for m in self.rows)

    @property
    def column_indices(self) -> Tuple[int, ...]:
        return tuple(m.index for m in self.columns)


def is_fry_line(line: np.ndarray) -> bool:
    return bool(np.all(line == CellType.FRY))


def find_item_run(line: np.ndarray, run_length: int = 3) -> Optional[CellType]:
    """Kind of the first left-to-right run of `run_length` identical items."""
    values = [int(v) for v in line]
    for start in range(len(values) - run_length + 1):
        first = values[start]
        if not is_item(first):
            continue
        if all(v == first for v in values[start + 1 : start + run_length]):
            return CellType(first)
    return None


def hybrid_item_kind(line: np.ndarray, minimum: int = 3) -> Optional[CellType]:
    """Item kind completing a line made only of fries and one item kind."""
    values = [int(v) for v in line]
    if any(v == CellType.EMPTY for v in values):
        return None
    kinds = {v for v in values if is_item(v)}
    if len(kinds) != 1:
        return None
    kind = kinds.pop()
    if values.count(kind) < minimum:
        return None
    return CellType(kind)


def match_line(line: np.ndarray, policy: ClearPolicy, index: int) -> Optional[LineMatch]:
    # Fry rule first; a line is marked at most once
    if is_fry_line(line):
        return LineMatch(index)
    if policy is ClearPolicy.HYBRID:
        kind = hybrid_item_kind(line)
    else:
        kind = find_item_run(line)
    if kind is None:
        return None
    return LineMatch(index, kind)


class ClearEngine:
    """Scan a locked board, remove completed lines and score them."""

    def __init__(self, policy: ClearPolicy = ClearPolicy.CLASSIC, rules: Optional[ScoringRules] = None) -> None:
        self.policy = ClearPolicy(policy)
        self.rules = rules or ScoringRules()

    def scan(self, grid: GameGrid) -> Tuple[Tuple[LineMatch, ...], Tuple[LineMatch, ...]]:
        state = grid.grid
        rows = []
        for y in range(grid.height):
            match = match_line(state[y, :], self.policy, y)
            if match is not None:
                rows.append(match)
        columns = []
        if self.policy is ClearPolicy.ROWS_AND_COLUMNS:
            for x in range(grid.width):
                match = match_line(state[:, x], self.policy, x)
                if match is not None:
                    columns.append(match)
        return tuple(rows), tuple(columns)

    def score(self, matches) -> int:
        matches = list(matches)
        points = self.rules.score_for_lines(len(matches))
        for m in matches:
            points += self.rules.bonus_for_item(m.item)
        return points

    def clear(self, grid: GameGrid) -> ClearResult:
        rows, columns = self.scan(grid)
        if not rows and not columns:
            return ClearResult()
        # Column indices are unaffected by removing rows
        grid.remove_rows(m.index for m in rows)
        grid.remove_columns(m.index for m in columns)
        return ClearResult(rows=rows, columns=columns, points=self.score(rows + columns))
