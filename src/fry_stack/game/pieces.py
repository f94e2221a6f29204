from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .cells import CellType
from .grid import iter_cells


class InvalidShapeError(ValueError):
    """A shape matrix that can never be placed on a board."""


_VALID_VALUES = frozenset(int(c) for c in CellType)


class PieceShape:
    """Immutable rectangular matrix of `CellType` values with at least one filled cell."""

    __slots__ = ("cells",)

    def __init__(self, cells) -> None:
        arr = np.array(cells, dtype=np.int8)
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidShapeError(f"shape must be a non-empty 2-D matrix, got {arr.shape}")
        if not set(np.unique(arr).tolist()) <= _VALID_VALUES:
            raise InvalidShapeError(f"shape contains unknown cell values: {arr.tolist()}")
        if not np.any(arr != CellType.EMPTY):
            raise InvalidShapeError("shape has no filled cells")
        arr.setflags(write=False)
        self.cells = arr

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    def rotated(self) -> "PieceShape":
        # Clockwise quarter turn
        return PieceShape(np.rot90(self.cells, 1, axes=(1, 0)))

    def is_rotation_invariant(self) -> bool:
        """True for a single cell or a square filled with one cell kind."""
        if self.height == 1 and self.width == 1:
            return True
        if self.height != self.width:
            return False
        first = self.cells[0, 0]
        return first != CellType.EMPTY and bool(np.all(self.cells == first))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceShape):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"PieceShape({self.cells.tolist()})"


@dataclass(frozen=True)
class Piece:
    shape: PieceShape
    kind: CellType
    row: int = 0
    col: int = 0

    def moved(self, drow: int, dcol: int) -> "Piece":
        return replace(self, row=self.row + drow, col=self.col + dcol)

    def with_shape(self, shape: PieceShape, col: Optional[int] = None) -> "Piece":
        return replace(self, shape=shape, col=self.col if col is None else col)

    def cells(self) -> List[Tuple[int, int]]:
        return [(r, c) for r, c, _ in iter_cells(self.shape.cells, self.row, self.col)]


@dataclass(frozen=True)
class PieceDef:
    """A catalog entry: a shape and the kind it is spawned as."""

    shape: PieceShape
    kind: CellType


_E = CellType.EMPTY
_F = CellType.FRY

FILLER_SHAPES: Tuple[PieceShape, ...] = (
    PieceShape([[_F, _F, _F, _F]]),  # I
    PieceShape([[_F, _E, _E], [_F, _F, _F]]),  # L
    PieceShape([[_E, _E, _F], [_F, _F, _F]]),  # J
    PieceShape([[_F, _F], [_F, _F]]),  # O
    PieceShape([[_E, _F, _F], [_F, _F, _E]]),  # S
    PieceShape([[_E, _F, _E], [_F, _F, _F]]),  # T
    PieceShape([[_F, _F, _E], [_E, _F, _F]]),  # Z
)

SINGLE_ITEM_PIECES: Tuple[PieceDef, ...] = tuple(
    PieceDef(PieceShape([[kind]]), kind)
    for kind in (
        CellType.BURGER,
        CellType.POTATO,
        CellType.KETCHUP,
        CellType.MUSTARD,
        CellType.DONUT,
        CellType.ONION,
    )
)


def _item_pieces() -> Tuple[PieceDef, ...]:
    b, k, m, p = CellType.BURGER, CellType.KETCHUP, CellType.MUSTARD, CellType.POTATO
    d, o = CellType.DONUT, CellType.ONION
    return (
        PieceDef(PieceShape([[b, b]]), b),
        PieceDef(PieceShape([[k, k]]), k),
        PieceDef(PieceShape([[m, m]]), m),
        PieceDef(PieceShape([[p, p]]), p),
        PieceDef(PieceShape([[d, d], [d, d]]), d),
        PieceDef(PieceShape([[o, _E], [o, o]]), o),
    )


MULTI_ITEM_PIECES: Tuple[PieceDef, ...] = _item_pieces()


@dataclass
class SpawnWeights:
    filler: float = 0.5
    single_item: float = 0.25
    multi_item: float = 0.25

    def as_tuple(self) -> Tuple[float, float, float]:
        return (float(self.filler), float(self.single_item), float(self.multi_item))


class PieceCatalog:
    """Weighted random source of pieces, spawned centred on row 0."""

    FILLER = "filler"
    SINGLE_ITEM = "single_item"
    MULTI_ITEM = "multi_item"

    def __init__(
        self,
        board_width: int = 10,
        weights: Optional[SpawnWeights] = None,
        rng: Optional[random.Random] = None,
        filler_shapes: Sequence[PieceShape] = FILLER_SHAPES,
        single_items: Sequence[PieceDef] = SINGLE_ITEM_PIECES,
        multi_items: Sequence[PieceDef] = MULTI_ITEM_PIECES,
    ) -> None:
        self.board_width = int(board_width)
        self.weights = weights or SpawnWeights()
        self.rng = rng or random.Random()
        w = self.weights.as_tuple()
        if any(x < 0 for x in w) or sum(w) <= 0:
            raise ValueError(f"spawn weights must be non-negative with a positive sum: {w}")
        self._pools: List[Tuple[str, List[PieceDef]]] = [
            (self.FILLER, [PieceDef(s, CellType.FRY) for s in filler_shapes]),
            (self.SINGLE_ITEM, list(single_items)),
            (self.MULTI_ITEM, list(multi_items)),
        ]
        for (name, pool), weight in zip(self._pools, w):
            if weight > 0 and not pool:
                raise ValueError(f"category '{name}' has weight {weight} but no pieces")

    def spawn(self, shape: PieceShape, kind: CellType) -> Piece:
        col = self.board_width // 2 - shape.width // 2
        return Piece(shape=shape, kind=CellType(kind), row=0, col=col)

    def next(self) -> Piece:
        _, pool = self.rng.choices(self._pools, weights=self.weights.as_tuple())[0]
        entry = self.rng.choice(pool)
        return self.spawn(entry.shape, entry.kind)
