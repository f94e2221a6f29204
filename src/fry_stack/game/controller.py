"""Moving, rotating and dropping the active piece.

Every function works on the session's active piece and leaves it untouched
when the requested move is blocked. Locking is delegated back to the
session so that board, score and piece replacement change together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from .events import GameEvent
from .grid import GameGrid
from .pieces import Piece

if TYPE_CHECKING:
    from .core import GameSession


def kick_offsets(shape_width: int) -> Iterator[int]:
    """Column displacements tried when a rotated shape collides in place.

    Steps of +1, -2, +3, -4, ... are applied one after another, so the
    anchor visits +1, -1, +2, -2, ... until it would move more than
    `shape_width + 1` columns away.
    """
    limit = shape_width + 1
    offset, step = 0, 1
    while True:
        offset += step
        if abs(offset) > limit:
            return
        yield offset
        step = -(step + (1 if step > 0 else -1))


def find_rotation(grid: GameGrid, piece: Piece) -> Optional[Piece]:
    """Clockwise rotation of `piece` that fits on `grid`, or None."""
    if piece.shape.is_rotation_invariant():
        return None
    shape = piece.shape.rotated()
    if grid.is_occupiable(shape.cells, piece.row, piece.col):
        return piece.with_shape(shape)
    for offset in kick_offsets(shape.width):
        col = piece.col + offset
        if grid.is_occupiable(shape.cells, piece.row, col):
            return piece.with_shape(shape, col)
    return None


def can_move(grid: GameGrid, piece: Piece, drow: int, dcol: int) -> bool:
    return grid.is_occupiable(piece.shape.cells, piece.row + drow, piece.col + dcol)


def translate(session: "GameSession", dx: int) -> bool:
    piece = session.active
    if piece is None or not can_move(session.grid, piece, 0, dx):
        return False
    session.active = piece.moved(0, dx)
    return True


def soft_drop_step(session: "GameSession") -> bool:
    """Move the piece down one row, or lock it where it is."""
    piece = session.active
    if piece is None:
        return False
    if can_move(session.grid, piece, 1, 0):
        session.active = piece.moved(1, 0)
        return True
    session.lock_active_piece()
    return False


def hard_drop(session: "GameSession") -> int:
    """Drop the piece as far as it goes and lock it. Returns rows travelled."""
    piece = session.active
    if piece is None:
        return 0
    rows = 0
    while can_move(session.grid, piece, 1, 0):
        piece = piece.moved(1, 0)
        rows += 1
    session.active = piece
    session.lock_active_piece()
    return rows


def rotate(session: "GameSession") -> bool:
    piece = session.active
    if piece is None:
        return False
    rotated = find_rotation(session.grid, piece)
    if rotated is None:
        return False
    session.active = rotated
    session.emit(GameEvent.ROTATED)
    return True
