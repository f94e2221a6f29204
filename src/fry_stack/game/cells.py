from __future__ import annotations

from enum import IntEnum
from typing import Tuple


class CellType(IntEnum):
    """Value stored in one board or shape cell."""

    EMPTY = 0
    FRY = 1  # filler material
    BURGER = 2
    POTATO = 3
    KETCHUP = 4
    MUSTARD = 5
    DONUT = 6
    ONION = 7


ITEM_KINDS: Tuple[CellType, ...] = tuple(c for c in CellType if c > CellType.FRY)

PRIMARY_ITEM = CellType.BURGER


def is_item(value: int) -> bool:
    return int(value) > CellType.FRY
