from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from fry_stack.game.cells import CellType

Color = Tuple[int, int, int]


CELL_COLORS: Dict[CellType, Color] = {
    CellType.FRY: (250, 204, 21),
    CellType.BURGER: (194, 110, 45),
    CellType.POTATO: (133, 99, 45),
    CellType.KETCHUP: (220, 53, 53),
    CellType.MUSTARD: (240, 220, 60),
    CellType.DONUT: (236, 120, 180),
    CellType.ONION: (168, 110, 210),
}

# Short labels drawn on item cells
CELL_GLYPHS: Dict[CellType, str] = {
    CellType.BURGER: "B",
    CellType.POTATO: "P",
    CellType.KETCHUP: "K",
    CellType.MUSTARD: "M",
    CellType.DONUT: "D",
    CellType.ONION: "O",
}


@dataclass(frozen=True)
class Theme:
    background: Color
    board: Color
    empty: Color
    panel: Color
    text: Color
    accent: Color


THEMES: Dict[str, Theme] = {
    "dark": Theme(
        background=(15, 23, 42),
        board=(51, 65, 85),
        empty=(30, 41, 59),
        panel=(30, 41, 59),
        text=(226, 232, 240),
        accent=(250, 204, 21),
    ),
    "light": Theme(
        background=(241, 245, 249),
        board=(203, 213, 225),
        empty=(226, 232, 240),
        panel=(226, 232, 240),
        text=(15, 23, 42),
        accent=(202, 138, 4),
    ),
}


def color_for_value(value: int, theme: Theme) -> Color:
    if value == CellType.EMPTY:
        return theme.empty
    return CELL_COLORS.get(CellType(abs(int(value))), (200, 200, 200))
