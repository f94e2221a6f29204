from __future__ import annotations

from typing import Dict, List, Optional

from fry_stack.game.events import Command


class KeyRepeater:
    """Re-sends held commands at a fixed cadence.

    The first press is sent immediately by `press`; while the key stays down
    `update` returns the command again every `interval_ms`. Holding a new
    horizontal direction replaces the previous one.
    """

    HORIZONTAL = (Command.MOVE_LEFT, Command.MOVE_RIGHT)

    def __init__(self, intervals: Optional[Dict[Command, int]] = None) -> None:
        self.intervals: Dict[Command, int] = intervals or {
            Command.MOVE_LEFT: 75,
            Command.MOVE_RIGHT: 75,
            Command.SOFT_DROP: 50,
        }
        self._held: Dict[Command, int] = {}

    def press(self, command: Command) -> Command:
        if command in self.intervals:
            if command in self.HORIZONTAL:
                for other in self.HORIZONTAL:
                    self._held.pop(other, None)
            self._held[command] = 0
        return command

    def release(self, command: Command) -> None:
        self._held.pop(command, None)

    def clear(self) -> None:
        self._held.clear()

    def update(self, elapsed_ms: int) -> List[Command]:
        out: List[Command] = []
        for command in list(self._held):
            interval = self.intervals[command]
            acc = self._held[command] + int(elapsed_ms)
            while acc >= interval:
                acc -= interval
                out.append(command)
            self._held[command] = acc
        return out
