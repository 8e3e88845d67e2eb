"""Player input collection.

Window key events are folded into one :class:`TickInput` per simulation tick.
The pump button is reported both as a level (held) and as an edge (pressed
since the previous tick), so a quick tap between two ticks is not lost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from utils import Direction


@dataclass(frozen=True)
class TickInput:
    move: Optional[Direction] = None
    pump_pressed: bool = False
    pump_held: bool = False
    restart: bool = False


class InputTracker:
    """Tracks held keys between ticks."""

    def __init__(self):
        self._held_dirs: list[Direction] = []
        self._pump_down = False
        self._pump_latched = False
        self._restart = False

    def press_direction(self, direction: Direction) -> None:
        if direction in self._held_dirs:
            self._held_dirs.remove(direction)
        # Most recent press wins.
        self._held_dirs.append(direction)

    def release_direction(self, direction: Direction) -> None:
        if direction in self._held_dirs:
            self._held_dirs.remove(direction)

    def press_pump(self) -> None:
        if not self._pump_down:
            self._pump_latched = True
        self._pump_down = True

    def release_pump(self) -> None:
        self._pump_down = False

    def request_restart(self) -> None:
        self._restart = True

    def reset(self) -> None:
        self._held_dirs.clear()
        self._pump_down = False
        self._pump_latched = False
        self._restart = False

    @property
    def current_direction(self) -> Optional[Direction]:
        return self._held_dirs[-1] if self._held_dirs else None

    def next_tick(self) -> TickInput:
        """Build the input for one tick and consume the one-shot flags."""
        tick = TickInput(
            move=self.current_direction,
            pump_pressed=self._pump_latched,
            # A tap released before this tick still holds for the press tick.
            pump_held=self._pump_down or self._pump_latched,
            restart=self._restart,
        )
        self._pump_latched = False
        self._restart = False
        return tick
