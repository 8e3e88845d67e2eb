"""Score tracking for a single run."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logic import BalanceLogic


class ScoreTracker:
    """Accumulates points; the score only ever increases within a run."""

    def __init__(self, balance: "BalanceLogic"):
        self.balance = balance
        self.score: int = 0
        self.tiles_dug: int = 0
        self.pops: int = 0
        self.crushes: int = 0
        self.levels_cleared: int = 0

    def _award(self, points: int) -> int:
        pts = max(0, int(points))
        self.score += pts
        return pts

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_dig(self) -> int:
        self.tiles_dug += 1
        return self._award(self.balance.dig_points)

    def on_pump_defeat(self) -> int:
        self.pops += 1
        return self._award(self.balance.pump_defeat_points)

    def on_rock_crush(self, count: int) -> int:
        """Award a single rock impact; points scale linearly with the crush count."""
        n = max(0, int(count))
        self.crushes += n
        return self._award(self.balance.rock_crush_points * n)

    def on_level_clear(self) -> int:
        self.levels_cleared += 1
        return self._award(self.balance.level_bonus)

    def reset(self) -> None:
        self.score = 0
        self.tiles_dug = 0
        self.pops = 0
        self.crushes = 0
        self.levels_cleared = 0
