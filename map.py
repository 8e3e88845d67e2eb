"""Dirt grid: which tiles still hold dirt and which are dug-out tunnels."""

from config import GRID_H, GRID_W


class DirtGrid:
    """Fixed-size dirt/tunnel field indexed as ``(x, y)``.

    Reads and writes are not bounds checked: callers filter coordinates with
    :meth:`in_bounds` first.
    """

    def __init__(self, width: int = GRID_W, height: int = GRID_H):
        self.width = int(width)
        self.height = int(height)
        self._dirt: list[list[bool]] = []
        self.reset_full()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def has_dirt(self, x: int, y: int) -> bool:
        return self._dirt[y][x]

    def is_tunnel(self, x: int, y: int) -> bool:
        return not self._dirt[y][x]

    def clear(self, x: int, y: int) -> bool:
        """Dig out a tile. Returns True when dirt was actually removed."""
        had = self._dirt[y][x]
        self._dirt[y][x] = False
        return had

    def reset_full(self) -> None:
        self._dirt = [[True for _ in range(self.width)] for _ in range(self.height)]

    def cells(self):
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def tunnel_count(self) -> int:
        return sum(1 for row in self._dirt for v in row if not v)

    def rows(self) -> tuple[tuple[bool, ...], ...]:
        return tuple(tuple(row) for row in self._dirt)
