"""Utility functions and math helpers."""

import math
from dataclasses import dataclass
from enum import Enum

Cell = tuple[int, int]


@dataclass
class Vec2:
    """2D Vector class."""
    x: float
    y: float

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float):
        return Vec2(self.x * s, self.y * s)

    def __rmul__(self, s: float):
        return self.__mul__(s)

    def __truediv__(self, s: float):
        if abs(s) <= 1e-12:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / s, self.y / s)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self):
        l = self.length()
        if l <= 1e-9:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / l, self.y / l)

    @classmethod
    def from_cell(cls, cell: Cell) -> "Vec2":
        return cls(float(cell[0]), float(cell[1]))


class Direction(Enum):
    """Grid step direction. Screen-style axes: y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP_LEFT = (-1, -1)
    UP_RIGHT = (1, -1)
    DOWN_LEFT = (-1, 1)
    DOWN_RIGHT = (1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_cardinal(self) -> bool:
        return self.dx == 0 or self.dy == 0

    def facing(self) -> "Direction":
        """Cardinal facing for a step; diagonals face their horizontal side."""
        if self.is_cardinal:
            return self
        return Direction.RIGHT if self.dx > 0 else Direction.LEFT

    def step(self, cell: Cell, distance: int = 1) -> Cell:
        return (cell[0] + self.dx * distance, cell[1] + self.dy * distance)

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction | None":
        key = (sign(dx), sign(dy))
        for d in cls:
            if d.value == key:
                return d
        return None


CARDINALS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def sign(v: float) -> int:
    return (v > 0) - (v < 0)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Cell, b: Cell) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def move_towards(render: Vec2, target: Cell, speed: float, dt: float) -> tuple[Vec2, bool]:
    """Advance a render position toward a target cell.

    Returns the new position and whether it snapped onto the target, which
    happens once the remaining distance fits in a single step.
    """
    goal = Vec2.from_cell(target)
    step = float(speed) * float(dt)
    delta = goal - render
    d = delta.length()
    if d <= step:
        return goal, True
    return render + delta * (step / d), False
