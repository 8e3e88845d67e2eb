"""Hazards: Fygar fire breath and falling rocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from config import GRID_H, GRID_W
from utils import Cell, Direction

if TYPE_CHECKING:
    from enemy import Enemy
    from level import GameState
    from logic import BalanceLogic
    from map import DirtGrid


LOG = logging.getLogger(__name__)


@dataclass
class Fire:
    """Fire breath projected from a Fygar's tile along its facing."""

    id: int
    origin: Cell
    direction: Direction
    created_at: float
    duration: float
    owner_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.duration <= 0.0:
            raise ValueError(f"fire duration must be positive, got {self.duration}")

    def age(self, now: float) -> float:
        return float(now) - self.created_at

    def expired(self, now: float) -> bool:
        return self.age(now) >= self.duration


def fire_range(age: float, balance: "BalanceLogic") -> int:
    """Hazard length in tiles for a fire of the given age.

    warning -> 0, grow -> 1, full -> 2, shrink -> 1, afterwards 0.
    """
    if age < 0.0:
        return 0
    t = balance.fire_warning
    if age < t:
        return 0
    t += balance.fire_grow
    if age < t:
        return 1
    t += balance.fire_full
    if age < t:
        return 2
    t += balance.fire_shrink
    if age < t:
        return 1
    return 0


def fire_tiles(fire: Fire, now: float, balance: "BalanceLogic") -> list[Cell]:
    """Tiles currently covered by the flame (may extend past the grid edge)."""
    reach = fire_range(fire.age(now), balance)
    return [fire.direction.step(fire.origin, d) for d in range(1, reach + 1)]


def _facing_player(enemy: "Enemy", player_pos: Cell) -> bool:
    if enemy.direction is Direction.LEFT:
        return enemy.pos[0] > player_pos[0]
    if enemy.direction is Direction.RIGHT:
        return enemy.pos[0] < player_pos[0]
    return False


def try_breathe_fire(enemy: "Enemy", state: "GameState", pumped: bool) -> Optional[Fire]:
    """Attempt to start a fire breath. Every gate must pass, the dice roll last."""
    if enemy.kind.value != "fygar" or pumped:
        return None
    grid = state.grid
    x, y = enemy.pos
    if not grid.in_bounds(x, y) or grid.has_dirt(x, y):
        return None

    balance = state.balance
    now = state.clock
    if now - enemy.last_fire_time < balance.fire_cooldown:
        return None

    player_pos = state.player.pos
    if player_pos[1] != y or abs(player_pos[0] - x) > balance.fire_distance:
        return None
    if not _facing_player(enemy, player_pos):
        return None
    if state.rng.random() >= balance.fire_probability:
        return None

    fire = Fire(
        id=state.entities.next_id(),
        origin=enemy.pos,
        direction=enemy.direction,
        created_at=now,
        duration=balance.fire_duration,
        owner_id=enemy.id,
    )
    state.entities.fires.append(fire)
    enemy.last_fire_time = now
    enemy.firing = True
    LOG.debug("Fygar %d breathing fire at %s facing %s", enemy.id, fire.origin, fire.direction.name)
    return fire


def update_fires(state: "GameState") -> None:
    """Drop fires whose age reached their total duration."""
    now = state.clock
    state.entities.fires = [f for f in state.entities.fires if not f.expired(now)]


class RockState(Enum):
    STABLE = "stable"
    WOBBLING = "wobbling"
    FALLING = "falling"
    LANDED = "landed"


@dataclass
class Rock:
    """Rock sitting in one column; ``y`` is fractional while it falls."""

    id: int
    x: int
    y: float
    state: RockState = RockState.STABLE
    wobble_timer: float = 0.0
    fall_speed: float = 0.0

    def __post_init__(self) -> None:
        if not (0 <= self.x < GRID_W) or not (0.0 <= self.y <= GRID_H - 1):
            raise ValueError(f"rock position ({self.x}, {self.y}) is outside the grid")

    @property
    def cell(self) -> Cell:
        return (int(self.x), int(self.y))

    @property
    def dangerous(self) -> bool:
        return self.state in (RockState.FALLING, RockState.LANDED)

    @property
    def solid(self) -> bool:
        return self.state in (RockState.STABLE, RockState.WOBBLING)


def rock_supported(rock: Rock, grid: "DirtGrid") -> bool:
    row = int(rock.y)
    if row >= grid.height - 1:
        return True
    return grid.has_dirt(rock.x, row + 1)


def _advance_fall(rock: Rock, grid: "DirtGrid", dt: float) -> None:
    # Walk the rows crossed this tick so a long frame cannot skip a landing row.
    goal = rock.y + rock.fall_speed * dt
    bottom = grid.height - 1
    for row in range(int(rock.y), min(int(goal), bottom) + 1):
        if row >= bottom or grid.has_dirt(rock.x, row + 1):
            rock.y = max(rock.y, float(row))
            rock.state = RockState.LANDED
            LOG.debug("Rock %d landed at (%d, %d)", rock.id, rock.x, row)
            return
    rock.y = goal


def update_rock(rock: Rock, grid: "DirtGrid", dt: float, balance: "BalanceLogic") -> None:
    if rock.state is RockState.STABLE:
        if not rock_supported(rock, grid):
            rock.state = RockState.WOBBLING
            rock.wobble_timer = 0.0
    elif rock.state is RockState.WOBBLING:
        rock.wobble_timer += dt
        if rock.wobble_timer >= balance.rock_wobble_time:
            rock.state = RockState.FALLING
            rock.fall_speed = balance.rock_fall_speed
    elif rock.state is RockState.FALLING:
        _advance_fall(rock, grid, dt)


def update_rocks(state: "GameState", dt: float) -> None:
    for rock in state.entities.rocks:
        update_rock(rock, state.grid, dt, state.balance)


def remove_landed_rocks(state: "GameState") -> int:
    """Remove rocks that finished falling. Runs after the collision pass."""
    before = len(state.entities.rocks)
    state.entities.rocks = [r for r in state.entities.rocks if r.state is not RockState.LANDED]
    return before - len(state.entities.rocks)
