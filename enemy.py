"""Enemy entity and its per-tick state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from config import GRID_H, GRID_W
from enemy_behaviors.base import Behavior
from enemy_behaviors.fygar import Fygar
from enemy_behaviors.pooka import Pooka
from pathing import choose_direction
from pump import is_pumped
from utils import Cell, Direction, Vec2, move_towards

if TYPE_CHECKING:
    from level import GameState
    from logic import BalanceLogic

MAX_INFLATION = 4


class EnemyKind(str, Enum):
    POOKA = "pooka"
    FYGAR = "fygar"


_BEHAVIOR_IMPLS: dict[EnemyKind, Behavior] = {
    EnemyKind.POOKA: Pooka(),
    EnemyKind.FYGAR: Fygar(),
}


@dataclass
class Enemy:
    """Enemy entity.

    ``spawn`` is fixed for the enemy's lifetime; life loss sends it back there.
    ``pos`` only changes when the walk toward ``target`` completes.
    """
    id: int
    kind: EnemyKind
    spawn: Cell
    speed: float
    pos: Cell = None
    render: Vec2 = None
    target: Cell = None
    direction: Direction = Direction.DOWN
    ghost_target: Optional[Cell] = None
    inflation: int = 0
    deflate_timer: float = 0.0
    alive_time: float = 0.0
    last_fire_time: float = float("-inf")
    firing: bool = False
    moving: bool = False
    in_dirt: bool = True
    boosted: bool = False

    def __post_init__(self) -> None:
        self.kind = EnemyKind(self.kind)
        sx, sy = self.spawn
        if not (0 <= sx < GRID_W and 0 <= sy < GRID_H):
            raise ValueError(f"enemy spawn {self.spawn} is outside the grid")
        if not (0 <= self.inflation <= MAX_INFLATION):
            raise ValueError(f"inflation must be within 0..{MAX_INFLATION}, got {self.inflation}")
        if self.pos is None:
            self.pos = self.spawn
        if self.target is None:
            self.target = self.pos
        if self.render is None:
            self.render = Vec2.from_cell(self.pos)

    @property
    def behavior(self) -> Behavior:
        return _BEHAVIOR_IMPLS[self.kind]

    def reset_to_spawn(self) -> None:
        """Return to spawn and drop all transient state (speed boost is kept)."""
        self.pos = self.spawn
        self.render = Vec2.from_cell(self.spawn)
        self.target = self.spawn
        self.direction = Direction.DOWN
        self.ghost_target = None
        self.inflation = 0
        self.deflate_timer = 0.0
        self.alive_time = 0.0
        self.firing = False
        self.moving = False


def create_enemy(enemy_id: int, kind: EnemyKind, cell: Cell, speed_scale: float, balance: "BalanceLogic") -> Enemy:
    kind = EnemyKind(kind)
    base = _BEHAVIOR_IMPLS[kind].tunnel_speed(balance)
    return Enemy(id=enemy_id, kind=kind, spawn=cell, speed=base * float(speed_scale))


def _apply_aggression(enemy: Enemy, balance: "BalanceLogic") -> None:
    if enemy.boosted or enemy.alive_time < balance.aggression_time:
        return
    enemy.speed *= balance.aggression_multiplier
    enemy.boosted = True


def _update_deflation(enemy: Enemy, pumped: bool, dt: float, balance: "BalanceLogic") -> None:
    if pumped or enemy.inflation <= 0:
        enemy.deflate_timer = 0.0
        return
    enemy.deflate_timer += dt
    if enemy.deflate_timer >= balance.deflate_interval:
        enemy.inflation -= 1
        enemy.deflate_timer = 0.0


def _move_enemy(enemy: Enemy, state: "GameState", dt: float) -> None:
    balance = state.balance
    if enemy.moving:
        speed = balance.dirt_speed if enemy.in_dirt else enemy.speed
        enemy.render, arrived = move_towards(enemy.render, enemy.target, speed, dt)
        if arrived:
            enemy.pos = enemy.target
            enemy.moving = False

    if enemy.moving:
        return

    step = choose_direction(enemy, state.grid, state.player.pos, state.rng, balance)
    enemy.direction = step.facing()
    nx, ny = step.step(enemy.pos)
    if state.grid.in_bounds(nx, ny):
        enemy.target = (nx, ny)
        enemy.moving = True


def update_enemy(enemy: Enemy, state: "GameState", dt: float) -> None:
    """Advance one enemy: timers, dirt status, deflation, attack, then movement."""
    balance = state.balance
    enemy.alive_time += dt
    _apply_aggression(enemy, balance)

    x, y = enemy.pos
    enemy.in_dirt = state.grid.in_bounds(x, y) and state.grid.has_dirt(x, y)

    pumped = is_pumped(state, enemy)
    _update_deflation(enemy, pumped, dt, balance)
    enemy.behavior.update_attack(enemy, state, pumped)

    if enemy.firing or pumped or enemy.inflation > 0:
        return
    _move_enemy(enemy, state, dt)


def update_enemies(state: "GameState", dt: float) -> None:
    for enemy in list(state.entities.enemies):
        update_enemy(enemy, state, dt)
