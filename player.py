"""Player entity and related functionality."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from config import PLAYER_SPAWN, PLAYER_SPEED
from utils import Cell, Direction, Vec2, move_towards

if TYPE_CHECKING:
    from level import GameState


@dataclass
class Player:
    """Player entity.

    ``pos`` is the logical tile; ``render`` trails it continuously and
    ``target`` is the tile being walked into (at most one cardinal step away).
    """
    pos: Cell = PLAYER_SPAWN
    render: Vec2 = field(default_factory=lambda: Vec2.from_cell(PLAYER_SPAWN))
    target: Cell = PLAYER_SPAWN
    direction: Direction = Direction.DOWN
    moving: bool = False
    speed: float = PLAYER_SPEED

    def reset_to_spawn(self, spawn: Cell = PLAYER_SPAWN) -> None:
        self.pos = spawn
        self.render = Vec2.from_cell(spawn)
        self.target = spawn
        self.direction = Direction.DOWN
        self.moving = False


def update_player(state: "GameState", move: Optional[Direction], dt: float) -> None:
    """Advance the walk toward the current target, then accept a new step.

    A new step digs its target tile immediately; digging fresh dirt scores.
    """
    player = state.player
    if player.moving:
        player.render, arrived = move_towards(player.render, player.target, player.speed, dt)
        if arrived:
            player.pos = player.target
            player.moving = False

    if player.moving or move is None or not move.is_cardinal:
        return

    player.direction = move
    nx, ny = move.step(player.pos)
    if not state.grid.in_bounds(nx, ny):
        return
    if state.entities.solid_rock_at((nx, ny)) is not None:
        return

    player.target = (nx, ny)
    player.moving = True
    if state.grid.clear(nx, ny):
        state.score.on_dig()
