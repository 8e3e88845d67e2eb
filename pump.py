"""Player pump: target an enemy ahead, inflate it while held, pop it at max."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from config import PARTICLE_COLORS
from utils import Direction

if TYPE_CHECKING:
    from enemy import Enemy
    from level import GameState


LOG = logging.getLogger(__name__)


@dataclass
class ActivePump:
    """Pump hose attached to one enemy."""

    target_id: int
    timer: float = 0.0
    key_held: bool = True
    inflation_progress: int = 0


@dataclass
class PumpVisual:
    """A pump shot that hit nothing; shown briefly, then gone."""

    direction: Direction
    visual_timer: float


Pump = Union[ActivePump, PumpVisual]


def is_pumped(state: "GameState", enemy: "Enemy") -> bool:
    pump = state.pump
    return isinstance(pump, ActivePump) and pump.target_id == enemy.id


def find_pump_target(state: "GameState") -> Optional["Enemy"]:
    """First enemy out of the dirt within reach along the player's facing."""
    player = state.player
    grid = state.grid
    for distance in range(1, state.balance.pump_reach + 1):
        cell = player.direction.step(player.pos, distance)
        if not grid.in_bounds(*cell):
            break
        for enemy in state.entities.enemies_at(cell):
            if not grid.has_dirt(*enemy.pos):
                return enemy
    return None


def trigger_pump(state: "GameState") -> Optional[Pump]:
    """Handle a fire-pump press. Ignored while paused or while a pump exists."""
    if state.round_paused or state.pump is not None:
        return None

    target = find_pump_target(state)
    if target is None:
        state.pump = PumpVisual(direction=state.player.direction, visual_timer=state.balance.pump_visual_time)
        return state.pump

    if target.firing:
        state.entities.remove_fires_owned_by(target.id)
        target.firing = False
        LOG.debug("Pump interrupted fire of enemy %d", target.id)
    state.pump = ActivePump(target_id=target.id)
    return state.pump


def pop_enemy(state: "GameState", enemy: "Enemy") -> int:
    state.entities.particles.burst(enemy.render, PARTICLE_COLORS["pop"], state.balance.pop_particles, state.rng)
    points = state.score.on_pump_defeat()
    state.entities.remove_enemy(enemy)
    LOG.info("Enemy %d popped (+%d)", enemy.id, points)
    return points


def update_pump(state: "GameState", held: bool, dt: float) -> None:
    pump = state.pump
    if pump is None:
        return

    if isinstance(pump, PumpVisual):
        pump.visual_timer -= dt
        if pump.visual_timer <= 0.0:
            state.pump = None
        return

    target = state.entities.find_enemy(pump.target_id)
    if target is None:
        state.pump = None
        return

    pump.key_held = bool(held)
    if not pump.key_held:
        # Released: the enemy deflates on its own from here.
        state.pump = None
        return

    interval = state.balance.pump_inflate_interval
    pump.timer += dt
    while pump.timer >= interval:
        pump.timer -= interval
        target.inflation = min(state.balance.max_inflation, target.inflation + 1)
        pump.inflation_progress += 1
        if target.inflation >= state.balance.max_inflation:
            pop_enemy(state, target)
            state.pump = None
            return
