"""Collision detection: player vs enemies, fire breath and falling rocks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config import PARTICLE_COLORS
from hazards import fire_tiles
from level import GamePhase, lose_life
from pump import ActivePump

if TYPE_CHECKING:
    from level import GameState


LOG = logging.getLogger(__name__)


def collisions_live(state: "GameState") -> bool:
    """Collisions run only in live play: not paused, not over."""
    return state.phase is GamePhase.PLAYING and not state.round_paused


def check_enemy_collision(state: "GameState") -> bool:
    """Player and enemy on the same tile costs a life."""
    if not collisions_live(state):
        return False
    player_pos = state.player.pos
    for enemy in state.entities.enemies:
        if enemy.pos == player_pos:
            LOG.info("Player caught by enemy %d at %s", enemy.id, player_pos)
            lose_life(state)
            return True
    return False


def check_fire_collision(state: "GameState") -> bool:
    if not collisions_live(state):
        return False
    player_pos = state.player.pos
    for fire in state.entities.fires:
        if player_pos in fire_tiles(fire, state.clock, state.balance):
            LOG.info("Player hit by fire from enemy %s", fire.owner_id)
            lose_life(state)
            return True
    return False


def _crush_enemy(state: "GameState", enemy) -> None:
    state.entities.particles.burst(enemy.render, PARTICLE_COLORS["crush"], state.balance.crush_particles, state.rng)
    if isinstance(state.pump, ActivePump) and state.pump.target_id == enemy.id:
        state.pump = None
    state.entities.remove_enemy(enemy)


def check_rock_collisions(state: "GameState") -> int:
    """Falling and just-landed rocks crush whatever shares their tile.

    Returns the number of enemies crushed this tick.
    """
    if not collisions_live(state):
        return 0
    balance = state.balance
    crushed_total = 0
    for rock in list(state.entities.rocks):
        if not rock.dangerous:
            continue
        cell = rock.cell
        crushed = state.entities.enemies_at(cell)
        if crushed:
            for enemy in crushed:
                _crush_enemy(state, enemy)
            points = state.score.on_rock_crush(len(crushed))
            state.shake = max(state.shake, balance.enemy_crush_shake)
            crushed_total += len(crushed)
            LOG.info("Rock %d crushed %d enemies at %s (+%d)", rock.id, len(crushed), cell, points)
        if state.player.pos == cell:
            state.shake = max(state.shake, balance.player_crush_shake)
            LOG.info("Player crushed by rock %d at %s", rock.id, cell)
            lose_life(state)
            break
    return crushed_total
