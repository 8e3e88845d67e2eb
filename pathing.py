"""Enemy pathing: corridor following with an occasional dig-through shortcut.

Two regimes:

* tunnel regime: step to the in-bounds neighbour closest (Manhattan) to the
  player (tunnel or dirt), with random tie-breaks. Before committing,
  compare the tunnel route time (BFS over tunnels) with the straight dirt
  route time (Chebyshev distance at dirt speed) and switch to ghost mode when
  digging through is clearly faster.
* ghost regime: while standing in dirt or holding a ghost target, step
  straight at the target, diagonals allowed.
"""

from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import TYPE_CHECKING, Optional

from utils import CARDINALS, Cell, Direction, chebyshev, manhattan

if TYPE_CHECKING:
    from enemy import Enemy
    from logic import BalanceLogic
    from map import DirtGrid


LOG = logging.getLogger(__name__)


def tunnel_distance(grid: "DirtGrid", start: Cell, goal: Cell, max_distance: int) -> Optional[int]:
    """Shortest tunnel-only walk from ``start`` to ``goal``; None when unreachable.

    The search gives up beyond ``max_distance`` steps.
    """
    if start == goal:
        return 0
    frontier = deque([(start, 0)])
    seen = {start}
    while frontier:
        cell, d = frontier.popleft()
        if d >= max_distance:
            continue
        for direction in CARDINALS:
            nxt = direction.step(cell)
            if nxt in seen or not grid.in_bounds(*nxt) or grid.has_dirt(*nxt):
                continue
            if nxt == goal:
                return d + 1
            seen.add(nxt)
            frontier.append((nxt, d + 1))
    return None


def _ring(center: Cell, radius: int):
    cx, cy = center
    for dx in range(-radius, radius + 1):
        dy = radius - abs(dx)
        yield (cx + dx, cy + dy)
        if dy:
            yield (cx + dx, cy - dy)


def find_ghost_target(grid: "DirtGrid", enemy_pos: Cell, player_pos: Cell, max_radius: int) -> Cell:
    """Tunnel tile near the player that is closest to the enemy.

    Rings of growing Manhattan radius around the player are searched; the
    first ring holding any tunnel wins. Falls back to the player's own tile.
    """
    for radius in range(1, max_radius + 1):
        ring = [
            c for c in _ring(player_pos, radius)
            if c != enemy_pos and grid.in_bounds(*c) and not grid.has_dirt(*c)
        ]
        if ring:
            return min(ring, key=lambda c: (manhattan(c, enemy_pos), c[1], c[0]))
    return player_pos


def should_enter_ghost_mode(enemy: "Enemy", grid: "DirtGrid", player_pos: Cell, balance: "BalanceLogic") -> bool:
    if enemy.pos == player_pos:
        return False
    steps = tunnel_distance(grid, enemy.pos, player_pos, balance.bfs_max_distance)
    tunnel_time = math.inf if steps is None else steps / balance.tunnel_speed(enemy.kind.value)
    dirt_time = chebyshev(enemy.pos, player_pos) / balance.dirt_speed
    return dirt_time <= balance.ghost_threshold * tunnel_time


def _closest(options: list[Direction], origin: Cell, player_pos: Cell, rng: random.Random) -> Direction:
    best = min(manhattan(d.step(origin), player_pos) for d in options)
    tied = [d for d in options if manhattan(d.step(origin), player_pos) == best]
    return tied[0] if len(tied) == 1 else rng.choice(tied)


def _tunnel_step(enemy: "Enemy", grid: "DirtGrid", player_pos: Cell, rng: random.Random, balance: "BalanceLogic") -> Direction:
    pos = enemy.pos
    options = [d for d in CARDINALS if grid.in_bounds(*d.step(pos))]
    choice = _closest(options, pos, player_pos, rng)

    if should_enter_ghost_mode(enemy, grid, player_pos, balance):
        dirt = [d for d in options if grid.has_dirt(*d.step(pos))]
        if dirt:
            enemy.ghost_target = find_ghost_target(grid, pos, player_pos, balance.ghost_ring_radius)
            LOG.debug("Enemy %d entering ghost mode toward %s", enemy.id, enemy.ghost_target)
            return _closest(dirt, pos, player_pos, rng)
    return choice


def _ghost_step(enemy: "Enemy", grid: "DirtGrid", player_pos: Cell, balance: "BalanceLogic") -> Optional[Direction]:
    """Step toward the ghost target, or None to fall back to the tunnel regime."""
    pos = enemy.pos
    in_dirt = grid.has_dirt(*pos)
    if enemy.ghost_target is not None:
        if pos == enemy.ghost_target or not in_dirt:
            # Arrived, or surfaced into a tunnel short of the target.
            enemy.ghost_target = None
            return None
    else:
        target = find_ghost_target(grid, pos, player_pos, balance.ghost_ring_radius)
        if target == pos:
            return None
        enemy.ghost_target = target
    tx, ty = enemy.ghost_target
    return Direction.from_delta(tx - pos[0], ty - pos[1])


def choose_direction(enemy: "Enemy", grid: "DirtGrid", player_pos: Cell, rng: random.Random, balance: "BalanceLogic") -> Direction:
    """Next step direction for an enemy standing on ``enemy.pos``."""
    if enemy.ghost_target is not None or grid.has_dirt(*enemy.pos):
        step = _ghost_step(enemy, grid, player_pos, balance)
        if step is not None:
            return step
    return _tunnel_step(enemy, grid, player_pos, rng, balance)
