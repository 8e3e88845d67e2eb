"""Game state and level management."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from config import PLAYER_SPAWN
from enemy import EnemyKind, create_enemy
from entities import EntityStore
from hazards import Rock
from logic import BalanceLogic, LevelScalingLogic
from map import DirtGrid
from player import Player
from pump import Pump
from score import ScoreTracker
from utils import Cell, manhattan


LOG = logging.getLogger(__name__)


class GamePhase(Enum):
    PLAYING = "playing"
    LEVEL_COMPLETE = "levelComplete"
    GAME_OVER = "gameOver"


@dataclass
class GameState:
    """Simulation context handed to every update function."""
    balance: BalanceLogic = field(default_factory=BalanceLogic)
    rng: random.Random = field(default_factory=random.Random)
    grid: DirtGrid = field(default_factory=DirtGrid)
    entities: EntityStore = field(default_factory=EntityStore)
    pump: Optional[Pump] = None
    score: ScoreTracker = None
    phase: GamePhase = GamePhase.PLAYING
    level: int = 1
    lives: int = 3
    round_paused: bool = True
    pause_timer: float = 0.0
    transition_timer: float = 0.0
    clock: float = 0.0
    shake: float = 0.0

    def __post_init__(self) -> None:
        if self.score is None:
            self.score = ScoreTracker(self.balance)
        self.player.speed = self.balance.player_speed

    @property
    def player(self) -> Player:
        return self.entities.player


_SCALING = LevelScalingLogic()


def get_spawn_plan(level: int):
    return _SCALING.plan_level(level)


def _pick_cell(state: GameState, occupied: set[Cell], accept: Callable[[Cell], bool]) -> Cell:
    """Random tile passing ``accept``; exhaustive scan next; unchecked random last."""
    grid = state.grid
    rng = state.rng
    for _ in range(max(1, state.balance.spawn_attempts)):
        cell = (rng.randrange(grid.width), rng.randrange(grid.height))
        if cell not in occupied and accept(cell):
            return cell
    for cell in grid.cells():
        if cell not in occupied and accept(cell):
            return cell
    for cell in grid.cells():
        if cell not in occupied:
            LOG.warning("No valid spawn tile; using unoccupied %s", cell)
            return cell
    cell = (rng.randrange(grid.width), rng.randrange(grid.height))
    LOG.warning("Grid saturated; using unchecked spawn %s", cell)
    return cell


def _carve_lair(state: GameState, kind: EnemyKind, cell: Cell) -> None:
    grid = state.grid
    x, y = cell
    if kind is EnemyKind.POOKA:
        length = 5 + state.rng.randrange(4)
        start = max(0, x - length // 2)
        for cx in range(start, min(grid.width - 1, start + length - 1) + 1):
            grid.clear(cx, y)
    else:
        length = 4 + state.rng.randrange(4)
        start = max(0, y - length // 2)
        for cy in range(start, min(grid.height - 1, start + length - 1) + 1):
            grid.clear(x, cy)


def spawn_enemies(state: GameState) -> None:
    plan = get_spawn_plan(state.level)
    store = state.entities
    store.enemies.clear()
    player_pos = state.player.pos
    occupied = {player_pos}
    min_dist = state.balance.spawn_min_player_distance

    kinds = [EnemyKind.POOKA] * plan.pooka_count + [EnemyKind.FYGAR] * plan.fygar_count
    for kind in kinds:
        cell = _pick_cell(state, occupied, lambda c: manhattan(c, player_pos) > min_dist)
        occupied.add(cell)
        store.enemies.append(create_enemy(store.next_id(), kind, cell, plan.speed_scale, state.balance))
        if state.balance.spawn_lair_tunnels:
            _carve_lair(state, kind, cell)

    LOG.info("Spawned %d Pooka and %d Fygar for level %d", plan.pooka_count, plan.fygar_count, state.level)


def spawn_rocks(state: GameState) -> None:
    grid = state.grid
    store = state.entities
    store.rocks.clear()
    count = state.rng.randint(state.balance.rock_count_min, state.balance.rock_count_max)
    occupied = store.occupied_cells()

    def valid(cell: Cell) -> bool:
        x, y = cell
        return y < grid.height - 1 and grid.has_dirt(x, y + 1)

    for _ in range(count):
        cell = _pick_cell(state, occupied, valid)
        occupied.add(cell)
        store.rocks.append(Rock(id=store.next_id(), x=cell[0], y=float(cell[1])))
    LOG.debug("Placed %d rocks", count)


def setup_level(state: GameState, clear_start: bool = False) -> None:
    """Fresh field for the current level: full dirt, spawns, round pause.

    ``clear_start`` digs the player's start tile before rocks are placed;
    a new run starts that way, an advanced level does not.
    """
    state.grid.reset_full()
    if clear_start:
        state.grid.clear(*PLAYER_SPAWN)
    state.player.reset_to_spawn(PLAYER_SPAWN)
    state.pump = None
    state.entities.clear_level()
    spawn_enemies(state)
    spawn_rocks(state)
    state.round_paused = True
    state.pause_timer = 0.0
    state.transition_timer = 0.0


def advance_level(state: GameState) -> None:
    state.level += 1
    bonus = state.score.on_level_clear()
    setup_level(state)
    LOG.info("Advanced to level %d (+%d bonus)", state.level, bonus)


def restart(state: GameState) -> None:
    """Reinitialise a run to level-1 defaults."""
    LOG.info("Restarting game")
    state.level = 1
    state.lives = state.balance.start_lives
    state.score.reset()
    state.clock = 0.0
    state.shake = 0.0
    state.entities.particles.clear()
    state.phase = GamePhase.PLAYING
    setup_level(state, clear_start=True)


def new_game_state(balance: Optional[BalanceLogic] = None, rng: Optional[random.Random] = None) -> GameState:
    balance = balance or BalanceLogic()
    state = GameState(balance=balance, rng=rng or random.Random(), lives=balance.start_lives)
    setup_level(state, clear_start=True)
    return state


def lose_life(state: GameState) -> None:
    """Take a life; reset the round or end the game when none remain."""
    state.lives -= 1
    LOG.info("Life lost! Lives remaining: %d", state.lives)
    if state.lives <= 0:
        state.lives = 0
        state.phase = GamePhase.GAME_OVER
        return

    player = state.player
    player.reset_to_spawn(PLAYER_SPAWN)
    state.grid.clear(*PLAYER_SPAWN)
    for enemy in state.entities.enemies:
        enemy.reset_to_spawn()
    state.entities.fires.clear()
    state.pump = None
    state.round_paused = True
    state.pause_timer = 0.0
