"""Shared fixtures: a live, empty level with a deterministic RNG."""

import random

import pytest

from enemy import EnemyKind, create_enemy
from level import new_game_state


@pytest.fixture
def state():
    """Level 1 with enemies and rocks removed, round pause already over."""
    s = new_game_state(rng=random.Random(1234))
    s.entities.clear_level()
    s.round_paused = False
    return s


@pytest.fixture
def add_enemy(state):
    def _add(kind=EnemyKind.POOKA, cell=(3, 8), tunnel=False):
        enemy = create_enemy(state.entities.next_id(), kind, cell, 1.0, state.balance)
        state.entities.enemies.append(enemy)
        if tunnel:
            state.grid.clear(*cell)
        return enemy
    return _add
