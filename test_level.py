"""Level setup, spawning, advancing and whole-round scenarios."""

import random

import pytest

from config import PLAYER_SPAWN
from controls import TickInput
from level import GamePhase, advance_level, get_spawn_plan, lose_life, new_game_state, restart
from logic import BalanceLogic
from simulation import Simulation
from utils import Direction, manhattan

TICK = 1 / 60


def _unpause(sim):
    sim.step(sim.balance.round_pause)
    assert not sim.state.round_paused


class TestSpawnPlan:
    @pytest.mark.parametrize(
        "level,pooka,fygar",
        [(1, 2, 1), (2, 3, 1), (3, 3, 2), (4, 4, 2), (10, 4, 2)],
    )
    def test_counts(self, level, pooka, fygar):
        plan = get_spawn_plan(level)
        assert (plan.pooka_count, plan.fygar_count) == (pooka, fygar)

    def test_speed_scale_is_capped(self):
        assert get_spawn_plan(1).speed_scale == pytest.approx(1.0)
        assert get_spawn_plan(3).speed_scale == pytest.approx(1.2)
        assert get_spawn_plan(20).speed_scale == pytest.approx(1.5)


class TestSetup:
    def test_new_game_defaults(self):
        state = new_game_state(rng=random.Random(7))
        assert state.level == 1 and state.lives == 3
        assert state.score.score == 0
        assert state.round_paused
        assert state.grid.is_tunnel(*PLAYER_SPAWN)
        assert state.grid.tunnel_count() == 1
        kinds = sorted(e.kind.value for e in state.entities.enemies)
        assert kinds == ["fygar", "pooka", "pooka"]
        assert 3 <= len(state.entities.rocks) <= 5

    def test_spawn_placement_rules(self):
        state = new_game_state(rng=random.Random(11))
        cells = [e.pos for e in state.entities.enemies]
        assert len(set(cells)) == len(cells)
        assert all(manhattan(c, PLAYER_SPAWN) > 3 for c in cells)
        for rock in state.entities.rocks:
            x, y = rock.cell
            assert y < state.grid.height - 1
            assert state.grid.has_dirt(x, y + 1)
            assert rock.cell not in cells

    def test_unsatisfiable_spawn_rule_still_places_enemies(self):
        balance = BalanceLogic(spawn_min_player_distance=100)
        state = new_game_state(balance, random.Random(3))
        assert len(state.entities.enemies) == 3

    def test_lair_tunnels_are_optional(self):
        state = new_game_state(BalanceLogic(spawn_lair_tunnels=True), random.Random(5))
        assert state.grid.tunnel_count() > 1


class TestAdvance:
    def test_advance_resets_the_field(self):
        state = new_game_state(rng=random.Random(2))
        state.grid.clear(1, 1)
        state.entities.enemies.clear()
        state.round_paused = False
        score_before = state.score.score

        advance_level(state)

        assert state.level == 2
        assert state.score.score == score_before + 1000
        assert state.grid.tunnel_count() == 0
        assert state.player.pos == PLAYER_SPAWN
        assert state.pump is None and state.entities.fires == []
        assert state.round_paused
        assert len(state.entities.enemies) == get_spawn_plan(2).total_count

    def test_advance_is_idempotent_in_shape(self):
        a = new_game_state(rng=random.Random(9))
        b = new_game_state(rng=random.Random(10))
        b.grid.clear(4, 4)
        b.entities.enemies.clear()
        advance_level(a)
        advance_level(b)
        for s in (a, b):
            assert s.level == 2
            assert s.grid.tunnel_count() == 0
            assert len(s.entities.enemies) == 4
            assert s.round_paused

    def test_restart_digs_the_start_tile(self):
        state = new_game_state(rng=random.Random(12))
        state.grid.clear(1, 1)
        state.level = 3
        restart(state)
        assert state.level == 1
        assert state.grid.tunnel_count() == 1
        assert state.grid.is_tunnel(*PLAYER_SPAWN)
        for rock in state.entities.rocks:
            x, y = rock.cell
            assert state.grid.has_dirt(x, y + 1)

    def test_life_loss_keeps_level_and_score(self):
        state = new_game_state(rng=random.Random(4))
        state.score.on_dig()
        lose_life(state)
        assert state.level == 1
        assert state.lives == 2
        assert state.score.score == 10


class TestScenarios:
    def test_digging_right_from_spawn(self):
        sim = Simulation(seed=21)
        sim.state.entities.rocks.clear()
        _unpause(sim)

        sim.step(TICK, TickInput(move=Direction.RIGHT))

        snap = sim.snapshot()
        assert snap.score == 10
        assert snap.has_dirt(8, 3) is False
        assert snap.player.direction == "RIGHT"
        assert snap.player.pos == PLAYER_SPAWN

    def test_level_complete_then_next_level(self):
        sim = Simulation(seed=22)
        _unpause(sim)
        sim.state.entities.enemies.clear()

        sim.step(TICK)
        assert sim.phase is GamePhase.LEVEL_COMPLETE

        sim.step(1.0)
        assert sim.state.level == 1
        sim.step(1.0)
        assert sim.phase is GamePhase.PLAYING
        assert sim.state.level == 2
        assert sim.state.score.score == 1000
        assert sim.state.round_paused

    def test_game_over_freezes_until_restart(self):
        sim = Simulation(seed=23)
        _unpause(sim)
        state = sim.state
        state.lives = 1
        state.entities.enemies[0].pos = state.player.pos

        sim.step(TICK)
        assert sim.phase is GamePhase.GAME_OVER
        frozen = sim.snapshot()

        for _ in range(30):
            sim.step(TICK, TickInput(move=Direction.LEFT, pump_pressed=True, pump_held=True))
        assert sim.snapshot() == frozen

        sim.step(TICK, TickInput(restart=True))
        assert sim.phase is GamePhase.PLAYING
        assert state.level == 1 and state.lives == 3
        assert state.score.score == 0
        assert state.round_paused
        assert state.grid.is_tunnel(*PLAYER_SPAWN)
