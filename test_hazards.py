"""Fire breath timing and gating; rock gravity."""

import pytest

from enemy import EnemyKind
from hazards import (
    Fire,
    Rock,
    RockState,
    fire_range,
    fire_tiles,
    remove_landed_rocks,
    try_breathe_fire,
    update_fires,
    update_rock,
)
from logic import BalanceLogic
from map import DirtGrid
from player import update_player
from utils import Direction


class TestFireRange:
    @pytest.mark.parametrize(
        "age,expected",
        [
            (0.0, 0),
            (0.25, 0),
            (0.5, 1),
            (0.7, 1),
            (1.0, 2),
            (1.35, 1),
            (1.6, 0),
        ],
    )
    def test_phase_mapping(self, age, expected):
        assert fire_range(age, BalanceLogic()) == expected

    def test_tiles_extend_along_facing(self):
        fire = Fire(id=1, origin=(5, 5), direction=Direction.RIGHT, created_at=0.0, duration=1.5)
        assert fire_tiles(fire, 1.0, BalanceLogic()) == [(6, 5), (7, 5)]
        assert fire_tiles(fire, 0.1, BalanceLogic()) == []

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            Fire(id=1, origin=(5, 5), direction=Direction.LEFT, created_at=0.0, duration=0.0)


class TestBreathFire:
    @pytest.fixture
    def fygar(self, state, add_enemy):
        state.balance.fire_probability = 1.0
        for x in range(3, 9):
            state.grid.clear(x, 6)
        state.player.pos = (7, 6)
        enemy = add_enemy(EnemyKind.FYGAR, (5, 6), tunnel=True)
        enemy.direction = Direction.RIGHT
        return enemy

    def test_breathes_when_every_gate_passes(self, state, fygar):
        fire = try_breathe_fire(fygar, state, pumped=False)
        assert fire is not None
        assert fire.owner_id == fygar.id and fire.origin == (5, 6)
        assert fygar.firing
        assert state.entities.fires == [fire]

    def test_cooldown_blocks_a_second_breath(self, state, fygar):
        assert try_breathe_fire(fygar, state, pumped=False) is not None
        fygar.firing = False
        state.clock = 2.9
        assert try_breathe_fire(fygar, state, pumped=False) is None
        state.clock = 3.0
        assert try_breathe_fire(fygar, state, pumped=False) is not None

    def test_must_face_the_player(self, state, fygar):
        fygar.direction = Direction.LEFT
        assert try_breathe_fire(fygar, state, pumped=False) is None

    def test_must_share_the_row_within_distance(self, state, fygar):
        state.player.pos = (7, 7)
        assert try_breathe_fire(fygar, state, pumped=False) is None
        state.player.pos = (9, 6)
        assert try_breathe_fire(fygar, state, pumped=False) is None

    def test_no_fire_from_dirt_or_while_pumped(self, state, fygar):
        assert try_breathe_fire(fygar, state, pumped=True) is None
        fygar.pos = (5, 9)
        assert try_breathe_fire(fygar, state, pumped=False) is None

    def test_dice_roll_can_refuse(self, state, fygar):
        state.balance.fire_probability = 0.0
        assert try_breathe_fire(fygar, state, pumped=False) is None

    def test_pooka_never_breathes(self, state, add_enemy):
        state.balance.fire_probability = 1.0
        state.player.pos = (7, 6)
        pooka = add_enemy(EnemyKind.POOKA, (5, 6), tunnel=True)
        pooka.direction = Direction.RIGHT
        assert try_breathe_fire(pooka, state, pumped=False) is None

    def test_fire_removed_once_duration_elapses(self, state, fygar):
        fire = try_breathe_fire(fygar, state, pumped=False)
        state.clock = 1.4
        update_fires(state)
        assert len(state.entities.fires) == 1
        state.clock = fire.created_at + state.balance.fire_duration
        update_fires(state)
        assert state.entities.fires == []


class TestRocks:
    def test_rejects_position_outside_grid(self):
        with pytest.raises(ValueError):
            Rock(id=1, x=14, y=3.0)

    def test_full_lifecycle(self):
        grid = DirtGrid()
        balance = BalanceLogic()
        rock = Rock(id=1, x=4, y=5.0)

        update_rock(rock, grid, 0.1, balance)
        assert rock.state is RockState.STABLE

        grid.clear(4, 6)
        grid.clear(4, 7)
        update_rock(rock, grid, 0.1, balance)
        assert rock.state is RockState.WOBBLING

        update_rock(rock, grid, 0.3, balance)
        assert rock.state is RockState.WOBBLING
        update_rock(rock, grid, 0.3, balance)
        assert rock.state is RockState.FALLING

        last_y = rock.y
        while rock.state is RockState.FALLING:
            update_rock(rock, grid, 0.05, balance)
            assert rock.y >= last_y
            last_y = rock.y
        assert rock.state is RockState.LANDED
        assert rock.cell == (4, 7)

    def test_long_frame_cannot_skip_landing_row(self):
        grid = DirtGrid()
        grid.clear(4, 6)
        rock = Rock(id=1, x=4, y=5.0, state=RockState.FALLING, fall_speed=6.0)
        update_rock(rock, grid, 2.0, BalanceLogic())
        assert rock.state is RockState.LANDED
        assert rock.cell == (4, 6)

    def test_bottom_row_is_supported(self):
        grid = DirtGrid()
        rock = Rock(id=1, x=4, y=14.0)
        update_rock(rock, grid, 1.0, BalanceLogic())
        assert rock.state is RockState.STABLE

    def test_landed_rocks_are_removed(self, state):
        state.entities.rocks = [
            Rock(id=1, x=2, y=4.0, state=RockState.LANDED),
            Rock(id=2, x=3, y=4.0),
        ]
        assert remove_landed_rocks(state) == 1
        assert [r.id for r in state.entities.rocks] == [2]

    def test_stable_rock_blocks_the_player(self, state):
        state.entities.rocks = [Rock(id=1, x=8, y=3.0)]
        update_player(state, Direction.RIGHT, 1 / 60)
        assert not state.player.moving
        assert state.player.direction is Direction.RIGHT
        assert state.grid.has_dirt(8, 3)
