"""Pump targeting, inflation, release and misses."""

from enemy import EnemyKind, update_enemy
from hazards import try_breathe_fire
from pump import ActivePump, PumpVisual, trigger_pump, update_pump
from utils import Direction


def _face_right(state):
    state.player.pos = (5, 5)
    state.player.direction = Direction.RIGHT
    state.grid.clear(5, 5)


class TestPump:
    def test_four_intervals_pop_the_enemy(self, state, add_enemy):
        _face_right(state)
        enemy = add_enemy(cell=(6, 5), tunnel=True)
        pump = trigger_pump(state)
        assert isinstance(pump, ActivePump) and pump.target_id == enemy.id

        for expected in (1, 2, 3):
            update_pump(state, True, 0.3)
            assert enemy.inflation == expected
            assert enemy in state.entities.enemies

        update_pump(state, True, 0.3)
        assert enemy not in state.entities.enemies
        assert state.pump is None
        assert state.score.score == 200
        assert len(state.entities.particles) > 0

    def test_reaches_two_tiles(self, state, add_enemy):
        _face_right(state)
        enemy = add_enemy(cell=(7, 5), tunnel=True)
        assert trigger_pump(state).target_id == enemy.id

    def test_miss_leaves_a_short_lived_visual(self, state, add_enemy):
        _face_right(state)
        add_enemy(cell=(8, 5), tunnel=True)
        pump = trigger_pump(state)
        assert isinstance(pump, PumpVisual)
        update_pump(state, False, 0.1)
        assert state.pump is pump
        update_pump(state, False, 0.1)
        assert state.pump is None

    def test_enemy_in_dirt_cannot_be_pumped(self, state, add_enemy):
        _face_right(state)
        add_enemy(cell=(6, 5))
        assert isinstance(trigger_pump(state), PumpVisual)

    def test_release_then_deflate(self, state, add_enemy):
        _face_right(state)
        enemy = add_enemy(cell=(6, 5), tunnel=True)
        trigger_pump(state)
        update_pump(state, True, 0.3)
        update_pump(state, True, 0.3)
        assert enemy.inflation == 2

        update_pump(state, False, 0.1)
        assert state.pump is None
        assert enemy.inflation == 2

        update_enemy(enemy, state, 0.8)
        assert enemy.inflation == 1

    def test_press_ignored_while_paused_or_busy(self, state, add_enemy):
        _face_right(state)
        add_enemy(cell=(6, 5), tunnel=True)
        state.round_paused = True
        assert trigger_pump(state) is None
        state.round_paused = False
        first = trigger_pump(state)
        assert trigger_pump(state) is None
        assert state.pump is first

    def test_pump_interrupts_fire_breath(self, state, add_enemy):
        _face_right(state)
        state.balance.fire_probability = 1.0
        fygar = add_enemy(EnemyKind.FYGAR, (6, 5), tunnel=True)
        fygar.direction = Direction.LEFT
        assert try_breathe_fire(fygar, state, pumped=False) is not None

        trigger_pump(state)
        assert state.entities.fires == []
        assert not fygar.firing

    def test_target_removed_elsewhere_clears_pump(self, state, add_enemy):
        _face_right(state)
        enemy = add_enemy(cell=(6, 5), tunnel=True)
        trigger_pump(state)
        state.entities.remove_enemy(enemy)
        update_pump(state, True, 0.3)
        assert state.pump is None
