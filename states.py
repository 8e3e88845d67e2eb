"""Round/level controller states and the per-tick gameplay pipeline."""

import logging

from enemy import update_enemies
from fsm import State
from hazards import remove_landed_rocks, update_fires, update_rocks
from level import GamePhase, advance_level, restart
from physics import check_enemy_collision, check_fire_collision, check_rock_collisions, collisions_live
from player import update_player
from pump import trigger_pump, update_pump


LOG = logging.getLogger(__name__)


def _phase_player(state, tick, dt):
    update_player(state, tick.move, dt)


def _phase_pump_trigger(state, tick, dt):
    # Before enemies, so an interrupted Fygar sees its fire gone this tick.
    if tick.pump_pressed:
        trigger_pump(state)


def _phase_enemies(state, tick, dt):
    update_enemies(state, dt)


def _phase_fires(state, tick, dt):
    update_fires(state)


def _phase_pump(state, tick, dt):
    update_pump(state, tick.pump_held, dt)


def _phase_rocks(state, tick, dt):
    update_rocks(state, dt)


def _phase_particles(state, tick, dt):
    update_cosmetics(state, dt)


def _phase_enemy_collision(state, tick, dt):
    check_enemy_collision(state)


def _phase_fire_collision(state, tick, dt):
    check_fire_collision(state)


def _phase_rock_collision(state, tick, dt):
    check_rock_collisions(state)


def _phase_rock_cleanup(state, tick, dt):
    # Landed rocks leave only after a live collision pass has seen them. A
    # life lost earlier this tick skips that pass, so they wait for the next.
    if collisions_live(state):
        remove_landed_rocks(state)


# Order is fixed; collisions see this tick's positions and rock states.
TICK_PIPELINE = (
    ("player", _phase_player),
    ("pump_trigger", _phase_pump_trigger),
    ("enemies", _phase_enemies),
    ("fires", _phase_fires),
    ("pump", _phase_pump),
    ("rocks", _phase_rocks),
    ("particles", _phase_particles),
    ("enemy_collision", _phase_enemy_collision),
    ("fire_collision", _phase_fire_collision),
    ("rock_collision", _phase_rock_collision),
    ("rock_cleanup", _phase_rock_cleanup),
)


def update_cosmetics(state, dt: float) -> None:
    state.entities.particles.update(dt)
    if state.shake > 0.0:
        state.shake = max(0.0, state.shake - state.balance.shake_decay * dt)


def run_pipeline(state, tick, dt: float) -> bool:
    """Run every gameplay phase in order. Returns False once the game is over."""
    for name, phase in TICK_PIPELINE:
        phase(state, tick, dt)
        if state.phase is GamePhase.GAME_OVER:
            LOG.debug("Game over during phase '%s'", name)
            return False
    return True


class PlayingState(State):
    def enter(self):
        self.sim.state.phase = GamePhase.PLAYING

    def update(self, dt: float, tick):
        s = self.sim.state
        if s.round_paused:
            s.pause_timer += dt
            if s.pause_timer >= s.balance.round_pause:
                s.round_paused = False
                s.pause_timer = 0.0
                LOG.info("Pause ended - gameplay resuming")
            return

        s.clock += dt
        if not run_pipeline(s, tick, dt):
            self.sim.fsm.set_state("GameOverState")
            return
        if not s.entities.enemies:
            self.sim.fsm.set_state("LevelCompleteState")


class LevelCompleteState(State):
    def enter(self):
        s = self.sim.state
        s.phase = GamePhase.LEVEL_COMPLETE
        s.transition_timer = 0.0
        LOG.info("Level %d complete", s.level)

    def update(self, dt: float, tick):
        s = self.sim.state
        update_cosmetics(s, dt)
        s.transition_timer += dt
        if s.transition_timer >= s.balance.level_transition:
            advance_level(s)
            self.sim.fsm.set_state("PlayingState")


class GameOverState(State):
    def enter(self):
        s = self.sim.state
        s.phase = GamePhase.GAME_OVER
        LOG.info("Game over at level %d with score %d", s.level, s.score.score)

    def update(self, dt: float, tick):
        if tick.restart:
            restart(self.sim.state)
            self.sim.fsm.set_state("PlayingState")
