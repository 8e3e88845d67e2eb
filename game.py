# Pyglet tunnel-digging arcade game
# Controls: WASD/Arrows move and dig, SPACE pumps (hold to inflate), R restarts after game over.
# Install: py -m pip install pyglet

import logging

import pyglet

pyglet.options["shadow_window"] = False

from config import FPS, PALETTE, SCREEN_H, SCREEN_W
from controls import InputTracker
from logic import BalanceLogic
from simulation import Simulation
from utils import Direction
from visuals import Visuals


LOG = logging.getLogger(__name__)

_k = pyglet.window.key
KEY_DIRECTIONS = {
    _k.UP: Direction.UP,
    _k.W: Direction.UP,
    _k.DOWN: Direction.DOWN,
    _k.S: Direction.DOWN,
    _k.LEFT: Direction.LEFT,
    _k.A: Direction.LEFT,
    _k.RIGHT: Direction.RIGHT,
    _k.D: Direction.RIGHT,
}


class Game(pyglet.window.Window):
    """Main game window: keyboard in, fixed-step simulation, shapes out."""

    def __init__(self, seed=None):
        super().__init__(width=SCREEN_W, height=SCREEN_H, caption="KiroDig", vsync=True)
        self.balance = BalanceLogic(fps=float(FPS))
        self.sim = Simulation(self.balance, seed=seed)
        self.input = InputTracker()

        self.batch = pyglet.graphics.Batch()
        self.visuals = Visuals(self.batch)

        self._fixed_dt = self.balance.fixed_dt
        self._frame_dt_cap = self.balance.frame_dt_cap
        self._max_catchup_steps = self.balance.max_catchup_steps
        self._accumulator = 0.0

        pyglet.clock.schedule_interval(self.update, 1.0 / FPS)

    def on_key_press(self, symbol, modifiers):
        """Handle key presses."""
        direction = KEY_DIRECTIONS.get(symbol)
        if direction is not None:
            self.input.press_direction(direction)
        elif symbol == _k.SPACE:
            self.input.press_pump()
        elif symbol == _k.R:
            self.input.request_restart()
        elif symbol == _k.ESCAPE:
            self.close()
            return pyglet.event.EVENT_HANDLED

    def on_key_release(self, symbol, modifiers):
        direction = KEY_DIRECTIONS.get(symbol)
        if direction is not None:
            self.input.release_direction(direction)
        elif symbol == _k.SPACE:
            self.input.release_pump()

    def on_deactivate(self):
        # Keys released while unfocused never reach us.
        self.input.reset()

    def update(self, dt: float):
        """Update game logic."""
        frame_dt = max(0.0, min(float(dt), self._frame_dt_cap))
        self._accumulator += frame_dt
        steps = 0
        while self._accumulator >= self._fixed_dt and steps < self._max_catchup_steps:
            self.sim.step(self._fixed_dt, self.input.next_tick())
            self._accumulator -= self._fixed_dt
            steps += 1
        if steps >= self._max_catchup_steps:
            # Drop extra accumulated time to avoid spiral-of-death stalls.
            self._accumulator = 0.0

    def on_draw(self):
        """Render the game."""
        pyglet.gl.glClearColor(*(c / 255.0 for c in PALETTE["tunnel"]), 1.0)
        self.clear()
        self.visuals.sync(self.sim.snapshot())
        self.batch.draw()


def main(seed=None):
    """Start the game."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        _ = Game(seed=seed)
        pyglet.app.run()
    except KeyboardInterrupt:
        pass
    except Exception:
        LOG.exception("Fatal error")
        raise


if __name__ == "__main__":
    main()
