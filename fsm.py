"""
Finite state machine driving the round/level controller.

States are registered under their class name; a transition runs the old
state's ``exit`` and the new state's ``enter`` back to back.
"""

import logging

LOG = logging.getLogger(__name__)


class State:
    """One controller state. ``sim`` is the owning simulation."""

    def __init__(self, sim):
        self.sim = sim

    @property
    def name(self) -> str:
        return type(self).__name__

    def enter(self):
        pass

    def exit(self):
        pass

    def update(self, dt: float, tick):
        """Advance by one tick of ``dt`` seconds with the tick's input."""


class StateMachine:
    def __init__(self, initial_state: State):
        self.current_state: State | None = None
        self._states: dict[str, State] = {}
        if initial_state:
            self.add_state(initial_state)
            self.set_state(initial_state.name)

    def add_state(self, state: State):
        self._states[state.name] = state

    def set_state(self, state_name: str):
        """Switch to a registered state. Unknown names raise ``ValueError``."""
        new_state = self._states.get(state_name)
        if new_state is None:
            raise ValueError(f"State '{state_name}' not found.")
        old = self.current_state
        if old is not None:
            old.exit()
        self.current_state = new_state
        LOG.debug("Controller %s -> %s", old.name if old else "<none>", state_name)
        new_state.enter()

    @property
    def current_name(self) -> str:
        return self.current_state.name if self.current_state else ""

    def update(self, dt: float, tick):
        if self.current_state:
            self.current_state.update(dt, tick)
