"""Headless game simulation: the seam between the engine and any front end."""

from __future__ import annotations

import logging
import random
from typing import Optional

from controls import TickInput
from fsm import StateMachine
from level import GamePhase, GameState, new_game_state
from logic import BalanceLogic
from snapshot import Snapshot, take_snapshot
from states import GameOverState, LevelCompleteState, PlayingState


LOG = logging.getLogger(__name__)

_NO_INPUT = TickInput()


class Simulation:
    """Owns a :class:`GameState` and the controller states that advance it.

    ``step`` applies one tick; ``snapshot`` returns a frozen view for
    rendering. Given the same seed and the same inputs, two simulations
    evolve identically.
    """

    def __init__(
        self,
        balance: Optional[BalanceLogic] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        if rng is None:
            rng = random.Random(seed)
        self.balance = balance or BalanceLogic()
        self.state: GameState = new_game_state(self.balance, rng)

        self.fsm = StateMachine(PlayingState(self))
        self.fsm.add_state(LevelCompleteState(self))
        self.fsm.add_state(GameOverState(self))
        LOG.info("Simulation ready (seed=%s)", seed)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def step(self, dt: float, tick: Optional[TickInput] = None) -> None:
        if dt <= 0.0:
            return
        self.fsm.update(float(dt), tick or _NO_INPUT)

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.state)
