"""Base class for enemy behaviors."""
from abc import ABC, abstractmethod


class Behavior(ABC):
    """Per-type enemy traits: tunnel speed and any attack it can make."""

    @abstractmethod
    def tunnel_speed(self, balance) -> float:
        """Base tunnel speed in tiles per second, before level scaling."""

    def update_attack(self, enemy, state, pumped: bool) -> None:
        """Run the type's attack logic for this tick. Default: no attack."""
        enemy.firing = False
