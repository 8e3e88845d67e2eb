"""Pooka: the fast tunnel runner with no ranged attack."""
from enemy_behaviors.base import Behavior


class Pooka(Behavior):

    def tunnel_speed(self, balance) -> float:
        return balance.pooka_tunnel_speed
