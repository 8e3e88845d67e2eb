"""Fygar: slower in tunnels, breathes fire along its row."""
from enemy_behaviors.base import Behavior
from hazards import try_breathe_fire


class Fygar(Behavior):

    def tunnel_speed(self, balance) -> float:
        return balance.fygar_tunnel_speed

    def update_attack(self, enemy, state, pumped: bool) -> None:
        """Keep ``firing`` in sync with the owned fire, then try a new breath."""
        fire = state.entities.fire_owned_by(enemy.id)
        enemy.firing = fire is not None and not fire.expired(state.clock)
        if not enemy.firing and not enemy.in_dirt:
            try_breathe_fire(enemy, state, pumped)
