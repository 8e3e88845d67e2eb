"""Entity store: owns every live entity collection of a running game."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from particles import ParticleSystem
from player import Player
from utils import Cell

if TYPE_CHECKING:
    from enemy import Enemy
    from hazards import Fire, Rock


class EntityStore:
    """Player, enemies, rocks, fires and particles, plus id allocation."""

    def __init__(self, player: Optional[Player] = None):
        self.player: Player = player if player is not None else Player()
        self.enemies: list["Enemy"] = []
        self.rocks: list["Rock"] = []
        self.fires: list["Fire"] = []
        self.particles = ParticleSystem()
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # ------------------------------------------------------------------
    # Enemies
    # ------------------------------------------------------------------

    def find_enemy(self, enemy_id: int) -> Optional["Enemy"]:
        for e in self.enemies:
            if e.id == enemy_id:
                return e
        return None

    def enemies_at(self, cell: Cell) -> list["Enemy"]:
        return [e for e in self.enemies if e.pos == cell]

    def remove_enemy(self, enemy: "Enemy") -> bool:
        """Remove an enemy together with any fire it still owns."""
        if enemy not in self.enemies:
            return False
        self.enemies.remove(enemy)
        self.remove_fires_owned_by(enemy.id)
        return True

    # ------------------------------------------------------------------
    # Fires
    # ------------------------------------------------------------------

    def fire_owned_by(self, enemy_id: int) -> Optional["Fire"]:
        for f in self.fires:
            if f.owner_id == enemy_id:
                return f
        return None

    def remove_fires_owned_by(self, enemy_id: int) -> int:
        before = len(self.fires)
        self.fires = [f for f in self.fires if f.owner_id != enemy_id]
        return before - len(self.fires)

    # ------------------------------------------------------------------
    # Rocks
    # ------------------------------------------------------------------

    def rock_at(self, cell: Cell) -> Optional["Rock"]:
        for r in self.rocks:
            if r.cell == cell:
                return r
        return None

    def solid_rock_at(self, cell: Cell) -> Optional["Rock"]:
        """A rock that has not started falling blocks its tile."""
        rock = self.rock_at(cell)
        if rock is not None and rock.solid:
            return rock
        return None

    def occupied_cells(self) -> set[Cell]:
        cells = {self.player.pos}
        cells.update(e.pos for e in self.enemies)
        cells.update(r.cell for r in self.rocks)
        return cells

    def clear_level(self) -> None:
        self.enemies.clear()
        self.rocks.clear()
        self.fires.clear()
