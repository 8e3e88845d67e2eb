"""Cosmetic debris for enemy pops and rock crushes.

Positions and velocities are in tile units. Nothing here affects gameplay;
the renderer reads particles through snapshots.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from utils import Vec2


Color = tuple[int, int, int]

SPEED_RANGE = (1.5, 4.5)
TTL_RANGE = (0.35, 0.8)
DRAG = 2.0


@dataclass
class Particle:
    pos: Vec2
    vel: Vec2
    color: Color
    ttl: float
    max_ttl: float
    drag: float = 0.0

    @property
    def life(self) -> float:
        """Remaining fraction of the lifetime, 1.0 when fresh."""
        return self.ttl / self.max_ttl if self.max_ttl > 0 else 0.0


class ParticleSystem:
    """Owns all live particles."""

    def __init__(self):
        self.particles: list[Particle] = []

    def burst(self, pos: Vec2, color: Color, count: int, rng: random.Random) -> None:
        """Scatter ``count`` particles from the centre of the tile at ``pos``."""
        cx, cy = pos.x + 0.5, pos.y + 0.5
        for _ in range(max(0, int(count))):
            heading = rng.uniform(0.0, math.tau)
            speed = rng.uniform(*SPEED_RANGE)
            ttl = rng.uniform(*TTL_RANGE)
            self.particles.append(
                Particle(
                    pos=Vec2(cx, cy),
                    vel=Vec2(math.cos(heading), math.sin(heading)) * speed,
                    color=color,
                    ttl=ttl,
                    max_ttl=ttl,
                    drag=DRAG,
                )
            )

    def update(self, dt: float) -> None:
        alive = self.particles
        i = 0
        while i < len(alive):
            p = alive[i]
            p.ttl -= dt
            if p.ttl <= 0.0:
                # Swap-remove; order does not matter for debris.
                alive[i] = alive[-1]
                alive.pop()
                continue
            if p.drag > 0.0:
                p.vel = p.vel * max(0.0, 1.0 - p.drag * dt)
            p.pos = p.pos + p.vel * dt
            i += 1

    def clear(self) -> None:
        self.particles.clear()

    def __len__(self) -> int:
        return len(self.particles)
