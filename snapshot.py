"""Read-only views of a running game for renderers and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from hazards import fire_range
from pump import ActivePump, PumpVisual
from utils import Cell

if TYPE_CHECKING:
    from level import GameState


@dataclass(frozen=True)
class PlayerView:
    pos: Cell
    render: tuple[float, float]
    direction: str
    moving: bool


@dataclass(frozen=True)
class EnemyView:
    id: int
    kind: str
    pos: Cell
    render: tuple[float, float]
    direction: str
    inflation: int
    ghost: bool
    in_dirt: bool
    firing: bool


@dataclass(frozen=True)
class FireView:
    id: int
    origin: Cell
    direction: str
    age: float
    range: int
    owner_id: Optional[int]


@dataclass(frozen=True)
class RockView:
    id: int
    x: int
    y: float
    state: str


@dataclass(frozen=True)
class ParticleView:
    pos: tuple[float, float]
    color: tuple[int, int, int]
    life: float


@dataclass(frozen=True)
class PumpView:
    """``target_id`` is None for a pump shot that hit nothing."""
    direction: str
    target_id: Optional[int] = None
    inflation_progress: int = 0
    visual_timer: float = 0.0


@dataclass(frozen=True)
class Snapshot:
    phase: str
    level: int
    lives: int
    score: int
    paused: bool
    pause_timer: float
    transition_timer: float
    shake: float
    clock: float
    grid: tuple[tuple[bool, ...], ...]
    player: PlayerView
    enemies: tuple[EnemyView, ...]
    fires: tuple[FireView, ...]
    rocks: tuple[RockView, ...]
    particles: tuple[ParticleView, ...]
    pump: Optional[PumpView]

    def has_dirt(self, x: int, y: int) -> bool:
        return self.grid[y][x]


def _pump_view(state: "GameState") -> Optional[PumpView]:
    pump = state.pump
    if isinstance(pump, ActivePump):
        return PumpView(
            direction=state.player.direction.name,
            target_id=pump.target_id,
            inflation_progress=pump.inflation_progress,
        )
    if isinstance(pump, PumpVisual):
        return PumpView(direction=pump.direction.name, visual_timer=pump.visual_timer)
    return None


def take_snapshot(state: "GameState") -> Snapshot:
    player = state.player
    now = state.clock
    balance = state.balance
    return Snapshot(
        phase=state.phase.value,
        level=state.level,
        lives=state.lives,
        score=state.score.score,
        paused=state.round_paused,
        pause_timer=state.pause_timer,
        transition_timer=state.transition_timer,
        shake=state.shake,
        clock=now,
        grid=state.grid.rows(),
        player=PlayerView(
            pos=player.pos,
            render=(player.render.x, player.render.y),
            direction=player.direction.name,
            moving=player.moving,
        ),
        enemies=tuple(
            EnemyView(
                id=e.id,
                kind=e.kind.value,
                pos=e.pos,
                render=(e.render.x, e.render.y),
                direction=e.direction.name,
                inflation=e.inflation,
                ghost=e.ghost_target is not None,
                in_dirt=e.in_dirt,
                firing=e.firing,
            )
            for e in state.entities.enemies
        ),
        fires=tuple(
            FireView(
                id=f.id,
                origin=f.origin,
                direction=f.direction.name,
                age=f.age(now),
                range=fire_range(f.age(now), balance),
                owner_id=f.owner_id,
            )
            for f in state.entities.fires
        ),
        rocks=tuple(RockView(id=r.id, x=r.x, y=r.y, state=r.state.value) for r in state.entities.rocks),
        particles=tuple(
            ParticleView(
                pos=(p.pos.x, p.pos.y),
                color=p.color,
                life=p.life,
            )
            for p in state.entities.particles.particles
        ),
        pump=_pump_view(state),
    )
