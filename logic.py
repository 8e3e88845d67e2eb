"""Centralized gameplay balance tuning logic."""

from __future__ import annotations

from dataclasses import dataclass

import config


@dataclass
class BalanceLogic:
    """Single source of truth for gameplay tuning values."""

    fps: float = float(config.FPS)

    # Simulation pacing
    frame_dt_cap: float = 0.25
    max_catchup_steps: int = 6

    # Movement (tiles per second)
    player_speed: float = config.PLAYER_SPEED
    pooka_tunnel_speed: float = 2.0
    fygar_tunnel_speed: float = 1.5
    dirt_speed: float = 0.5

    # Ghost mode
    ghost_threshold: float = 0.6
    ghost_ring_radius: int = 5
    bfs_max_distance: int = 20

    # Aggression boost
    aggression_time: float = 30.0
    aggression_multiplier: float = 1.2

    # Fire breath phases (seconds)
    fire_warning: float = 0.5
    fire_grow: float = 0.4
    fire_full: float = 0.3
    fire_shrink: float = 0.3
    fire_cooldown: float = 3.0
    fire_probability: float = 0.3
    fire_distance: int = 3

    # Pump
    pump_reach: int = 2
    pump_inflate_interval: float = 0.3
    max_inflation: int = 4
    pump_visual_time: float = 0.2
    deflate_interval: float = 0.8

    # Rocks
    rock_wobble_time: float = 0.6
    rock_fall_speed: float = 6.0
    rock_count_min: int = 3
    rock_count_max: int = 5

    # Round flow
    round_pause: float = 2.0
    level_transition: float = 2.0
    start_lives: int = config.START_LIVES

    # Scoring
    dig_points: int = 10
    pump_defeat_points: int = 200
    rock_crush_points: int = 500
    level_bonus: int = 1000

    # Cosmetics
    enemy_crush_shake: float = 6.0
    player_crush_shake: float = 12.0
    shake_decay: float = 24.0
    pop_particles: int = 16
    crush_particles: int = 10

    # Spawning
    spawn_attempts: int = 100
    spawn_min_player_distance: int = 3
    spawn_lair_tunnels: bool = False

    @property
    def fixed_dt(self) -> float:
        return 1.0 / max(1.0, float(self.fps))

    @property
    def fire_duration(self) -> float:
        return self.fire_warning + self.fire_grow + self.fire_full + self.fire_shrink

    def tunnel_speed(self, kind: str) -> float:
        if str(kind) == "fygar":
            return self.fygar_tunnel_speed
        return self.pooka_tunnel_speed


@dataclass(frozen=True)
class EnemySpawnPlan:
    """Resolved enemy composition for one level."""

    pooka_count: int
    fygar_count: int
    speed_scale: float

    @property
    def total_count(self) -> int:
        return self.pooka_count + self.fygar_count


class LevelScalingLogic:
    """Per-level enemy counts and speed scaling."""

    def __init__(self) -> None:
        self.pooka_base = 2
        self.pooka_max = 4
        self.pooka_levels_per_extra = 2
        self.fygar_base = 1
        self.fygar_max = 2
        self.fygar_levels_per_extra = 3
        self.speed_per_level = 0.1
        self.speed_scale_max = 1.5

    def speed_scale(self, level: int) -> float:
        lvl = max(1, int(level))
        return min(self.speed_scale_max, 1.0 + self.speed_per_level * (lvl - 1))

    def plan_level(self, level: int) -> EnemySpawnPlan:
        lvl = max(1, int(level))
        pooka = min(self.pooka_base + lvl // self.pooka_levels_per_extra, self.pooka_max)
        fygar = min(self.fygar_base + lvl // self.fygar_levels_per_extra, self.fygar_max)
        return EnemySpawnPlan(pooka_count=pooka, fygar_count=fygar, speed_scale=self.speed_scale(lvl))

    def max_enemies(self) -> int:
        return self.pooka_max + self.fygar_max
