"""Visual rendering system."""

from __future__ import annotations

import math

import pyglet
from pyglet import shapes
from pyglet.graphics import Group

from config import ENEMY_COLORS, GRID_H, GRID_W, PALETTE, SCREEN_H, SCREEN_W, SKY_ROWS, TILE_PX
from utils import Direction


def tile_to_screen(x: float, y: float, shake: tuple[float, float] = (0.0, 0.0)) -> tuple[float, float]:
    """Bottom-left pixel of a (possibly fractional) tile position."""
    sx = x * TILE_PX + shake[0]
    sy = SCREEN_H - (y + SKY_ROWS + 1) * TILE_PX + shake[1]
    return sx, sy


class RenderHandle:
    """Handle for managing render objects."""

    def __init__(self, *objs):
        self.objs = list(objs)

    def set_visible(self, visible: bool):
        for o in self.objs:
            o.visible = visible

    def delete(self):
        for o in self.objs:
            if hasattr(o, "delete"):
                o.delete()


class Visuals:
    """Draws a :class:`snapshot.Snapshot` with pyglet shapes."""

    def __init__(self, batch):
        self.batch = batch
        self._bg_group = Group(order=0)
        self._field_group = Group(order=1)
        self._actor_group = Group(order=2)
        self._fx_group = Group(order=3)
        self._hud_group = Group(order=4)

        self._enemy_handles: dict[int, RenderHandle] = {}
        self._rock_handles: dict[int, RenderHandle] = {}
        self._fire_handles: dict[int, RenderHandle] = {}
        self._particle_dots: list[shapes.Rectangle] = []
        self._player_handle: RenderHandle | None = None
        self._pump_line: shapes.Line | None = None

        self._sky = shapes.Rectangle(
            0, SCREEN_H - SKY_ROWS * TILE_PX, SCREEN_W, SKY_ROWS * TILE_PX,
            color=PALETTE["sky"], batch=self.batch, group=self._bg_group,
        )
        self._tiles: list[list[shapes.Rectangle]] = []
        for y in range(GRID_H):
            row = []
            for x in range(GRID_W):
                px, py = tile_to_screen(x, y)
                row.append(shapes.Rectangle(px, py, TILE_PX, TILE_PX, color=PALETTE["dirt"], batch=self.batch, group=self._field_group))
            self._tiles.append(row)
        self._init_hud()

    def _init_hud(self) -> None:
        top = SCREEN_H - 8
        self._score_label = pyglet.text.Label(
            "", font_size=13, x=8, y=top, anchor_x="left", anchor_y="top",
            color=(*PALETTE["hud_text"], 255), batch=self.batch, group=self._hud_group,
        )
        self._level_label = pyglet.text.Label(
            "", font_size=13, x=SCREEN_W - 8, y=top, anchor_x="right", anchor_y="top",
            color=(*PALETTE["hud_text"], 255), batch=self.batch, group=self._hud_group,
        )
        self._lives_label = pyglet.text.Label(
            "", font_size=12, x=8, y=8, anchor_x="left", anchor_y="bottom",
            color=(*PALETTE["hud_text"], 255), batch=self.batch, group=self._hud_group,
        )
        self._banner = pyglet.text.Label(
            "", font_size=22, x=SCREEN_W // 2, y=SCREEN_H // 2, anchor_x="center", anchor_y="center",
            color=(*PALETTE["hud_text"], 255), batch=self.batch, group=self._hud_group,
        )

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def sync(self, snap) -> None:
        shake = (0.0, 0.0)
        if snap.shake > 0.0:
            shake = (math.sin(snap.clock * 53.0) * snap.shake, math.cos(snap.clock * 47.0) * snap.shake)

        self._sync_grid(snap, shake)
        self._sync_player(snap.player, shake)
        self._sync_enemies(snap.enemies, shake)
        self._sync_rocks(snap.rocks, shake)
        self._sync_fires(snap.fires, shake)
        self._sync_pump(snap, shake)
        self._sync_particles(snap.particles, shake)
        self._sync_hud(snap)

    def _sync_grid(self, snap, shake) -> None:
        for y, row in enumerate(snap.grid):
            for x, dirt in enumerate(row):
                tile = self._tiles[y][x]
                tile.x, tile.y = tile_to_screen(x, y, shake)
                if dirt:
                    tile.color = PALETTE["dirt"] if (y // 4) % 2 == 0 else PALETTE["dirt_dark"]
                else:
                    tile.color = PALETTE["tunnel"]

    def _sync_player(self, player, shake) -> None:
        if self._player_handle is None:
            body = shapes.Rectangle(0, 0, TILE_PX - 8, TILE_PX - 8, color=PALETTE["player"], batch=self.batch, group=self._actor_group)
            visor = shapes.Rectangle(0, 0, 8, 8, color=(255, 255, 255), batch=self.batch, group=self._actor_group)
            self._player_handle = RenderHandle(body, visor)
        body, visor = self._player_handle.objs
        px, py = tile_to_screen(*player.render, shake)
        body.x, body.y = px + 4, py + 4
        d = Direction[player.direction]
        cx, cy = px + TILE_PX / 2, py + TILE_PX / 2
        visor.x = cx - 4 + d.dx * 8
        visor.y = cy - 4 - d.dy * 8

    def _sync_enemies(self, enemies, shake) -> None:
        live = set()
        for e in enemies:
            live.add(e.id)
            h = self._enemy_handles.get(e.id)
            if h is None:
                body = shapes.Circle(0, 0, TILE_PX * 0.38, color=ENEMY_COLORS.get(e.kind, (200, 120, 120)), batch=self.batch, group=self._actor_group)
                eye = shapes.Circle(0, 0, 4, color=(255, 255, 255), batch=self.batch, group=self._actor_group)
                h = self._enemy_handles[e.id] = RenderHandle(body, eye)
            body, eye = h.objs
            px, py = tile_to_screen(*e.render, shake)
            cx, cy = px + TILE_PX / 2, py + TILE_PX / 2
            body.x, body.y = cx, cy
            body.radius = TILE_PX * (0.38 + 0.09 * e.inflation)
            # Ghosts drifting through dirt are drawn as faint eyes only.
            body.opacity = 90 if e.in_dirt else 255
            d = Direction[e.direction]
            eye.x, eye.y = cx + d.dx * 6, cy - d.dy * 6
        for enemy_id in [k for k in self._enemy_handles if k not in live]:
            self._enemy_handles.pop(enemy_id).delete()

    def _sync_rocks(self, rocks, shake) -> None:
        live = set()
        for r in rocks:
            live.add(r.id)
            h = self._rock_handles.get(r.id)
            if h is None:
                h = self._rock_handles[r.id] = RenderHandle(
                    shapes.Rectangle(0, 0, TILE_PX - 4, TILE_PX - 6, color=PALETTE["rock"], batch=self.batch, group=self._actor_group)
                )
            (body,) = h.objs
            px, py = tile_to_screen(r.x, r.y, shake)
            wobble = math.sin(py * 0.7 + px) * 2.0 if r.state == "wobbling" else 0.0
            body.x, body.y = px + 2 + wobble, py + 2
        for rock_id in [k for k in self._rock_handles if k not in live]:
            self._rock_handles.pop(rock_id).delete()

    def _sync_fires(self, fires, shake) -> None:
        live = set()
        for f in fires:
            live.add(f.id)
            h = self._fire_handles.get(f.id)
            if h is None:
                flame = shapes.Rectangle(0, 0, 1, 1, color=PALETTE["fire"], batch=self.batch, group=self._fx_group)
                spark = shapes.Circle(0, 0, 5, color=PALETTE["warning"], batch=self.batch, group=self._fx_group)
                h = self._fire_handles[f.id] = RenderHandle(flame, spark)
            flame, spark = h.objs
            d = Direction[f.direction]
            ox, oy = tile_to_screen(*f.origin, shake)
            cx, cy = ox + TILE_PX / 2, oy + TILE_PX / 2
            spark.x, spark.y = cx + d.dx * TILE_PX * 0.5, cy
            spark.visible = f.range == 0
            flame.visible = f.range > 0
            if f.range > 0:
                length = f.range * TILE_PX
                flame.width = length
                flame.height = TILE_PX * 0.5
                flame.x = cx + TILE_PX / 2 if d.dx > 0 else cx - TILE_PX / 2 - length
                flame.y = cy - TILE_PX * 0.25
        for fire_id in [k for k in self._fire_handles if k not in live]:
            self._fire_handles.pop(fire_id).delete()

    def _sync_pump(self, snap, shake) -> None:
        pump = snap.pump
        if pump is None:
            if self._pump_line is not None:
                self._pump_line.visible = False
            return
        if self._pump_line is None:
            self._pump_line = shapes.Line(0, 0, 0, 0, thickness=3, color=PALETTE["pump"], batch=self.batch, group=self._fx_group)
        px, py = tile_to_screen(*snap.player.render, shake)
        cx, cy = px + TILE_PX / 2, py + TILE_PX / 2
        d = Direction[pump.direction]
        reach = TILE_PX * 2
        if pump.target_id is not None:
            for e in snap.enemies:
                if e.id == pump.target_id:
                    ex, ey = tile_to_screen(*e.render, shake)
                    reach = math.hypot(ex - px, ey - py)
                    break
        line = self._pump_line
        line.visible = True
        line.x, line.y = cx, cy
        line.x2, line.y2 = cx + d.dx * reach, cy - d.dy * reach

    def _sync_particles(self, particles, shake) -> None:
        while len(self._particle_dots) < len(particles):
            self._particle_dots.append(shapes.Rectangle(0, 0, 4, 4, color=(255, 255, 255), batch=self.batch, group=self._fx_group))
        for i, dot in enumerate(self._particle_dots):
            if i >= len(particles):
                dot.visible = False
                continue
            p = particles[i]
            # Particle positions are tile-centred already.
            sx, sy = tile_to_screen(p.pos[0], p.pos[1] - 1.0, shake)
            dot.visible = True
            dot.x, dot.y = sx - 2, sy - 2
            dot.color = p.color
            dot.opacity = int(255 * max(0.0, min(1.0, p.life)))

    def _sync_hud(self, snap) -> None:
        self._score_label.text = f"SCORE {snap.score}"
        self._level_label.text = f"LEVEL {snap.level}"
        self._lives_label.text = "LIVES " + "* " * snap.lives
        if snap.phase == "gameOver":
            self._banner.text = "GAME OVER - press R"
            self._banner.color = (*PALETTE["game_over"], 255)
        elif snap.phase == "levelComplete":
            self._banner.text = f"LEVEL {snap.level} CLEAR"
            self._banner.color = (*PALETTE["hud_text"], 255)
        elif snap.paused:
            self._banner.text = "READY"
            self._banner.color = (*PALETTE["hud_text"], 255)
        else:
            self._banner.text = ""
