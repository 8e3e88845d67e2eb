# Game Configuration Constants

# Dirt field dimensions (tiles)
GRID_W = 14
GRID_H = 15
SKY_ROWS = 3
STATUS_ROWS = 1
TOTAL_ROWS = SKY_ROWS + GRID_H + STATUS_ROWS

# Player
PLAYER_SPAWN = (7, 3)
PLAYER_SPEED = 2.5  # tiles per second, slightly faster than a Pooka
START_LIVES = 3

# Screen dimensions
TILE_PX = 36
SCREEN_W = GRID_W * TILE_PX
SCREEN_H = TOTAL_ROWS * TILE_PX
FPS = 60

# Colors
PALETTE = {
    "sky": (20, 30, 70),
    "dirt": (139, 90, 43),
    "dirt_dark": (110, 70, 32),
    "tunnel": (12, 8, 6),
    "player": (121, 14, 203),
    "pooka": (230, 40, 40),
    "fygar": (40, 200, 80),
    "fire": (255, 140, 20),
    "fire_core": (255, 240, 120),
    "warning": (255, 230, 0),
    "rock": (120, 120, 130),
    "pump": (220, 235, 255),
    "hud_text": (255, 255, 255),
    "game_over": (255, 51, 51),
}

ENEMY_COLORS = {
    "pooka": PALETTE["pooka"],
    "fygar": PALETTE["fygar"],
}

PARTICLE_COLORS = {
    "pop": (255, 255, 255),
    "crush": (150, 140, 130),
}
