"""Game configuration constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .models import EnemyKind, EnemySpec, SlowEffect, TowerKind, TowerSpec

GRID_SIZE = 40

MAP_WIDTH_CELLS = 20
MAP_HEIGHT_CELLS = 15

INITIAL_LIVES = 10
INITIAL_GOLD = 100
INITIAL_SCORE = 0

ENEMIES_PER_WAVE = 5
WAVE_BONUS_PER_WAVE = 10
WAVE_HEALTH_STEP = 0.1
BOSS_WAVE_INTERVAL = 5
SPAWN_INTERVAL_MS = 1000.0

# Projectile speeds are per-update displacements tuned for 60 updates/s.
NOMINAL_UPDATES_PER_SECOND = 60
AOE_DETONATION_EPSILON = 5.0

PATH_HALF_WIDTH = 15
PATH_PLACEMENT_TOLERANCE = 30

DEFAULT_LAYOUT = "classic"

TOWERS = {
    "basic": {
        "name": "Basic Tower",
        "cost": 50,
        "range": 100,
        "damage": 12,
        "fire_rate": 1.0,
        "projectile_speed": 5,
        "color": "#4CAF50",
    },
    "sniper": {
        "name": "Sniper Tower",
        "cost": 100,
        "range": 200,
        "damage": 30,
        "fire_rate": 0.5,
        "projectile_speed": 10,
        "color": "#2196F3",
    },
    "aoe": {
        "name": "Cannon Tower",
        "cost": 150,
        "range": 80,
        "damage": 15,
        "fire_rate": 0.8,
        "projectile_speed": 3,
        "color": "#FF9800",
        "aoe_radius": 30,
    },
    "slow": {
        "name": "Frost Tower",
        "cost": 75,
        "range": 90,
        "damage": 5,
        "fire_rate": 1.2,
        "projectile_speed": 6,
        "color": "#00BCD4",
        "slow": {"multiplier": 0.5, "duration_ms": 2000},
    },
}

# Speeds are world units per second.
ENEMIES = {
    "basic": {"health": 30, "speed": 60, "size": 15, "reward": 5, "color": "#e74c3c"},
    "fast": {"health": 15, "speed": 120, "size": 10, "reward": 8, "color": "#f1c40f"},
    "tank": {"health": 80, "speed": 30, "size": 20, "reward": 15, "color": "#8e44ad"},
    "boss": {"health": 200, "speed": 42, "size": 25, "reward": 50, "color": "#c0392b"},
}

# (kind, first wave it may appear in, cumulative draw threshold). A draw below
# the threshold picks the kind; anything left over is a basic enemy.
SPAWN_TABLE = [
    ("boss", 10, 0.1),
    ("tank", 5, 0.3),
    ("fast", 1, 0.4),
]

PATH_LAYOUTS = {
    "classic": [
        (0, 100),
        (150, 100),
        (150, 250),
        (300, 250),
        (300, 100),
        (450, 100),
        (450, 350),
        (600, 350),
        (600, 200),
        (800, 200),
    ],
    "zigzag": [
        (0, 60),
        (740, 60),
        (740, 220),
        (60, 220),
        (60, 380),
        (740, 380),
        (740, 540),
        (800, 540),
    ],
    "serpent": [
        (0, 300),
        (140, 300),
        (140, 100),
        (340, 100),
        (340, 500),
        (540, 500),
        (540, 100),
        (700, 100),
        (700, 300),
        (800, 300),
    ],
}


def build_tower_specs(table: Dict[str, dict]) -> Dict[TowerKind, TowerSpec]:
    specs: Dict[TowerKind, TowerSpec] = {}
    for key, entry in table.items():
        slow = entry.get("slow")
        specs[TowerKind(key)] = TowerSpec(
            kind=TowerKind(key),
            name=entry["name"],
            cost=int(entry["cost"]),
            range=float(entry["range"]),
            damage=float(entry["damage"]),
            fire_rate=float(entry["fire_rate"]),
            projectile_speed=float(entry["projectile_speed"]),
            color=entry.get("color", "#ffffff"),
            aoe_radius=float(entry["aoe_radius"]) if entry.get("aoe_radius") else None,
            slow=SlowEffect(float(slow["multiplier"]), float(slow["duration_ms"])) if slow else None,
        )
    return specs


def build_enemy_specs(table: Dict[str, dict]) -> Dict[EnemyKind, EnemySpec]:
    return {
        EnemyKind(key): EnemySpec(
            kind=EnemyKind(key),
            health=float(entry["health"]),
            speed=float(entry["speed"]),
            size=float(entry["size"]),
            reward=int(entry["reward"]),
            color=entry.get("color", "#ff0000"),
        )
        for key, entry in table.items()
    }


@dataclass
class GameConfig:
    layout: str = DEFAULT_LAYOUT
    grid_size: int = GRID_SIZE
    map_width_cells: int = MAP_WIDTH_CELLS
    map_height_cells: int = MAP_HEIGHT_CELLS
    initial_gold: int = INITIAL_GOLD
    initial_lives: int = INITIAL_LIVES
    enemies_per_wave: int = ENEMIES_PER_WAVE
    towers: Dict[TowerKind, TowerSpec] = field(default_factory=lambda: build_tower_specs(TOWERS))
    enemies: Dict[EnemyKind, EnemySpec] = field(default_factory=lambda: build_enemy_specs(ENEMIES))
    layouts: Dict[str, list] = field(default_factory=lambda: dict(PATH_LAYOUTS))
    seed: int | None = None

    @classmethod
    def default(cls) -> "GameConfig":
        return cls()

    @property
    def map_width(self) -> int:
        return self.map_width_cells * self.grid_size

    @property
    def map_height(self) -> int:
        return self.map_height_cells * self.grid_size

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (0.0, 0.0, float(self.map_width), float(self.map_height))

    def layout_names(self) -> list[str]:
        return list(self.layouts.keys())

    def cell_center(self, col: int, row: int) -> Tuple[float, float]:
        half = self.grid_size / 2
        return (col * self.grid_size + half, row * self.grid_size + half)

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        return (int(x // self.grid_size), int(y // self.grid_size))

    def cell_in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.map_width_cells and 0 <= row < self.map_height_cells
