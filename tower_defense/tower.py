"""Tower system for the tower defense game."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from .enemy import Enemy
from .models import TowerSpec


class Tower:
    """Represents a tower placed on a grid cell."""

    def __init__(self, spec: TowerSpec, cell: Tuple[int, int], position: Tuple[float, float]):
        """Initialize a tower.

        Args:
            spec: Parameter record for the tower kind
            cell: Grid cell (col, row) the tower occupies
            position: World coordinate of the cell centre
        """
        self.spec = spec
        self.kind = spec.kind
        self.cell = cell
        self.x, self.y = position

        self.name = spec.name
        self.cost = spec.cost
        self.range = spec.range
        self.damage = spec.damage
        self.fire_rate = spec.fire_rate
        self.projectile_speed = spec.projectile_speed
        self.aoe_radius = spec.aoe_radius
        self.slow = spec.slow
        self.color = spec.color

        self.cooldown_remaining = 0.0
        self.target: Optional[Enemy] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def fire_interval_ms(self) -> float:
        return self.spec.fire_interval_ms

    def tick_cooldown(self, elapsed_ms: float):
        self.cooldown_remaining -= elapsed_ms

    def can_shoot(self) -> bool:
        return self.cooldown_remaining <= 0

    def reset_cooldown(self):
        """Restart the fire interval. Overshoot from the last update is dropped."""
        self.cooldown_remaining = self.fire_interval_ms

    def get_distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def is_in_range(self, x: float, y: float) -> bool:
        return self.get_distance_to(x, y) <= self.range

    def find_target(self, enemies: Iterable[Enemy]) -> Optional[Enemy]:
        return select_target(self, enemies)

    def __repr__(self):
        return f"Tower({self.name} at cell {self.cell})"


def select_target(tower: Tower, enemies: Iterable[Enemy]) -> Optional[Enemy]:
    """Pick the in-range enemy closest to the base.

    Enemies further along the route win: higher segment index first, then
    greater distance into the segment. Remaining ties keep the first enemy
    in scan order.

    Args:
        tower: The tower looking for a target
        enemies: Live enemies

    Returns:
        Enemy: The selected enemy, or None
    """
    best = None
    best_key = None
    for enemy in enemies:
        if not enemy.is_alive() or enemy.arrived:
            continue
        if not tower.is_in_range(enemy.x, enemy.y):
            continue
        key = (enemy.segment_index, enemy.distance)
        if best_key is None or key > best_key:
            best = enemy
            best_key = key
    return best
