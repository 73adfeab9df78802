"""Projectile system for the tower defense game."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import NOMINAL_UPDATES_PER_SECOND
from .models import SlowEffect


class Projectile:
    """A shot flying in a straight line toward the point its target occupied at launch."""

    def __init__(
        self,
        origin: Tuple[float, float],
        target_position: Tuple[float, float],
        speed: float,
        damage: float,
        aoe_radius: Optional[float] = None,
        slow: Optional[SlowEffect] = None,
        source=None,
    ):
        """Initialize a projectile.

        Args:
            origin: Launch coordinate (the tower position)
            target_position: Point captured at launch; the shot does not home
            speed: Displacement per nominal 60 Hz update
            damage: Damage dealt on hit or detonation
            aoe_radius: Detonation radius for area-effect shots
            slow: Slow effect applied to the enemy hit
            source: The tower that fired, for event reporting
        """
        self.x, self.y = origin
        self.target_x, self.target_y = target_position
        self.speed = speed
        self.damage = damage
        self.aoe_radius = aoe_radius
        self.slow = slow
        self.source = source
        self.is_area_effect = bool(aoe_radius)

        dx = self.target_x - self.x
        dy = self.target_y - self.y
        distance = math.hypot(dx, dy)
        if distance > 0:
            self.heading: Tuple[float, float] = (dx / distance, dy / distance)
        else:
            self.heading = (0.0, 0.0)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def target_position(self) -> Tuple[float, float]:
        return (self.target_x, self.target_y)

    def distance_to_target(self) -> float:
        return math.hypot(self.target_x - self.x, self.target_y - self.y)

    def update(self, elapsed_ms: float, speed_multiplier: float = 1.0):
        """Move the projectile for one update.

        Area-effect shots stop on their captured point so they can detonate
        there. Direct shots keep their heading after passing it.

        Args:
            elapsed_ms: Time since the last update
            speed_multiplier: Global speed multiplier
        """
        step = self.speed * (elapsed_ms / 1000.0) * NOMINAL_UPDATES_PER_SECOND * speed_multiplier
        if not math.isfinite(step) or step <= 0:
            return

        if self.is_area_effect:
            remaining = self.distance_to_target()
            if remaining <= 0:
                return
            step = min(step, remaining)
            self.x += (self.target_x - self.x) / remaining * step
            self.y += (self.target_y - self.y) / remaining * step
            return

        hx, hy = self.heading
        self.x += hx * step
        self.y += hy * step

    def is_out_of_bounds(self, bounds: Tuple[float, float, float, float]) -> bool:
        left, top, right, bottom = bounds
        return self.x < left or self.x > right or self.y < top or self.y > bottom

    def __repr__(self):
        kind = "aoe" if self.is_area_effect else "direct"
        return f"Projectile({kind} at ({self.x:.1f}, {self.y:.1f}) -> ({self.target_x:.1f}, {self.target_y:.1f}))"
