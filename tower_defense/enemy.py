"""Enemy system for the tower defense game."""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from .models import EnemySpec
from .path import Path

logger = logging.getLogger(__name__)


class Enemy:
    """Represents an enemy unit walking the path."""

    def __init__(self, spec: EnemySpec, path: Path, health_multiplier: float = 1.0):
        """Initialize an enemy at the start of the path.

        Args:
            spec: Parameter record for the enemy kind
            path: The path the enemy walks
            health_multiplier: Wave difficulty scalar applied to base health
        """
        # Assigned by the registry that takes ownership of the enemy.
        self.id: Optional[int] = None
        self.spec = spec
        self.kind = spec.kind

        self.max_health = spec.health * health_multiplier
        self.health = self.max_health
        self.base_speed = spec.speed
        self.size = spec.size
        self.reward = spec.reward
        self.color = spec.color

        self.segment_index = 0
        self.distance = 0.0
        self.x, self.y = path.resolve(0, 0.0)

        # (multiplier, expires_at_ms)
        self.active_slow: Optional[Tuple[float, float]] = None
        self.arrived = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def route_position(self) -> Tuple[int, float]:
        return (self.segment_index, self.distance)

    def apply_slow(self, multiplier: float, duration_ms: float, now_ms: float):
        """Apply a slow effect, replacing whatever slow was active."""
        self.active_slow = (multiplier, now_ms + duration_ms)

    def expire_slow(self, now_ms: float):
        if self.active_slow is not None and now_ms >= self.active_slow[1]:
            self.active_slow = None

    def current_speed(self, speed_multiplier: float = 1.0) -> float:
        """Effective speed after slow effects and time scaling.

        Args:
            speed_multiplier: Global speed multiplier

        Returns:
            float: World units per second
        """
        slow_factor = 1.0
        if self.active_slow is not None:
            slow_factor = max(0.0, 1.0 - self.active_slow[0])
        return self.base_speed * slow_factor * speed_multiplier

    def take_damage(self, damage: float) -> float:
        """Apply damage to the enemy.

        Health never drops below zero.

        Args:
            damage: Amount of damage to apply

        Returns:
            float: Damage actually dealt
        """
        dealt = min(self.health, max(0.0, damage))
        self.health -= dealt
        return dealt

    def is_alive(self) -> bool:
        return self.health > 0

    def get_health_percentage(self) -> float:
        """Get the health as a percentage.

        Returns:
            float: Health percentage (0-100)
        """
        if self.max_health <= 0:
            return 0.0
        return max(0.0, min(100.0, (self.health / self.max_health) * 100))

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def __repr__(self):
        return (
            f"Enemy({self.kind.value}#{self.id} health={self.health:.0f}/{self.max_health:.0f} "
            f"at ({self.x:.1f}, {self.y:.1f}))"
        )


def advance(enemy: Enemy, path: Path, elapsed_ms: float, speed_multiplier: float, now_ms: float) -> bool:
    """Move an enemy along the path.

    Distance left over at the end of a segment carries into the following
    segments, so a fast enemy can cross several waypoints in one update.

    Args:
        enemy: The enemy to move
        path: The path being walked
        elapsed_ms: Time since the last update
        speed_multiplier: Global speed multiplier
        now_ms: Simulation clock, for slow expiry

    Returns:
        bool: True if the enemy reached the base during this update
    """
    if enemy.arrived:
        return False

    enemy.expire_slow(now_ms)
    travel = enemy.current_speed(speed_multiplier) * (elapsed_ms / 1000.0)
    if not math.isfinite(travel) or travel < 0:
        travel = 0.0
    enemy.distance += travel

    last = path.last_segment_index
    crossed = 0
    while enemy.segment_index <= last and crossed <= last:
        length = path.segment_length(enemy.segment_index)
        if enemy.distance < length:
            break
        enemy.distance -= length
        enemy.segment_index += 1
        crossed += 1

    if enemy.segment_index > last:
        enemy.segment_index = path.point_count() - 1
        enemy.distance = 0.0
        enemy.arrived = True
        enemy.x, enemy.y = path.end
        logger.debug("%r reached the base", enemy)
        return True

    enemy.x, enemy.y = path.resolve(enemy.segment_index, enemy.distance)
    return False
