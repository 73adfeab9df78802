"""Tower fire, projectile flight and damage resolution."""

from __future__ import annotations

import logging
from typing import Optional

from .config import AOE_DETONATION_EPSILON, GameConfig
from .economy import Economy
from .enemy import Enemy
from .models import EventSink, EventType, GameEvent, SlowEffect
from .projectile import Projectile
from .registry import EntityRegistry
from .tower import Tower, select_target

logger = logging.getLogger(__name__)


class CombatResolver:
    """Fires towers and resolves every projectile against the live enemies."""

    def __init__(self, config: GameConfig, registry: EntityRegistry, economy: Economy, emit: EventSink) -> None:
        self.config = config
        self.registry = registry
        self.economy = economy
        self._emit = emit

    def fire_towers(self, elapsed_ms: float) -> int:
        """Advance tower cooldowns and fire at the best target in range.

        Returns:
            int: Number of projectiles launched
        """
        fired = 0
        enemies = self.registry.enemies
        for tower in self.registry.towers:
            tower.tick_cooldown(elapsed_ms)
            if not tower.can_shoot():
                continue
            target = select_target(tower, enemies)
            tower.target = target
            if target is None:
                # Ready and waiting; don't let the cooldown run away below zero.
                tower.cooldown_remaining = 0.0
                continue
            self.fire(tower, target)
            tower.reset_cooldown()
            fired += 1
        return fired

    def fire(self, tower: Tower, target: Enemy) -> Projectile:
        projectile = Projectile(
            origin=tower.position,
            target_position=target.position,
            speed=tower.projectile_speed,
            damage=tower.damage,
            aoe_radius=tower.aoe_radius,
            slow=tower.slow,
            source=tower,
        )
        self.registry.add_projectile(projectile)
        logger.debug("%r fired at %r", tower, target)
        self._emit(
            GameEvent(
                EventType.PROJECTILE_FIRED,
                {"tower": tower.kind.value, "origin": tower.position, "target": target.position},
            )
        )
        return projectile

    def update_projectiles(self, elapsed_ms: float, speed_multiplier: float, now_ms: float) -> None:
        bounds = self.config.bounds
        for projectile in self.registry.projectiles:
            projectile.update(elapsed_ms, speed_multiplier)

            if projectile.is_area_effect:
                if projectile.distance_to_target() <= AOE_DETONATION_EPSILON:
                    self.detonate(projectile, now_ms)
                    self.registry.remove_projectile(projectile)
                    continue
            else:
                hit = self._first_collision(projectile)
                if hit is not None:
                    self.damage(hit, projectile.damage, now_ms, projectile.slow)
                    self.registry.remove_projectile(projectile)
                    continue
                if projectile.heading == (0.0, 0.0):
                    # Launched from the captured point itself; it can never travel.
                    self.registry.remove_projectile(projectile)
                    continue

            if projectile.is_out_of_bounds(bounds):
                self.registry.remove_projectile(projectile)

    def _first_collision(self, projectile: Projectile) -> Optional[Enemy]:
        for enemy in self.registry.enemies:
            if enemy.distance_to(projectile.x, projectile.y) <= enemy.size:
                return enemy
        return None

    def detonate(self, projectile: Projectile, now_ms: float) -> int:
        """Damage every enemy within the blast radius, without falloff.

        Returns:
            int: Number of enemies caught in the blast
        """
        tx, ty = projectile.target_position
        radius = projectile.aoe_radius or 0.0
        caught = [enemy for enemy in self.registry.enemies if enemy.distance_to(tx, ty) <= radius]
        for enemy in caught:
            self.damage(enemy, projectile.damage, now_ms, projectile.slow)
        logger.debug("Detonation at (%.1f, %.1f) caught %d enemies", tx, ty, len(caught))
        return len(caught)

    def damage(self, enemy: Enemy, amount: float, now_ms: float, slow: Optional[SlowEffect] = None) -> bool:
        """Apply damage and any slow effect, defeating the enemy at zero health.

        Returns:
            bool: True if the enemy was defeated
        """
        if not self.registry.has_enemy(enemy):
            return False
        dealt = enemy.take_damage(amount)
        if slow is not None:
            enemy.apply_slow(slow.multiplier, slow.duration_ms, now_ms)
        self._emit(GameEvent(EventType.ENEMY_HIT, {"kind": enemy.kind.value, "damage": dealt, "health": enemy.health}))
        if enemy.is_alive():
            return False
        self.defeat(enemy)
        return True

    def defeat(self, enemy: Enemy) -> None:
        if not self.registry.remove_enemy(enemy):
            return
        self.economy.reward(enemy)
        logger.debug("%r defeated, +%d gold", enemy, enemy.reward)
        self._emit(
            GameEvent(
                EventType.ENEMY_DEFEATED,
                {"kind": enemy.kind.value, "reward": enemy.reward, "position": enemy.position},
            )
        )
