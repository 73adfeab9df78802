import unittest

from tower_defense.combat import CombatResolver
from tower_defense.config import GameConfig
from tower_defense.economy import Economy
from tower_defense.enemy import Enemy
from tower_defense.models import EnemyKind, EnemySpec, EventType, SlowEffect, TowerKind
from tower_defense.path import Path
from tower_defense.projectile import Projectile
from tower_defense.registry import EntityRegistry
from tower_defense.tower import Tower

SPEC = EnemySpec(EnemyKind.BASIC, health=30, speed=60, size=15, reward=5)
PATH = Path([(0, 100), (800, 100)])


class CombatTestCase(unittest.TestCase):
    def setUp(self):
        self.config = GameConfig()
        self.events = []
        self.registry = EntityRegistry()
        self.economy = Economy(self.config, self.events.append)
        self.combat = CombatResolver(self.config, self.registry, self.economy, self.events.append)

    def add_enemy(self, x, y, health=None):
        enemy = Enemy(SPEC, PATH)
        enemy.x, enemy.y = x, y
        if health is not None:
            enemy.health = health
        self.registry.add_enemy(enemy)
        return enemy

    def add_tower(self, kind, position=(100.0, 160.0), cell=(2, 4)):
        tower = Tower(self.config.towers[kind], cell, position)
        self.registry.add_tower(tower)
        return tower

    def event_types(self):
        return [event.type for event in self.events]


class TestFireDecision(CombatTestCase):
    def test_fires_when_ready_and_target_in_range(self):
        tower = self.add_tower(TowerKind.BASIC)
        self.add_enemy(100, 100)
        self.assertEqual(self.combat.fire_towers(16), 1)
        self.assertEqual(len(self.registry.projectiles), 1)
        self.assertEqual(tower.cooldown_remaining, 1000.0)
        self.assertIn(EventType.PROJECTILE_FIRED, self.event_types())

    def test_waits_for_cooldown_and_drops_overshoot(self):
        tower = self.add_tower(TowerKind.BASIC)
        self.add_enemy(100, 100)
        self.combat.fire_towers(16)

        self.assertEqual(self.combat.fire_towers(400), 0)
        self.assertEqual(tower.cooldown_remaining, 600.0)

        self.assertEqual(self.combat.fire_towers(700), 1)
        self.assertEqual(tower.cooldown_remaining, 1000.0)

    def test_idle_tower_cooldown_does_not_go_negative(self):
        tower = self.add_tower(TowerKind.BASIC)
        for _ in range(10):
            self.combat.fire_towers(500)
        self.assertEqual(tower.cooldown_remaining, 0.0)
        self.assertEqual(self.registry.projectiles, ())

    def test_projectile_captures_target_position(self):
        self.add_tower(TowerKind.SNIPER)
        enemy = self.add_enemy(150, 100)
        self.combat.fire_towers(16)
        projectile = self.registry.projectiles[0]
        enemy.x = 400
        self.assertEqual(projectile.target_position, (150, 100))


class TestDirectHits(CombatTestCase):
    def shoot(self, origin, target, damage=12.0, speed=5.0, slow=None):
        projectile = Projectile(origin, target, speed=speed, damage=damage, slow=slow)
        self.registry.add_projectile(projectile)
        return projectile

    def test_hit_damages_and_removes_projectile(self):
        enemy = self.add_enemy(130, 100)
        self.shoot((100, 100), (200, 100))
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(enemy.health, 18)
        self.assertEqual(self.registry.projectiles, ())
        self.assertIn(EventType.ENEMY_HIT, self.event_types())

    def test_at_most_one_enemy_per_projectile(self):
        first = self.add_enemy(130, 100)
        second = self.add_enemy(130, 100)
        self.shoot((100, 100), (200, 100))
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(first.health, 18)
        self.assertEqual(second.health, 30)

    def test_hits_whatever_enemy_is_on_the_line(self):
        original = self.add_enemy(400, 400)
        bystander = self.add_enemy(130, 100)
        self.shoot((100, 100), (200, 100))
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(original.health, 30)
        self.assertEqual(bystander.health, 18)

    def test_slow_effect_overwrites_previous_slow(self):
        enemy = self.add_enemy(130, 100)
        enemy.apply_slow(0.2, 99999, now_ms=0)
        self.shoot((100, 100), (200, 100), damage=5, slow=SlowEffect(0.5, 2000))
        self.combat.update_projectiles(100, 1.0, now_ms=1000)
        self.assertEqual(enemy.active_slow, (0.5, 3000))

    def test_defeat_rewards_gold_and_score(self):
        enemy = self.add_enemy(130, 100, health=10)
        self.shoot((100, 100), (200, 100))
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(enemy.health, 0)
        self.assertEqual(self.registry.enemies, ())
        self.assertEqual(self.economy.gold, self.config.initial_gold + 5)
        self.assertEqual(self.economy.score, 5)
        self.assertIn(EventType.ENEMY_DEFEATED, self.event_types())

    def test_defeated_enemy_is_not_hit_again_in_same_update(self):
        self.add_enemy(130, 100, health=10)
        self.shoot((100, 100), (200, 100))
        survivor = self.shoot((100, 100), (200, 100))
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(self.economy.gold, self.config.initial_gold + 5)
        self.assertEqual(self.event_types().count(EventType.ENEMY_DEFEATED), 1)
        self.assertEqual(self.registry.projectiles, (survivor,))

    def test_out_of_bounds_projectile_is_discarded(self):
        enemy = self.add_enemy(100, 500)
        self.shoot((790, 100), (900, 100), speed=10)
        self.combat.update_projectiles(100, 1.0, now_ms=0)
        self.assertEqual(self.registry.projectiles, ())
        self.assertEqual(enemy.health, 30)


class TestAreaEffect(CombatTestCase):
    def test_damage_is_uniform_within_radius(self):
        centre = self.add_enemy(160, 100)
        edge = self.add_enemy(180, 100)
        outside = self.add_enemy(200, 100)
        passer_by = self.add_enemy(120, 100)
        projectile = Projectile((100, 100), (160, 100), speed=3, damage=15, aoe_radius=30)
        self.registry.add_projectile(projectile)

        for _ in range(10):
            if not self.registry.projectiles:
                break
            self.combat.update_projectiles(100, 1.0, now_ms=0)

        self.assertEqual(self.registry.projectiles, ())
        self.assertEqual(centre.health, 15)
        self.assertEqual(edge.health, 15)
        self.assertEqual(outside.health, 30)
        self.assertEqual(passer_by.health, 30)

    def test_blast_defeats_several_enemies(self):
        self.add_enemy(160, 100, health=10)
        self.add_enemy(170, 100, health=10)
        projectile = Projectile((160, 100), (160, 100), speed=3, damage=15, aoe_radius=30)
        self.registry.add_projectile(projectile)
        self.combat.update_projectiles(16, 1.0, now_ms=0)
        self.assertEqual(self.registry.enemies, ())
        self.assertEqual(self.economy.score, 10)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
