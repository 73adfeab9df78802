import unittest

from tower_defense.enemy import Enemy, advance
from tower_defense.models import EnemyKind, EnemySpec
from tower_defense.path import Path

BASIC = EnemySpec(EnemyKind.BASIC, health=30, speed=60, size=15, reward=5)


class TestEnemyMovement(unittest.TestCase):
    def test_moves_along_first_segment(self):
        path = Path([(0, 0), (100, 0), (100, 100)])
        enemy = Enemy(BASIC, path)
        arrived = advance(enemy, path, 1000, 1.0, now_ms=1000)
        self.assertFalse(arrived)
        self.assertEqual(enemy.route_position, (0, 60.0))
        self.assertEqual(enemy.position, (60.0, 0.0))

    def test_crosses_several_segments_in_one_update(self):
        path = Path([(0, 0), (10, 0), (10, 10), (20, 10), (20, 20), (100, 20)])
        enemy = Enemy(BASIC, path)
        advance(enemy, path, 500, 1.0, now_ms=500)
        self.assertEqual(enemy.segment_index, 3)
        self.assertAlmostEqual(enemy.distance, 0.0)
        self.assertEqual(enemy.position, (20.0, 10.0))

    def test_arrival_clamps_to_final_waypoint(self):
        path = Path([(0, 0), (100, 0)])
        enemy = Enemy(BASIC, path)
        self.assertTrue(advance(enemy, path, 2000, 1.0, now_ms=2000))
        self.assertTrue(enemy.arrived)
        self.assertEqual(enemy.segment_index, path.point_count() - 1)
        self.assertEqual(enemy.position, (100.0, 0.0))
        self.assertFalse(advance(enemy, path, 1000, 1.0, now_ms=3000))

    def test_speed_multiplier_scales_distance(self):
        path = Path([(0, 0), (1000, 0)])
        enemy = Enemy(BASIC, path)
        advance(enemy, path, 500, 2.0, now_ms=500)
        self.assertAlmostEqual(enemy.x, 60.0)

    def test_slow_reduces_speed_until_expiry(self):
        path = Path([(0, 0), (1000, 0)])
        enemy = Enemy(BASIC, path)
        enemy.apply_slow(0.5, 1000, now_ms=0)

        advance(enemy, path, 1000, 1.0, now_ms=500)
        self.assertAlmostEqual(enemy.x, 30.0)
        self.assertIsNotNone(enemy.active_slow)

        advance(enemy, path, 1000, 1.0, now_ms=1500)
        self.assertIsNone(enemy.active_slow)
        self.assertAlmostEqual(enemy.x, 90.0)

    def test_non_positive_elapsed_does_not_move(self):
        path = Path([(0, 0), (100, 0)])
        enemy = Enemy(BASIC, path)
        advance(enemy, path, -100, 1.0, now_ms=0)
        advance(enemy, path, float("nan"), 1.0, now_ms=0)
        self.assertEqual(enemy.position, (0.0, 0.0))

    def test_zero_length_segments_are_skipped(self):
        path = Path([(0, 0), (0, 0), (0, 0), (50, 0)])
        enemy = Enemy(BASIC, path)
        advance(enemy, path, 500, 1.0, now_ms=500)
        self.assertEqual(enemy.segment_index, 2)
        self.assertAlmostEqual(enemy.x, 30.0)

    def test_movement_is_deterministic(self):
        path = Path([(0, 0), (37, 0), (37, 91), (150, 91)])
        first, second = Enemy(BASIC, path), Enemy(BASIC, path)
        steps = [(16.7, 1.0), (33.4, 2.0), (250, 1.0), (1000, 2.0), (5, 1.0)]
        for elapsed, multiplier in steps:
            advance(first, path, elapsed, multiplier, now_ms=0)
            advance(second, path, elapsed, multiplier, now_ms=0)
            self.assertEqual(first.position, second.position)
            self.assertEqual(first.route_position, second.route_position)


class TestEnemyHealth(unittest.TestCase):
    def test_health_scaled_by_multiplier(self):
        enemy = Enemy(BASIC, Path([(0, 0), (1, 0)]), health_multiplier=1.5)
        self.assertAlmostEqual(enemy.max_health, 45.0)
        self.assertEqual(enemy.health, enemy.max_health)

    def test_damage_never_goes_below_zero(self):
        enemy = Enemy(BASIC, Path([(0, 0), (1, 0)]))
        dealt = enemy.take_damage(50)
        self.assertEqual(dealt, 30)
        self.assertEqual(enemy.health, 0)
        self.assertFalse(enemy.is_alive())
        self.assertEqual(enemy.get_health_percentage(), 0.0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
