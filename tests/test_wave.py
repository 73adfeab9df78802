import unittest

from tower_defense.config import GameConfig
from tower_defense.errors import InvalidStateTransition
from tower_defense.models import EnemyKind, EventType, WavePhase
from tower_defense.path import Path
from tower_defense.wave import WaveManager

PATH = Path([(0, 100), (800, 100)])


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class WaveTestCase(unittest.TestCase):
    def setUp(self):
        self.events = []
        self.manager = WaveManager(GameConfig(), self.events.append, rng=FixedRandom(0.99))

    def advance_to_wave(self, number):
        self.manager.current_wave = number - 1
        self.manager.phase = WavePhase.IDLE
        return self.manager.start_wave()


class TestWaveLifecycle(WaveTestCase):
    def test_initial_state(self):
        self.assertEqual(self.manager.current_wave, 0)
        self.assertIs(self.manager.phase, WavePhase.IDLE)
        self.assertIsNone(self.manager.update(5000, 1.0, PATH))

    def test_start_wave_sets_quota(self):
        self.assertEqual(self.manager.start_wave(), 1)
        self.assertEqual(self.manager.enemies_this_wave, 5)
        self.assertEqual(self.manager.enemies_spawned, 0)
        self.assertTrue(self.manager.wave_active)
        self.assertEqual(self.events[-1].type, EventType.WAVE_STARTED)

    def test_cannot_start_while_active(self):
        self.manager.start_wave()
        with self.assertRaises(InvalidStateTransition):
            self.manager.start_wave()
        self.assertEqual(self.manager.current_wave, 1)

    def test_completion_requires_quota_and_no_survivors(self):
        self.manager.start_wave()
        self.assertEqual(self.manager.check_complete(0), 0)

        for _ in range(5):
            self.manager.update(1000, 1.0, PATH)
        self.assertEqual(self.manager.enemies_spawned, 5)
        self.assertEqual(self.manager.check_complete(2), 0)

        self.assertEqual(self.manager.check_complete(0), 10)
        self.assertIs(self.manager.phase, WavePhase.COMPLETE)
        self.assertEqual(self.manager.check_complete(0), 0)
        completions = [e for e in self.events if e.type is EventType.WAVE_COMPLETE]
        self.assertEqual(len(completions), 1)

    def test_next_wave_after_completion(self):
        self.manager.start_wave()
        for _ in range(5):
            self.manager.update(1000, 1.0, PATH)
        self.manager.check_complete(0)
        self.assertEqual(self.manager.start_wave(), 2)
        self.assertEqual(self.manager.enemies_this_wave, 10)

    def test_bonus_scales_with_wave(self):
        self.advance_to_wave(3)
        self.manager.enemies_spawned = self.manager.enemies_this_wave
        self.assertEqual(self.manager.check_complete(0), 30)


class TestSpawning(WaveTestCase):
    def test_spawn_cadence(self):
        self.manager.start_wave()
        self.assertIsNone(self.manager.update(999, 1.0, PATH))
        enemy = self.manager.update(1, 1.0, PATH)
        self.assertIsNotNone(enemy)
        self.assertEqual(enemy.position, (0.0, 100.0))
        self.assertEqual(self.manager.spawn_timer, 0.0)

    def test_speed_multiplier_shortens_cadence(self):
        self.manager.start_wave()
        self.assertIsNotNone(self.manager.update(500, 2.0, PATH))

    def test_spawning_stops_at_quota(self):
        self.manager.start_wave()
        spawned = [self.manager.update(1000, 1.0, PATH) for _ in range(10)]
        self.assertEqual(len([e for e in spawned if e is not None]), 5)
        self.assertEqual(self.manager.enemies_remaining(0), 0)

    def test_health_scales_with_wave(self):
        self.advance_to_wave(3)
        enemy = self.manager.update(1000, 1.0, PATH)
        self.assertIs(enemy.kind, EnemyKind.BASIC)
        self.assertAlmostEqual(enemy.max_health, 36.0)

    def test_first_enemy_of_fifth_wave_is_boss(self):
        self.advance_to_wave(5)
        first = self.manager.update(1000, 1.0, PATH)
        second = self.manager.update(1000, 1.0, PATH)
        self.assertIs(first.kind, EnemyKind.BOSS)
        self.assertIs(second.kind, EnemyKind.BASIC)


class TestEnemySelection(WaveTestCase):
    def choose(self, wave, roll):
        self.manager.rng = FixedRandom(roll)
        self.advance_to_wave(wave)
        self.manager.enemies_spawned = 1
        return self.manager.choose_kind()

    def test_low_waves_only_draw_basic_and_fast(self):
        self.assertIs(self.choose(1, 0.05), EnemyKind.FAST)
        self.assertIs(self.choose(2, 0.39), EnemyKind.FAST)
        self.assertIs(self.choose(3, 0.5), EnemyKind.BASIC)

    def test_tanks_from_wave_five(self):
        self.assertIs(self.choose(4, 0.2), EnemyKind.FAST)
        self.assertIs(self.choose(6, 0.2), EnemyKind.TANK)

    def test_bosses_from_wave_ten(self):
        self.assertIs(self.choose(9, 0.05), EnemyKind.TANK)
        self.assertIs(self.choose(11, 0.05), EnemyKind.BOSS)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
