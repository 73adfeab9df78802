"""Wave system for the tower defense game."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .config import (
    BOSS_WAVE_INTERVAL,
    SPAWN_INTERVAL_MS,
    SPAWN_TABLE,
    WAVE_BONUS_PER_WAVE,
    WAVE_HEALTH_STEP,
    GameConfig,
)
from .enemy import Enemy
from .errors import InvalidStateTransition
from .models import EnemyKind, EventSink, EventType, GameEvent, WavePhase
from .path import Path

logger = logging.getLogger(__name__)


class WaveManager:
    """Controls spawn cadence, enemy selection and wave completion."""

    def __init__(self, config: GameConfig, emit: EventSink, rng: Optional[random.Random] = None):
        """Initialize the wave manager.

        Args:
            config: Game configuration
            emit: Event sink for wave notifications
            rng: Random source for enemy selection
        """
        self.config = config
        self._emit = emit
        self.rng = rng or random.Random()
        self.reset()

    def reset(self):
        self.current_wave = 0
        self.phase = WavePhase.IDLE
        self.enemies_this_wave = 0
        self.enemies_spawned = 0
        self.spawn_timer = 0.0

    @property
    def wave_active(self) -> bool:
        return self.phase is WavePhase.ACTIVE

    @property
    def health_multiplier(self) -> float:
        return 1.0 + (max(1, self.current_wave) - 1) * WAVE_HEALTH_STEP

    def start_wave(self) -> int:
        """Start the next wave.

        Returns:
            int: The new wave number

        Raises:
            InvalidStateTransition: If a wave is already running
        """
        if self.phase is WavePhase.ACTIVE:
            raise InvalidStateTransition("Wave already in progress!")

        self.current_wave += 1
        self.enemies_this_wave = self.current_wave * self.config.enemies_per_wave
        self.enemies_spawned = 0
        self.spawn_timer = 0.0
        self.phase = WavePhase.ACTIVE

        logger.info("Wave %d started: %d enemies", self.current_wave, self.enemies_this_wave)
        self._emit(GameEvent(EventType.WAVE_STARTED, {"wave": self.current_wave, "enemies": self.enemies_this_wave}))
        return self.current_wave

    def choose_kind(self) -> EnemyKind:
        """Pick the type of the next enemy.

        The first enemy of every fifth wave is a boss. Otherwise a single
        draw is compared against the spawn table; heavier kinds only become
        eligible from their minimum wave on.
        """
        if self.enemies_spawned == 0 and self.current_wave % BOSS_WAVE_INTERVAL == 0:
            return EnemyKind.BOSS

        roll = self.rng.random()
        for kind, min_wave, threshold in SPAWN_TABLE:
            if self.current_wave >= min_wave and roll < threshold:
                return EnemyKind(kind)
        return EnemyKind.BASIC

    def spawn(self, path: Path) -> Enemy:
        kind = self.choose_kind()
        enemy = Enemy(self.config.enemies[kind], path, health_multiplier=self.health_multiplier)
        self.enemies_spawned += 1
        logger.debug("Spawned %r (%d/%d)", enemy, self.enemies_spawned, self.enemies_this_wave)
        self._emit(
            GameEvent(
                EventType.ENEMY_SPAWNED,
                {"kind": kind.value, "health": enemy.max_health, "wave": self.current_wave},
            )
        )
        return enemy

    def update(self, elapsed_ms: float, speed_multiplier: float, path: Path) -> Optional[Enemy]:
        """Advance the spawn timer.

        Args:
            elapsed_ms: Time since the last update
            speed_multiplier: Global speed multiplier
            path: Path new enemies start on

        Returns:
            Enemy: A new enemy to register, or None
        """
        if not self.wave_active or self.enemies_spawned >= self.enemies_this_wave:
            return None

        self.spawn_timer += elapsed_ms
        if self.spawn_timer >= SPAWN_INTERVAL_MS / speed_multiplier:
            self.spawn_timer = 0.0
            return self.spawn(path)
        return None

    def enemies_remaining(self, alive_enemy_count: int) -> int:
        return max(0, self.enemies_this_wave - self.enemies_spawned) + alive_enemy_count

    def check_complete(self, alive_enemy_count: int) -> int:
        """Finish the wave once its quota is spawned and no enemy is left.

        Args:
            alive_enemy_count: Enemies still in play

        Returns:
            int: Bonus gold earned, 0 if the wave is still running
        """
        if not self.wave_active:
            return 0
        if self.enemies_spawned < self.enemies_this_wave or alive_enemy_count > 0:
            return 0

        self.phase = WavePhase.COMPLETE
        bonus = self.current_wave * WAVE_BONUS_PER_WAVE
        logger.info("Wave %d complete, +%d gold bonus", self.current_wave, bonus)
        self._emit(GameEvent(EventType.WAVE_COMPLETE, {"wave": self.current_wave, "bonus": bonus}))
        return bonus

    def get_current_wave_number(self) -> int:
        return self.current_wave
