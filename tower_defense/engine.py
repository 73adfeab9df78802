"""Simulation context: owns one game and exposes its command/query surface.

Per tick the phases run in a fixed order: spawn, movement and arrivals,
tower fire, projectiles, wave completion, game over. Events raised along
the way are queued and handed to subscribers once the tick is done.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import random
from typing import Callable, List, Optional, Tuple

from .combat import CombatResolver
from .config import GameConfig
from .economy import Economy
from .enemy import Enemy, advance
from .errors import InvalidStateTransition
from .models import EventType, GameEvent, GameSnapshot, TowerKind
from .path import Path
from .projectile import Projectile
from .registry import EntityRegistry
from .scores import MemoryScoreStore
from .tower import Tower
from .wave import WaveManager

logger = logging.getLogger(__name__)

EventCallback = Callable[[GameEvent], None]


class TowerDefenseEngine:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        high_scores=None,
        layout: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        config = config or GameConfig.default()
        if layout is not None:
            config = dataclasses.replace(config, layout=layout)
        self.config = config
        self.high_scores = high_scores if high_scores is not None else MemoryScoreStore()
        self.rng = random.Random(seed if seed is not None else config.seed)

        self._pending: List[GameEvent] = []
        self._outbox: List[GameEvent] = []
        self._subscribers: List[EventCallback] = []

        self._saved_high_score = self.high_scores.load()
        self.registry = EntityRegistry()
        self.economy = Economy(config, self._emit, high_score=self._saved_high_score)
        self.waves = WaveManager(config, self._emit, rng=self.rng)
        self.combat = CombatResolver(config, self.registry, self.economy, self._emit)
        self.path = Path.from_layout(config.layout, config.layouts)

        self.speed_multiplier = 1.0
        self.paused = False
        self.selected_kind: Optional[TowerKind] = None
        self.now_ms = 0.0

    # events

    def subscribe(self, callback: EventCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def drain_events(self) -> List[GameEvent]:
        events, self._outbox = self._outbox, []
        return events

    def _emit(self, event: GameEvent) -> None:
        self._pending.append(event)

    def _flush(self) -> List[GameEvent]:
        events, self._pending = self._pending, []
        self._outbox.extend(events)
        for event in events:
            for callback in list(self._subscribers):
                callback(event)
        return events

    # simulation

    def tick(self, elapsed_ms: float) -> List[GameEvent]:
        """Advance the simulation by one step.

        Does nothing while paused or after the game is lost.

        Returns:
            list: Events raised during this step
        """
        if self.paused or self.economy.is_game_over:
            return []
        if not math.isfinite(elapsed_ms) or elapsed_ms <= 0:
            return []

        self.now_ms += elapsed_ms
        multiplier = self.speed_multiplier

        spawned = self.waves.update(elapsed_ms, multiplier, self.path)
        if spawned is not None:
            self.registry.add_enemy(spawned)

        for enemy in self.registry.enemies:
            if advance(enemy, self.path, elapsed_ms, multiplier, self.now_ms):
                self.economy.on_enemy_arrived(enemy, self.registry, self.waves.current_wave)

        self.combat.fire_towers(elapsed_ms)
        self.combat.update_projectiles(elapsed_ms, multiplier, self.now_ms)

        if not self.economy.is_game_over:
            bonus = self.waves.check_complete(self.registry.alive_enemy_count())
            if bonus:
                self.economy.award_wave_bonus(self.waves.current_wave, bonus)

        if self.economy.is_game_over:
            self.save_high_score()
        return self._flush()

    # commands

    def _require_running(self) -> None:
        if self.economy.is_game_over:
            raise InvalidStateTransition("Game over! Reset the game to play again.")

    def select_tower_kind(self, kind) -> TowerKind:
        kind = TowerKind(kind)
        if kind not in self.config.towers:
            raise KeyError(f"tower kind {kind.value} is not configured")
        self.selected_kind = kind
        return kind

    def clear_selection(self) -> None:
        self.selected_kind = None

    def place_tower(self, cell: Tuple[int, int], kind=None) -> Tower:
        """Buy a tower on a grid cell.

        Args:
            cell: (col, row) grid cell
            kind: Tower kind; defaults to the selected kind

        Raises:
            InvalidPlacement: The cell is off the map, on the path or taken
            InsufficientFunds: Not enough gold
            InvalidStateTransition: The game is over
        """
        self._require_running()
        kind = kind if kind is not None else self.selected_kind
        if kind is None:
            raise ValueError("no tower kind selected")
        tower = self.economy.place_tower(tuple(cell), TowerKind(kind), self.path, self.registry)
        self._flush()
        return tower

    def place_tower_at(self, x: float, y: float, kind=None) -> Tower:
        return self.place_tower(self.config.cell_at(x, y), kind)

    def start_wave(self) -> int:
        self._require_running()
        wave = self.waves.start_wave()
        self._flush()
        return wave

    def set_speed_multiplier(self, multiplier: float) -> None:
        multiplier = float(multiplier)
        if not math.isfinite(multiplier) or multiplier <= 0:
            raise ValueError(f"speed multiplier must be positive, got {multiplier}")
        self.speed_multiplier = multiplier
        logger.info("Speed set to x%g", multiplier)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        logger.info("Paused" if self.paused else "Resumed")
        return self.paused

    def reset_game(self) -> None:
        """Restore the initial state on the configured layout.

        Allowed in any state, including mid-wave and after game over; only
        starting a second wave while one runs is rejected.
        """
        self.save_high_score()
        self.registry.clear()
        self.economy.reset()
        self.waves.reset()
        self.path = Path.from_layout(self.config.layout, self.config.layouts)
        self.now_ms = 0.0
        self.paused = False
        self.selected_kind = None
        logger.info("Game reset on layout %s", self.path.name)
        self._emit(GameEvent(EventType.GAME_RESET, {"layout": self.path.name}))
        self._flush()

    def select_layout(self, name: str) -> None:
        """Switch path layout. Always a full reset, never a live change."""
        if name not in self.config.layouts:
            raise KeyError(f"unknown path layout: {name}")
        self.config = dataclasses.replace(self.config, layout=name)
        self.economy.config = self.config
        self.waves.config = self.config
        self.combat.config = self.config
        self.reset_game()

    def save_high_score(self) -> None:
        if self.economy.high_score > self._saved_high_score:
            self.high_scores.save(self.economy.high_score)
            self._saved_high_score = self.economy.high_score
            logger.info("New high score %d saved", self.economy.high_score)

    # queries

    @property
    def towers(self) -> Tuple[Tower, ...]:
        return self.registry.towers

    @property
    def enemies(self) -> Tuple[Enemy, ...]:
        return self.registry.enemies

    @property
    def projectiles(self) -> Tuple[Projectile, ...]:
        return self.registry.projectiles

    @property
    def is_game_over(self) -> bool:
        return self.economy.is_game_over

    def state(self) -> GameSnapshot:
        alive = self.registry.alive_enemy_count()
        return GameSnapshot(
            wave_number=self.waves.current_wave,
            enemies_this_wave=self.waves.enemies_this_wave,
            enemies_spawned=self.waves.enemies_spawned,
            enemies_remaining=self.waves.enemies_remaining(alive),
            wave_phase=self.waves.phase,
            gold=self.economy.gold,
            lives=self.economy.lives,
            score=self.economy.score,
            high_score=self.economy.high_score,
            is_game_over=self.economy.is_game_over,
            is_paused=self.paused,
            speed_multiplier=self.speed_multiplier,
            layout=self.path.name,
            selected_kind=self.selected_kind,
        )
