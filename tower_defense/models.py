from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


class TowerKind(str, enum.Enum):
    BASIC = "basic"
    SNIPER = "sniper"
    AOE = "aoe"
    SLOW = "slow"

    @classmethod
    def ordered(cls) -> list["TowerKind"]:
        return [cls.BASIC, cls.SNIPER, cls.AOE, cls.SLOW]


class EnemyKind(str, enum.Enum):
    BASIC = "basic"
    FAST = "fast"
    TANK = "tank"
    BOSS = "boss"


class WavePhase(str, enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class EventType(str, enum.Enum):
    TOWER_PLACED = "tower_placed"
    WAVE_STARTED = "wave_started"
    ENEMY_SPAWNED = "enemy_spawned"
    PROJECTILE_FIRED = "projectile_fired"
    ENEMY_HIT = "enemy_hit"
    ENEMY_DEFEATED = "enemy_defeated"
    BASE_HIT = "base_hit"
    WAVE_COMPLETE = "wave_complete"
    GAME_OVER = "game_over"
    NEW_HIGH_SCORE = "new_high_score"
    GAME_RESET = "game_reset"


@dataclass(frozen=True)
class SlowEffect:
    multiplier: float
    duration_ms: float


@dataclass(frozen=True)
class TowerSpec:
    kind: TowerKind
    name: str
    cost: int
    range: float
    damage: float
    fire_rate: float
    projectile_speed: float
    color: str = "#ffffff"
    aoe_radius: Optional[float] = None
    slow: Optional[SlowEffect] = None

    @property
    def fire_interval_ms(self) -> float:
        return 1000.0 / self.fire_rate

    @property
    def is_area_effect(self) -> bool:
        return bool(self.aoe_radius)


@dataclass(frozen=True)
class EnemySpec:
    kind: EnemyKind
    health: float
    speed: float
    size: float
    reward: int
    color: str = "#ff0000"


@dataclass(frozen=True)
class GameEvent:
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, **self.data}


@dataclass(frozen=True)
class GameSnapshot:
    wave_number: int
    enemies_this_wave: int
    enemies_spawned: int
    enemies_remaining: int
    wave_phase: WavePhase
    gold: int
    lives: int
    score: int
    high_score: int
    is_game_over: bool
    is_paused: bool
    speed_multiplier: float
    layout: str
    selected_kind: Optional[TowerKind]

    @property
    def is_wave_active(self) -> bool:
        return self.wave_phase is WavePhase.ACTIVE


EventSink = Callable[[GameEvent], None]
