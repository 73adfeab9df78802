from .config import GameConfig
from .engine import TowerDefenseEngine
from .errors import InsufficientFunds, InvalidPlacement, InvalidStateTransition, TowerDefenseError
from .models import EnemyKind, EventType, GameEvent, GameSnapshot, TowerKind, WavePhase

__all__ = [
    "EnemyKind",
    "EventType",
    "GameConfig",
    "GameEvent",
    "GameSnapshot",
    "InsufficientFunds",
    "InvalidPlacement",
    "InvalidStateTransition",
    "TowerDefenseEngine",
    "TowerDefenseError",
    "TowerKind",
    "WavePhase",
]
