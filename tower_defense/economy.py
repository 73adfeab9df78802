"""Gold, lives, score and tower purchases."""

from __future__ import annotations

import logging
from typing import Tuple

from .config import PATH_PLACEMENT_TOLERANCE, GameConfig
from .enemy import Enemy
from .errors import InsufficientFunds, InvalidPlacement
from .models import EventSink, EventType, GameEvent, TowerKind
from .path import Path
from .registry import EntityRegistry
from .tower import Tower

logger = logging.getLogger(__name__)


class Economy:
    """Tracks the player's resources and the win/loss lifecycle."""

    def __init__(self, config: GameConfig, emit: EventSink, high_score: int = 0) -> None:
        self.config = config
        self._emit = emit
        self.high_score = high_score
        self.reset()

    def reset(self) -> None:
        self.gold = self.config.initial_gold
        self.lives = self.config.initial_lives
        self.score = 0
        self.is_game_over = False
        self.new_high_score = False

    def validate_placement(self, cell: Tuple[int, int], path: Path, registry: EntityRegistry) -> Tuple[float, float]:
        """Check that a tower may stand on ``cell``.

        Returns:
            tuple: World coordinate of the cell centre

        Raises:
            InvalidPlacement: Off the map, on the path, or on another tower
        """
        col, row = cell
        if not self.config.cell_in_bounds(col, row):
            raise InvalidPlacement(f"Cell {cell} is outside the map!")
        x, y = self.config.cell_center(col, row)
        if path.distance_to(x, y) <= PATH_PLACEMENT_TOLERANCE:
            raise InvalidPlacement("Can't place tower on the path!")
        if registry.is_occupied(cell):
            raise InvalidPlacement("Can't place tower on another tower!")
        return (x, y)

    def place_tower(self, cell: Tuple[int, int], kind: TowerKind, path: Path, registry: EntityRegistry) -> Tower:
        """Validate, charge for and register a new tower.

        Raises:
            InvalidPlacement: If the cell cannot hold a tower
            InsufficientFunds: If the tower costs more than the gold held
        """
        spec = self.config.towers[TowerKind(kind)]
        position = self.validate_placement(cell, path, registry)
        if self.gold < spec.cost:
            raise InsufficientFunds(
                f"Not enough gold! You need {spec.cost} gold.", cost=spec.cost, gold=self.gold
            )

        tower = Tower(spec, cell, position)
        registry.add_tower(tower)
        self.gold -= spec.cost
        logger.info("Placed %s at %s for %d gold (%d left)", spec.name, cell, spec.cost, self.gold)
        self._emit(GameEvent(EventType.TOWER_PLACED, {"kind": spec.kind.value, "cell": cell, "cost": spec.cost}))
        return tower

    def reward(self, enemy: Enemy) -> None:
        self.gold += enemy.reward
        self.add_score(enemy.reward)

    def add_score(self, points: int) -> None:
        if points <= 0:
            return
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
            if not self.new_high_score:
                self.new_high_score = True
                self._emit(GameEvent(EventType.NEW_HIGH_SCORE, {"score": self.score}))

    def award_wave_bonus(self, wave_number: int, bonus: int) -> None:
        self.gold += bonus
        logger.info("Wave %d bonus: +%d gold", wave_number, bonus)

    def on_enemy_arrived(self, enemy: Enemy, registry: EntityRegistry, wave_number: int = 0) -> bool:
        """Charge a life for an enemy that reached the base.

        Returns:
            bool: True if this arrival ended the game
        """
        if not registry.remove_enemy(enemy):
            return False
        if self.is_game_over:
            return False
        self.lives = max(0, self.lives - 1)
        self._emit(GameEvent(EventType.BASE_HIT, {"kind": enemy.kind.value, "lives": self.lives}))
        if self.lives <= 0:
            self.is_game_over = True
            logger.info("Game over at wave %d with score %d", wave_number, self.score)
            self._emit(GameEvent(EventType.GAME_OVER, {"won": False, "score": self.score, "wave": wave_number}))
            return True
        return False
