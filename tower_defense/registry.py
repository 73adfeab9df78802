from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .enemy import Enemy
from .projectile import Projectile
from .tower import Tower

Cell = Tuple[int, int]


class EntityRegistry:
    """Owns the live towers, enemies and projectiles of one game."""

    def __init__(self) -> None:
        self._towers: Dict[Cell, Tower] = {}
        self._enemies: List[Enemy] = []
        self._projectiles: List[Projectile] = []
        self._next_enemy_id = 1

    @property
    def towers(self) -> Tuple[Tower, ...]:
        return tuple(self._towers.values())

    @property
    def enemies(self) -> Tuple[Enemy, ...]:
        return tuple(self._enemies)

    @property
    def projectiles(self) -> Tuple[Projectile, ...]:
        return tuple(self._projectiles)

    def add_tower(self, tower: Tower) -> None:
        if tower.cell in self._towers:
            raise ValueError(f"cell {tower.cell} already holds {self._towers[tower.cell]!r}")
        self._towers[tower.cell] = tower

    def tower_at(self, cell: Cell) -> Optional[Tower]:
        return self._towers.get(cell)

    def is_occupied(self, cell: Cell) -> bool:
        return cell in self._towers

    def add_enemy(self, enemy: Enemy) -> None:
        if enemy.id is None:
            enemy.id = self._next_enemy_id
            self._next_enemy_id += 1
        self._enemies.append(enemy)

    def remove_enemy(self, enemy: Enemy) -> bool:
        """Remove an enemy; returns False if it was already gone."""
        try:
            self._enemies.remove(enemy)
        except ValueError:
            return False
        return True

    def has_enemy(self, enemy: Enemy) -> bool:
        return enemy in self._enemies

    def add_projectile(self, projectile: Projectile) -> None:
        self._projectiles.append(projectile)

    def remove_projectile(self, projectile: Projectile) -> bool:
        try:
            self._projectiles.remove(projectile)
        except ValueError:
            return False
        return True

    def alive_enemy_count(self) -> int:
        return len(self._enemies)

    def clear(self) -> None:
        self._towers.clear()
        self._enemies.clear()
        self._projectiles.clear()
        self._next_enemy_id = 1

    def __repr__(self) -> str:
        return (
            f"EntityRegistry(towers={len(self._towers)}, enemies={len(self._enemies)}, "
            f"projectiles={len(self._projectiles)})"
        )
