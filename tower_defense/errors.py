"""Rejected-command errors raised by the engine."""

from __future__ import annotations


class TowerDefenseError(Exception):
    """Base class for recoverable, user-facing command rejections."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidPlacement(TowerDefenseError):
    pass


class InsufficientFunds(TowerDefenseError):
    def __init__(self, reason: str, cost: int = 0, gold: int = 0) -> None:
        super().__init__(reason)
        self.cost = cost
        self.gold = gold


class InvalidStateTransition(TowerDefenseError):
    pass
