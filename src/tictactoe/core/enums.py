"""Enumerations shared across the core and engine layers."""

from __future__ import annotations

from enum import IntEnum


class Difficulty(IntEnum):
    """Strength of the computer opponent."""

    NORMAL = 0
    HARD = 1
    INVINCIBLE = 2

    @property
    def optimal_probability(self) -> float:
        """Chance of following the best strategy on a quiet turn."""
        return _OPTIMAL_PROBABILITY[self]


_OPTIMAL_PROBABILITY: dict[Difficulty, float] = {
    Difficulty.NORMAL: 0.40,
    Difficulty.HARD: 0.95,
    Difficulty.INVINCIBLE: 1.0,
}
