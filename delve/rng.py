"""Single source of randomness for the turn engine.

Every roll in the game (room placement, damage variance, crits, loot, monster
wandering) goes through one ``GameRng`` owned by the game state, so seeding it
makes a whole run reproducible and tests can pin individual draws with
monkeypatch.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class GameRng(random.Random):
    """``random.Random`` with the few dice helpers the engine needs."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(1, 1_000_000)
        self.initial_seed = seed
        super().__init__(seed)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (``random() < p``)."""
        return self.random() < probability

    def below(self, n: int) -> int:
        """Uniform integer in ``[0, n)``."""
        return self.randrange(n)

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Roulette-wheel pick of one item proportional to its weight."""
        if not items:
            raise ValueError("weighted_choice() needs at least one item")
        total = sum(weights)
        pivot = self.random() * total
        acc = 0.0
        for item, weight in zip(items, weights):
            acc += weight
            if pivot < acc:
                return item
        return items[-1]


__all__ = ["GameRng"]
