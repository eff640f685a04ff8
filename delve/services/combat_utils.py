"""Combat utility helpers.

Damage reduction model:
  Each reduction is a fraction (0.1 == 10%) applied multiplicatively in the
  order given: ``damage = floor(damage * (1 - r))``, clamped to at least 1
  after every step. The player's permanent reduction comes first, then any
  active temporary protection effect.

Rules:
  - Zero or negative reductions are skipped.
  - Reductions >= 1 still leave the minimum 1 damage.
"""

from __future__ import annotations

import math
from typing import Iterable, Tuple


def roll_damage(base: int, rng, spread: Tuple[float, float]) -> int:
    """floor(base * U(lo, hi))."""
    lo, hi = spread
    return math.floor(base * rng.uniform(lo, hi))


def apply_damage_reduction(damage: int, reductions: Iterable[float]) -> int:
    for r in reductions:
        if not r or r <= 0:
            continue
        damage = max(1, math.floor(damage * (1 - r)))
    return damage


__all__ = ["roll_damage", "apply_damage_reduction"]
