"""Experience point (XP) progression utilities.

Leveling is a rolling threshold: experience above ``experience_to_level`` is
carried over and the threshold grows geometrically each level. Import
``check_level_up`` anywhere the player gains experience (kills, chest rolls,
experience potions).
"""

from __future__ import annotations

import math

from delve.config import DEFAULT_RULES


def next_threshold(current: int, growth: float = DEFAULT_RULES.experience_growth) -> int:
    """Return the experience needed for the level after one with ``current``."""
    return math.floor(current * growth)


def check_level_up(player, rules=DEFAULT_RULES) -> int:
    """Apply every level-up the player's experience pays for.

    Args:
        player: mutable ``Player`` record.
        rules: ``GameRules`` supplying the health/attack bonuses and growth factor.

    Returns:
        Number of levels gained (0 when below the threshold). A single large
        reward can raise several levels in one call; each one grants the
        bonuses and a full heal.
    """
    gained = 0
    while player.experience >= player.experience_to_level:
        player.experience -= player.experience_to_level
        player.level += 1
        player.experience_to_level = next_threshold(player.experience_to_level, rules.experience_growth)
        player.max_health += rules.level_health_bonus
        player.health = player.max_health
        player.attack_power += rules.level_attack_bonus
        gained += 1
    return gained


__all__ = ["next_threshold", "check_level_up"]
