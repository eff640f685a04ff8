"""Monster template selection & scaling service.

Stateless helpers used by the level generator:
  1. Filter templates by ``min_floor``.
  2. Pick one uniformly.
  3. Scale health/attack by floor *and* player level, rewards by floor only.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from delve.catalog import MONSTER_TYPES
from delve.models.entities import Monster, MonsterTemplate


def eligible_templates(floor: int, templates: Sequence[MonsterTemplate] = MONSTER_TYPES) -> List[MonsterTemplate]:
    return [t for t in templates if t.min_floor <= floor]


def floor_scaling(floor: int) -> float:
    return 1 + (floor - 1) * 0.2


def player_level_scaling(player_level: int) -> float:
    return 1 + (player_level - 1) * 0.15


def scaling_factors(floor: int, player_level: int) -> Tuple[float, float]:
    """Return (stat_scaling, reward_scaling)."""
    reward = floor_scaling(floor)
    return reward * player_level_scaling(player_level), reward


def scaled_instance(
    template: MonsterTemplate, floor: int, player_level: int, x: int, y: int, monster_id: str
) -> Monster:
    stat_scale, reward_scale = scaling_factors(floor, player_level)
    max_health = math.ceil(template.health * stat_scale)
    return Monster(
        id=monster_id,
        type_id=template.type_id,
        name=template.name,
        glyph=template.glyph,
        color=template.color,
        x=x,
        y=y,
        health=max_health,
        max_health=max_health,
        attack=math.ceil(template.attack * stat_scale),
        exp_value=math.ceil(template.exp_value * reward_scale),
        gold_value=math.ceil(template.gold_value * reward_scale),
    )


def choose_monster(floor: int, player_level: int, rng, x: int, y: int, monster_id: str) -> Optional[Monster]:
    """Return a scaled monster for ``floor`` or None when no template qualifies."""
    pool = eligible_templates(floor)
    if not pool:
        return None
    template = rng.choice(pool)
    return scaled_instance(template, floor, player_level, x, y, monster_id)


__all__ = [
    "eligible_templates",
    "floor_scaling",
    "player_level_scaling",
    "scaling_factors",
    "scaled_instance",
    "choose_monster",
]
