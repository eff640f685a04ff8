"""Treasure chest resolution.

Opening a chest always pays gold, then makes one secondary roll ``r``:

  r < chest_exp_chance                                -> bonus experience
  r < chest_exp_chance + chest_potion_chance          -> one potion drop
  otherwise                                           -> nothing extra

Potion drops come from the floor-gated pool weighted by 1 / rarity. When the
inventory is full the potion's ``value`` is paid out as gold instead.
The chest tile becomes floor; the player does not move onto it.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from delve.catalog import POTION_TYPES
from delve.config import DEFAULT_RULES
from delve.dungeon.level import DungeonLevel
from delve.dungeon.tiles import FLOOR
from delve.models.entities import Player, Potion
from delve.models.xp import check_level_up

from .status_effects import add_potion


def chest_gold(floor: int, player: Player, rng) -> int:
    base = 5 + rng.below(10) * floor
    return math.ceil(base * (1 + player.gold_bonus))


def chest_experience(floor: int, rng) -> int:
    return 5 + rng.below(5) * floor


def potion_pool(floor: int, potions: Sequence[Potion] = POTION_TYPES) -> List[Potion]:
    return [p for p in potions if p.min_floor <= floor]


def choose_potion(floor: int, rng, potions: Sequence[Potion] = POTION_TYPES) -> Optional[Potion]:
    """Weighted pick (1 / rarity) among potions available on ``floor``."""
    pool = potion_pool(floor, potions)
    if not pool:
        return None
    return rng.weighted_choice(pool, [1.0 / max(1, p.rarity) for p in pool])


def open_chest(level: DungeonLevel, x: int, y: int, player: Player, floor: int, rng, rules=DEFAULT_RULES) -> List[str]:
    """Loot the chest at (x, y) for ``player`` and return the messages produced."""
    gold = chest_gold(floor, player, rng)
    player.gold += gold
    msgs = [f"You found a treasure chest! +{gold} gold"]

    roll = rng.random()
    if roll < rules.chest_exp_chance:
        exp = chest_experience(floor, rng)
        player.experience += exp
        msgs.append(f"The chest contained ancient knowledge! +{exp} XP")
        if check_level_up(player, rules):
            msgs.append(f"Level Up! You are now level {player.level}. Health and attack increased!")
    elif roll < rules.chest_exp_chance + rules.chest_potion_chance:
        potion = choose_potion(floor, rng)
        if potion is not None:
            if add_potion(player, potion):
                msgs.append(f"You found a {potion.name}!")
            else:
                player.gold += potion.value
                msgs.append(f"Your pack is full. The {potion.name} sells for {potion.value} gold.")

    level.set_tile(x, y, FLOOR)
    return msgs


__all__ = ["chest_gold", "chest_experience", "potion_pool", "choose_potion", "open_chest"]
