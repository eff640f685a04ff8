"""Potion inventory and timed effect framework.

The player holds up to ``potion_capacity`` potions (copies of catalog
templates). Using one dispatches on its ``kind``:

- restore_health: heal floor(max_health * magnitude), clamped to max_health.
- restore_exp: gain floor(experience_to_level * magnitude), then level-up check.
- temp_attack / temp_protection: install (or overwrite) a TimedEffect of that
  kind lasting ``duration`` turns.

The potion is removed from the inventory once its handler has run. Timed
effects are decremented by ``decay_effects`` once per resolved turn and
removed when they reach zero.

Extension point: add new potion handlers to POTION_HANDLERS.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional

from delve.config import DEFAULT_RULES
from delve.models.entities import (
    RESTORE_EXP,
    RESTORE_HEALTH,
    TEMP_ATTACK,
    TEMP_PROTECTION,
    Player,
    Potion,
    TimedEffect,
)
from delve.models.xp import check_level_up

EFFECT_LABELS = {
    TEMP_ATTACK: "strength",
    TEMP_PROTECTION: "protection",
}


def add_potion(player: Player, potion: Potion) -> bool:
    """Append ``potion`` to the inventory; False (and no change) when full."""
    if len(player.potions) >= player.potion_capacity:
        return False
    player.potions.append(potion)
    return True


def _restore_health(player: Player, potion: Potion, rules) -> List[str]:
    healed = player.heal(math.floor(player.max_health * potion.magnitude))
    return [f"You drink the {potion.name} and recover {healed} health."]


def _restore_exp(player: Player, potion: Potion, rules) -> List[str]:
    gain = math.floor(player.experience_to_level * potion.magnitude)
    player.experience += gain
    msgs = [f"You drink the {potion.name} and gain {gain} XP."]
    if check_level_up(player, rules):
        msgs.append(f"Level Up! You are now level {player.level}.")
    return msgs


def _timed(player: Player, potion: Potion, rules) -> List[str]:
    player.effects[potion.kind] = TimedEffect(potion.kind, potion.magnitude, int(potion.duration or 1))
    return [f"You drink the {potion.name}. {potion.description}."]


POTION_HANDLERS: Dict[str, Callable[[Player, Potion, object], List[str]]] = {
    RESTORE_HEALTH: _restore_health,
    RESTORE_EXP: _restore_exp,
    TEMP_ATTACK: _timed,
    TEMP_PROTECTION: _timed,
}


def use_potion(player: Player, index: int, rules=DEFAULT_RULES) -> Optional[List[str]]:
    """Consume the potion at ``index``.

    Returns the messages produced, or None when ``index`` is out of range.
    Raises ValueError for a potion kind with no handler (inventory untouched).
    """
    if not 0 <= index < len(player.potions):
        return None
    potion = player.potions[index]
    handler = POTION_HANDLERS.get(potion.kind)
    if handler is None:
        raise ValueError(f"Unknown potion kind: {potion.kind}")
    msgs = handler(player, potion, rules)
    del player.potions[index]
    return msgs


def decay_effects(player: Player) -> List[str]:
    """Tick every active effect once; return a notice for each that wore off."""
    msgs: List[str] = []
    for kind, eff in list(player.effects.items()):
        eff.turns_remaining -= 1
        if eff.turns_remaining <= 0:
            del player.effects[kind]
            msgs.append(f"The {EFFECT_LABELS.get(kind, kind)} effect wore off.")
    return msgs


__all__ = ["add_potion", "use_potion", "decay_effects", "POTION_HANDLERS"]
