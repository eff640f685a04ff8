"""Melee exchange resolution.

Responsibilities:
    * Resolve the player's bump attack on a monster (base hit, critical,
      optional double attack, death and kill rewards).
    * Resolve one monster attack on the player (variance, permanent then
      temporary damage reduction, minimum 1 damage).

Both resolvers are stateless: they mutate only the two combatants passed in
and return what happened. Removing dead monsters, leveling and floor-clear
checks belong to the turn coordinator.

Design notes:
    - Kill rewards scale by the player's exp/gold bonus only; crits and double
      attacks never change them.
    - The double attack ignores crits and uses its own damage window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from delve.config import DEFAULT_RULES
from delve.models.entities import TEMP_PROTECTION, Monster, Player

from .combat_utils import apply_damage_reduction, roll_damage


@dataclass
class DamageEvent:
    amount: int
    critical: bool = False
    double_attack: bool = False


@dataclass
class CombatOutcome:
    events: List[DamageEvent] = field(default_factory=list)
    monster_died: bool = False
    exp_reward: int = 0
    gold_reward: int = 0

    @property
    def total_damage(self) -> int:
        return sum(e.amount for e in self.events)

    @property
    def critical(self) -> bool:
        return any(e.critical for e in self.events)


def kill_rewards(player: Player, monster: Monster):
    """Return (exp, gold) granted for killing ``monster``."""
    exp = math.ceil(monster.exp_value * (1 + player.exp_bonus))
    gold = math.ceil(monster.gold_value * (1 + player.gold_bonus))
    return exp, gold


def resolve_player_attack(player: Player, monster: Monster, rng, rules=DEFAULT_RULES) -> CombatOutcome:
    outcome = CombatOutcome()
    attack = player.effective_attack()

    damage = roll_damage(attack, rng, rules.hit_range)
    critical = rng.random() < player.crit_chance
    if critical:
        damage *= rules.crit_multiplier
    monster.take_damage(damage)
    outcome.events.append(DamageEvent(damage, critical=critical))

    if monster.is_alive and rng.random() < player.double_attack_chance:
        second = roll_damage(attack, rng, rules.double_attack_range)
        monster.take_damage(second)
        outcome.events.append(DamageEvent(second, double_attack=True))

    if not monster.is_alive:
        outcome.monster_died = True
        outcome.exp_reward, outcome.gold_reward = kill_rewards(player, monster)
    return outcome


def resolve_monster_attack(monster: Monster, player: Player, rng, rules=DEFAULT_RULES) -> int:
    """Apply one hit from ``monster`` to ``player`` and return the damage dealt."""
    base = max(1, roll_damage(monster.attack, rng, rules.hit_range))
    damage = apply_damage_reduction(base, (player.damage_reduction, player.effect_magnitude(TEMP_PROTECTION)))
    player.take_damage(damage)
    return damage


__all__ = ["DamageEvent", "CombatOutcome", "kill_rewards", "resolve_player_attack", "resolve_monster_attack"]
