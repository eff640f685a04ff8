"""Entity records: the player, monsters, potions, timed effects and shop offers.

Templates (``MonsterTemplate``, ``Potion``, ``ShopUpgrade``) are frozen and
shared from ``delve.catalog``. Instances that change during play (``Player``,
``Monster``, ``TimedEffect``) are plain mutable dataclasses owned by the
``GameState``; they expose ``to_dict()`` for the read-only snapshot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Potion effect kinds
RESTORE_HEALTH = "restore_health"
RESTORE_EXP = "restore_exp"
TEMP_ATTACK = "temp_attack"
TEMP_PROTECTION = "temp_protection"

# Percentage modifiers carried by the player (all fractions, 0.1 == 10%)
MODIFIERS = (
    "crit_chance",
    "double_attack_chance",
    "damage_reduction",
    "health_regen",
    "gold_bonus",
    "exp_bonus",
)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class MonsterTemplate:
    type_id: str
    name: str
    glyph: str
    health: int
    attack: int
    exp_value: int
    gold_value: int
    color: str
    min_floor: int = 1


@dataclass
class Monster:
    id: str
    type_id: str
    name: str
    glyph: str
    color: str
    x: int
    y: int
    health: int
    max_health: int
    attack: int
    exp_value: int
    gold_value: int

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, amount: int) -> int:
        """Subtract ``amount`` from health, never dropping below zero."""
        self.health = max(0, self.health - amount)
        return self.health

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type_id,
            "name": self.name,
            "glyph": self.glyph,
            "color": self.color,
            "x": self.x,
            "y": self.y,
            "health": self.health,
            "max_health": self.max_health,
            "attack": self.attack,
        }


@dataclass(frozen=True)
class Potion:
    """Potion template; inventory entries are these same immutable values."""

    id: str
    name: str
    description: str
    kind: str
    magnitude: float
    color: str
    rarity: int = 1
    min_floor: int = 1
    duration: Optional[int] = None
    value: int = 10

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "kind": self.kind,
            "color": self.color,
        }


@dataclass
class TimedEffect:
    kind: str
    magnitude: float
    turns_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "magnitude": self.magnitude, "turns_remaining": self.turns_remaining}


@dataclass(frozen=True)
class ShopUpgrade:
    id: str
    name: str
    description: str
    base_cost: int
    kind: str
    magnitude: float


@dataclass(frozen=True)
class ShopOffer:
    id: str
    name: str
    description: str
    cost: int
    kind: str
    magnitude: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description, "cost": self.cost}


@dataclass
class Player:
    x: int = 0
    y: int = 0
    health: int = 100
    max_health: int = 100
    level: int = 1
    experience: int = 0
    experience_to_level: int = 50
    attack_power: int = 10
    gold: int = 0
    crit_chance: float = 0.0
    double_attack_chance: float = 0.0
    damage_reduction: float = 0.0
    health_regen: float = 0.0
    gold_bonus: float = 0.0
    exp_bonus: float = 0.0
    potion_capacity: int = 5
    potions: List[Potion] = field(default_factory=list)
    effects: Dict[str, TimedEffect] = field(default_factory=dict)

    @classmethod
    def from_rules(cls, rules) -> "Player":
        return cls(
            health=rules.start_health,
            max_health=rules.start_health,
            experience_to_level=rules.start_experience_to_level,
            attack_power=rules.start_attack,
            potion_capacity=rules.potion_capacity,
        )

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def heal(self, amount: int) -> int:
        """Restore up to ``amount`` health (clamped to max); returns amount gained."""
        before = self.health
        self.health = min(self.max_health, self.health + max(0, amount))
        return self.health - before

    def take_damage(self, amount: int) -> int:
        self.health = max(0, self.health - amount)
        return self.health

    def effect_magnitude(self, kind: str) -> float:
        eff = self.effects.get(kind)
        return eff.magnitude if eff else 0.0

    def effective_attack(self) -> int:
        """Attack power including an active strength effect."""
        bonus = self.effect_magnitude(TEMP_ATTACK)
        if not bonus:
            return self.attack_power
        return math.floor(self.attack_power * (1 + bonus))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "x": self.x,
            "y": self.y,
            "health": self.health,
            "max_health": self.max_health,
            "level": self.level,
            "experience": self.experience,
            "experience_to_level": self.experience_to_level,
            "attack_power": self.attack_power,
            "effective_attack": self.effective_attack(),
            "gold": self.gold,
            "potions": [p.to_dict() for p in self.potions],
            "potion_capacity": self.potion_capacity,
            "effects": [e.to_dict() for e in self.effects.values()],
        }
        for name in MODIFIERS:
            data[name] = getattr(self, name)
        return data


__all__ = [
    "RESTORE_HEALTH",
    "RESTORE_EXP",
    "TEMP_ATTACK",
    "TEMP_PROTECTION",
    "MODIFIERS",
    "MonsterTemplate",
    "Monster",
    "Potion",
    "TimedEffect",
    "ShopUpgrade",
    "ShopOffer",
    "Player",
]
