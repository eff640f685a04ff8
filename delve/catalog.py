"""Static game content: monster templates, potions and shop upgrades.

Monsters are gated by ``min_floor``; potions by ``min_floor`` and drop
weight ``1 / rarity``. Shop upgrades are permanent stat changes whose ``kind``
is interpreted by ``delve.services.shop_service.apply_upgrade``.
"""

from delve.models.entities import (
    RESTORE_EXP,
    RESTORE_HEALTH,
    TEMP_ATTACK,
    TEMP_PROTECTION,
    MonsterTemplate,
    Potion,
    ShopUpgrade,
)

MONSTER_TYPES = (
    MonsterTemplate("rat", "Rat", "r", 10, 2, 5, 1, "#bb9", 1),
    MonsterTemplate("goblin", "Goblin", "g", 15, 3, 10, 3, "#8f8", 1),
    MonsterTemplate("skeleton", "Skeleton", "s", 20, 4, 15, 5, "#fff", 2),
    MonsterTemplate("orc", "Orc", "o", 25, 5, 20, 8, "#f88", 3),
    MonsterTemplate("troll", "Troll", "T", 40, 8, 30, 15, "#88f", 5),
    MonsterTemplate("wraith", "Wraith", "W", 35, 12, 40, 20, "#c8f", 7),
    MonsterTemplate("demon", "Demon", "&", 60, 15, 50, 30, "#f55", 9),
    MonsterTemplate("dragon", "Dragon", "D", 100, 20, 100, 50, "#fa0", 12),
)

POTION_TYPES = (
    Potion(
        "health",
        "Health Potion",
        "Restores 30% of your max health",
        RESTORE_HEALTH,
        0.3,
        "#ff5555",
        rarity=1,
        value=10,
    ),
    Potion(
        "experience",
        "Experience Potion",
        "Grants 20% of the experience needed to level",
        RESTORE_EXP,
        0.2,
        "#55aaff",
        rarity=2,
        min_floor=2,
        value=20,
    ),
    Potion(
        "greater_health",
        "Greater Health Potion",
        "Restores 60% of your max health",
        RESTORE_HEALTH,
        0.6,
        "#ff0000",
        rarity=2,
        min_floor=3,
        value=20,
    ),
    Potion(
        "strength",
        "Strength Potion",
        "+30% attack power for 5 turns",
        TEMP_ATTACK,
        0.3,
        "#ffaa00",
        rarity=3,
        min_floor=4,
        duration=5,
        value=30,
    ),
    Potion(
        "protection",
        "Protection Potion",
        "-40% damage taken for 5 turns",
        TEMP_PROTECTION,
        0.4,
        "#9966ff",
        rarity=3,
        min_floor=5,
        duration=5,
        value=30,
    ),
)

SHOP_UPGRADES = (
    ShopUpgrade("health_boost", "Health Boost", "Increase max health by 15", 25, "max_health", 15),
    ShopUpgrade("strength_boost", "Strength Boost", "Increase attack power by 5", 30, "attack_power", 5),
    ShopUpgrade("lucky_charm", "Lucky Charm", "Increase critical hit chance by 10%", 40, "crit_chance", 0.1),
    ShopUpgrade("vitality_stone", "Vitality Stone", "Regenerate 5% health per step", 50, "health_regen", 0.05),
    ShopUpgrade("gold_magnet", "Gold Magnet", "Increase gold found by 20%", 35, "gold_bonus", 0.2),
    ShopUpgrade("experience_tome", "Experience Tome", "Gain 15% more experience", 45, "exp_bonus", 0.15),
    ShopUpgrade("defensive_amulet", "Defensive Amulet", "Reduce damage taken by 10%", 40, "damage_reduction", 0.1),
    ShopUpgrade("fury_charm", "Fury Charm", "Gain 15% chance for double attacks", 60, "double_attack_chance", 0.15),
)


def monster_by_type(type_id: str) -> MonsterTemplate:
    for tpl in MONSTER_TYPES:
        if tpl.type_id == type_id:
            return tpl
    raise KeyError(type_id)


def potion_by_id(potion_id: str) -> Potion:
    for p in POTION_TYPES:
        if p.id == potion_id:
            return p
    raise KeyError(potion_id)


__all__ = ["MONSTER_TYPES", "POTION_TYPES", "SHOP_UPGRADES", "monster_by_type", "potion_by_id"]
