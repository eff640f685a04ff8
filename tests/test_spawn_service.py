import math

from delve.catalog import MONSTER_TYPES, monster_by_type
from delve.services import spawn_service
from delve.rng import GameRng


def test_eligible_templates_gated_by_floor():
    assert {t.type_id for t in spawn_service.eligible_templates(1)} == {"rat", "goblin"}
    assert len(spawn_service.eligible_templates(12)) == len(MONSTER_TYPES)


def test_floor_one_level_one_is_unscaled():
    m = spawn_service.scaled_instance(monster_by_type("orc"), 1, 1, 2, 3, "m1-0")
    assert (m.max_health, m.attack, m.exp_value, m.gold_value) == (25, 5, 20, 8)
    assert m.position == (2, 3)


def test_rewards_scale_by_floor_only():
    tpl = monster_by_type("skeleton")
    m = spawn_service.scaled_instance(tpl, 4, 5, 0, 0, "m4-0")
    stat, reward = spawn_service.scaling_factors(4, 5)
    assert m.max_health == math.ceil(tpl.health * stat)
    assert m.attack == math.ceil(tpl.attack * stat)
    assert m.exp_value == math.ceil(tpl.exp_value * reward)
    assert m.gold_value == math.ceil(tpl.gold_value * reward)
    assert reward == spawn_service.floor_scaling(4)


def test_choose_monster_uses_pool():
    m = spawn_service.choose_monster(2, 1, GameRng(3), 1, 1, "m2-0")
    assert m.type_id in {"rat", "goblin", "skeleton"}
    assert spawn_service.choose_monster(0, 1, GameRng(3), 1, 1, "m0-0") is None
