import math

import pytest

from delve.catalog import SHOP_UPGRADES, potion_by_id
from delve.dungeon.tiles import CHEST, FLOOR
from delve.models.entities import Player, ShopOffer
from delve.rng import GameRng
from delve.services import loot_service, shop_service
from tests.factories import ScriptedRng, open_level


def _chest_level():
    level = open_level()
    level.set_tile(3, 2, CHEST)
    return level


def _fixed_below(value):
    def below(n):
        return min(value, n - 1)

    return below


def test_chest_gold_formula_includes_bonus():
    rng = GameRng(1)
    rng.below = _fixed_below(3)
    player = Player(gold_bonus=0.2)
    assert loot_service.chest_gold(2, player, rng) == math.ceil((5 + 3 * 2) * 1.2)


def test_chest_with_experience_roll():
    level = _chest_level()
    player = Player(x=2, y=2)
    rng = ScriptedRng(randoms=[0.1])
    rng.below = _fixed_below(3)
    msgs = loot_service.open_chest(level, 3, 2, player, 2, rng)
    assert player.gold == 11
    assert player.experience == 11
    assert level.tile(3, 2) == FLOOR
    assert player.position == (2, 2)
    assert msgs[0] == "You found a treasure chest! +11 gold"
    assert "ancient knowledge" in msgs[1]


def test_chest_with_potion_roll():
    level = _chest_level()
    player = Player()
    rng = ScriptedRng(randoms=[0.5, 0.0])
    msgs = loot_service.open_chest(level, 3, 2, player, 1, rng)
    assert [p.id for p in player.potions] == ["health"]
    assert msgs[-1] == "You found a Health Potion!"


def test_full_inventory_converts_potion_to_gold():
    level = _chest_level()
    player = Player()
    player.potions = [potion_by_id("health")] * player.potion_capacity
    rng = ScriptedRng(randoms=[0.5, 0.0])
    rng.below = _fixed_below(0)
    loot_service.open_chest(level, 3, 2, player, 1, rng)
    assert len(player.potions) == player.potion_capacity
    assert player.gold == 5 + potion_by_id("health").value


def test_chest_with_nothing_extra():
    level = _chest_level()
    player = Player()
    msgs = loot_service.open_chest(level, 3, 2, player, 1, ScriptedRng(randoms=[0.9]))
    assert len(msgs) == 1
    assert player.potions == []
    assert player.experience == 0


def test_integer_rolls_leave_scripted_draws_alone():
    rng = ScriptedRng(randoms=[0.25, 0.75])
    rng.below(10)
    rng.choice(["a", "b", "c"])
    assert rng.random() == 0.25
    assert rng.random() == 0.75


def test_potion_pool_is_floor_gated():
    assert [p.id for p in loot_service.potion_pool(1)] == ["health"]
    assert len(loot_service.potion_pool(5)) == 5


def test_choose_potion_weights_by_rarity():
    # pivot near the top of the wheel lands on the last, rarest entry
    assert loot_service.choose_potion(5, ScriptedRng(randoms=[0.999])).id == "protection"
    assert loot_service.choose_potion(5, ScriptedRng(randoms=[0.0])).id == "health"


def test_shop_offers_are_distinct_and_priced_by_depth():
    for floor in (3, 4, 7):
        offers = shop_service.generate_shop_offers(floor, GameRng(floor))
        assert len(offers) == 4
        assert len({o.name for o in offers}) == 4
        mult = math.ceil(floor / 3)
        for o in offers:
            base = next(u.base_cost for u in SHOP_UPGRADES if u.name == o.name)
            assert math.floor(base * 0.8) * mult <= o.cost <= math.floor(base * 1.2) * mult


def test_shop_offers_deterministic_per_seed():
    a = shop_service.generate_shop_offers(3, GameRng(99))
    b = shop_service.generate_shop_offers(3, GameRng(99))
    assert a == b


def _offer(cost=30, kind="max_health", magnitude=15):
    return ShopOffer("offer-3-0", "Health Boost", "Increase max health by 15", cost, kind, magnitude)


def test_purchase_success_applies_and_removes_offer():
    player = Player(gold=50, health=60)
    offers = [_offer()]
    ok, msg = shop_service.purchase(player, offers, 0)
    assert ok
    assert player.gold == 20
    assert player.max_health == 115
    assert player.health == 75
    assert offers == []
    assert msg == "Purchased Health Boost! Increase max health by 15."


def test_purchase_not_enough_gold():
    player = Player(gold=10)
    offers = [_offer()]
    ok, msg = shop_service.purchase(player, offers, 0)
    assert not ok
    assert msg == "Not enough gold!"
    assert player.gold == 10
    assert len(offers) == 1


def test_purchase_out_of_range():
    player = Player(gold=100)
    assert shop_service.purchase(player, [_offer()], 3) == (False, None)
    assert player.gold == 100


def test_modifier_upgrades_are_additive():
    player = Player()
    shop_service.apply_upgrade(player, "crit_chance", 0.1)
    shop_service.apply_upgrade(player, "crit_chance", 0.1)
    shop_service.apply_upgrade(player, "attack_power", 5)
    assert player.crit_chance == pytest.approx(0.2)
    assert player.attack_power == 15


def test_unknown_upgrade_kind():
    with pytest.raises(ValueError):
        shop_service.apply_upgrade(Player(), "flight", 1)
