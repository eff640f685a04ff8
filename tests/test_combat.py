from delve.catalog import monster_by_type
from delve.config import GameRules
from delve.models.entities import TEMP_ATTACK, TEMP_PROTECTION, Player, TimedEffect
from delve.services.combat_service import resolve_monster_attack, resolve_player_attack
from delve.services.combat_utils import apply_damage_reduction
from delve.services.spawn_service import scaled_instance
from tests.factories import ScriptedRng, make_monster


def test_plain_hit_uses_attack_times_variance():
    player = Player()
    monster = make_monster(1, 1, health=30)
    # crit roll, double-attack roll
    rng = ScriptedRng(randoms=[0.9, 0.9], uniforms=[1.0])
    out = resolve_player_attack(player, monster, rng)
    assert out.total_damage == 10
    assert not out.critical
    assert len(out.events) == 1
    assert monster.health == 20
    assert not out.monster_died


def test_critical_hit_doubles_damage():
    player = Player(crit_chance=0.5)
    monster = make_monster(1, 1, health=50)
    rng = ScriptedRng(randoms=[0.1, 0.9], uniforms=[1.0])
    out = resolve_player_attack(player, monster, rng)
    assert out.critical
    assert out.total_damage == 20
    assert monster.health == 30


def test_double_attack_uses_its_own_range():
    player = Player(double_attack_chance=0.5)
    monster = make_monster(1, 1, health=30)
    rng = ScriptedRng(randoms=[0.9, 0.1], uniforms=[1.0, 0.75])
    out = resolve_player_attack(player, monster, rng)
    assert [e.amount for e in out.events] == [10, 7]
    assert out.events[1].double_attack
    assert monster.health == 13


def test_double_attack_window_is_configurable():
    player = Player(double_attack_chance=1.0)
    monster = make_monster(1, 1, health=100)
    rules = GameRules(double_attack_range=(0.7, 1.0))
    # Real draws: just check the bound of the configured window
    out = resolve_player_attack(player, monster, ScriptedRng(randoms=[0.9], seed=3), rules)
    second = out.events[1].amount
    assert 7 <= second <= 10


def test_no_second_hit_on_a_dead_monster():
    player = Player(double_attack_chance=1.0, exp_bonus=0.15, gold_bonus=0.2)
    monster = make_monster(1, 1, health=5, exp_value=5, gold_value=3)
    rng = ScriptedRng(randoms=[0.9], uniforms=[1.0])
    out = resolve_player_attack(player, monster, rng)
    assert len(out.events) == 1
    assert out.monster_died
    assert monster.health == 0
    assert out.exp_reward == 6
    assert out.gold_reward == 4


def test_rewards_ignore_crits():
    player = Player(crit_chance=1.0)
    monster = make_monster(1, 1, health=5, exp_value=8, gold_value=2)
    out = resolve_player_attack(player, monster, ScriptedRng(randoms=[0.0], uniforms=[1.0]))
    assert out.critical
    assert (out.exp_reward, out.gold_reward) == (8, 2)


def test_strength_effect_raises_effective_attack():
    player = Player()
    player.effects[TEMP_ATTACK] = TimedEffect(TEMP_ATTACK, 0.3, 5)
    monster = make_monster(1, 1, health=50)
    out = resolve_player_attack(player, monster, ScriptedRng(randoms=[0.9, 0.9], uniforms=[1.0]))
    assert player.effective_attack() == 13
    assert out.total_damage == 13


def test_monster_attack_applies_permanent_then_temporary_reduction():
    player = Player(damage_reduction=0.1)
    player.effects[TEMP_PROTECTION] = TimedEffect(TEMP_PROTECTION, 0.4, 3)
    monster = make_monster(1, 1, attack=10)
    dealt = resolve_monster_attack(monster, player, ScriptedRng(uniforms=[1.0]))
    assert dealt == 5
    assert player.health == 95


def test_monster_attack_deals_at_least_one():
    player = Player(damage_reduction=0.5)
    monster = make_monster(1, 1, attack=1)
    dealt = resolve_monster_attack(monster, player, ScriptedRng(uniforms=[0.8]))
    assert dealt == 1
    assert player.health == 99


def test_player_health_never_negative():
    player = Player(health=3)
    monster = make_monster(1, 1, attack=50)
    resolve_monster_attack(monster, player, ScriptedRng(uniforms=[1.0]))
    assert player.health == 0
    assert not player.is_alive


def test_apply_damage_reduction_composes_and_clamps():
    assert apply_damage_reduction(10, [0.1, 0.4]) == 5
    assert apply_damage_reduction(10, [0.0, None]) == 10
    assert apply_damage_reduction(1, [0.9]) == 1
    assert apply_damage_reduction(10, [1.5]) == 1


def test_goblin_falls_to_two_fixed_hits():
    goblin = scaled_instance(monster_by_type("goblin"), 1, 1, 4, 4, "m1-0")
    assert goblin.health == 15
    player = Player()
    rng = ScriptedRng(randoms=[0.9, 0.9, 0.9], uniforms=[1.2, 1.2])
    first = resolve_player_attack(player, goblin, rng)
    assert first.total_damage == 12
    assert not first.monster_died
    second = resolve_player_attack(player, goblin, rng)
    assert second.monster_died
    assert (second.exp_reward, second.gold_reward) == (10, 3)


def test_half_damage_reduction_halves_a_ten_point_hit():
    player = Player(damage_reduction=0.5)
    monster = make_monster(1, 1, attack=10)
    assert resolve_monster_attack(monster, player, ScriptedRng(uniforms=[1.0])) == 5
    assert player.health == 95
