import json

from delve import logging_utils
from delve.config import DEFAULT_RULES, load_rules, rules_to_dict
from delve.rng import GameRng


def test_defaults_when_no_override():
    assert load_rules() is DEFAULT_RULES
    assert DEFAULT_RULES.level_health_bonus == 20
    assert DEFAULT_RULES.double_attack_range == (0.6, 0.9)


def test_dict_override_merges():
    rules = load_rules({"level_health_bonus": 10, "wander_chance": 0.5})
    assert rules.level_health_bonus == 10
    assert rules.wander_chance == 0.5
    assert rules.potion_capacity == DEFAULT_RULES.potion_capacity


def test_json_string_and_env_override(monkeypatch):
    assert load_rules('{"potion_capacity": 3}').potion_capacity == 3
    monkeypatch.setenv("DELVE_RULES", json.dumps({"sight_radius": 6, "double_attack_range": [0.7, 1.0]}))
    rules = load_rules()
    assert rules.sight_radius == 6
    assert rules.double_attack_range == (0.7, 1.0)


def test_bad_overrides_are_ignored():
    rules = load_rules({"nope": 1, "start_health": "lots", "potion_capacity": 2.5, "wander_chance": True})
    assert rules == DEFAULT_RULES
    assert load_rules("{not json") is DEFAULT_RULES
    assert load_rules("[1, 2]") is DEFAULT_RULES


def test_rules_to_dict_round_trips_names():
    data = rules_to_dict(DEFAULT_RULES)
    assert data["message_log_size"] == 5
    assert load_rules(data) == DEFAULT_RULES


def test_rng_seed_and_helpers():
    a, b = GameRng(10), GameRng(10)
    assert a.initial_seed == 10
    assert [a.below(100) for _ in range(5)] == [b.below(100) for _ in range(5)]
    assert 1 <= GameRng().initial_seed <= 1_000_000
    assert not GameRng(1).chance(0.0)
    assert GameRng(1).weighted_choice(["a", "b"], [0.0, 1.0]) == "b"


def test_log_line_format(capsys, monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    logging_utils.get_logger("delve.test").info(event="floor_advance", floor=3, note="two words")
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=floor_advance" in out
    assert "floor=3" in out
    assert "note=two_words" in out
    assert "logger=delve.test" in out


def test_log_json_mode_and_threshold(capsys, monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = logging_utils.get_logger("delve.test")
    log.debug(event="hidden")
    log.info(event="shown", floor=2)
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert len(lines) == 1
    rec = json.loads(lines[0])
    assert rec["event"] == "shown"
    assert rec["level"] == "info"
    assert rec["floor"] == 2


def test_reserved_keys_do_not_collide(capsys, monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    logging_utils.get_logger("delve.test").info(event="floor_advance", level=7, ts=0, player_level=3)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "level=7" not in out
    assert "ts=0" not in out
    assert "player_level=3" in out


def test_non_finite_override_is_ignored(monkeypatch):
    assert load_rules('{"start_health": Infinity}').start_health == DEFAULT_RULES.start_health
    assert load_rules({"potion_capacity": float("nan")}).potion_capacity == DEFAULT_RULES.potion_capacity
    assert load_rules({"wander_chance": float("inf")}).wander_chance == DEFAULT_RULES.wander_chance
    monkeypatch.setenv("DELVE_RULES", '{"start_health": -Infinity, "sight_radius": 6}')
    rules = load_rules()
    assert rules.start_health == DEFAULT_RULES.start_health
    assert rules.sight_radius == 6
