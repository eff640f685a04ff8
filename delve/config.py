"""Tunable rule constants for the turn engine.

Several numbers in the game are balance knobs rather than fixed rules (level-up
health gain, the second-hit damage window, how often idle monsters wander).
They live on ``GameRules`` so a deployment can override them with a JSON object,
either through the ``DELVE_RULES`` environment variable or the Flask config key
of the same name.

Overrides are merged onto the defaults: unknown keys are ignored and values of
the wrong type are skipped so a bad override never blocks game creation.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class GameRules:
    # Player baseline
    start_health: int = 100
    start_attack: int = 10
    start_experience_to_level: int = 50
    # Leveling
    level_health_bonus: int = 20
    level_attack_bonus: int = 2
    experience_growth: float = 1.5
    # Combat
    hit_range: Tuple[float, float] = (0.8, 1.2)
    double_attack_range: Tuple[float, float] = (0.6, 0.9)
    crit_multiplier: int = 2
    # Inventory / UI
    potion_capacity: int = 5
    message_log_size: int = 5
    # Monster AI
    sight_radius: int = 10
    wander_chance: float = 0.3
    # Chest loot
    chest_exp_chance: float = 0.3
    chest_potion_chance: float = 0.35


DEFAULT_RULES = GameRules()


def _coerce(current: Any, value: Any) -> Any:
    """Return ``value`` converted to the type of ``current`` or raise ValueError."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        raise ValueError("expected bool")
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or int(value) != value:
            raise ValueError("expected int")
        return int(value)
    if isinstance(current, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError("expected number")
        return float(value)
    if isinstance(current, tuple):
        if not isinstance(value, (list, tuple)) or len(value) != len(current):
            raise ValueError("expected pair")
        pair = tuple(float(v) for v in value)
        if not all(math.isfinite(v) for v in pair):
            raise ValueError("expected finite numbers")
        return pair
    raise ValueError("unsupported field")


def load_rules(overrides: Optional[Mapping[str, Any] | str] = None) -> GameRules:
    """Merge ``overrides`` (dict or JSON string) onto the default rules.

    When ``overrides`` is None the ``DELVE_RULES`` environment variable is used.
    """
    if overrides is None:
        overrides = os.getenv("DELVE_RULES") or None
    if not overrides:
        return DEFAULT_RULES
    if isinstance(overrides, str):
        try:
            overrides = json.loads(overrides)
        except ValueError:
            return DEFAULT_RULES
    if not isinstance(overrides, Mapping):
        return DEFAULT_RULES
    known = {f.name: getattr(DEFAULT_RULES, f.name) for f in fields(GameRules)}
    merged: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            continue
        try:
            merged[key] = _coerce(known[key], value)
        except (TypeError, ValueError, OverflowError):
            continue
    return replace(DEFAULT_RULES, **merged)


def rules_to_dict(rules: GameRules) -> Dict[str, Any]:
    return asdict(rules)


__all__ = ["GameRules", "DEFAULT_RULES", "load_rules", "rules_to_dict"]
