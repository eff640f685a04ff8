"""Turn coordinator: the only writer of ``GameState``.

Phases::

    idle --start--> exploring <--exit/buy--> in_shop
      ^                 |                        |
      +---restart--- game_over <--player dies----+

One call resolves one external action to completion. A turn-consuming action
(attack, chest, step, wait) runs in this order:

  1. the action itself (a surviving attacked monster counterattacks once),
  2. timed effects decay,
  3. each monster moves, then attacks if adjacent (the monster already
     counterattacked this turn is skipped).

Wall bumps, entering the shop, using the exit, shop actions and potions do
not consume a turn. Actions sent in the wrong phase are ignored.
"""

from __future__ import annotations

import math
import os
from typing import Iterable, Optional, Set

from delve.config import GameRules, load_rules
from delve.dungeon.config import DungeonConfig
from delve.dungeon.generator import generate_level, reveal_exit
from delve.dungeon.tiles import CHEST, EXIT, SHOP, WALL
from delve.logging_utils import get_logger
from delve.models.entities import Monster, Player
from delve.models.game_state import EXPLORING, GAME_OVER, IDLE, IN_SHOP, GameState
from delve.models.xp import check_level_up
from delve.rng import GameRng

from . import shop_service
from .combat_service import resolve_monster_attack, resolve_player_attack
from .loot_service import open_chest
from .monster_ai import is_adjacent, step_monster
from .status_effects import decay_effects, use_potion

log = get_logger("delve.turns")

DIRECTIONS = {
    "n": (0, -1),
    "s": (0, 1),
    "e": (1, 0),
    "w": (-1, 0),
    "wait": (0, 0),
}
VALID_STEPS = frozenset(DIRECTIONS.values())

IDLE_MESSAGE = "Welcome to Delve! Start a new game to begin."
START_MESSAGE = "Game started! Explore the dungeon and defeat all monsters to find the exit."
EXIT_MESSAGE = "An exit (>) has appeared! Find it to proceed to the next floor."


def _env_seed() -> Optional[int]:
    raw = os.getenv("DELVE_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        log.warn(event="bad_seed_env", value=raw)
        return None


def idle_state(seed: Optional[int] = None, rules: Optional[GameRules] = None, config: Optional[DungeonConfig] = None) -> GameState:
    rules = rules or load_rules()
    state = GameState(rng=GameRng(seed), rules=rules, config=config or DungeonConfig())
    state.player = Player.from_rules(rules)
    state.add_message(IDLE_MESSAGE)
    return state


def new_game(seed: Optional[int] = None, rules: Optional[GameRules] = None, config: Optional[DungeonConfig] = None) -> GameState:
    """Build a state and start it. ``seed`` falls back to ``DELVE_SEED``."""
    if seed is None:
        seed = _env_seed()
    state = idle_state(seed, rules, config)
    start_game(state)
    return state


def start_game(state: GameState) -> bool:
    """Idle -> exploring: fresh player, floor 1."""
    if state.phase != IDLE:
        return False
    state.player = Player.from_rules(state.rules)
    state.floor = 1
    state.turn = 0
    state.messages = []
    state.phase = EXPLORING
    state.add_message(START_MESSAGE)
    _load_floor(state)
    log.info(event="game_start", seed=state.rng.initial_seed)
    return True


def restart(state: GameState) -> bool:
    """Return any phase to idle, dropping the current floor."""
    state.phase = IDLE
    state.level = None
    state.monsters = []
    state.shop_offers = []
    state.floor = 1
    state.floor_cleared = False
    state.exit_revealed = False
    state.player = Player.from_rules(state.rules)
    state.messages = []
    state.add_message(IDLE_MESSAGE)
    return True


def _load_floor(state: GameState) -> None:
    layout = generate_level(state.floor, state.player.level, state.rng, state.config)
    state.level = layout.level
    state.monsters = layout.monsters
    state.shop_offers = layout.shop_offers
    state.player.x, state.player.y = layout.player_start
    state.floor_cleared = False
    state.exit_revealed = False
    state.last_metrics = layout.metrics
    if layout.shop_offers:
        state.add_message(f"This floor has a shop ({SHOP}). Visit it to purchase upgrades!")
    if not state.monsters:
        _clear_floor(state)


def _clear_floor(state: GameState) -> None:
    state.floor_cleared = True
    if state.exit_revealed:
        return
    if reveal_exit(state.level, state.player.position) is not None:
        state.exit_revealed = True
        state.add_message(EXIT_MESSAGE)


def advance_floor(state: GameState) -> None:
    state.floor += 1
    _load_floor(state)
    state.add_message(f"You descend deeper into the dungeon. Floor {state.floor}.")
    log.info(event="floor_advance", floor=state.floor, player_level=state.player.level, turn=state.turn)


def _game_over(state: GameState) -> None:
    state.phase = GAME_OVER
    state.add_message("Game Over! You have been defeated.")
    log.info(event="game_over", floor=state.floor, player_level=state.player.level, turn=state.turn)


def _monster_hits(state: GameState, monster: Monster) -> bool:
    """One monster attack; returns False once the player is dead."""
    damage = resolve_monster_attack(monster, state.player, state.rng, state.rules)
    state.add_message(f"{monster.name} attacks you for {damage} damage!")
    if not state.player.is_alive:
        _game_over(state)
        return False
    return True


def _player_attacks(state: GameState, monster: Monster) -> Set[str]:
    """Resolve a bump attack; returns ids of monsters that already struck back."""
    player = state.player
    outcome = resolve_player_attack(player, monster, state.rng, state.rules)
    for event in outcome.events:
        if event.double_attack:
            state.add_message(f"Extra attack! You deal {event.amount} additional damage.")
        elif event.critical:
            state.add_message(f"Critical hit! You deal {event.amount} damage to the {monster.name}!")
        else:
            state.add_message(f"You attack the {monster.name} for {event.amount} damage.")

    if outcome.monster_died:
        state.monsters = [m for m in state.monsters if m is not monster]
        player.experience += outcome.exp_reward
        player.gold += outcome.gold_reward
        state.add_message(
            f"You defeated the {monster.name}! Gained {outcome.exp_reward} exp and {outcome.gold_reward} gold."
        )
        if check_level_up(player, state.rules):
            state.add_message(f"Level Up! You are now level {player.level}. Health and attack increased!")
        if not state.monsters:
            _clear_floor(state)
        return set()

    _monster_hits(state, monster)
    return {monster.id}


def _monster_phase(state: GameState, already_attacked: Iterable[str]) -> None:
    skip = set(already_attacked)
    for monster in list(state.monsters):
        if state.phase == GAME_OVER:
            return
        step_monster(state.level, monster, state.monsters, state.player.position, state.rng, state.rules)
        if monster.id in skip:
            continue
        if is_adjacent(monster.position, state.player.position):
            if not _monster_hits(state, monster):
                return


def _end_turn(state: GameState, already_attacked: Iterable[str] = ()) -> None:
    state.add_messages(decay_effects(state.player))
    _monster_phase(state, already_attacked)


def _regenerate(player: Player) -> None:
    if player.health_regen > 0 and player.health < player.max_health:
        player.heal(math.ceil(player.max_health * player.health_regen))


def handle_directional_input(state: GameState, dx: int, dy: int) -> bool:
    """Resolve a move/attack/interaction toward (dx, dy); (0, 0) waits.

    Returns True when the action was accepted. Raises ValueError for a step
    that is not a single cardinal direction or a wait.
    """
    if (dx, dy) not in VALID_STEPS:
        raise ValueError(f"Invalid direction: ({dx}, {dy})")
    if state.phase != EXPLORING:
        return False
    player = state.player

    if (dx, dy) == (0, 0):
        state.turn += 1
        _end_turn(state)
        return True

    tx, ty = player.x + dx, player.y + dy
    if not state.level.in_bounds(tx, ty) or state.level.tile(tx, ty) == WALL:
        return False

    monster = state.monster_at(tx, ty)
    if monster is not None:
        state.turn += 1
        attacked = _player_attacks(state, monster)
        if state.phase == EXPLORING:
            _end_turn(state, attacked)
        return True

    tile = state.level.tile(tx, ty)
    if tile == CHEST:
        state.turn += 1
        state.add_messages(open_chest(state.level, tx, ty, player, state.floor, state.rng, state.rules))
        _end_turn(state)
        return True
    if tile == SHOP:
        state.phase = IN_SHOP
        state.add_message("Welcome to the shop! Choose an upgrade to purchase, or leave.")
        return True
    if tile == EXIT:
        advance_floor(state)
        return True

    state.turn += 1
    player.x, player.y = tx, ty
    _regenerate(player)
    _end_turn(state)
    return True


def handle_named_direction(state: GameState, name: str) -> bool:
    step = DIRECTIONS.get(name)
    if step is None:
        raise ValueError(f"Invalid direction: {name}")
    return handle_directional_input(state, *step)


def handle_shop_purchase(state: GameState, index: int) -> bool:
    if state.phase != IN_SHOP:
        return False
    bought, msg = shop_service.purchase(state.player, state.shop_offers, index)
    if msg:
        state.add_message(msg)
    if bought:
        log.info(event="shop_purchase", floor=state.floor, gold=state.player.gold, remaining=len(state.shop_offers))
    return bought


def handle_shop_exit(state: GameState) -> bool:
    if state.phase != IN_SHOP:
        return False
    state.phase = EXPLORING
    state.add_message("You left the shop.")
    return True


def handle_potion_use(state: GameState, index: int) -> bool:
    """Drink a potion. Free action: no turn passes and nothing decays."""
    if state.phase not in (EXPLORING, IN_SHOP):
        return False
    msgs = use_potion(state.player, index, state.rules)
    if msgs is None:
        return False
    state.add_messages(msgs)
    return True


__all__ = [
    "DIRECTIONS",
    "VALID_STEPS",
    "idle_state",
    "new_game",
    "start_game",
    "restart",
    "advance_floor",
    "handle_directional_input",
    "handle_named_direction",
    "handle_shop_purchase",
    "handle_shop_exit",
    "handle_potion_use",
]
