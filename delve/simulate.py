"""Headless bot for balance checks.

Plays a seeded game with a simple greedy policy and reports how far it got:

- leave the shop after buying the cheapest affordable offer,
- drink a health potion below 40% health,
- otherwise walk (BFS) toward the nearest monster, chest or revealed exit,
- wait when nothing is reachable.

Used by ``run.py simulate``; deterministic for a given seed and rule set.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Dict, Optional, Tuple

from delve.dungeon.tiles import CHEST, EXIT, SHOP, WALL
from delve.models.entities import RESTORE_HEALTH
from delve.models.game_state import GAME_OVER, IN_SHOP, GameState
from delve.services import turn_service

Coord = Tuple[int, int]

LOW_HEALTH = 0.4


def first_step_toward_goal(state: GameState) -> Optional[Coord]:
    """BFS from the player; returns the (dx, dy) of the first step to the nearest goal."""
    level = state.level
    start = state.player.position
    goals = {m.position for m in state.monsters}
    shopping = any(o.cost <= state.player.gold for o in state.shop_offers)
    for x, y in level.cells():
        tile = level.grid[x][y]
        if tile == CHEST or tile == EXIT or (tile == SHOP and shopping):
            goals.add((x, y))
    if not goals:
        return None
    first: Dict[Coord, Optional[Coord]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        for dx, dy in ((0, -1), (0, 1), (1, 0), (-1, 0)):
            nxt = (cur[0] + dx, cur[1] + dy)
            if nxt in first or not level.in_bounds(*nxt):
                continue
            tile = level.tile(*nxt)
            if tile == WALL:
                continue
            first[nxt] = first[cur] or (dx, dy)
            if nxt in goals:
                return first[nxt]
            if tile != SHOP:
                q.append(nxt)
    return None


def _shop_turn(state: GameState) -> None:
    affordable = [i for i, o in enumerate(state.shop_offers) if o.cost <= state.player.gold]
    if affordable:
        cheapest = min(affordable, key=lambda i: state.shop_offers[i].cost)
        turn_service.handle_shop_purchase(state, cheapest)
    turn_service.handle_shop_exit(state)


def _maybe_heal(state: GameState) -> bool:
    player = state.player
    if player.health > player.max_health * LOW_HEALTH:
        return False
    for i, potion in enumerate(player.potions):
        if potion.kind == RESTORE_HEALTH:
            return turn_service.handle_potion_use(state, i)
    return False


def play(seed: int, max_turns: int = 500) -> Tuple[GameState, Dict[str, Any]]:
    state = turn_service.new_game(seed=seed)
    actions = 0
    while state.phase != GAME_OVER and state.turn < max_turns and actions < max_turns * 4:
        actions += 1
        if state.phase == IN_SHOP:
            _shop_turn(state)
            continue
        if _maybe_heal(state):
            continue
        step = first_step_toward_goal(state) or (0, 0)
        if not turn_service.handle_directional_input(state, *step):
            turn_service.handle_directional_input(state, 0, 0)
    summary = {
        "seed": seed,
        "turns": state.turn,
        "floor": state.floor,
        "level": state.player.level,
        "gold": state.player.gold,
        "health": state.player.health,
        "game_over": state.phase == GAME_OVER,
    }
    return state, summary


__all__ = ["first_step_toward_goal", "play"]
