"""Floor generation: rooms, corridors, player start, shop, monsters and chests.

Phases run in a fixed order so a seeded ``GameRng`` reproduces the same floor:

  1. Room count = 5 + U[0,5) + floor // 2; rooms placed with overlap rejection.
  2. Consecutive rooms joined by L-shaped corridors (linear chain).
  3. Player start at the center of room 0.
  4. Shop at the center of room 1 from floor 3 on (offers generated here).
  5. Monsters in rooms 1..n, chests in any room, both on free floor cells.

The exit is never placed here; ``reveal_exit`` adds it once the floor is clear.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, NamedTuple, Optional, Set, Tuple

from delve.logging_utils import get_logger
from delve.models.entities import Monster, ShopOffer
from delve.services import shop_service, spawn_service

from .config import DungeonConfig
from .connectivity import farthest_floor_tile
from .level import DungeonLevel
from .rooms import Room, place_rooms
from .tiles import CHEST, EXIT, FLOOR, SHOP
from .tunnels import connect_rooms_in_order

log = get_logger("delve.dungeon")

Coord = Tuple[int, int]


class GenerationError(RuntimeError):
    """Raised when a floor cannot provide a valid player start."""


class LevelLayout(NamedTuple):
    level: DungeonLevel
    rooms: List[Room]
    player_start: Coord
    monsters: List[Monster]
    shop_offers: List[ShopOffer]
    metrics: Dict[str, Any]


def room_count(floor: int, rng) -> int:
    return 5 + rng.below(5) + floor // 2


def monster_count(floor: int, player_level: int) -> int:
    return 5 + int(floor * 1.5) + int(player_level * 0.5)


def chest_count(floor: int, rng) -> int:
    return 2 + floor // 2 + rng.below(3)


def find_spawn_cell(level: DungeonLevel, room: Room, occupied: Set[Coord], rng, attempts: int) -> Optional[Coord]:
    """Sample a free floor cell in ``room``; None after ``attempts`` misses."""
    for _ in range(attempts):
        x = room.x + rng.below(room.w)
        y = room.y + rng.below(room.h)
        if level.tile(x, y) == FLOOR and (x, y) not in occupied:
            return x, y
    return None


def generate_level(floor: int, player_level: int, rng, config: Optional[DungeonConfig] = None) -> LevelLayout:
    config = config or DungeonConfig()
    start = time.perf_counter()
    level = DungeonLevel(config.width, config.height)

    requested = room_count(floor, rng)
    rooms, dropped = place_rooms(level, requested, config, rng)
    if not rooms:
        raise GenerationError(f"No rooms could be placed for floor {floor}")
    connect_rooms_in_order(level, rooms, rng)

    player_start = rooms[0].center
    level.set_tile(*player_start, FLOOR)

    shop_offers: List[ShopOffer] = []
    if floor >= 3 and len(rooms) >= 2:
        level.set_tile(*rooms[1].center, SHOP)
        shop_offers = shop_service.generate_shop_offers(floor, rng)

    occupied: Set[Coord] = {player_start}
    monsters: List[Monster] = []
    wanted_monsters = monster_count(floor, player_level)
    spawn_rooms = rooms[1:]
    if spawn_rooms:
        for i in range(wanted_monsters):
            room = rng.choice(spawn_rooms)
            cell = find_spawn_cell(level, room, occupied, rng, config.spawn_attempts)
            if cell is None:
                continue
            monster = spawn_service.choose_monster(floor, player_level, rng, cell[0], cell[1], f"m{floor}-{i}")
            if monster is None:
                continue
            monsters.append(monster)
            occupied.add(cell)

    wanted_chests = chest_count(floor, rng)
    chests = 0
    for _ in range(wanted_chests):
        room = rng.choice(rooms)
        cell = find_spawn_cell(level, room, occupied, rng, config.spawn_attempts)
        if cell is None:
            continue
        level.set_tile(*cell, CHEST)
        chests += 1

    metrics = {
        "rooms_requested": requested,
        "rooms_placed": len(rooms),
        "rooms_dropped": dropped,
        "monsters_requested": wanted_monsters,
        "monsters_placed": len(monsters),
        "monsters_skipped": wanted_monsters - len(monsters),
        "chests_requested": wanted_chests,
        "chests_placed": chests,
        "chests_skipped": wanted_chests - chests,
        "runtime_ms": int((time.perf_counter() - start) * 1000),
    }
    log.debug(event="level_generated", floor=floor, player_level=player_level, **metrics)
    return LevelLayout(level, rooms, player_start, monsters, shop_offers, metrics)


def reveal_exit(level: DungeonLevel, player_pos: Coord) -> Optional[Coord]:
    """Turn the floor tile farthest from the player into the exit."""
    target = farthest_floor_tile(level, player_pos)
    if target is not None:
        level.set_tile(*target, EXIT)
    return target


__all__ = [
    "GenerationError",
    "LevelLayout",
    "room_count",
    "monster_count",
    "chest_count",
    "find_spawn_cell",
    "generate_level",
    "reveal_exit",
]
