from typing import List, Tuple

from .level import DungeonLevel
from .rooms import Room
from .tiles import FLOOR


def carve_horizontal(level: DungeonLevel, x1: int, x2: int, y: int) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        level.set_tile(x, y, FLOOR)


def carve_vertical(level: DungeonLevel, y1: int, y2: int, x: int) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        level.set_tile(x, y, FLOOR)


def carve_tunnel_between(level: DungeonLevel, a: Tuple[int, int], b: Tuple[int, int], horizontal_first: bool) -> None:
    """L-shaped corridor from center ``a`` to center ``b``.

    The bend sits at (b.x, a.y) when horizontal_first, otherwise at (a.x, b.y).
    """
    (ax, ay), (bx, by) = a, b
    if horizontal_first:
        carve_horizontal(level, ax, bx, ay)
        carve_vertical(level, ay, by, bx)
    else:
        carve_vertical(level, ay, by, ax)
        carve_horizontal(level, ax, bx, by)


def connect_rooms_in_order(level: DungeonLevel, rooms: List[Room], rng) -> int:
    """Chain room[i] to room[i+1] in placement order; returns corridors carved."""
    for a, b in zip(rooms, rooms[1:]):
        carve_tunnel_between(level, a.center, b.center, horizontal_first=rng.chance(0.5))
    return max(0, len(rooms) - 1)


__all__ = ["carve_horizontal", "carve_vertical", "carve_tunnel_between", "connect_rooms_in_order"]
