from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .config import DungeonConfig
from .level import DungeonLevel
from .tiles import FLOOR


@dataclass
class Room:
    x: int
    y: int
    w: int
    h: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)


def try_place_room(level: DungeonLevel, config: DungeonConfig, rng) -> Optional[Room]:
    """Pick a room that keeps a 1-tile margin from every carved floor tile.

    Up to ``config.room_attempts`` candidates are tried; returns None if all overlap.
    """
    span = config.max_room_size - config.min_room_size
    for _ in range(config.room_attempts):
        w = config.min_room_size + rng.below(span)
        h = config.min_room_size + rng.below(span)
        if level.width - w - 2 <= 0 or level.height - h - 2 <= 0:
            continue
        x = 1 + rng.below(level.width - w - 2)
        y = 1 + rng.below(level.height - h - 2)
        room = Room(x, y, w, h)
        if not _overlaps_floor(level, room):
            return room
    return None


def _overlaps_floor(level: DungeonLevel, room: Room) -> bool:
    for yy in range(room.y - 1, room.y + room.h + 1):
        for xx in range(room.x - 1, room.x + room.w + 1):
            if level.in_bounds(xx, yy) and level.tile(xx, yy) == FLOOR:
                return True
    return False


def carve_room(level: DungeonLevel, room: Room) -> None:
    for ix, iy in room.cells():
        level.set_tile(ix, iy, FLOOR)


def place_rooms(level: DungeonLevel, target: int, config: DungeonConfig, rng):
    """Place and carve up to ``target`` rooms.

    Returns (rooms, dropped). A room that fails every attempt is skipped.
    """
    rooms: List[Room] = []
    dropped = 0
    for _ in range(target):
        room = try_place_room(level, config, rng)
        if room is None:
            dropped += 1
            continue
        carve_room(level, room)
        rooms.append(room)
    return rooms, dropped


__all__ = ["Room", "try_place_room", "carve_room", "place_rooms"]
