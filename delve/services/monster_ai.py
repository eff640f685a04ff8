"""Monster movement for the exploration turn.

Each monster takes at most one cardinal step per turn:

- Chase: when the player is within ``sight_radius`` (Manhattan) and visible
  along a Bresenham line, step on the axis with the larger offset (ties go
  vertical).
- Wander: otherwise, with ``wander_chance`` probability, step in a random
  cardinal direction.

A step is dropped (monster stays put) when the destination is a wall, out of
bounds, another monster, the player, or a chest/exit/shop tile. Attacks are
not decided here; the turn coordinator checks adjacency after each step.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from delve.config import DEFAULT_RULES
from delve.dungeon.connectivity import chebyshev, manhattan
from delve.dungeon.level import DungeonLevel
from delve.dungeon.tiles import FEATURE_TILES, WALL

Coord = Tuple[int, int]

DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def line_of_sight(level: DungeonLevel, start: Coord, end: Coord) -> bool:
    """Walk a Bresenham line from ``start``; False at the first wall before ``end``.

    The starting cell is checked too, the destination is not.
    """
    x, y = start
    x2, y2 = end
    dx = abs(x2 - x)
    dy = abs(y2 - y)
    sx = 1 if x < x2 else -1
    sy = 1 if y < y2 else -1
    err = dx - dy
    while True:
        if (x, y) == (x2, y2):
            return True
        if level.tile(x, y) == WALL:
            return False
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def can_enter(level: DungeonLevel, pos: Coord, occupied: Iterable[Coord], player_pos: Coord) -> bool:
    if not level.in_bounds(*pos):
        return False
    tile = level.tile(*pos)
    if tile == WALL or tile in FEATURE_TILES:
        return False
    if pos == player_pos:
        return False
    return pos not in occupied


def chase_step(monster_pos: Coord, player_pos: Coord) -> Coord:
    dx = player_pos[0] - monster_pos[0]
    dy = player_pos[1] - monster_pos[1]
    if abs(dx) > abs(dy):
        return (1 if dx > 0 else -1), 0
    return 0, (1 if dy > 0 else -1)


def choose_step(level: DungeonLevel, monster_pos: Coord, player_pos: Coord, rng, rules=DEFAULT_RULES) -> Optional[Coord]:
    """Return the (dx, dy) a monster wants this turn, or None to stay."""
    if manhattan(monster_pos, player_pos) <= rules.sight_radius and line_of_sight(level, monster_pos, player_pos):
        return chase_step(monster_pos, player_pos)
    if rng.random() < rules.wander_chance:
        return rng.choice(DIRECTIONS)
    return None


def step_monster(level: DungeonLevel, monster, monsters, player_pos: Coord, rng, rules=DEFAULT_RULES) -> bool:
    """Move ``monster`` one step if its chosen destination is free. Returns True on movement."""
    step = choose_step(level, monster.position, player_pos, rng, rules)
    if step is None:
        return False
    target = (monster.x + step[0], monster.y + step[1])
    others = {m.position for m in monsters if m is not monster and m.is_alive}
    if not can_enter(level, target, others, player_pos):
        return False
    monster.x, monster.y = target
    return True


def is_adjacent(monster_pos: Coord, player_pos: Coord) -> bool:
    """Chebyshev distance 1 (diagonals included)."""
    return chebyshev(monster_pos, player_pos) <= 1


__all__ = ["DIRECTIONS", "line_of_sight", "can_enter", "chase_step", "choose_step", "step_monster", "is_adjacent"]
