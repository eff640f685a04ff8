"""Reachability and distance helpers over a generated level."""

from __future__ import annotations

from collections import deque
from typing import Optional, Set, Tuple

from .level import DungeonLevel
from .tiles import FLOOR, WALL

Coord2D = Tuple[int, int]


def flood_reachable(level: DungeonLevel, start: Coord2D) -> Set[Coord2D]:
    """4-directional flood fill from ``start`` over every non-wall tile."""
    if level.tile(*start) == WALL:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = cx + dx, cy + dy
            if (nx, ny) not in visited and level.in_bounds(nx, ny) and level.tile(nx, ny) != WALL:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def manhattan(a: Coord2D, b: Coord2D) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Coord2D, b: Coord2D) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def farthest_floor_tile(level: DungeonLevel, origin: Coord2D) -> Optional[Coord2D]:
    """Floor tile with the greatest Manhattan distance from ``origin``.

    Ties go to the first tile found scanning rows top-to-bottom, columns left-to-right.
    """
    best = None
    best_dist = -1
    for x, y in level.cells():
        if level.grid[x][y] != FLOOR:
            continue
        dist = manhattan((x, y), origin)
        if dist > best_dist:
            best, best_dist = (x, y), dist
    return best


__all__ = ["flood_reachable", "manhattan", "chebyshev", "farthest_floor_tile"]
