"""Tile grid for a single floor.

The grid is stored column-major (``grid[x][y]``) like the rest of the dungeon
code; callers go through ``tile``/``set_tile`` and ``rows()`` produces the
row-major ASCII view used by snapshots.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .tiles import FLOOR, WALL

Coord = Tuple[int, int]


class DungeonLevel:
    __slots__ = ("width", "height", "grid")

    def __init__(self, width: int, height: int, fill: str = WALL):
        self.width = width
        self.height = height
        self.grid: List[List[str]] = [[fill for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> str:
        """Return the tile at (x, y); anything outside the grid reads as wall."""
        if not self.in_bounds(x, y):
            return WALL
        return self.grid[x][y]

    def set_tile(self, x: int, y: int, tile: str) -> None:
        self.grid[x][y] = tile

    def is_wall(self, x: int, y: int) -> bool:
        return self.tile(x, y) == WALL

    def cells(self) -> Iterator[Coord]:
        """Scan rows top-to-bottom, columns left-to-right."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def floor_cells(self) -> List[Coord]:
        return [(x, y) for x, y in self.cells() if self.grid[x][y] == FLOOR]

    def count(self, tile: str) -> int:
        return sum(1 for x, y in self.cells() if self.grid[x][y] == tile)

    def rows(self) -> List[str]:
        return ["".join(self.grid[x][y] for x in range(self.width)) for y in range(self.height)]


__all__ = ["DungeonLevel"]
