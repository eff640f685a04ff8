"""Public dungeon package interface."""

from .config import DungeonConfig
from .generator import GenerationError, LevelLayout, generate_level, reveal_exit
from .level import DungeonLevel
from .rooms import Room
from .tiles import CHEST, EXIT, FLOOR, SHOP, WALL

__all__ = [
    "DungeonConfig",
    "DungeonLevel",
    "GenerationError",
    "LevelLayout",
    "Room",
    "generate_level",
    "reveal_exit",
    "WALL",
    "FLOOR",
    "CHEST",
    "EXIT",
    "SHOP",
]
