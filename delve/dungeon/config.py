from dataclasses import dataclass


@dataclass(frozen=True)
class DungeonConfig:
    width: int = 80
    height: int = 25
    min_room_size: int = 4
    max_room_size: int = 10  # exclusive
    room_attempts: int = 10
    spawn_attempts: int = 20


__all__ = ["DungeonConfig"]
