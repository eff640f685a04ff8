# Tile constants centralized for modular imports (ASCII glyphs double as the snapshot rendering)
WALL = "#"
FLOOR = "."
CHEST = "$"
EXIT = ">"
SHOP = "S"

# Features that occupy a cell: monsters never step onto them and spawns skip them
FEATURE_TILES = frozenset({CHEST, EXIT, SHOP})

__all__ = ["WALL", "FLOOR", "CHEST", "EXIT", "SHOP", "FEATURE_TILES"]
