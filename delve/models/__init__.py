# Model package init
from .entities import Monster, MonsterTemplate, Player, Potion, ShopOffer, ShopUpgrade, TimedEffect  # noqa: F401
from .game_state import EXPLORING, GAME_OVER, IDLE, IN_SHOP, GameState  # noqa: F401 re-export
from .xp import check_level_up  # noqa: F401

__all__ = [
    "GameState",
    "IDLE",
    "EXPLORING",
    "IN_SHOP",
    "GAME_OVER",
    "Player",
    "Monster",
    "MonsterTemplate",
    "Potion",
    "TimedEffect",
    "ShopOffer",
    "ShopUpgrade",
    "check_level_up",
]
