"""GameState aggregate root and its read-only snapshot.

The turn coordinator (``delve.services.turn_service``) is the only writer.
Everything else, the HTTP layer and the Socket.IO push included, reads
``to_dict()`` after an action has fully resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from delve.config import DEFAULT_RULES, GameRules
from delve.dungeon.config import DungeonConfig
from delve.dungeon.level import DungeonLevel
from delve.rng import GameRng

from .entities import Monster, Player, ShopOffer

# Phases
IDLE = "idle"
EXPLORING = "exploring"
IN_SHOP = "in_shop"
GAME_OVER = "game_over"

PHASES = (IDLE, EXPLORING, IN_SHOP, GAME_OVER)

PLAYER_GLYPH = "@"


@dataclass
class GameState:
    rng: GameRng = field(default_factory=GameRng)
    rules: GameRules = DEFAULT_RULES
    config: DungeonConfig = field(default_factory=DungeonConfig)
    phase: str = IDLE
    floor: int = 1
    level: Optional[DungeonLevel] = None
    monsters: List[Monster] = field(default_factory=list)
    player: Player = field(default_factory=Player)
    shop_offers: List[ShopOffer] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    floor_cleared: bool = False
    exit_revealed: bool = False
    turn: int = 0
    last_metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def running(self) -> bool:
        return self.phase in (EXPLORING, IN_SHOP)

    @property
    def shop_open(self) -> bool:
        return self.phase == IN_SHOP

    def add_message(self, text: str) -> None:
        self.messages.append(text)
        overflow = len(self.messages) - self.rules.message_log_size
        if overflow > 0:
            del self.messages[:overflow]

    def add_messages(self, texts) -> None:
        for text in texts or ():
            self.add_message(text)

    def monster_at(self, x: int, y: int) -> Optional[Monster]:
        for m in self.monsters:
            if m.x == x and m.y == y and m.is_alive:
                return m
        return None

    def render_rows(self) -> List[str]:
        """Tile rows with monster glyphs and the player overlaid."""
        if self.level is None:
            return []
        cells = [list(row) for row in self.level.rows()]
        for m in self.monsters:
            if self.level.in_bounds(m.x, m.y):
                cells[m.y][m.x] = m.glyph
        if self.phase != IDLE and self.level.in_bounds(self.player.x, self.player.y):
            cells[self.player.y][self.player.x] = PLAYER_GLYPH
        return ["".join(row) for row in cells]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase,
            "running": self.running,
            "floor": self.floor,
            "turn": self.turn,
            "seed": self.rng.initial_seed,
            "width": self.level.width if self.level else self.config.width,
            "height": self.level.height if self.level else self.config.height,
            "map": self.render_rows(),
            "player": self.player.to_dict(),
            "monsters": [m.to_dict() for m in self.monsters],
            "messages": list(self.messages),
            "shop_open": self.shop_open,
            "shop_offers": [o.to_dict() for o in self.shop_offers] if self.shop_open else [],
            "floor_cleared": self.floor_cleared,
            "exit_revealed": self.exit_revealed,
        }


__all__ = ["IDLE", "EXPLORING", "IN_SHOP", "GAME_OVER", "PHASES", "PLAYER_GLYPH", "GameState"]
