"""Floor shop: offer generation, purchase validation and upgrade application.

Offers are data (``kind`` + ``magnitude``); ``apply_upgrade`` is the single
place that interprets them. Extension point: add a handler to UPGRADE_HANDLERS.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from delve.catalog import SHOP_UPGRADES
from delve.models.entities import MODIFIERS, Player, ShopOffer, ShopUpgrade

OFFER_COUNT = 4


def offer_cost(base_cost: int, floor: int, rng) -> int:
    return math.floor(base_cost * rng.uniform(0.8, 1.2)) * math.ceil(floor / 3)


def generate_shop_offers(
    floor: int, rng, upgrades: Sequence[ShopUpgrade] = SHOP_UPGRADES, count: int = OFFER_COUNT
) -> List[ShopOffer]:
    """Sample ``count`` distinct upgrades and price them for ``floor``."""
    picked = rng.sample(list(upgrades), min(count, len(upgrades)))
    return [
        ShopOffer(
            id=f"offer-{floor}-{i}",
            name=u.name,
            description=u.description,
            cost=offer_cost(u.base_cost, floor, rng),
            kind=u.kind,
            magnitude=u.magnitude,
        )
        for i, u in enumerate(picked)
    ]


def _max_health(player: Player, amount: float) -> None:
    gain = int(amount)
    player.max_health += gain
    player.heal(gain)


def _attack_power(player: Player, amount: float) -> None:
    player.attack_power += int(amount)


def _modifier(name: str) -> Callable[[Player, float], None]:
    def apply(player: Player, amount: float) -> None:
        setattr(player, name, getattr(player, name) + amount)

    return apply


UPGRADE_HANDLERS: Dict[str, Callable[[Player, float], None]] = {
    "max_health": _max_health,
    "attack_power": _attack_power,
}
UPGRADE_HANDLERS.update({name: _modifier(name) for name in MODIFIERS})


def apply_upgrade(player: Player, kind: str, magnitude: float) -> None:
    handler = UPGRADE_HANDLERS.get(kind)
    if handler is None:
        raise ValueError(f"Unknown upgrade kind: {kind}")
    handler(player, magnitude)


def purchase(player: Player, offers: List[ShopOffer], index: int) -> Tuple[bool, Optional[str]]:
    """Buy ``offers[index]`` for ``player``.

    Returns (bought, message). An out-of-range index returns (False, None) and
    changes nothing; insufficient gold returns (False, "Not enough gold!").
    """
    if not 0 <= index < len(offers):
        return False, None
    offer = offers[index]
    if player.gold < offer.cost:
        return False, "Not enough gold!"
    player.gold -= offer.cost
    apply_upgrade(player, offer.kind, offer.magnitude)
    del offers[index]
    return True, f"Purchased {offer.name}! {offer.description}."


__all__ = ["OFFER_COUNT", "offer_cost", "generate_shop_offers", "apply_upgrade", "purchase", "UPGRADE_HANDLERS"]
