from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoneyChanged:
    money: int
    delta: int
    source: str


@dataclass(frozen=True)
class ItemPurchased:
    item_id: str
    count: int
    price_paid: int
    next_price: int


@dataclass(frozen=True)
class PurchaseRejected:
    item_id: str
    price: int | None
    money: int


@dataclass(frozen=True)
class AchievementUnlocked:
    achievement_id: str
    title: str


@dataclass(frozen=True)
class OfflineBonusApplied:
    amount: int
    elapsed_seconds: int


@dataclass(frozen=True)
class SaveCompleted:
    key: str
    save_time: int


Listener = Callable[[object], None]


class EventBus:
    """Synchronous publish/subscribe channel to the presentation layer."""

    def __init__(self) -> None:
        self._listeners: dict[type, list[Listener]] = defaultdict(list)
        self._global: list[Listener] = []

    def subscribe(self, event_type: type, fn: Listener) -> None:
        self._listeners[event_type].append(fn)

    def subscribe_all(self, fn: Listener) -> None:
        self._global.append(fn)

    def emit(self, event: object) -> None:
        for fn in [*self._listeners.get(type(event), []), *self._global]:
            try:
                fn(event)
            except Exception:
                logger.exception("Listener %r failed on %s", fn, type(event).__name__)
