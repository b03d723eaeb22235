from __future__ import annotations

from typing import TYPE_CHECKING

from idletycoon.item import ItemState

if TYPE_CHECKING:
    from idletycoon.definition import GameDefinition


class EconomyState:
    """Mutable runtime container holding all economy state."""

    def __init__(self, definition: GameDefinition) -> None:
        self.money: int = 0
        self.items: dict[str, ItemState] = {}
        self.shop_name: str = ""
        self.unlocked_achievements: list[str] = []
        self._earn_rates: dict[str, int] = {}

        for idef in definition.items:
            self.items[idef.id] = ItemState(count=0, price=idef.base_price)
            self._earn_rates[idef.id] = idef.earn_rate

    @property
    def income_rate(self) -> int:
        """Currency added per accrual tick: sum of count * earn_rate."""
        return sum(
            item.count * self._earn_rates[item_id]
            for item_id, item in self.items.items()
        )

    def item_count(self, id: str) -> int:
        item = self.items.get(id)
        return item.count if item else 0

    def item_price(self, id: str) -> int | None:
        item = self.items.get(id)
        return item.price if item else None

    def has_achievement(self, id: str) -> bool:
        return id in self.unlocked_achievements
