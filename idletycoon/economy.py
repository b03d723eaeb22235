from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from idletycoon.definition import GameDefinition
from idletycoon.item import ItemStatus
from idletycoon.price_scaling import PriceScaling
from idletycoon.state import EconomyState

if TYPE_CHECKING:
    from idletycoon.codec import SaveRecord

logger = logging.getLogger(__name__)


class EconomyModel:
    """Authoritative economy logic: balance, catalog, pricing and accrual."""

    def __init__(self, definition: GameDefinition) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.state = EconomyState(definition)
        self.price_scaling = PriceScaling.exponential(definition.config.price_growth)

    # ── Core loop ────────────────────────────────────────────────────

    def accrue_tick(self) -> int:
        """Add one interval of passive income. Returns the amount added."""
        total = self.total_income_rate()
        if total > 0:
            self.state.money += total
            return total
        return 0

    # ── Player actions ───────────────────────────────────────────────

    def purchase(self, item_id: str) -> bool:
        """Attempt to buy one unit of an item. Returns True on success."""
        item = self.state.items.get(item_id)
        if item is None:
            logger.debug("Ignoring purchase of unknown item %r", item_id)
            return False

        if self.state.money < item.price:
            return False

        self.state.money -= item.price
        item.count += 1
        item.price = self.price_scaling.step(item.price)
        return True

    def click(self) -> int:
        """Process a click on the building. Returns the amount added."""
        reward = self.definition.config.click_reward
        self.state.money += reward
        return reward

    def restore(self, record: SaveRecord) -> None:
        """Overwrite state with a loaded save record.

        Saved items whose id is not in the catalog are skipped. Prices are
        taken verbatim unless the game config asks to reconcile them.
        """
        self.state.money = max(0, record.money)
        self.state.shop_name = record.shop_name

        for saved in record.items:
            item = self.state.items.get(saved.id)
            if item is None:
                logger.debug("Skipping saved item %r not in catalog", saved.id)
                continue
            item.count = saved.count
            if self.definition.config.reconcile_prices:
                idef = self.definition.get_item(saved.id)
                item.price = self.price_scaling.price_after(idef.base_price, saved.count)
            else:
                item.price = saved.price

        self.state.unlocked_achievements = []
        for aid in record.unlocked_achievement_ids:
            if self.definition.get_achievement(aid) is None:
                logger.debug("Skipping saved achievement %r not in catalog", aid)
                continue
            if aid not in self.state.unlocked_achievements:
                self.state.unlocked_achievements.append(aid)

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> EconomyState:
        """Return live reference to economy state."""
        return self.state

    def total_income_rate(self) -> int:
        return self.state.income_rate

    def item_statuses(self) -> list[ItemStatus]:
        """Snapshot of every catalog item in declaration order."""
        result: list[ItemStatus] = []
        for idef in self.definition.items:
            item = self.state.items[idef.id]
            result.append(
                ItemStatus(
                    id=idef.id,
                    display_name=idef.display_name,
                    count=item.count,
                    price=item.price,
                    earn_rate=idef.earn_rate,
                    affordable=self.state.money >= item.price,
                )
            )
        return result

    def affordable_items(self) -> list[ItemStatus]:
        return [s for s in self.item_statuses() if s.affordable]

    def time_to_afford(self, item_id: str) -> float | None:
        """Seconds until affordable at the current income rate. None if never."""
        item = self.state.items.get(item_id)
        if item is None:
            return None
        if self.state.money >= item.price:
            return 0.0
        rate = self.total_income_rate()
        if rate <= 0:
            return None  # will never afford without clicking
        interval = self.definition.config.accrual_interval
        return (item.price - self.state.money) / rate * interval
