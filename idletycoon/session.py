from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from idletycoon.achievement import AchievementDef, AchievementEvaluator, AchievementStatus
from idletycoon.clock import GameClock, PeriodicTrigger
from idletycoon.codec import SaveStateCodec
from idletycoon.definition import GameDefinition
from idletycoon.economy import EconomyModel
from idletycoon.events import (
    AchievementUnlocked,
    EventBus,
    ItemPurchased,
    MoneyChanged,
    OfflineBonusApplied,
    PurchaseRejected,
    SaveCompleted,
)
from idletycoon.item import ItemStatus
from idletycoon.offline import OfflineBonus, offline_bonus
from idletycoon.state import EconomyState
from idletycoon.storage import KeyValueStore

logger = logging.getLogger(__name__)


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class GameSession:
    """One running game: economy, achievements, persistence and clock.

    Every mutation goes through a single re-entrant lock, so a host that
    calls in from several threads (a tool server next to the clock loop)
    still sees purchases and accrual applied one at a time.
    """

    def __init__(
        self,
        definition: GameDefinition,
        store: KeyValueStore,
        now: Callable[[], int] | None = None,
    ) -> None:
        self.definition = definition
        self.economy = EconomyModel(definition)
        self.evaluator = AchievementEvaluator(definition.achievements)
        self.codec = SaveStateCodec(store, definition.config)
        self.events = EventBus()
        self.clock = GameClock([
            PeriodicTrigger("accrual", definition.config.accrual_interval, self.accrue),
            PeriodicTrigger("autosave", definition.config.autosave_interval, self.save),
        ])
        self.offline_bonus: OfflineBonus | None = None
        self.loaded_version: int | None = None

        self._now = now or wall_clock_ms
        self._lock = threading.RLock()
        self._started = False
        self._name_resolved = not definition.config.ask_shop_name

    # ── Startup ──────────────────────────────────────────────────────

    def start(self) -> OfflineBonus | None:
        """Load the save, then credit offline earnings once."""
        with self._lock:
            if self._started:
                raise RuntimeError("Session already started")
            self._started = True

            record = self.codec.load()
            if record is None:
                logger.info("No save data found; starting fresh")
                self._check_achievements()
                return None

            self.economy.restore(record)
            self.loaded_version = record.version
            if self.state.shop_name:
                self._name_resolved = True

            bonus = offline_bonus(
                record.last_save_time,
                self._now(),
                self.economy.total_income_rate(),
                self.definition.config.offline_threshold,
            )
            if bonus is not None:
                self.state.money += bonus.amount
                self.offline_bonus = bonus
                logger.info(
                    "Offline for %ds, credited %d", bonus.elapsed_seconds, bonus.amount
                )
                self.events.emit(OfflineBonusApplied(bonus.amount, bonus.elapsed_seconds))
                self.events.emit(MoneyChanged(self.state.money, bonus.amount, "offline"))

            self._check_achievements()
            return bonus

    @property
    def needs_shop_name(self) -> bool:
        return not self._name_resolved

    def set_shop_name(self, name: str | None) -> bool:
        """Resolve the shop name once. Blank input falls back to the default."""
        with self._lock:
            if self._name_resolved:
                return False
            cleaned = (name or "").strip()
            self.state.shop_name = cleaned or self.definition.config.default_shop_name
            self._name_resolved = True
            self.save()
            return True

    # ── Player actions ───────────────────────────────────────────────

    def click(self) -> int:
        with self._lock:
            amount = self.economy.click()
            self.events.emit(MoneyChanged(self.state.money, amount, "click"))
            self._check_achievements()
            return amount

    def purchase(self, item_id: str) -> bool:
        """Buy one unit. Saves on success; rejection leaves state untouched."""
        with self._lock:
            price = self.state.item_price(item_id)
            if not self.economy.purchase(item_id):
                self.events.emit(PurchaseRejected(item_id, price, self.state.money))
                return False

            item = self.state.items[item_id]
            self.events.emit(ItemPurchased(item_id, item.count, price, item.price))
            self.events.emit(MoneyChanged(self.state.money, -price, "purchase"))
            self._check_achievements(save=False)
            self.save()
            return True

    # ── Clock callbacks ──────────────────────────────────────────────

    def accrue(self) -> int:
        with self._lock:
            amount = self.economy.accrue_tick()
            if amount:
                self.events.emit(MoneyChanged(self.state.money, amount, "income"))
            self._check_achievements()
            return amount

    def save(self) -> bool:
        """Best-effort save. Skipped until the shop name has been resolved."""
        with self._lock:
            if self.needs_shop_name:
                logger.debug("Save deferred until a shop name is chosen")
                return False
            now = self._now()
            if not self.codec.save(self.state, now):
                return False
            self.events.emit(SaveCompleted(self.codec.current_key, now))
            return True

    def advance(self, seconds: float) -> int:
        """Run the clock forward in simulated time."""
        with self._lock:
            return self.clock.advance(seconds)

    async def run(self) -> None:
        await self.clock.run()

    async def run_for(self, seconds: float) -> None:
        await self.clock.run_for(seconds)

    def stop(self) -> None:
        self.clock.stop()

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def state(self) -> EconomyState:
        return self.economy.state

    @property
    def money(self) -> int:
        return self.state.money

    @property
    def shop_name(self) -> str:
        return self.state.shop_name

    def total_income_rate(self) -> int:
        return self.economy.total_income_rate()

    def item_statuses(self) -> list[ItemStatus]:
        with self._lock:
            return self.economy.item_statuses()

    def achievement_statuses(self) -> list[AchievementStatus]:
        with self._lock:
            return self.evaluator.statuses(self.state)

    # ── Private helpers ──────────────────────────────────────────────

    def _check_achievements(self, save: bool = True) -> list[AchievementDef]:
        unlocked = self.evaluator.evaluate_all(self.state)
        for adef in unlocked:
            self.events.emit(AchievementUnlocked(adef.id, adef.title))
        if unlocked and save:
            self.save()
        return unlocked
