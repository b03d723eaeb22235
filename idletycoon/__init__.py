# idletycoon: idle tycoon economy & versioned save core

from idletycoon._types import compare
from idletycoon.requirement import Requirement, Req
from idletycoon.price_scaling import PriceScaling
from idletycoon.item import ItemDef, ItemState, ItemStatus
from idletycoon.achievement import AchievementDef, AchievementEvaluator, AchievementStatus
from idletycoon.definition import GameDefinition, GameConfig
from idletycoon.state import EconomyState
from idletycoon.economy import EconomyModel
from idletycoon.offline import OfflineBonus, compute_catch_up, offline_bonus
from idletycoon.events import (
    EventBus,
    MoneyChanged,
    ItemPurchased,
    PurchaseRejected,
    AchievementUnlocked,
    OfflineBonusApplied,
    SaveCompleted,
)
from idletycoon.storage import KeyValueStore, MemoryStore, JsonFileStore
from idletycoon.codec import (
    SCHEMA_VERSIONS,
    SchemaVersion,
    SaveRecord,
    SavedItem,
    SaveRecordError,
    SaveStateCodec,
)
from idletycoon.clock import GameClock, PeriodicTrigger
from idletycoon.session import GameSession
from idletycoon.formatting import format_status

__all__ = [
    # Types
    "compare",
    # Requirements
    "Requirement",
    "Req",
    # Pricing
    "PriceScaling",
    # Data model
    "ItemDef",
    "ItemState",
    "ItemStatus",
    "AchievementDef",
    "AchievementEvaluator",
    "AchievementStatus",
    # Definition
    "GameDefinition",
    "GameConfig",
    # State
    "EconomyState",
    # Economy
    "EconomyModel",
    # Offline progress
    "OfflineBonus",
    "compute_catch_up",
    "offline_bonus",
    # Events
    "EventBus",
    "MoneyChanged",
    "ItemPurchased",
    "PurchaseRejected",
    "AchievementUnlocked",
    "OfflineBonusApplied",
    "SaveCompleted",
    # Persistence
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "SCHEMA_VERSIONS",
    "SchemaVersion",
    "SaveRecord",
    "SavedItem",
    "SaveRecordError",
    "SaveStateCodec",
    # Clock
    "GameClock",
    "PeriodicTrigger",
    # Session
    "GameSession",
    # Formatting
    "format_status",
]
