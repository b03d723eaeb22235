from __future__ import annotations

from dataclasses import dataclass, field

from idletycoon.achievement import AchievementDef
from idletycoon.item import ItemDef
from idletycoon.requirement import referenced_items


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Untitled"
    click_reward: int = 100
    price_growth: float = 1.5
    accrual_interval: float = 1.0
    autosave_interval: float = 10.0
    offline_threshold: int = 10
    save_key_prefix: str = "tycoon_save"
    schema_version: int = 4
    ask_shop_name: bool = False
    suggested_shop_name: str = ""
    default_shop_name: str = ""
    reconcile_prices: bool = False


@dataclass
class GameDefinition:
    """Complete static definition of a tycoon game: config, catalog, achievements."""

    config: GameConfig = field(default_factory=GameConfig)
    items: list[ItemDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _items_by_id: dict[str, ItemDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._items_by_id = {i.id: i for i in self.items}
        self._achievements_by_id = {a.id: a for a in self.achievements}

    def get_item(self, id: str) -> ItemDef | None:
        return self._items_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []
        item_ids = {i.id for i in self.items}

        # Check for duplicate IDs
        seen_i: set[str] = set()
        for i in self.items:
            if i.id in seen_i:
                errors.append(f"Duplicate item ID: {i.id!r}")
            seen_i.add(i.id)

        seen_a: set[str] = set()
        for a in self.achievements:
            if a.id in seen_a:
                errors.append(f"Duplicate achievement ID: {a.id!r}")
            seen_a.add(a.id)

        for i in self.items:
            if i.base_price <= 0:
                errors.append(f"Item {i.id!r} has non-positive base_price {i.base_price}")
            if i.earn_rate < 0:
                errors.append(f"Item {i.id!r} has negative earn_rate {i.earn_rate}")

        # Check achievement predicates reference known items
        for a in self.achievements:
            if a.condition is None:
                errors.append(f"Achievement {a.id!r} has no condition")
                continue
            for item_id in sorted(referenced_items(a.condition) - item_ids):
                errors.append(
                    f"Achievement {a.id!r} references unknown item {item_id!r}"
                )

        from idletycoon.codec import SCHEMA_VERSIONS

        known_versions = {v.version for v in SCHEMA_VERSIONS}
        if self.config.schema_version not in known_versions:
            errors.append(
                f"Unknown schema version {self.config.schema_version}; "
                f"expected one of {sorted(known_versions)}"
            )

        if self.config.click_reward < 0:
            errors.append(f"click_reward must be non-negative, got {self.config.click_reward}")
        if self.config.price_growth < 1:
            errors.append(f"price_growth must be at least 1, got {self.config.price_growth}")
        if self.config.accrual_interval <= 0 or self.config.autosave_interval <= 0:
            errors.append("Clock intervals must be positive")

        return errors
