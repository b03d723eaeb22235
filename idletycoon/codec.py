"""Versioned save records.

Each schema version is stored under its own key (``<prefix>_v<N>``). Loading
probes the game's current version first and then every older version in
descending order; fields an older layout never had are filled from that
version's defaults. Nothing is migrated in place: the next save simply
writes the current version's key and older keys are left as they are.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from idletycoon.definition import GameConfig
from idletycoon.state import EconomyState
from idletycoon.storage import KeyValueStore

logger = logging.getLogger(__name__)


class SaveRecordError(ValueError):
    """A persisted record could not be decoded."""


@dataclass(frozen=True)
class SchemaVersion:
    """One generation of the persisted record layout."""

    version: int
    fields: frozenset[str]
    defaults: dict[str, Any] = field(default_factory=dict)


_V2_FIELDS = frozenset({"money", "items", "lastSaveTime"})

# Oldest first; a new layout is one more entry at the end.
SCHEMA_VERSIONS: list[SchemaVersion] = [
    SchemaVersion(2, _V2_FIELDS, {"shopName": "", "unlockedAchievementIds": []}),
    SchemaVersion(3, _V2_FIELDS | {"unlockedAchievementIds"}, {"shopName": ""}),
    SchemaVersion(4, _V2_FIELDS | {"unlockedAchievementIds", "shopName"}),
]

_FIELD_ORDER = ("shopName", "money", "items", "unlockedAchievementIds", "lastSaveTime")


def get_schema(version: int) -> SchemaVersion:
    for schema in SCHEMA_VERSIONS:
        if schema.version == version:
            return schema
    raise ValueError(f"Unknown schema version: {version}")


def probe_order(current: int) -> list[SchemaVersion]:
    """Schema versions to try when loading, newest (current) first."""
    return sorted(
        (s for s in SCHEMA_VERSIONS if s.version <= current),
        key=lambda s: s.version,
        reverse=True,
    )


@dataclass
class SavedItem:
    id: str
    count: int
    price: int


@dataclass
class SaveRecord:
    """Decoded contents of one persisted record."""

    money: int = 0
    items: list[SavedItem] = field(default_factory=list)
    shop_name: str = ""
    unlocked_achievement_ids: list[str] = field(default_factory=list)
    last_save_time: int | None = None
    version: int = SCHEMA_VERSIONS[-1].version


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _decode_item(entry: Any) -> SavedItem | None:
    if not isinstance(entry, dict):
        return None
    item_id = entry.get("id")
    count = _as_int(entry.get("count"))
    price = _as_int(entry.get("price"))
    if not isinstance(item_id, str) or count is None or price is None:
        return None
    if count < 0 or price < 0:
        return None
    return SavedItem(id=item_id, count=count, price=price)


def encode(record: SaveRecord, version: int) -> str:
    """Serialize a record to JSON holding only the fields *version* carries."""
    schema = get_schema(version)
    values: dict[str, Any] = {
        "shopName": record.shop_name,
        "money": record.money,
        "items": [
            {"id": i.id, "count": i.count, "price": i.price} for i in record.items
        ],
        "unlockedAchievementIds": list(record.unlocked_achievement_ids),
        "lastSaveTime": record.last_save_time,
    }
    return json.dumps({k: values[k] for k in _FIELD_ORDER if k in schema.fields})


def decode(raw: str, version: int) -> SaveRecord:
    """Parse a record stored under *version*'s key.

    Raises SaveRecordError when the payload is not usable at all. Individual
    item entries that are malformed are dropped rather than failing the load.
    """
    schema = get_schema(version)
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise SaveRecordError(f"Invalid JSON in v{version} record: {exc}") from exc
    if not isinstance(data, dict):
        raise SaveRecordError(f"v{version} record is not a JSON object")

    def get(name: str, fallback: Any) -> Any:
        if name in data:
            return data[name]
        return schema.defaults.get(name, fallback)

    money = _as_int(get("money", None))
    if money is None:
        raise SaveRecordError(f"v{version} record has no integer 'money'")

    raw_items = get("items", None)
    if not isinstance(raw_items, list):
        raise SaveRecordError(f"v{version} record has no 'items' list")
    items: list[SavedItem] = []
    for entry in raw_items:
        item = _decode_item(entry)
        if item is None:
            logger.debug("Dropping malformed saved item %r", entry)
            continue
        items.append(item)

    shop_name = get("shopName", "")
    if not isinstance(shop_name, str):
        shop_name = ""

    raw_ids = get("unlockedAchievementIds", [])
    if not isinstance(raw_ids, list):
        raw_ids = []
    unlocked = [a for a in raw_ids if isinstance(a, str)]

    return SaveRecord(
        money=max(0, money),
        items=items,
        shop_name=shop_name,
        unlocked_achievement_ids=unlocked,
        last_save_time=_as_int(get("lastSaveTime", None)),
        version=version,
    )


class SaveStateCodec:
    """Reads and writes economy state through a key-value store."""

    def __init__(self, store: KeyValueStore, config: GameConfig) -> None:
        self.store = store
        self.prefix = config.save_key_prefix
        self.version = config.schema_version

    def key_for(self, version: int) -> str:
        return f"{self.prefix}_v{version}"

    @property
    def current_key(self) -> str:
        return self.key_for(self.version)

    def snapshot(self, state: EconomyState, now: int) -> SaveRecord:
        return SaveRecord(
            money=state.money,
            items=[
                SavedItem(id=item_id, count=item.count, price=item.price)
                for item_id, item in state.items.items()
            ],
            shop_name=state.shop_name,
            unlocked_achievement_ids=list(state.unlocked_achievements),
            last_save_time=now,
            version=self.version,
        )

    def save(self, state: EconomyState, now: int) -> bool:
        """Write state under the current version's key. Never raises."""
        try:
            payload = encode(self.snapshot(state, now), self.version)
            self.store.set(self.current_key, payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Save to %s failed: %s", self.current_key, exc)
            return False
        logger.debug("Saved %d bytes to %s", len(payload), self.current_key)
        return True

    def load(self) -> SaveRecord | None:
        """Return the newest usable record, or None when there is no save."""
        for schema in probe_order(self.version):
            key = self.key_for(schema.version)
            try:
                raw = self.store.get(key)
            except (OSError, ValueError) as exc:
                logger.warning("Reading %s failed: %s", key, exc)
                continue
            if raw is None:
                continue
            try:
                record = decode(raw, schema.version)
            except SaveRecordError as exc:
                logger.warning("Ignoring unreadable save at %s: %s", key, exc)
                continue
            if schema.version != self.version:
                logger.info("Loaded save from older key %s", key)
            return record
        return None
