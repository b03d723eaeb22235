from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ItemDef:
    """Static catalog entry for a purchasable income item."""

    id: str
    display_name: str = ""
    base_price: int = 0
    earn_rate: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class ItemState:
    """Mutable runtime state for an item."""

    count: int = 0
    price: int = 0


@dataclass(frozen=True)
class ItemStatus:
    """Read-only snapshot of an item for the presentation layer."""

    id: str
    display_name: str
    count: int
    price: int
    earn_rate: int
    affordable: bool
