"""Burger shop: the extended tycoon with a named shop (save schema v4)."""
from __future__ import annotations

from idletycoon.achievement import AchievementDef
from idletycoon.definition import GameConfig, GameDefinition
from idletycoon.item import ItemDef
from idletycoon.requirement import Req


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(
            name="Burger Shop Tycoon",
            click_reward=100,
            price_growth=1.5,
            schema_version=4,
            ask_shop_name=True,
            suggested_shop_name="Burger House",
            default_shop_name="Nameless Burger Joint",
        ),
        items=[
            ItemDef("fryer", "High-Performance Fryer", base_price=500, earn_rate=10),
            ItemDef("drink", "Drink Bar", base_price=2500, earn_rate=40),
            ItemDef("part_time", "Part-Time Staff", base_price=10_000, earn_rate=150),
            ItemDef("delivery", "Delivery Bike", base_price=50_000, earn_rate=800),
            ItemDef("branch", "Second Branch", base_price=200_000, earn_rate=3500),
            ItemDef("franchise", "Franchise", base_price=1_000_000, earn_rate=15_000),
        ],
        achievements=[
            AchievementDef(
                "first_fry",
                "Fries on the Menu (bought a fryer)",
                condition=Req.owns("fryer"),
            ),
            AchievementDef(
                "manager",
                "Real Manager (100,000 in the till)",
                condition=Req.money(">=", 100_000),
            ),
            AchievementDef(
                "chain_store",
                "Chain Store (opened a second branch)",
                condition=Req.owns("branch"),
            ),
        ],
    )
