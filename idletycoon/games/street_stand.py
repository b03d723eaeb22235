"""Street stand: the classic tycoon without a shop name (save schema v3)."""
from __future__ import annotations

from idletycoon.achievement import AchievementDef
from idletycoon.definition import GameConfig, GameDefinition
from idletycoon.item import ItemDef
from idletycoon.requirement import Req


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(
            name="Street Stand Tycoon",
            click_reward=100,
            price_growth=1.5,
            schema_version=3,
        ),
        items=[
            ItemDef("cart", "Food Cart", base_price=500, earn_rate=10),
            ItemDef("signboard", "Signboard", base_price=2500, earn_rate=40),
            ItemDef("helper", "Helper", base_price=10_000, earn_rate=150),
            ItemDef("food_truck", "Food Truck", base_price=50_000, earn_rate=800),
            ItemDef("storefront", "Storefront", base_price=200_000, earn_rate=3500),
        ],
        achievements=[
            AchievementDef("first_cart", "Open for Business", condition=Req.owns("cart")),
            AchievementDef("savings", "Nest Egg", condition=Req.money(">=", 100_000)),
            AchievementDef(
                "storefront_open",
                "Off the Street",
                condition=Req.owns("storefront"),
            ),
        ],
    )
