"""Tests for state module."""
from idletycoon.definition import GameConfig, GameDefinition
from idletycoon.item import ItemDef
from idletycoon.state import EconomyState


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test"),
        items=[
            ItemDef("cart", base_price=500, earn_rate=10),
            ItemDef("van", base_price=5000, earn_rate=80),
        ],
    )


def test_initialization():
    state = EconomyState(_make_definition())
    assert state.money == 0
    assert state.shop_name == ""
    assert state.unlocked_achievements == []
    assert list(state.items) == ["cart", "van"]


def test_initial_price_is_base_price():
    state = EconomyState(_make_definition())
    assert state.item_price("cart") == 500
    assert state.item_price("van") == 5000
    assert state.item_count("cart") == 0


def test_unknown_item():
    state = EconomyState(_make_definition())
    assert state.item_count("nonexistent") == 0
    assert state.item_price("nonexistent") is None


def test_income_rate():
    state = EconomyState(_make_definition())
    assert state.income_rate == 0
    state.items["cart"].count = 3
    state.items["van"].count = 2
    assert state.income_rate == 3 * 10 + 2 * 80


def test_has_achievement():
    state = EconomyState(_make_definition())
    assert not state.has_achievement("first")
    state.unlocked_achievements.append("first")
    assert state.has_achievement("first")
