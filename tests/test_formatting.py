"""Tests for formatting module."""
from idletycoon.formatting import format_money, format_offline_bonus, format_status
from idletycoon.games import burger_shop
from idletycoon.offline import OfflineBonus
from idletycoon.session import GameSession
from idletycoon.storage import MemoryStore


def test_format_money():
    assert format_money(1234567) == "1,234,567"


def test_format_offline_bonus():
    text = format_offline_bonus(OfflineBonus(amount=360000, elapsed_seconds=3600))
    assert "3600s" in text
    assert "+360,000" in text


def test_format_status():
    session = GameSession(burger_shop.define_game(), MemoryStore(), now=lambda: 0)
    session.start()
    session.set_shop_name("Big Burger")
    for _ in range(6):
        session.click()
    session.purchase("fryer")

    text = format_status(session)
    assert "Big Burger" in text
    assert "Money: 100" in text
    assert "Income: 10/s" in text
    assert "High-Performance Fryer (Lv.1)" in text
    assert "ACHIEVEMENTS: 1/3" in text
    assert "[x] Fries on the Menu" in text


def test_format_status_uses_game_name_until_named():
    session = GameSession(burger_shop.define_game(), MemoryStore(), now=lambda: 0)
    session.start()
    assert "Burger Shop Tycoon" in format_status(session)
