"""Tests for MCP server tool functions."""
import json

from idletycoon.achievement import AchievementDef
from idletycoon.definition import GameConfig, GameDefinition
from idletycoon.item import ItemDef
from idletycoon.requirement import Req
from idletycoon.session import GameSession
from idletycoon.storage import MemoryStore

from idletycoon.mcp.server import (
    _GameHolder,
    _tool_click,
    _tool_get_game_info,
    _tool_get_game_state,
    _tool_get_shop,
    _tool_purchase,
    _tool_save_game,
    _tool_set_shop_name,
    _tool_wait,
    create_server,
)

NOW = 1_700_000_000_000


def _make_test_definition() -> GameDefinition:
    """A small but complete game definition for testing."""
    return GameDefinition(
        config=GameConfig(
            name="Test Game",
            schema_version=4,
            ask_shop_name=True,
            default_shop_name="Nameless",
        ),
        items=[
            ItemDef("cart", "Food Cart", base_price=500, earn_rate=10),
            ItemDef("van", "Food Van", base_price=2500, earn_rate=40),
        ],
        achievements=[
            AchievementDef("first_cart", "First cart", condition=Req.owns("cart")),
            AchievementDef("thousand", "A thousand", condition=Req.money(">=", 1000)),
        ],
    )


def _make_holder(store=None) -> _GameHolder:
    defn = _make_test_definition()
    session = GameSession(defn, store if store is not None else MemoryStore(), now=lambda: NOW)
    session.start()
    return _GameHolder(definition=defn, session=session)


# ── get_game_info ────────────────────────────────────────────────────


class TestGetGameInfo:
    def test_returns_expected_structure(self):
        result = _tool_get_game_info(_make_holder())
        assert result["name"] == "Test Game"
        assert result["click_reward"] == 100
        assert result["schema_version"] == 4
        assert result["asks_shop_name"] is True
        assert len(result["items"]) == 2
        assert len(result["achievements"]) == 2

    def test_item_fields(self):
        result = _tool_get_game_info(_make_holder())
        cart = result["items"][0]
        assert cart == {
            "id": "cart",
            "display_name": "Food Cart",
            "base_price": 500,
            "earn_rate": 10,
        }


# ── get_game_state ───────────────────────────────────────────────────


class TestGetGameState:
    def test_initial_state(self):
        result = _tool_get_game_state(_make_holder())
        assert result["money"] == 0
        assert result["income_rate"] == 0
        assert result["shop_name"] == ""
        assert result["needs_shop_name"] is True
        assert result["items"]["cart"] == {"count": 0, "price": 500, "affordable": False}
        assert result["achievements_unlocked"] == []
        assert "offline_bonus" not in result

    def test_reports_offline_bonus(self):
        store = MemoryStore({
            "tycoon_save_v4": json.dumps({
                "shopName": "Cart",
                "money": 0,
                "items": [{"id": "cart", "count": 1, "price": 750}],
                "unlockedAchievementIds": ["first_cart"],
                "lastSaveTime": NOW - 60_000,
            }),
        })
        result = _tool_get_game_state(_make_holder(store))
        assert result["offline_bonus"] == {"amount": 600, "elapsed_seconds": 60}
        assert result["money"] == 600


# ── get_shop ─────────────────────────────────────────────────────────


class TestGetShop:
    def test_time_to_afford_without_income(self):
        result = _tool_get_shop(_make_holder())
        assert [i["id"] for i in result["items"]] == ["cart", "van"]
        assert result["items"][0]["time_to_afford"] is None

    def test_time_to_afford_with_income(self):
        holder = _make_holder()
        holder.session.state.money = 500
        holder.session.purchase("cart")
        result = _tool_get_shop(holder)
        van = result["items"][1]
        assert van["time_to_afford"] == 250.0
        assert result["items"][0]["count"] == 1


# ── click ────────────────────────────────────────────────────────────


class TestClick:
    def test_click_once(self):
        result = _tool_click(_make_holder())
        assert result == {"clicks": 1, "total_earned": 100, "new_balance": 100}

    def test_click_many(self):
        result = _tool_click(_make_holder(), 10)
        assert result["total_earned"] == 1000

    def test_click_bounds(self):
        holder = _make_holder()
        assert "error" in _tool_click(holder, 0)
        assert "error" in _tool_click(holder, 1001)


# ── purchase ─────────────────────────────────────────────────────────


class TestPurchase:
    def test_purchase_success(self):
        holder = _make_holder()
        _tool_click(holder, 6)
        result = _tool_purchase(holder, "cart")
        assert result == {
            "success": True,
            "item_id": "cart",
            "price_paid": 500,
            "new_count": 1,
            "next_price": 750,
            "new_balance": 100,
        }

    def test_purchase_cannot_afford(self):
        result = _tool_purchase(_make_holder(), "van")
        assert result["success"] is False
        assert result["reason"] == "Cannot afford"
        assert result["price"] == 2500

    def test_purchase_unknown(self):
        assert "error" in _tool_purchase(_make_holder(), "rocket")


# ── set_shop_name / save_game ────────────────────────────────────────


class TestShopNameAndSave:
    def test_save_requires_name(self):
        result = _tool_save_game(_make_holder())
        assert result["success"] is False

    def test_set_name_then_save(self):
        store = MemoryStore()
        holder = _make_holder(store)
        assert _tool_set_shop_name(holder, "Cart Co") == {"success": True, "shop_name": "Cart Co"}
        result = _tool_save_game(holder)
        assert result == {"success": True, "key": "tycoon_save_v4"}
        assert json.loads(store.get("tycoon_save_v4"))["shopName"] == "Cart Co"

    def test_name_only_once(self):
        holder = _make_holder()
        _tool_set_shop_name(holder, "")
        result = _tool_set_shop_name(holder, "Again")
        assert result["success"] is False
        assert result["shop_name"] == "Nameless"


# ── wait ─────────────────────────────────────────────────────────────


class TestWait:
    def test_wait_accrues(self):
        holder = _make_holder()
        holder.session.state.items["cart"].count = 2
        result = _tool_wait(holder, 30)
        assert result["earned"] == 600
        assert result["money"] == 600
        assert result["income_rate"] == 20

    def test_wait_reports_new_achievements(self):
        holder = _make_holder()
        holder.session.state.items["cart"].count = 10
        result = _tool_wait(holder, 10)
        assert result["new_achievements"] == ["first_cart", "thousand"]

    def test_wait_bounds(self):
        holder = _make_holder()
        assert "error" in _tool_wait(holder, 0)
        assert "error" in _tool_wait(holder, 86401)


def test_create_server():
    server = create_server(_make_test_definition(), MemoryStore())
    assert server.name == "idletycoon: Test Game"
