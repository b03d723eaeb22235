"""MCP server wrapping a GameSession so an agent can play the tycoon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from idletycoon.definition import GameDefinition
from idletycoon.session import GameSession
from idletycoon.storage import KeyValueStore

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition and session."""

    definition: GameDefinition
    session: GameSession


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.definition
    return {
        "name": defn.config.name,
        "click_reward": defn.config.click_reward,
        "price_growth": defn.config.price_growth,
        "schema_version": defn.config.schema_version,
        "asks_shop_name": defn.config.ask_shop_name,
        "items": [
            {
                "id": i.id,
                "display_name": i.display_name,
                "base_price": i.base_price,
                "earn_rate": i.earn_rate,
            }
            for i in defn.items
        ],
        "achievements": [
            {"id": a.id, "title": a.title} for a in defn.achievements
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    session = holder.session
    items = {
        s.id: {"count": s.count, "price": s.price, "affordable": s.affordable}
        for s in session.item_statuses()
    }
    result: dict[str, Any] = {
        "shop_name": session.shop_name,
        "needs_shop_name": session.needs_shop_name,
        "money": session.money,
        "income_rate": session.total_income_rate(),
        "items": items,
        "achievements_unlocked": list(session.state.unlocked_achievements),
    }
    if session.offline_bonus is not None:
        result["offline_bonus"] = {
            "amount": session.offline_bonus.amount,
            "elapsed_seconds": session.offline_bonus.elapsed_seconds,
        }
    return result


def _tool_get_shop(holder: _GameHolder) -> dict[str, Any]:
    economy = holder.session.economy
    result = []
    for s in holder.session.item_statuses():
        time_to_afford = economy.time_to_afford(s.id)
        result.append({
            "id": s.id,
            "display_name": s.display_name,
            "count": s.count,
            "price": s.price,
            "earn_rate": s.earn_rate,
            "affordable": s.affordable,
            "time_to_afford": round(time_to_afford, 2) if time_to_afford is not None else None,
        })
    return {"items": result}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0
    for _ in range(count):
        total += holder.session.click()
    return {
        "clicks": count,
        "total_earned": total,
        "new_balance": holder.session.money,
    }


def _tool_purchase(holder: _GameHolder, item_id: str) -> dict[str, Any]:
    if holder.definition.get_item(item_id) is None:
        return {"error": f"Unknown item: {item_id!r}"}

    session = holder.session
    price = session.state.item_price(item_id)
    if session.purchase(item_id):
        return {
            "success": True,
            "item_id": item_id,
            "price_paid": price,
            "new_count": session.state.item_count(item_id),
            "next_price": session.state.item_price(item_id),
            "new_balance": session.money,
        }
    return {
        "success": False,
        "reason": "Cannot afford",
        "price": price,
        "money": session.money,
    }


def _tool_set_shop_name(holder: _GameHolder, name: str) -> dict[str, Any]:
    session = holder.session
    if not session.set_shop_name(name):
        return {"success": False, "reason": "Shop name is already set", "shop_name": session.shop_name}
    return {"success": True, "shop_name": session.shop_name}


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    session = holder.session
    before = set(session.state.unlocked_achievements)
    money_before = session.money
    session.advance(seconds)

    result: dict[str, Any] = {
        "waited": seconds,
        "earned": session.money - money_before,
        "money": session.money,
        "income_rate": session.total_income_rate(),
    }
    new_achievements = [
        a for a in session.state.unlocked_achievements if a not in before
    ]
    if new_achievements:
        result["new_achievements"] = new_achievements
    return result


def _tool_save_game(holder: _GameHolder) -> dict[str, Any]:
    session = holder.session
    if session.needs_shop_name:
        return {"success": False, "reason": "Choose a shop name first"}
    saved = session.save()
    result: dict[str, Any] = {"success": saved, "key": session.codec.current_key}
    if not saved:
        result["reason"] = "Storage write failed"
    return result


# ── Server factory ──────────────────────────────────────────────────


def create_server(definition: GameDefinition, store: KeyValueStore) -> FastMCP:
    """Create an MCP server wrapping a started GameSession."""
    session = GameSession(definition, store)
    session.start()
    holder = _GameHolder(definition=definition, session=session)

    mcp = FastMCP(
        name=f"idletycoon: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: items, base prices, earn rates, achievements."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: money, income rate, item counts and prices, achievements."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_shop() -> dict[str, Any]:
        """Get every item with its current price, affordability and time-to-afford."""
        return _tool_get_shop(holder)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click the building N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def purchase(item_id: str) -> dict[str, Any]:
        """Buy one unit of an item. Returns success/failure with reason."""
        return _tool_purchase(holder, item_id)

    @mcp.tool()
    def set_shop_name(name: str) -> dict[str, Any]:
        """Name the shop. Only works once; blank names get the default."""
        return _tool_set_shop_name(holder, name)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Income accrues every second."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def save_game() -> dict[str, Any]:
        """Save the game now."""
        return _tool_save_game(holder)

    return mcp
