from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import sys
from pathlib import Path

from idletycoon.definition import GameDefinition
from idletycoon.events import AchievementUnlocked, ItemPurchased, MoneyChanged, SaveCompleted
from idletycoon.formatting import format_money, format_offline_bonus, format_status
from idletycoon.session import GameSession
from idletycoon.storage import JsonFileStore, KeyValueStore, MemoryStore

DEFAULT_GAME = "idletycoon.games.burger_shop"
DEFAULT_SAVE_FILE = Path.home() / ".idletycoon" / "save.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idletycoon",
        description="idletycoon: idle tycoon game CLI",
    )
    parser.add_argument(
        "--game",
        default=DEFAULT_GAME,
        help=f"Python module with define_game() (default: {DEFAULT_GAME})",
    )
    parser.add_argument(
        "--save-file",
        default=str(DEFAULT_SAVE_FILE),
        help="JSON file holding save records",
    )
    parser.add_argument(
        "--no-save", action="store_true", help="Keep state in memory only"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("info", help="Show the catalog and achievements")
    sub.add_parser("status", help="Show money, shop and achievements")

    click = sub.add_parser("click", help="Click the building")
    click.add_argument("-n", "--count", type=int, default=1, help="Number of clicks")

    buy = sub.add_parser("buy", help="Buy one unit of an item")
    buy.add_argument("item_id", help="Item id, e.g. fryer")

    name = sub.add_parser("name", help="Name the shop (only once)")
    name.add_argument("shop_name", nargs="?", default="", help="Shop name")

    wait = sub.add_parser("wait", help="Advance simulated time")
    wait.add_argument("seconds", type=float, help="Seconds to simulate")

    run = sub.add_parser("run", help="Run the game clock in real time")
    run.add_argument(
        "--seconds", type=float, default=60.0, help="How long to run (default: 60)"
    )

    sub.add_parser("serve", help="Serve the game over MCP (stdio)")

    return parser


def load_game(module_path: str) -> GameDefinition:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def open_session(
    definition: GameDefinition, store: KeyValueStore
) -> GameSession:
    session = GameSession(definition, store)
    bonus = session.start()
    if bonus is not None:
        print(format_offline_bonus(bonus))
    return session


def _print_event(event: object) -> None:
    if isinstance(event, AchievementUnlocked):
        print(f"Achievement unlocked! {event.title}")
    elif isinstance(event, ItemPurchased):
        print(f"Bought {event.item_id} (Lv.{event.count}) for {format_money(event.price_paid)}")
    elif isinstance(event, MoneyChanged) and event.source == "income":
        print(f"+{format_money(event.delta)}  (money: {format_money(event.money)})")
    elif isinstance(event, SaveCompleted):
        print("Auto saved")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    definition = load_game(args.game)
    store: KeyValueStore = MemoryStore() if args.no_save else JsonFileStore(args.save_file)

    if args.command == "serve":
        from idletycoon.mcp.server import create_server

        server = create_server(definition, store)
        server.run(transport="stdio")
        return

    if args.command == "info":
        _print_info(definition)
        return

    session = open_session(definition, store)

    if args.command == "name":
        if not session.set_shop_name(args.shop_name):
            print(f"The shop is already named {session.shop_name!r}")
            sys.exit(1)
        print(f"Welcome to {session.shop_name}!")
        return

    if session.needs_shop_name:
        if sys.stdin.isatty():
            session.set_shop_name(_prompt_shop_name(definition))
            print(f"Welcome to {session.shop_name}!")
        else:
            print("Name your shop first: idletycoon name \"<shop name>\"")

    if args.command == "status":
        print(format_status(session))
        session.save()

    elif args.command == "click":
        session.events.subscribe(AchievementUnlocked, _print_event)
        total = sum(session.click() for _ in range(max(args.count, 0)))
        print(f"+{format_money(total)}  (money: {format_money(session.money)})")
        session.save()

    elif args.command == "buy":
        session.events.subscribe(ItemPurchased, _print_event)
        session.events.subscribe(AchievementUnlocked, _print_event)
        if not session.purchase(args.item_id):
            price = session.state.item_price(args.item_id)
            if price is None:
                print(f"Unknown item: {args.item_id!r}")
            else:
                print(
                    f"Not enough money: {args.item_id} costs {format_money(price)}, "
                    f"you have {format_money(session.money)}"
                )
            sys.exit(1)

    elif args.command == "wait":
        session.events.subscribe(AchievementUnlocked, _print_event)
        before = session.money
        session.advance(args.seconds)
        print(
            f"Waited {args.seconds:g}s: +{format_money(session.money - before)}"
            f"  (money: {format_money(session.money)})"
        )
        session.save()

    elif args.command == "run":
        session.events.subscribe_all(_print_event)
        try:
            asyncio.run(session.run_for(args.seconds))
        except KeyboardInterrupt:
            pass
        session.save()
        print(format_status(session))


def _prompt_shop_name(definition: GameDefinition) -> str | None:
    suggested = definition.config.suggested_shop_name
    try:
        answer = input(f"You are opening a new shop! Name it [{suggested}]: ")
    except EOFError:
        return None
    return answer.strip() or suggested


def _print_info(definition: GameDefinition) -> None:
    cfg = definition.config
    print(f"{cfg.name} (save schema v{cfg.schema_version})")
    print(f"Click reward: {cfg.click_reward}, price growth: x{cfg.price_growth}")
    print("")
    print("ITEMS:")
    for idef in definition.items:
        print(
            f"  {idef.id:<12s} {idef.display_name:<28s} "
            f"{format_money(idef.base_price):>12s}  +{idef.earn_rate}/s"
        )
    print("")
    print("ACHIEVEMENTS:")
    for adef in definition.achievements:
        print(f"  {adef.id:<16s} {adef.title}")
