from __future__ import annotations

from idletycoon.offline import OfflineBonus
from idletycoon.session import GameSession


def format_money(amount: int) -> str:
    return f"{amount:,}"


def format_offline_bonus(bonus: OfflineBonus) -> str:
    return (
        f"Welcome back! The shop ran for {bonus.elapsed_seconds}s while you were away: "
        f"+{format_money(bonus.amount)}"
    )


def format_status(session: GameSession) -> str:
    """Format the current session state for console output."""
    lines: list[str] = []
    title = session.shop_name or session.definition.config.name

    lines.append("=" * 20 + f" {title} " + "=" * 20)
    lines.append(f"Money: {format_money(session.money)}")
    lines.append(f"Income: {format_money(session.total_income_rate())}/s")
    lines.append("")

    lines.append("SHOP:")
    for s in session.item_statuses():
        marker = "  *" if s.affordable else "   "
        label = f"{s.display_name} (Lv.{s.count})"
        lines.append(
            f"{marker} {s.id:<12s} {label:.<36s} {format_money(s.price):>14s}"
            f"  +{s.earn_rate}/s"
        )
    lines.append("")

    statuses = session.achievement_statuses()
    if statuses:
        unlocked = sum(1 for a in statuses if a.unlocked)
        lines.append(f"ACHIEVEMENTS: {unlocked}/{len(statuses)}")
        for a in statuses:
            marker = "  [x]" if a.unlocked else "  [ ]"
            lines.append(f"{marker} {a.title}")

    return "\n".join(lines)
