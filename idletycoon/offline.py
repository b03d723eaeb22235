"""Retroactive income for the time between the last save and a load."""

from __future__ import annotations

from dataclasses import dataclass

# Absences at or below this many seconds earn nothing.
DEFAULT_THRESHOLD = 10


@dataclass(frozen=True)
class OfflineBonus:
    amount: int
    elapsed_seconds: int


def elapsed_seconds(last_save_time: int, now: int) -> int:
    """Whole seconds between two epoch-millisecond timestamps (floored)."""
    return (now - last_save_time) // 1000


def compute_catch_up(
    last_save_time: int,
    now: int,
    total_income_rate: int,
    threshold: int = DEFAULT_THRESHOLD,
) -> int:
    """Income earned while away. There is deliberately no cap on elapsed time."""
    diff = elapsed_seconds(last_save_time, now)
    if diff > threshold:
        return total_income_rate * diff
    return 0


def offline_bonus(
    last_save_time: int | None,
    now: int,
    total_income_rate: int,
    threshold: int = DEFAULT_THRESHOLD,
) -> OfflineBonus | None:
    """The bonus to report after a load, or None when nothing was earned."""
    if not last_save_time:
        return None
    amount = compute_catch_up(last_save_time, now, total_income_rate, threshold)
    if amount <= 0:
        return None
    return OfflineBonus(amount=amount, elapsed_seconds=elapsed_seconds(last_save_time, now))
