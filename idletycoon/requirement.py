from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from idletycoon._types import compare

if TYPE_CHECKING:
    from idletycoon.state import EconomyState


class Requirement(ABC):
    """Base class for unlock predicates, pure boolean conditions on economy state."""

    @abstractmethod
    def evaluate(self, state: EconomyState) -> bool: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _MoneyRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.money, self.op, self.threshold)


class _OwnsRequirement(Requirement):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id

    def evaluate(self, state: EconomyState) -> bool:
        return state.item_count(self.item_id) >= 1


class _CountRequirement(Requirement):
    def __init__(self, item_id: str, op: str, threshold: int) -> None:
        self.item_id = item_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.item_count(self.item_id), self.op, self.threshold)


class _IncomeRateRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.income_rate, self.op, self.threshold)


class _AchievementRequirement(Requirement):
    def __init__(self, achievement_id: str) -> None:
        self.achievement_id = achievement_id

    def evaluate(self, state: EconomyState) -> bool:
        return state.has_achievement(self.achievement_id)


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: EconomyState) -> bool:
        return all(r.evaluate(state) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: EconomyState) -> bool:
        return any(r.evaluate(state) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[EconomyState], bool]) -> None:
        self.fn = fn

    def evaluate(self, state: EconomyState) -> bool:
        return self.fn(state)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def money(op: str, threshold: int) -> Requirement:
        return _MoneyRequirement(op, threshold)

    @staticmethod
    def owns(item_id: str) -> Requirement:
        return _OwnsRequirement(item_id)

    @staticmethod
    def count(item_id: str, op: str, threshold: int) -> Requirement:
        return _CountRequirement(item_id, op, threshold)

    @staticmethod
    def income_rate(op: str, threshold: int) -> Requirement:
        return _IncomeRateRequirement(op, threshold)

    @staticmethod
    def achievement(achievement_id: str) -> Requirement:
        return _AchievementRequirement(achievement_id)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[EconomyState], bool]) -> Requirement:
        return _CustomRequirement(fn)


def referenced_items(req: Requirement) -> set[str]:
    """Item ids a requirement tree refers to (custom predicates are opaque)."""
    if isinstance(req, (_OwnsRequirement, _CountRequirement)):
        return {req.item_id}
    if isinstance(req, (_AllRequirement, _AnyRequirement)):
        found: set[str] = set()
        for sub in req.reqs:
            found |= referenced_items(sub)
        return found
    return set()
