from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from idletycoon.requirement import Requirement

if TYPE_CHECKING:
    from idletycoon.state import EconomyState

logger = logging.getLogger(__name__)


@dataclass
class AchievementDef:
    """A named one-shot unlock that fires when its condition is first met."""

    id: str
    title: str = ""
    condition: Requirement | None = None

    def __post_init__(self) -> None:
        if not self.title:
            self.title = self.id


@dataclass(frozen=True)
class AchievementStatus:
    id: str
    title: str
    unlocked: bool


class AchievementEvaluator:
    """Evaluates the achievement catalog against economy state.

    Unlocks are monotonic: once an id is in ``state.unlocked_achievements`` its
    condition is never looked at again, so calling ``evaluate_all`` more often
    only shortens detection latency.
    """

    def __init__(self, achievements: list[AchievementDef]) -> None:
        self.achievements = list(achievements)

    def evaluate_all(self, state: EconomyState) -> list[AchievementDef]:
        """Unlock every pending achievement whose condition holds.

        Returns the newly unlocked achievements in declaration order.
        """
        unlocked: list[AchievementDef] = []
        for adef in self.achievements:
            if state.has_achievement(adef.id):
                continue
            if adef.condition is not None and adef.condition.evaluate(state):
                state.unlocked_achievements.append(adef.id)
                unlocked.append(adef)
                logger.info("Achievement unlocked: %s", adef.id)
        return unlocked

    def statuses(self, state: EconomyState) -> list[AchievementStatus]:
        return [
            AchievementStatus(
                id=adef.id,
                title=adef.title,
                unlocked=state.has_achievement(adef.id),
            )
            for adef in self.achievements
        ]
