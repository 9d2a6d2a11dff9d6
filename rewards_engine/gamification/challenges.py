"""
Challenge System

Tracks progress for daily, weekly and monthly challenges. Each admitted
activity counts once toward every open challenge requiring its activity type;
a completed challenge ignores further activities until its period resets.

Challenge definitions come from the challenge catalog (data, not code).
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from rewards_engine.models.activity import ActivityType
from rewards_engine.models.challenge import Challenge, ChallengePeriod, ChallengeProgress

logger = logging.getLogger(__name__)


class ChallengeTracker:
    """Holds one progress instance per catalog challenge"""

    def __init__(self, catalog: Sequence[Challenge]):
        self._challenges: Dict[str, ChallengeProgress] = {
            challenge.id: ChallengeProgress(challenge=challenge) for challenge in catalog
        }

    def advance(
        self,
        activity_type: ActivityType,
        payload: Mapping[str, Any],
        now: datetime
    ) -> List[ChallengeProgress]:
        """
        Count an admitted activity toward matching challenges

        Args:
            activity_type: Type of activity
            payload: Activity fields (each activity counts as 1)
            now: Engine time, recorded as completed_at

        Returns:
            Challenges completed by this activity
        """
        completed = []

        for progress in self._challenges.values():
            if progress.challenge.required_activity != activity_type:
                continue

            if progress.update_progress(now):
                completed.append(progress)
                logger.info(
                    f"Challenge '{progress.challenge.id}' completed "
                    f"({progress.current_progress}/{progress.challenge.target_value})"
                )

        return completed

    def reset_period(self, period: ChallengePeriod) -> int:
        """
        Start a new period for every challenge of the given period

        Returns:
            Number of challenge instances reset
        """
        count = 0
        for progress in self._challenges.values():
            if progress.challenge.period == period:
                progress.reset()
                count += 1

        logger.info(f"Reset {count} {period.value} challenges")
        return count

    def available_challenges(self) -> List[Challenge]:
        return [progress.challenge for progress in self._challenges.values()]

    def progress_for(self, challenge_id: str) -> Optional[ChallengeProgress]:
        return self._challenges.get(challenge_id)

    def all_progress(self) -> List[ChallengeProgress]:
        return list(self._challenges.values())

    def restore(self, saved: Sequence[ChallengeProgress]) -> None:
        """
        Apply saved progress to challenges still in the catalog

        Saved entries for challenges no longer in the catalog are dropped.
        """
        for entry in saved:
            progress = self._challenges.get(entry.challenge.id)
            if progress is None:
                logger.warning(f"Dropping saved progress for unknown challenge '{entry.challenge.id}'")
                continue

            progress.current_progress = entry.current_progress
            progress.is_completed = entry.is_completed
            progress.completed_at = entry.completed_at
