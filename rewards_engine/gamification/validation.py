"""
Activity Anti-Gaming Validation

Decides whether a submitted activity is admissible. Rules, first failure wins:
1. Plausibility - payload values within realistic bounds (per activity type)
2. Burst limit - at most MAX_ACTIVITIES_PER_HOUR admitted per type per hour
3. Retroactive quota - entries backdated more than RETROACTIVE_WINDOW_HOURS
   are limited to MAX_RETROACTIVE_ENTRIES
4. On acceptance the timestamp is recorded (last ACTIVITY_HISTORY_LIMIT kept)

Rejection is reported as False, never raised.
"""

import logging
from collections import defaultdict, deque
from datetime import datetime, timedelta
from typing import Any, Deque, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from rewards_engine import config
from rewards_engine.models.activity import ActivityType

logger = logging.getLogger(__name__)


# ============================================================================
# PAYLOAD PLAUSIBILITY BOUNDS
# ============================================================================

class ExercisePayload(BaseModel):
    """
    Plausibility bounds for exercise payloads

    Constraints:
    - Calories burned: at most MAX_EXERCISE_CALORIES (default 5000 kcal)
    - Other fields are passed through untouched
    """
    calories: Optional[float] = Field(default=None, le=config.MAX_EXERCISE_CALORIES)

    model_config = {"extra": "allow"}


# Activity types without an entry here have no payload bounds
PAYLOAD_MODELS: Dict[ActivityType, type] = {
    ActivityType.EXERCISE: ExercisePayload,
}


class ActivityValidator:
    """
    Rate limiting and plausibility checks for activity submissions.

    Keeps one rolling list of admitted timestamps per activity type.
    """

    def __init__(
        self,
        max_per_hour: int = config.MAX_ACTIVITIES_PER_HOUR,
        max_retroactive_entries: int = config.MAX_RETROACTIVE_ENTRIES,
        retroactive_window: timedelta = timedelta(hours=config.RETROACTIVE_WINDOW_HOURS),
        history_limit: int = config.ACTIVITY_HISTORY_LIMIT,
        payload_models: Optional[Mapping[ActivityType, type]] = None,
    ):
        self.max_per_hour = max_per_hour
        self.max_retroactive_entries = max_retroactive_entries
        self.retroactive_window = retroactive_window
        self.history_limit = history_limit
        self.payload_models = dict(PAYLOAD_MODELS if payload_models is None else payload_models)
        self._recent_activities: Dict[ActivityType, Deque[datetime]] = defaultdict(
            lambda: deque(maxlen=self.history_limit)
        )

    def validate(
        self,
        activity_type: ActivityType,
        payload: Mapping[str, Any],
        occurred_at: datetime,
        now: datetime,
    ) -> bool:
        """
        Check an activity and record it if admitted

        Args:
            activity_type: Type of activity
            payload: Activity-specific fields
            occurred_at: When the activity happened
            now: Current engine time

        Returns:
            True if the activity is admitted
        """
        if not self._is_plausible(activity_type, payload):
            logger.info(f"Rejected {activity_type.value}: implausible payload")
            return False

        history = self._recent_activities[activity_type]

        recent_count = sum(1 for t in history if now - t < timedelta(hours=1))
        if recent_count >= self.max_per_hour:
            logger.info(
                f"Rejected {activity_type.value}: {recent_count} activities in the last hour"
            )
            return False

        if occurred_at < now - self.retroactive_window:
            retroactive_count = sum(1 for t in history if now - t > timedelta(days=1))
            if retroactive_count >= self.max_retroactive_entries:
                logger.info(
                    f"Rejected {activity_type.value}: retroactive quota used "
                    f"({retroactive_count}/{self.max_retroactive_entries})"
                )
                return False

        # deque(maxlen) drops the oldest entry once the limit is reached
        history.append(occurred_at)
        return True

    def prune(self, now: datetime, max_age: timedelta) -> int:
        """
        Drop history entries older than max_age across all activity types

        Returns:
            Number of entries removed
        """
        cutoff = now - max_age
        removed = 0
        for history in self._recent_activities.values():
            kept = [t for t in history if t >= cutoff]
            removed += len(history) - len(kept)
            history.clear()
            history.extend(kept)

        if removed:
            logger.debug(f"Pruned {removed} activity history entries older than {cutoff}")
        return removed

    def history_for(self, activity_type: ActivityType) -> List[datetime]:
        """Copy of the admitted timestamps for one activity type"""
        return list(self._recent_activities.get(activity_type, ()))

    def _is_plausible(self, activity_type: ActivityType, payload: Mapping[str, Any]) -> bool:
        model = self.payload_models.get(activity_type)
        if model is None:
            return True

        try:
            model.model_validate(dict(payload))
        except ValidationError as e:
            logger.debug(f"Payload for {activity_type.value} failed bounds: {e.errors()}")
            return False
        return True
