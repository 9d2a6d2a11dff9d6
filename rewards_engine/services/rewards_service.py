"""
RewardsService - Activity Rewards & Streak Engine

Single entry point for activity submissions. Each submission flows through:
validation -> streak update -> XP -> ledger counters and level check ->
reward catalog -> challenges, and comes back as an ActivityResult.

All mutable state is owned by one service instance and guarded by a single
asyncio.Lock shared with the daily rollover, so foreground processing and the
scheduler never interleave.
"""

import asyncio
import inspect
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from rewards_engine import config
from rewards_engine.exceptions import wrap_store_exception
from rewards_engine.gamification.achievement_system import RewardCatalogEvaluator
from rewards_engine.gamification.catalog import load_challenge_catalog, load_reward_catalog
from rewards_engine.gamification.challenges import ChallengeTracker
from rewards_engine.gamification.progress_ledger import LevelCurve, ProgressLedger
from rewards_engine.gamification.progress_store import InMemoryProgressStore, ProgressStore
from rewards_engine.gamification.streak_system import StreakTracker
from rewards_engine.gamification.validation import ActivityValidator
from rewards_engine.gamification.xp_system import calculate_xp, level_for_streak
from rewards_engine.models.activity import ActivityStreak, ActivityType
from rewards_engine.models.challenge import Challenge, ChallengePeriod, ChallengeProgress
from rewards_engine.models.result import ActivityResult
from rewards_engine.models.reward import UserProgress, UserReward
from rewards_engine.models.snapshot import EngineSnapshot
from rewards_engine.observability import metrics

logger = logging.getLogger(__name__)

CatalogSource = Optional[Union[Path, str, Sequence[Any]]]

# Sync or async callable receiving one update
Listener = Callable[[Any], Optional[Awaitable[None]]]


def _align_timezone(occurred_at: datetime, now: datetime) -> datetime:
    """Express occurred_at in the clock's convention (naive local or aware)"""
    if occurred_at.tzinfo is not None and now.tzinfo is None:
        return occurred_at.astimezone().replace(tzinfo=None)
    if occurred_at.tzinfo is None and now.tzinfo is not None:
        return occurred_at.astimezone(now.tzinfo)
    return occurred_at


class RewardsService:
    """
    Service for activity rewards.

    Responsibilities:
    - Anti-gaming validation of submissions
    - Per-activity streak tracking
    - XP calculation with streak multipliers
    - Lifetime/yearly counters and streak-based levels
    - Reward unlocking from the static catalog
    - Challenge progress
    - Daily rollover (invoked by the scheduler)
    """

    def __init__(
        self,
        store: Optional[ProgressStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
        level_curve: LevelCurve = level_for_streak,
        reward_catalog: CatalogSource = None,
        challenge_catalog: CatalogSource = None,
        validator: Optional[ActivityValidator] = None,
    ):
        """
        Initialize RewardsService.

        Args:
            store: Snapshot store (defaults to an in-memory store)
            clock: Returns the current local time (defaults to datetime.now)
            level_curve: Maps a streak length to LevelInfo
            reward_catalog: Reward catalog path or entries (defaults to config)
            challenge_catalog: Challenge catalog path or entries (defaults to config)
            validator: Anti-gaming validator (defaults to config limits)

        Raises:
            CatalogError: If either catalog is missing or malformed
        """
        self.store = store if store is not None else InMemoryProgressStore()
        self.clock = clock or datetime.now
        self.validator = validator or ActivityValidator()
        self.streaks = StreakTracker()
        self.ledger = ProgressLedger(level_curve)
        self.evaluator = RewardCatalogEvaluator(
            load_reward_catalog(reward_catalog), self.ledger, self.streaks
        )
        self.challenges = ChallengeTracker(load_challenge_catalog(challenge_catalog))
        self.lock = asyncio.Lock()
        self._progress_listeners: List[Listener] = []
        self._rewards_listeners: List[Listener] = []
        self._level_up_listeners: List[Listener] = []
        logger.debug("RewardsService initialized")

    async def initialize(self) -> bool:
        """
        Restore state from the snapshot store.

        Returns:
            True if a snapshot was found and restored

        Raises:
            PersistenceError: If the store fails to load
        """
        try:
            snapshot = await self.store.load_progress()
        except Exception as e:
            raise wrap_store_exception(e, operation="load_progress")

        if snapshot is None:
            logger.info("No saved progress found, starting fresh")
            return False

        async with self.lock:
            self.streaks.restore(snapshot.streaks)
            self.ledger.restore(snapshot.progress, snapshot.lifetime_totals, snapshot.yearly_totals)
            self.challenges.restore(snapshot.challenges)

        logger.info(
            f"Restored progress: level={snapshot.progress.current_level.title}, "
            f"rewards={len(snapshot.progress.unlocked_rewards)}, streaks={len(snapshot.streaks)}"
        )
        return True

    async def submit_activity(
        self,
        activity_type: Union[ActivityType, str],
        payload: Optional[Mapping[str, Any]] = None,
        occurred_at: Optional[datetime] = None,
    ) -> ActivityResult:
        """
        Process an activity and calculate rewards.

        Args:
            activity_type: Type of activity (enum or its string value)
            payload: Activity-specific fields (calories, steps, ...)
            occurred_at: When the activity happened (defaults to now)

        Returns:
            ActivityResult; success=False with 0 XP if the activity was rejected
        """
        try:
            activity_type = ActivityType(activity_type)
        except ValueError:
            logger.warning(f"Rejected unknown activity type: {activity_type!r}")
            return ActivityResult.rejected(f"Unknown activity type: {activity_type}")

        payload = dict(payload or {})

        async with self.lock:
            now = self.clock()
            if occurred_at is None:
                occurred_at = now
            else:
                occurred_at = _align_timezone(occurred_at, now)

            if not self.validator.validate(activity_type, payload, occurred_at, now):
                metrics.record_activity(activity_type.value, admitted=False)
                return ActivityResult.rejected()

            streak = self.streaks.advance(activity_type, occurred_at)
            xp_earned = calculate_xp(activity_type, streak)

            self.ledger.apply_event(activity_type, payload, now)
            level_up = self.ledger.check_level_up(self.streaks.max_current_streak())

            new_rewards = self.evaluator.evaluate(activity_type, payload, now)
            completed = self.challenges.advance(activity_type, payload, now)
            progress = self.ledger.progress.model_copy(deep=True)

        metrics.record_activity(activity_type.value, admitted=True, xp=xp_earned)
        metrics.record_streak(activity_type.value, streak.current_streak)
        for reward in new_rewards:
            metrics.record_reward_unlocked(reward.reward.type.value)
        for challenge_progress in completed:
            metrics.record_challenge_completed(challenge_progress.challenge.period.value)

        logger.info(
            f"Processed {activity_type.value}: xp={xp_earned}, streak={streak.current_streak}, "
            f"rewards={len(new_rewards)}, level_up={level_up is not None}"
        )

        # Listeners run after the lock is released
        await self._notify(self._progress_listeners, progress)
        if new_rewards:
            await self._notify(self._rewards_listeners, list(new_rewards))
        if level_up is not None:
            await self._notify(self._level_up_listeners, level_up)

        return ActivityResult(
            success=True,
            message="Activity processed successfully",
            xp_earned=xp_earned,
            new_rewards=new_rewards,
            level_up=level_up,
            streak=streak,
            completed_challenges=[replace(p) for p in completed],
        )

    async def perform_daily_rollover(
        self,
        now: Optional[datetime] = None,
        reset_weekly: bool = False,
        reset_monthly: bool = False,
    ) -> Dict[str, int]:
        """
        Start a new day: reset daily challenges and prune old activity history.

        Args:
            now: Rollover time (defaults to the service clock)
            reset_weekly: Also reset weekly challenges
            reset_monthly: Also reset monthly challenges

        Returns:
            Counts of reset challenges and pruned history entries
        """
        async with self.lock:
            if now is None:
                now = self.clock()

            summary = {
                "daily_reset": self.challenges.reset_period(ChallengePeriod.DAILY),
                "weekly_reset": 0,
                "monthly_reset": 0,
                "history_pruned": self.validator.prune(
                    now, timedelta(days=config.HISTORY_RETENTION_DAYS)
                ),
            }
            if reset_weekly:
                summary["weekly_reset"] = self.challenges.reset_period(ChallengePeriod.WEEKLY)
            if reset_monthly:
                summary["monthly_reset"] = self.challenges.reset_period(ChallengePeriod.MONTHLY)

        metrics.record_daily_rollover()
        logger.info(f"Daily rollover at {now}: {summary}")
        return summary

    def snapshot(self) -> EngineSnapshot:
        """Copy of the current engine state"""
        return EngineSnapshot(
            progress=self.ledger.progress.model_copy(deep=True),
            streaks=self.streaks.all_streaks(),
            lifetime_totals=self.ledger.lifetime_totals(),
            yearly_totals=self.ledger.yearly_totals(),
            challenges=[replace(p) for p in self.challenges.all_progress()],
            saved_at=self.clock(),
        )

    async def save(self) -> EngineSnapshot:
        """
        Hand the current state to the snapshot store.

        In-memory state stays authoritative whether or not the save succeeds;
        retrying is up to the caller.

        Raises:
            PersistenceError: If the store fails to save
        """
        async with self.lock:
            snapshot = self.snapshot()

        try:
            await self.store.save_progress(snapshot)
        except Exception as e:
            raise wrap_store_exception(
                e,
                operation="save_progress",
                context={"rewards": len(snapshot.progress.unlocked_rewards)},
            )

        logger.debug("Progress snapshot saved")
        return snapshot

    # ------------------------------------------------------------------
    # Update listeners
    # ------------------------------------------------------------------

    def subscribe_progress(self, listener: Listener) -> Callable[[], None]:
        """
        Receive a UserProgress copy after every admitted activity.

        Returns:
            Callable that removes the listener
        """
        return self._subscribe(self._progress_listeners, listener)

    def subscribe_rewards(self, listener: Listener) -> Callable[[], None]:
        """Receive the list of newly unlocked rewards whenever it is non-empty"""
        return self._subscribe(self._rewards_listeners, listener)

    def subscribe_level_up(self, listener: Listener) -> Callable[[], None]:
        """Receive every LevelUpEvent"""
        return self._subscribe(self._level_up_listeners, listener)

    @staticmethod
    def _subscribe(listeners: List[Listener], listener: Listener) -> Callable[[], None]:
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    async def _notify(self, listeners: List[Listener], update: Any) -> None:
        for listener in list(listeners):
            try:
                result = listener(update)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Update listener {listener!r} failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def current_progress(self) -> UserProgress:
        return self.ledger.progress.model_copy(deep=True)

    def streak_for(self, activity_type: Union[ActivityType, str]) -> ActivityStreak:
        return self.streaks.streak_for(ActivityType(activity_type))

    def unlocked_rewards(self) -> List[UserReward]:
        return list(self.ledger.progress.unlocked_rewards)

    def available_challenges(self) -> List[Challenge]:
        return self.challenges.available_challenges()

    def challenge_progress(self, challenge_id: str) -> Optional[ChallengeProgress]:
        progress = self.challenges.progress_for(challenge_id)
        return replace(progress) if progress is not None else None

    def reward_progress(self, reward_id: str) -> Dict[str, Any]:
        """Progress toward one catalog reward (current/required/percentage)"""
        return self.evaluator.progress_toward(reward_id, self.clock())

    def lifetime_total(self, activity_type: Union[ActivityType, str]) -> int:
        return self.ledger.lifetime_total(ActivityType(activity_type))

    def yearly_total(self, activity_type: Union[ActivityType, str], year: Optional[int] = None) -> int:
        if year is None:
            year = self.clock().year
        return self.ledger.yearly_total(ActivityType(activity_type), year)
