# apps/goals/domain/services/completion.py
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

from apps.goals.domain.entities import (
    GoalEntity, GoalStatus, ScoreHistoryEntryEntity, UserProfileEntity,
)
from apps.goals.domain.exceptions import GoalAlreadyCompleted, GoalNotFound
from apps.goals.domain.services.leveling import apply_score, build_profile
from apps.goals.domain.services.recurrence import next_occurrence
from apps.goals.domain.services.scoring import calculate_goal_values
from apps.goals.domain.validators import validate_goal
from apps.goals.ports.repositories import IGoalStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionResult:
    goal: GoalEntity
    entry: ScoreHistoryEntryEntity
    profile: UserProfileEntity
    previous_level: int
    next_goal: Optional[GoalEntity] = None

    @property
    def leveled_up(self) -> bool:
        return self.profile.level > self.previous_level


class CompletionService:
    """
    Protokół ukończenia celu. Jedyne miejsce, które dopisuje historię
    punktów i zmienia total_score profilu.
    """

    def __init__(self, store: IGoalStore, clock: Callable[[], datetime] = timezone.now):
        self.store = store
        self.clock = clock

    def complete_goal(self, goal_id: int) -> CompletionResult:
        # 1. Pobierz cel i sprawdź, czy nie był już rozliczony
        goal = self.store.get_goal(goal_id)
        if goal is None:
            raise GoalNotFound(goal_id)
        if goal.is_completed or self.store.has_score_entry(goal_id):
            raise GoalAlreadyCompleted(goal_id)

        # 2. Punkty liczymy z atrybutów PRZED nadpisaniem statusu i postępu
        validate_goal(goal)
        now = self.clock()
        score = calculate_goal_values(goal, now).cumulative_score

        completed = replace(
            goal,
            status=GoalStatus.COMPLETED,
            progress=100,
            completed_at=now,
        )
        entry = ScoreHistoryEntryEntity(
            id=None,
            goal_id=goal.id,
            goal_name=goal.name,
            score=score,
            date=now,
            tags=goal.ordered_tags,
        )
        profile = self.store.get_user_profile()
        new_profile = apply_score(profile, score)
        upcoming = next_occurrence(goal)

        # 3. Zapis: cel -> historia -> profil, wszystko albo nic
        next_goal = None
        with self.store.atomic():
            saved_goal = self.store.save_goal(completed)
            saved_entry = self.store.append_score_entry(entry)
            saved_profile = self.store.save_user_profile(new_profile)
            if upcoming is not None:
                next_goal = self.store.save_goal(upcoming)

        logger.info(
            "Goal %s completed: +%.2f XP (total %.2f, level %s)",
            goal.id, score, saved_profile.total_score, saved_profile.level
        )
        if saved_profile.level > profile.level:
            logger.info("Level up: %s -> %s", profile.level, saved_profile.level)
        if next_goal is not None:
            logger.info("Recurring goal %s scheduled as goal %s", goal.id, next_goal.id)

        return CompletionResult(
            goal=saved_goal,
            entry=saved_entry,
            profile=saved_profile,
            previous_level=profile.level,
            next_goal=next_goal,
        )

    def reconcile_profile(self) -> UserProfileEntity:
        """
        Naprawa rozjazdu profil/historia: total_score = suma wpisów historii,
        poziom i progi przeliczone od nowa.
        """
        history = self.store.get_score_history()
        total = sum(e.score for e in history)
        profile = self.store.get_user_profile()

        repaired = build_profile(total, profile)
        if repaired == profile:
            return profile

        logger.warning(
            "Profile drift repaired: total %.4f -> %.4f (%s history entries)",
            profile.total_score, total, len(history)
        )
        with self.store.atomic():
            return self.store.save_user_profile(repaired)
