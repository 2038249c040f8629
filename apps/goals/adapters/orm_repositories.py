# apps/goals/adapters/orm_repositories.py
import logging
from contextlib import contextmanager
from typing import List, Optional

from django.db import DatabaseError, transaction

from apps.core.models import UserProfile as UserProfileModel
from apps.goals.domain.entities import (
    EnergyLevel, GoalEntity, GoalStatus, GoalTag, Recurrence,
    ScoreHistoryEntryEntity, SubTaskEntity, UserProfileEntity,
)
from apps.goals.domain.exceptions import GoalNotFound, PersistenceError
from apps.goals.models import Goal as GoalModel, SubTask as SubTaskModel
from apps.goals.ports.repositories import IGoalStore
from apps.reports.models import ScoreHistoryEntry as ScoreHistoryEntryModel

logger = logging.getLogger(__name__)


class DjangoGoalStore(IGoalStore):
    def to_entity(self, model: GoalModel) -> GoalEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return GoalEntity(
            id=model.id,
            name=model.name,
            tags=frozenset(GoalTag(t) for t in model.tags),
            notes=model.notes,
            start_date=model.start_date,
            end_date=model.end_date,
            urgency=model.urgency,
            impact=model.impact,
            time_estimate=model.time_estimate,
            motivation=model.motivation,
            complexity=model.complexity,
            status=GoalStatus(model.status),
            progress=model.progress,
            energy_level=EnergyLevel(model.energy_level) if model.energy_level else None,
            recurring=Recurrence(model.recurring) if model.recurring else None,
            # Dzięki prefetch_related nie ma tu dodatkowego zapytania
            subtasks=tuple(
                SubTaskEntity(id=s.id, text=s.text, completed=s.completed)
                for s in model.subtasks.all()
            ),
            created_at=model.created_at,
            completed_at=model.completed_at,
        )

    def profile_to_entity(self, model: UserProfileModel) -> UserProfileEntity:
        return UserProfileEntity(
            id=model.id,
            level=model.level,
            total_score=model.total_score,
            score_for_current_level=model.score_for_current_level,
            score_to_next_level=model.score_to_next_level,
            badges=tuple(model.badges),
        )

    def entry_to_entity(self, model: ScoreHistoryEntryModel) -> ScoreHistoryEntryEntity:
        return ScoreHistoryEntryEntity(
            id=model.id,
            goal_id=model.goal_id,
            goal_name=model.goal_name,
            score=model.score,
            date=model.date,
            tags=GoalTag.ordered(model.tags),
        )

    def _queryset(self):
        return GoalModel.objects.prefetch_related('subtasks')

    # --- Cele ---

    def get_goals(self) -> List[GoalEntity]:
        return [self.to_entity(g) for g in self._queryset()]

    def get_goal(self, goal_id: int) -> Optional[GoalEntity]:
        try:
            return self.to_entity(self._queryset().get(id=goal_id))
        except GoalModel.DoesNotExist:
            return None

    def save_goal(self, goal: GoalEntity) -> GoalEntity:
        data = {
            'name': goal.name,
            'tags': [t.value for t in goal.ordered_tags],
            'notes': goal.notes,
            'start_date': goal.start_date,
            'end_date': goal.end_date,
            'urgency': goal.urgency,
            'impact': goal.impact,
            'time_estimate': goal.time_estimate,
            'motivation': goal.motivation,
            'complexity': goal.complexity,
            'status': goal.status.value,
            'progress': goal.progress,
            'energy_level': goal.energy_level.value if goal.energy_level else '',
            'recurring': goal.recurring.value if goal.recurring else '',
            'completed_at': goal.completed_at,
        }

        with transaction.atomic():
            if goal.id:
                # Aktualizacja istniejącego
                updated = GoalModel.objects.filter(id=goal.id).update(**data)
                if not updated:
                    raise GoalNotFound(goal.id)
                obj = GoalModel.objects.get(id=goal.id)
            else:
                if goal.created_at:
                    data['created_at'] = goal.created_at
                obj = GoalModel.objects.create(**data)

            self._sync_subtasks(obj, goal.subtasks)

        return self.get_goal(obj.id)

    def _sync_subtasks(self, obj: GoalModel, subtasks):
        """Podzadania zapisujemy w kolejności z encji; brakujące są usuwane."""
        keep_ids = []
        for order, sub in enumerate(subtasks):
            if sub.id and obj.subtasks.filter(id=sub.id).update(
                    text=sub.text, completed=sub.completed, order=order):
                keep_ids.append(sub.id)
            else:
                created = SubTaskModel.objects.create(
                    goal=obj, text=sub.text, completed=sub.completed, order=order
                )
                keep_ids.append(created.id)

        obj.subtasks.exclude(id__in=keep_ids).delete()

    def delete_goal(self, goal_id: int) -> None:
        deleted, _ = GoalModel.objects.filter(id=goal_id).delete()
        if not deleted:
            raise GoalNotFound(goal_id)

    # --- Profil i historia ---

    def get_user_profile(self) -> UserProfileEntity:
        return self.profile_to_entity(UserProfileModel.load())

    def save_user_profile(self, profile: UserProfileEntity) -> UserProfileEntity:
        obj = UserProfileModel.load()
        obj.level = profile.level
        obj.total_score = profile.total_score
        obj.score_for_current_level = profile.score_for_current_level
        obj.score_to_next_level = profile.score_to_next_level
        obj.badges = list(profile.badges)
        obj.save()
        return self.profile_to_entity(obj)

    def get_score_history(self) -> List[ScoreHistoryEntryEntity]:
        return [self.entry_to_entity(e) for e in ScoreHistoryEntryModel.objects.all()]

    def append_score_entry(self, entry: ScoreHistoryEntryEntity) -> ScoreHistoryEntryEntity:
        obj = ScoreHistoryEntryModel.objects.create(
            goal_id=entry.goal_id,
            goal_name=entry.goal_name,
            score=entry.score,
            date=entry.date,
            tags=[t.value for t in GoalTag.ordered(entry.tags)],
        )
        return self.entry_to_entity(obj)

    def has_score_entry(self, goal_id: int) -> bool:
        return ScoreHistoryEntryModel.objects.filter(goal_id=goal_id).exists()

    @contextmanager
    def atomic(self):
        try:
            with transaction.atomic():
                yield
        except DatabaseError as exc:
            logger.error("Atomic write failed, transaction rolled back: %s", exc)
            raise PersistenceError(str(exc)) from exc
