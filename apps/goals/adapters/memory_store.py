# apps/goals/adapters/memory_store.py
import copy
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, List, Optional

from django.utils import timezone

from apps.goals.domain.entities import GoalEntity, ScoreHistoryEntryEntity, UserProfileEntity
from apps.goals.domain.exceptions import GoalNotFound, PersistenceError
from apps.goals.ports.repositories import IGoalStore


class InMemoryGoalStore(IGoalStore):
    """Magazyn w pamięci (testy, skrypty). Nie wymaga bazy danych."""

    def __init__(self, goals: Optional[List[GoalEntity]] = None):
        self._goals: Dict[int, GoalEntity] = {}
        self._history: List[ScoreHistoryEntryEntity] = []
        self._profile = UserProfileEntity(id=1)
        self._next_goal_id = 1
        self._next_subtask_id = 1
        self._next_entry_id = 1
        for goal in goals or []:
            self.save_goal(goal)

    def _assign_subtask_ids(self, goal: GoalEntity) -> GoalEntity:
        subtasks = []
        for sub in goal.subtasks:
            if sub.id is None:
                sub = replace(sub, id=self._next_subtask_id)
                self._next_subtask_id += 1
            subtasks.append(sub)
        return replace(goal, subtasks=tuple(subtasks))

    def get_goals(self) -> List[GoalEntity]:
        return list(self._goals.values())

    def get_goal(self, goal_id: int) -> Optional[GoalEntity]:
        return self._goals.get(goal_id)

    def save_goal(self, goal: GoalEntity) -> GoalEntity:
        if goal.id:
            if goal.id not in self._goals:
                raise GoalNotFound(goal.id)
        else:
            goal = replace(
                goal,
                id=self._next_goal_id,
                created_at=goal.created_at or timezone.now(),
            )
            self._next_goal_id += 1

        goal = self._assign_subtask_ids(goal)
        self._goals[goal.id] = goal
        return goal

    def delete_goal(self, goal_id: int) -> None:
        if goal_id not in self._goals:
            raise GoalNotFound(goal_id)
        del self._goals[goal_id]

    def get_user_profile(self) -> UserProfileEntity:
        return self._profile

    def save_user_profile(self, profile: UserProfileEntity) -> UserProfileEntity:
        self._profile = replace(profile, id=self._profile.id)
        return self._profile

    def get_score_history(self) -> List[ScoreHistoryEntryEntity]:
        return list(self._history)

    def append_score_entry(self, entry: ScoreHistoryEntryEntity) -> ScoreHistoryEntryEntity:
        if self.has_score_entry(entry.goal_id):
            raise PersistenceError(f"Score entry for goal {entry.goal_id} already exists")
        entry = replace(entry, id=self._next_entry_id)
        self._next_entry_id += 1
        self._history.append(entry)
        return entry

    def has_score_entry(self, goal_id: int) -> bool:
        return any(e.goal_id == goal_id for e in self._history)

    @contextmanager
    def atomic(self):
        # Migawka stanu; przy błędzie wszystko wraca do stanu sprzed bloku
        snapshot = copy.copy(self.__dict__)
        snapshot['_goals'] = dict(self._goals)
        snapshot['_history'] = list(self._history)
        try:
            yield
        except Exception:
            self.__dict__.update(snapshot)
            raise
