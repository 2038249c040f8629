# apps/goals/domain/services/goal_service.py
import logging
from dataclasses import replace
from typing import Tuple

from django.core.exceptions import ValidationError

from apps.goals.domain.entities import GoalEntity, SubTaskEntity
from apps.goals.domain.exceptions import GoalNotFound
from apps.goals.ports.repositories import IGoalStore

logger = logging.getLogger(__name__)


class GoalService:
    def __init__(self, repository: IGoalStore):
        self.repository = repository

    def _get_editable(self, goal_id: int) -> GoalEntity:
        goal = self.repository.get_goal(goal_id)
        if goal is None:
            raise GoalNotFound(goal_id)
        if goal.is_completed:
            raise ValidationError({'status': ["Completed goals cannot be edited"]})
        return goal

    def _find_goal_by_subtask(self, subtask_id: int) -> Tuple[GoalEntity, int]:
        # Podzadania są częścią celu, więc szukamy ich przez cele
        for goal in self.repository.get_goals():
            for index, sub in enumerate(goal.subtasks):
                if sub.id == subtask_id:
                    if goal.is_completed:
                        raise ValidationError({'status': ["Completed goals cannot be edited"]})
                    return goal, index
        raise GoalNotFound(subtask_id, kind="Subtask")

    def add_subtask(self, goal_id: int, text: str) -> GoalEntity:
        text = (text or "").strip()
        if not text:
            raise ValidationError({'text': ["Subtask text cannot be empty"]})

        goal = self._get_editable(goal_id)
        subtasks = goal.subtasks + (SubTaskEntity(id=None, text=text),)
        return self.repository.save_goal(replace(goal, subtasks=subtasks))

    def toggle_subtask(self, subtask_id: int) -> GoalEntity:
        goal, index = self._find_goal_by_subtask(subtask_id)
        subtasks = list(goal.subtasks)
        subtasks[index] = replace(subtasks[index], completed=not subtasks[index].completed)
        return self.repository.save_goal(replace(goal, subtasks=tuple(subtasks)))

    def remove_subtask(self, subtask_id: int) -> GoalEntity:
        goal, index = self._find_goal_by_subtask(subtask_id)
        subtasks = goal.subtasks[:index] + goal.subtasks[index + 1:]
        return self.repository.save_goal(replace(goal, subtasks=subtasks))

    def delete_goal(self, goal_id: int) -> None:
        # Ukończone cele też można usunąć; historia punktów zostaje
        self.repository.delete_goal(goal_id)
        logger.info("Goal %s deleted", goal_id)
