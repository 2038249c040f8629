# apps/goals/application/use_cases.py
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import FrozenSet, Optional, Tuple

from django.core.exceptions import ValidationError

from apps.goals.domain.entities import (
    EnergyLevel, GoalEntity, GoalStatus, GoalTag, Recurrence, SubTaskEntity,
)
from apps.goals.domain.exceptions import GoalNotFound
from apps.goals.domain.validators import validate_goal
from apps.goals.ports.repositories import IGoalStore

logger = logging.getLogger(__name__)


@dataclass
class CreateGoalInput:
    name: str
    today: date
    tags: FrozenSet[GoalTag] = frozenset()
    notes: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    urgency: int = 5
    impact: int = 5
    time_estimate: float = 1.0
    motivation: int = 5
    complexity: int = 5
    status: GoalStatus = GoalStatus.NOT_STARTED
    progress: int = 0
    energy_level: Optional[EnergyLevel] = None
    recurring: Optional[Recurrence] = None
    subtasks: Tuple[str, ...] = ()
    deadline_days: int = 7


@dataclass
class UpdateGoalInput:
    goal_id: int
    name: str
    tags: FrozenSet[GoalTag]
    notes: str
    start_date: date
    end_date: date
    urgency: int
    impact: int
    time_estimate: float
    motivation: int
    complexity: int
    status: GoalStatus
    progress: int
    energy_level: Optional[EnergyLevel] = None
    recurring: Optional[Recurrence] = None


def _reject_direct_completion(status: GoalStatus):
    # Status "completed" ustawia wyłącznie protokół ukończenia
    if status == GoalStatus.COMPLETED:
        raise ValidationError({'status': ["Use the complete action to finish a goal"]})


class CreateGoalUseCase:
    def __init__(self, repository: IGoalStore):
        self.repository = repository

    def execute(self, input_dto: CreateGoalInput) -> GoalEntity:
        _reject_direct_completion(input_dto.status)

        goal = GoalEntity.new(
            (input_dto.name or "").strip(),
            input_dto.today,
            deadline_days=input_dto.deadline_days,
            tags=frozenset(input_dto.tags),
            notes=input_dto.notes,
            start_date=input_dto.start_date,
            end_date=input_dto.end_date,
            urgency=input_dto.urgency,
            impact=input_dto.impact,
            time_estimate=input_dto.time_estimate,
            motivation=input_dto.motivation,
            complexity=input_dto.complexity,
            status=input_dto.status,
            progress=input_dto.progress,
            energy_level=input_dto.energy_level,
            recurring=input_dto.recurring,
            subtasks=tuple(
                SubTaskEntity(id=None, text=text.strip())
                for text in input_dto.subtasks if text and text.strip()
            ),
        )

        saved = self.repository.save_goal(validate_goal(goal))
        logger.info("Goal %s created: %s", saved.id, saved.name)
        return saved


class UpdateGoalUseCase:
    def __init__(self, repository: IGoalStore):
        self.repository = repository

    def execute(self, input_dto: UpdateGoalInput) -> GoalEntity:
        current = self.repository.get_goal(input_dto.goal_id)
        if current is None:
            raise GoalNotFound(input_dto.goal_id)
        if current.is_completed:
            raise ValidationError({'status': ["Completed goals cannot be edited"]})
        _reject_direct_completion(input_dto.status)

        # Podzadania, daty utworzenia itd. zostają bez zmian
        updated = replace(
            current,
            name=(input_dto.name or "").strip(),
            tags=frozenset(input_dto.tags),
            notes=input_dto.notes,
            start_date=input_dto.start_date,
            end_date=input_dto.end_date,
            urgency=input_dto.urgency,
            impact=input_dto.impact,
            time_estimate=input_dto.time_estimate,
            motivation=input_dto.motivation,
            complexity=input_dto.complexity,
            status=input_dto.status,
            progress=input_dto.progress,
            energy_level=input_dto.energy_level,
            recurring=input_dto.recurring,
        )

        return self.repository.save_goal(validate_goal(updated))
