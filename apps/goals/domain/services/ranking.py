# apps/goals/domain/services/ranking.py
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional, Union

from django.core.exceptions import ValidationError

from apps.goals.domain.entities import GoalEntity, GoalStatus, GoalTag, GoalValues
from apps.goals.domain.services.scoring import calculate_goal_values

logger = logging.getLogger(__name__)

class SortOption(str, Enum):
    PRIORITY = 'priority'
    DEADLINE = 'deadline'
    EFFORT = 'effort'
    PROGRESS = 'progress'

class StateFilter(str, Enum):
    ALL = 'all'
    ACTIVE = 'active'
    COMPLETED = 'completed'

class Timeframe(str, Enum):
    """Ramy czasowe po dacie startu (filtrowane w GoalFilter, na poziomie zapytania)."""
    ALL = 'all'
    TODAY = 'today'
    TOMORROW = 'tomorrow'

@dataclass(frozen=True)
class GoalProjection:
    """Cel + jego wartości pochodne, łączone dopiero na potrzeby widoku."""
    goal: GoalEntity
    values: GoalValues

def project_goals(goals: Iterable[GoalEntity], now: Union[date, datetime]) -> List[GoalProjection]:
    """
    Cele z niepoprawnymi atrybutami (np. zapisane z pominięciem walidacji)
    są pomijane z ostrzeżeniem, reszta listy nadal się wyświetla.
    """
    result = []
    for g in goals:
        try:
            values = calculate_goal_values(g, now)
        except ValidationError as e:
            logger.warning("Skipping goal %s with invalid attributes: %s", g.id, e.messages)
            continue
        result.append(GoalProjection(goal=g, values=values))
    return result

def filter_goals(
        projections: Iterable[GoalProjection],
        state: StateFilter = StateFilter.ACTIVE,
        tags: Iterable[GoalTag] = ()
    ) -> List[GoalProjection]:
    selected_tags = {GoalTag(t) for t in tags}
    result = []

    for p in projections:
        goal = p.goal

        # Status (aktywne / ukończone)
        if state == StateFilter.COMPLETED and goal.status != GoalStatus.COMPLETED:
            continue
        if state == StateFilter.ACTIVE and goal.status == GoalStatus.COMPLETED:
            continue

        # Tagi: wystarczy jeden wspólny
        if selected_tags and not (goal.tags & selected_tags):
            continue

        result.append(p)

    return result

def sort_goals(projections: Iterable[GoalProjection], sort_by: SortOption = SortOption.PRIORITY) -> List[GoalProjection]:
    # sorted() jest stabilne, więc przy remisie zostaje kolejność wejściowa
    if sort_by == SortOption.PRIORITY:
        return sorted(projections, key=lambda p: p.values.priority_score, reverse=True)
    if sort_by == SortOption.DEADLINE:
        return sorted(projections, key=lambda p: p.goal.end_date or date.max)
    if sort_by == SortOption.EFFORT:
        return sorted(projections, key=lambda p: p.values.effort)
    if sort_by == SortOption.PROGRESS:
        return sorted(projections, key=lambda p: p.goal.progress, reverse=True)
    return list(projections)

def todays_priorities(projections: Iterable[GoalProjection], limit: Optional[int] = 3) -> List[GoalProjection]:
    """Pierwsze `limit` nieukończone cele (w podanej kolejności)."""
    active = [p for p in projections if not p.goal.is_completed]
    return active[:limit] if limit is not None else active
