# apps/goals/domain/services/recurrence.py
from dataclasses import replace
from typing import Optional

from dateutil.relativedelta import relativedelta

from apps.goals.domain.entities import GoalEntity, GoalStatus, Recurrence

RECURRENCE_STEPS = {
    Recurrence.DAILY: relativedelta(days=1),
    Recurrence.WEEKLY: relativedelta(weeks=1),
    Recurrence.MONTHLY: relativedelta(months=1),
}


def next_occurrence(goal: GoalEntity) -> Optional[GoalEntity]:
    """
    Następna instancja celu cyklicznego (albo None dla zwykłego celu).
    Daty przesuwamy o jeden krok, postęp i podzadania startują od zera.
    """
    if not goal.recurring:
        return None

    step = RECURRENCE_STEPS[goal.recurring]
    return replace(
        goal,
        id=None,
        start_date=goal.start_date + step if goal.start_date else None,
        end_date=goal.end_date + step if goal.end_date else None,
        status=GoalStatus.NOT_STARTED,
        progress=0,
        subtasks=tuple(replace(s, id=None, completed=False) for s in goal.subtasks),
        created_at=None,
        completed_at=None,
    )
