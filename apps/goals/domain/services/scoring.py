# apps/goals/domain/services/scoring.py
from datetime import date, datetime
from typing import Union

from django.core.exceptions import ValidationError

from apps.goals.domain.entities import DeadlineIndicator, GoalEntity, GoalValues

# Progi wskaźnika terminu (w dniach kalendarzowych)
ORANGE_MAX_DAYS = 3


def _require_positive(name: str, value: float):
    # Zero w mianowniku -> błąd walidacji zamiast inf/NaN
    if value is None or value <= 0:
        raise ValidationError({name: [f"{name} must be greater than 0"]})


def calculate_effort(time_estimate: float, complexity: float, motivation: float) -> float:
    """Wysiłek = (Czas × Złożoność) ÷ Motywacja."""
    _require_positive('motivation', motivation)
    return (time_estimate * complexity) / motivation


def calculate_priority_score(impact: float, urgency: float, effort: float) -> float:
    """Priorytet = (Wpływ × Pilność) ÷ Wysiłek."""
    _require_positive('effort', effort)
    return (impact * urgency) / effort


def calculate_cumulative_score(
        impact: float,
        urgency: float,
        motivation: float,
        time_estimate: float,
        complexity: float
    ) -> float:
    """Wartość celu (XP) = (Wpływ × Pilność × Motywacja²) ÷ (Czas × Złożoność)."""
    denominator = time_estimate * complexity
    _require_positive('time_estimate', denominator)
    return (impact * urgency * motivation ** 2) / denominator


def _as_date(value: Union[date, datetime]) -> date:
    # datetime dziedziczy po date, więc kolejność sprawdzeń ma znaczenie
    if isinstance(value, datetime):
        return value.date()
    return value


def determine_deadline_indicator(end_date: date, now: Union[date, datetime]) -> DeadlineIndicator:
    """
    Kolor terminu na podstawie liczby dni kalendarzowych do końca
    (godzina jest ignorowana).
    """
    if end_date is None:
        raise ValidationError({'end_date': ["end_date is required"]})
    days_remaining = (_as_date(end_date) - _as_date(now)).days

    if days_remaining <= 0:
        return DeadlineIndicator.RED
    if days_remaining <= ORANGE_MAX_DAYS:
        return DeadlineIndicator.ORANGE
    return DeadlineIndicator.GREEN


def calculate_goal_values(goal: GoalEntity, now: Union[date, datetime]) -> GoalValues:
    """Liczy wszystkie wartości pochodne celu. Cel nie jest modyfikowany."""
    effort = calculate_effort(goal.time_estimate, goal.complexity, goal.motivation)
    priority_score = calculate_priority_score(goal.impact, goal.urgency, effort)
    cumulative_score = calculate_cumulative_score(
        goal.impact,
        goal.urgency,
        goal.motivation,
        goal.time_estimate,
        goal.complexity
    )
    deadline_indicator = determine_deadline_indicator(goal.end_date, now)

    return GoalValues(
        effort=effort,
        priority_score=priority_score,
        cumulative_score=cumulative_score,
        deadline_indicator=deadline_indicator,
    )
