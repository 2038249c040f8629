# apps/goals/domain/validators.py
from django.core.exceptions import ValidationError

from apps.goals.domain.entities import GoalEntity

SCALE_MIN = 1
SCALE_MAX = 10

SCALE_FIELDS = ('urgency', 'impact', 'motivation', 'complexity')


def validate_goal(goal: GoalEntity) -> GoalEntity:
    """
    Walidacja na granicy silnika: po niej funkcje punktacji mogą zakładać
    poprawne zakresy. Zbiera wszystkie błędy naraz (słownik pole -> komunikaty).
    """
    errors = {}

    if not goal.name or not goal.name.strip():
        errors['name'] = ["Goal name cannot be empty"]

    for name in SCALE_FIELDS:
        value = getattr(goal, name)
        if value is None or not (SCALE_MIN <= value <= SCALE_MAX):
            errors[name] = [f"{name} must be between {SCALE_MIN} and {SCALE_MAX}"]

    if goal.time_estimate is None or goal.time_estimate <= 0:
        errors['time_estimate'] = ["time_estimate must be greater than 0"]

    if goal.progress is None or not (0 <= goal.progress <= 100):
        errors['progress'] = ["progress must be between 0 and 100"]

    if goal.end_date is None:
        errors['end_date'] = ["end_date is required"]
    elif goal.start_date and goal.start_date > goal.end_date:
        errors['end_date'] = ["end_date cannot be before start_date"]

    if errors:
        raise ValidationError(errors)
    return goal
