# apps/goals/domain/services/__init__.py
from .scoring import (
    calculate_cumulative_score,
    calculate_effort,
    calculate_goal_values,
    calculate_priority_score,
    determine_deadline_indicator,
)
from .leveling import (
    calculate_level,
    calculate_score_for_level,
    calculate_score_to_next_level,
)
from .completion import CompletionResult, CompletionService
