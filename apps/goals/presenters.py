# apps/goals/presenters.py
from apps.goals.domain.entities import ScoreHistoryEntryEntity, UserProfileEntity
from apps.goals.domain.services.leveling import calculate_level_progress
from apps.goals.domain.services.ranking import GoalProjection


def format_score(value: float) -> str:
    """Jedno miejsce po przecinku (tylko do wyświetlania)."""
    return f"{value:.1f}"


def goal_to_dict(projection: GoalProjection) -> dict:
    goal, values = projection.goal, projection.values
    return {
        'id': goal.id,
        'name': goal.name,
        'tags': [t.value for t in goal.ordered_tags],
        'notes': goal.notes,
        'start_date': goal.start_date.isoformat() if goal.start_date else None,
        'end_date': goal.end_date.isoformat() if goal.end_date else None,
        'urgency': goal.urgency,
        'impact': goal.impact,
        'time_estimate': goal.time_estimate,
        'motivation': goal.motivation,
        'complexity': goal.complexity,
        'status': goal.status.value,
        'progress': goal.progress,
        'energy_level': goal.energy_level.value if goal.energy_level else None,
        'recurring': goal.recurring.value if goal.recurring else None,
        'subtasks': [
            {'id': s.id, 'text': s.text, 'completed': s.completed}
            for s in goal.subtasks
        ],
        'checklist_progress': goal.checklist_progress(),
        'created_at': goal.created_at.isoformat() if goal.created_at else None,
        'completed_at': goal.completed_at.isoformat() if goal.completed_at else None,

        # Wartości pochodne (nie są zapisywane)
        'effort': values.effort,
        'priority_score': values.priority_score,
        'cumulative_score': values.cumulative_score,
        'deadline_indicator': values.deadline_indicator.value,
        'display': {
            'effort': format_score(values.effort),
            'priority_score': format_score(values.priority_score),
            'cumulative_score': format_score(values.cumulative_score),
        },
    }


def profile_to_dict(profile: UserProfileEntity) -> dict:
    return {
        'level': profile.level,
        'total_score': profile.total_score,
        'score_for_current_level': profile.score_for_current_level,
        'score_to_next_level': profile.score_to_next_level,
        'level_progress': calculate_level_progress(profile),
        'badges': list(profile.badges),
        'display': {
            'total_score': format_score(profile.total_score),
        },
    }


def entry_to_dict(entry: ScoreHistoryEntryEntity) -> dict:
    return {
        'id': entry.id,
        'goal_id': entry.goal_id,
        'goal_name': entry.goal_name,
        'score': entry.score,
        'date': entry.date.isoformat(),
        'tags': [t.value for t in entry.tags],
    }
