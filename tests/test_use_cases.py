from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError

from apps.goals.application.use_cases import (
    CreateGoalInput, CreateGoalUseCase, UpdateGoalInput, UpdateGoalUseCase,
)
from apps.goals.domain.entities import GoalEntity, GoalStatus, GoalTag
from apps.goals.domain.exceptions import GoalNotFound
from apps.goals.domain.services.completion import CompletionService
from apps.goals.domain.services.goal_service import GoalService


def update_input(goal: GoalEntity, **changes) -> UpdateGoalInput:
    data = dict(
        goal_id=goal.id,
        name=goal.name,
        tags=goal.tags,
        notes=goal.notes,
        start_date=goal.start_date,
        end_date=goal.end_date,
        urgency=goal.urgency,
        impact=goal.impact,
        time_estimate=goal.time_estimate,
        motivation=goal.motivation,
        complexity=goal.complexity,
        status=goal.status,
        progress=goal.progress,
    )
    data.update(changes)
    return UpdateGoalInput(**data)


def test_create_goal_with_defaults(store, today):
    goal = CreateGoalUseCase(store).execute(CreateGoalInput(name='  Read a book ', today=today))

    assert goal.id is not None
    assert goal.name == 'Read a book'
    assert goal.start_date == today
    assert goal.end_date == today + timedelta(days=7)
    assert (goal.urgency, goal.impact, goal.motivation, goal.complexity) == (5, 5, 5, 5)
    assert goal.time_estimate == 1.0
    assert goal.status == GoalStatus.NOT_STARTED
    assert goal.progress == 0
    assert goal.created_at is not None


def test_create_goal_with_subtasks(store, today):
    goal = CreateGoalUseCase(store).execute(CreateGoalInput(
        name='Portfolio', today=today,
        tags=frozenset({GoalTag.CREATIVE}),
        subtasks=('Pick template', ' ', 'Upload work'),
    ))

    assert [s.text for s in goal.subtasks] == ['Pick template', 'Upload work']
    assert all(s.id is not None for s in goal.subtasks)


@pytest.mark.parametrize("field, value", [
    ('urgency', 11),
    ('impact', 0),
    ('motivation', 0),
    ('complexity', 12),
    ('time_estimate', 0),
    ('time_estimate', -2.5),
    ('progress', 101),
    ('name', ''),
])
def test_create_rejects_out_of_range(store, today, field, value):
    with pytest.raises(ValidationError) as exc:
        CreateGoalUseCase(store).execute(CreateGoalInput(today=today, **{'name': 'Goal', field: value}))

    assert field in exc.value.message_dict
    assert store.get_goals() == []


def test_create_cannot_start_completed(store, today):
    with pytest.raises(ValidationError):
        CreateGoalUseCase(store).execute(CreateGoalInput(name='x', today=today, status=GoalStatus.COMPLETED))


def test_end_date_before_start_date_is_rejected(store, example_goal, today):
    with pytest.raises(ValidationError) as exc:
        UpdateGoalUseCase(store).execute(update_input(example_goal, end_date=today - timedelta(days=1)))

    assert 'end_date' in exc.value.message_dict
    assert store.get_goal(example_goal.id).end_date == example_goal.end_date


def test_update_goal_keeps_subtasks(store, example_goal):
    updated = UpdateGoalUseCase(store).execute(
        update_input(example_goal, progress=60, urgency=10, tags=frozenset({GoalTag.LEARNING}))
    )

    assert updated.progress == 60
    assert updated.urgency == 10
    assert updated.tags == frozenset({GoalTag.LEARNING})
    assert updated.subtasks == example_goal.subtasks
    assert updated.created_at == example_goal.created_at


def test_update_rejects_completion_and_completed_goals(store, example_goal, fixed_clock):
    with pytest.raises(ValidationError):
        UpdateGoalUseCase(store).execute(update_input(example_goal, status=GoalStatus.COMPLETED))

    CompletionService(store, clock=fixed_clock).complete_goal(example_goal.id)
    completed = store.get_goal(example_goal.id)
    with pytest.raises(ValidationError):
        UpdateGoalUseCase(store).execute(update_input(completed, status=GoalStatus.IN_PROGRESS))


def test_update_unknown_goal(store, example_goal):
    with pytest.raises(GoalNotFound):
        UpdateGoalUseCase(store).execute(update_input(example_goal, goal_id=999))


def test_subtask_lifecycle(store, example_goal):
    service = GoalService(store)

    goal = service.add_subtask(example_goal.id, 'Send invoices')
    added = goal.subtasks[-1]
    assert added.text == 'Send invoices'
    assert len(goal.subtasks) == 3

    goal = service.toggle_subtask(added.id)
    assert goal.subtasks[-1].completed is True
    assert goal.checklist_progress() == 33

    goal = service.remove_subtask(added.id)
    assert [s.text for s in goal.subtasks] == ['Set up portfolio', 'Find first client']


def test_subtask_errors(store, example_goal, fixed_clock):
    service = GoalService(store)

    with pytest.raises(ValidationError):
        service.add_subtask(example_goal.id, '   ')
    with pytest.raises(GoalNotFound):
        service.toggle_subtask(12345)
    with pytest.raises(GoalNotFound):
        service.add_subtask(999, 'x')

    CompletionService(store, clock=fixed_clock).complete_goal(example_goal.id)
    with pytest.raises(ValidationError):
        service.toggle_subtask(example_goal.subtasks[0].id)


def test_delete_goal_keeps_history(store, example_goal, fixed_clock):
    CompletionService(store, clock=fixed_clock).complete_goal(example_goal.id)
    GoalService(store).delete_goal(example_goal.id)

    assert store.get_goal(example_goal.id) is None
    assert len(store.get_score_history()) == 1
    with pytest.raises(GoalNotFound):
        GoalService(store).delete_goal(example_goal.id)
