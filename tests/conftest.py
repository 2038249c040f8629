"""
Wspólne fixture'y testów.

Testy silnika (punktacja, poziomy, protokół ukończenia) działają na
InMemoryGoalStore i nie potrzebują bazy; testy ORM i widoków używają `db`.
"""
from datetime import date, datetime, timedelta, timezone as dt_timezone

import pytest

from apps.goals.adapters.memory_store import InMemoryGoalStore
from apps.goals.domain.entities import GoalEntity, GoalStatus, GoalTag, SubTaskEntity

TODAY = date(2026, 10, 16)
NOW = datetime(2026, 10, 16, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fixed_clock():
    return lambda: NOW


@pytest.fixture
def make_goal():
    """Fabryka celów; domyślnie cel z przykładu (9/8/15/6/7)."""
    def _make(**overrides):
        attrs = dict(
            id=None,
            name='Launch Thumbnail Business',
            tags=frozenset({GoalTag.WORK, GoalTag.FINANCE}),
            start_date=TODAY,
            end_date=TODAY + timedelta(days=30),
            urgency=8,
            impact=9,
            time_estimate=15,
            motivation=7,
            complexity=6,
            status=GoalStatus.IN_PROGRESS,
            progress=30,
            subtasks=(
                SubTaskEntity(id=None, text='Set up portfolio'),
                SubTaskEntity(id=None, text='Find first client'),
            ),
        )
        attrs.update(overrides)
        return GoalEntity(**attrs)
    return _make


@pytest.fixture
def store():
    return InMemoryGoalStore()


@pytest.fixture
def example_goal(store, make_goal):
    return store.save_goal(make_goal())
