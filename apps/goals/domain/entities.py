# apps/goals/domain/entities.py
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class GoalStatus(str, Enum):
    NOT_STARTED = 'not-started'
    IN_PROGRESS = 'in-progress'
    COMPLETED = 'completed'


class GoalTag(str, Enum):
    WORK = 'work'
    HEALTH = 'health'
    PERSONAL = 'personal'
    FINANCE = 'finance'
    CREATIVE = 'creative'
    LEARNING = 'learning'
    SOCIAL = 'social'
    OTHER = 'other'

    @classmethod
    def ordered(cls, tags) -> Tuple['GoalTag', ...]:
        """Zwraca tagi w kolejności kanonicznej (kolejność z definicji Enuma)."""
        wanted = {cls(t) for t in tags}
        return tuple(t for t in cls if t in wanted)


class EnergyLevel(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class Recurrence(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


class DeadlineIndicator(str, Enum):
    RED = 'red'
    ORANGE = 'orange'
    GREEN = 'green'


@dataclass(frozen=True)
class SubTaskEntity:
    id: Optional[int]
    text: str
    completed: bool = False


@dataclass(frozen=True)
class GoalEntity:
    id: Optional[int]  # None przed zapisem
    name: str
    tags: FrozenSet[GoalTag] = frozenset()
    notes: str = ""

    # Terminy
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    # Atrybuty liczbowe (skale 1-10, czas w godzinach)
    urgency: int = 5
    impact: int = 5
    time_estimate: float = 1.0
    motivation: int = 5
    complexity: int = 5

    status: GoalStatus = GoalStatus.NOT_STARTED
    progress: int = 0  # 0-100

    energy_level: Optional[EnergyLevel] = None
    recurring: Optional[Recurrence] = None

    subtasks: Tuple[SubTaskEntity, ...] = ()

    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def new(cls, name: str, today: date, deadline_days: int = 7,
            start_date: Optional[date] = None, end_date: Optional[date] = None, **attrs) -> 'GoalEntity':
        """Nowy cel bez id. Brakujące daty: start dziś, termin za `deadline_days` dni."""
        return cls(
            id=None,
            name=name,
            start_date=start_date or today,
            end_date=end_date or today + timedelta(days=deadline_days),
            **attrs
        )

    @property
    def is_completed(self) -> bool:
        return self.status == GoalStatus.COMPLETED

    @property
    def ordered_tags(self) -> Tuple[GoalTag, ...]:
        return GoalTag.ordered(self.tags)

    def checklist_progress(self) -> int:
        """Procent ukończonych podzadań (tylko do wyświetlania)."""
        total = len(self.subtasks)
        if total == 0:
            return 0
        done = sum(1 for s in self.subtasks if s.completed)
        return int((done / total) * 100)


@dataclass(frozen=True)
class GoalValues:
    """Wartości pochodne celu. Nigdy nie są zapisywane, zawsze przeliczane."""
    effort: float
    priority_score: float
    cumulative_score: float
    deadline_indicator: DeadlineIndicator


@dataclass(frozen=True)
class UserProfileEntity:
    id: Optional[int]
    level: int = 1
    total_score: float = 0.0
    score_for_current_level: float = 0.0
    score_to_next_level: float = 10.0
    badges: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreHistoryEntryEntity:
    id: Optional[int]
    goal_id: int
    goal_name: str
    score: float
    date: datetime
    tags: Tuple[GoalTag, ...] = field(default_factory=tuple)
