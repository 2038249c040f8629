# apps/goals/ports/repositories.py
from abc import ABC, abstractmethod
from typing import ContextManager, List, Optional
from apps.goals.domain.entities import GoalEntity, ScoreHistoryEntryEntity, UserProfileEntity


class IGoalStore(ABC):
    @abstractmethod
    def get_goals(self) -> List[GoalEntity]:
        """Wszystkie cele w kolejności utworzenia."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[GoalEntity]:
        pass

    @abstractmethod
    def save_goal(self, goal: GoalEntity) -> GoalEntity:
        """Zapisuje (tworzy lub aktualizuje) cel razem z podzadaniami i zwraca encję z ID."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Rzuca GoalNotFound, jeśli cel nie istnieje."""
        pass

    @abstractmethod
    def get_user_profile(self) -> UserProfileEntity:
        pass

    @abstractmethod
    def save_user_profile(self, profile: UserProfileEntity) -> UserProfileEntity:
        pass

    @abstractmethod
    def get_score_history(self) -> List[ScoreHistoryEntryEntity]:
        """Historia punktów, od najstarszego wpisu."""
        pass

    @abstractmethod
    def append_score_entry(self, entry: ScoreHistoryEntryEntity) -> ScoreHistoryEntryEntity:
        pass

    @abstractmethod
    def has_score_entry(self, goal_id: int) -> bool:
        """Czy cel został już rozliczony (ochrona przed podwójnym wpisem)."""
        pass

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """
        Blok zapisów "wszystko albo nic". Błąd zapisu wewnątrz bloku
        kończy się wyjątkiem PersistenceError i wycofaniem zmian.
        """
        pass
