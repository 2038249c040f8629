# apps/reports/domain/services.py
from collections import Counter

from apps.goals.domain.entities import GoalTag
from apps.goals.ports.repositories import IGoalStore


class ReportService:
    def __init__(self, store: IGoalStore):
        self.store = store

    def get_score_trend(self, limit: int = 7):
        """Ostatnie `limit` wpisów historii (dane do wykresu liniowego)."""
        history = self.store.get_score_history()
        recent = history[-limit:] if limit else history

        # Formatowanie dla Chart.js
        return {
            'labels': [e.date.strftime('%b %d') for e in recent],
            'data': [e.score for e in recent],
        }

    def get_tag_distribution(self):
        """Liczba celów per tag (dane do wykresu kołowego)."""
        counts = Counter(tag for goal in self.store.get_goals() for tag in goal.tags)

        labels = []
        data = []
        for tag in GoalTag:
            if counts[tag]:
                labels.append(tag.value)
                data.append(counts[tag])

        return {'labels': labels, 'data': data}

    def get_summary(self):
        history = self.store.get_score_history()
        profile = self.store.get_user_profile()
        completed = len(history)

        return {
            'completed': completed,
            'total_score': profile.total_score,
            'level': profile.level,
            'average_score': sum(e.score for e in history) / completed if completed else 0.0,
        }
