# apps/core/models.py
from django.db import models


class UserProfile(models.Model):
    """
    Profil postępu (jeden na instalację).

    Pola poziomu są pochodną total_score i zapisuje je wyłącznie
    protokół ukończenia celu (albo naprawa profilu).
    """
    SINGLETON_ID = 1

    level = models.PositiveIntegerField(default=1)
    total_score = models.FloatField(default=0.0)
    score_for_current_level = models.FloatField(default=0.0)
    score_to_next_level = models.FloatField(default=10.0)

    # Na razie nieużywane
    badges = models.JSONField(default=list, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Level {self.level} ({self.total_score:.1f} XP)"

    @classmethod
    def load(cls) -> 'UserProfile':
        profile, _ = cls.objects.get_or_create(pk=cls.SINGLETON_ID)
        return profile
