# apps/reports/models.py
from django.db import models
from django.utils import timezone


class ScoreHistoryEntry(models.Model):
    # Bez ForeignKey: cel może zostać usunięty, historia zostaje.
    # unique: jeden wpis na ukończony cel
    goal_id = models.PositiveBigIntegerField(unique=True)

    # Migawki z chwili ukończenia
    goal_name = models.CharField(max_length=200)
    tags = models.JSONField(default=list, blank=True)

    score = models.FloatField()
    date = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['date', 'id']
        verbose_name_plural = 'score history entries'

    def __str__(self):
        return f"{self.goal_name}: +{self.score:.1f} ({self.date:%Y-%m-%d})"
