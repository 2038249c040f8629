# apps/goals/models.py
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from apps.goals.domain.entities import EnergyLevel, GoalStatus, GoalTag, Recurrence

SCALE_VALIDATORS = [MinValueValidator(1), MaxValueValidator(10)]


def validate_positive(value):
    if value is not None and value <= 0:
        raise ValidationError("Time estimate must be greater than 0")


class Goal(models.Model):
    # TextChoices dla Admina i formularzy, mapowane na Enumy domenowe
    class StatusChoices(models.TextChoices):
        NOT_STARTED = GoalStatus.NOT_STARTED.value, 'Not started'
        IN_PROGRESS = GoalStatus.IN_PROGRESS.value, 'In progress'
        COMPLETED = GoalStatus.COMPLETED.value, 'Completed'

    class EnergyChoices(models.TextChoices):
        LOW = EnergyLevel.LOW.value, 'Low'
        MEDIUM = EnergyLevel.MEDIUM.value, 'Medium'
        HIGH = EnergyLevel.HIGH.value, 'High'

    class RecurrenceChoices(models.TextChoices):
        DAILY = Recurrence.DAILY.value, 'Daily'
        WEEKLY = Recurrence.WEEKLY.value, 'Weekly'
        MONTHLY = Recurrence.MONTHLY.value, 'Monthly'

    TAG_CHOICES = [(t.value, t.value.capitalize()) for t in GoalTag]

    name = models.CharField(max_length=200)
    # Lista wartości GoalTag w kolejności kanonicznej, np. ["work", "finance"]
    tags = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField()

    # Atrybuty punktacji
    urgency = models.PositiveSmallIntegerField(default=5, validators=SCALE_VALIDATORS)
    impact = models.PositiveSmallIntegerField(default=5, validators=SCALE_VALIDATORS)
    time_estimate = models.FloatField(
        default=1.0,
        validators=[validate_positive],
        help_text="Szacowany czas w godzinach (> 0)"
    )
    motivation = models.PositiveSmallIntegerField(default=5, validators=SCALE_VALIDATORS)
    complexity = models.PositiveSmallIntegerField(default=5, validators=SCALE_VALIDATORS)

    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.NOT_STARTED
    )
    progress = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text="Postęp w procentach (0-100)"
    )

    energy_level = models.CharField(max_length=10, choices=EnergyChoices.choices, blank=True)
    recurring = models.CharField(max_length=10, choices=RecurrenceChoices.choices, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name


class SubTask(models.Model):
    goal = models.ForeignKey(Goal, on_delete=models.CASCADE, related_name='subtasks')

    text = models.CharField(max_length=255)
    completed = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return self.text
