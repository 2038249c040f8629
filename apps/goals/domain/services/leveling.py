# apps/goals/domain/services/leveling.py
import math
from dataclasses import replace

from django.core.exceptions import ValidationError

from apps.goals.domain.entities import UserProfileEntity

# Punkty na "jednostkę" poziomu: próg poziomu L to (L-1)² × 10
LEVEL_SCORE_UNIT = 10


def calculate_level(total_score: float) -> int:
    """Poziom = 1 + floor(sqrt(totalScore / 10))."""
    if total_score is None or total_score < 0:
        raise ValidationError({'total_score': ["total_score cannot be negative"]})
    return 1 + math.floor(math.sqrt(total_score / LEVEL_SCORE_UNIT))


def _require_level(level: int):
    if level is None or level < 1:
        raise ValidationError({'level': ["level must be at least 1"]})


def calculate_score_for_level(level: int) -> float:
    """Minimalny wynik, żeby BYĆ na danym poziomie."""
    _require_level(level)
    return (level - 1) ** 2 * LEVEL_SCORE_UNIT


def calculate_score_to_next_level(level: int) -> float:
    """Minimalny wynik, żeby wejść na poziom level + 1."""
    _require_level(level)
    return level ** 2 * LEVEL_SCORE_UNIT


def build_profile(total_score: float, base: UserProfileEntity) -> UserProfileEntity:
    """
    Jedyne miejsce, w którym powstają pola pochodne profilu.
    Poziom i progi zawsze wynikają z totalScore, nigdy nie są zapisywane osobno.
    """
    level = calculate_level(total_score)
    return replace(
        base,
        level=level,
        total_score=total_score,
        score_for_current_level=calculate_score_for_level(level),
        score_to_next_level=calculate_score_to_next_level(level),
    )


def apply_score(profile: UserProfileEntity, score: float) -> UserProfileEntity:
    return build_profile(profile.total_score + score, profile)


def calculate_level_progress(profile: UserProfileEntity) -> float:
    """
    Procent paska poziomu, przycięty do 0-100 (profil z rozjechanymi
    polami pochodnymi nie może dać ujemnego paska).
    """
    span = profile.score_to_next_level - profile.score_for_current_level
    if span <= 0:
        return 0.0
    percent = (profile.total_score - profile.score_for_current_level) / span * 100
    return max(0.0, min(percent, 100.0))
