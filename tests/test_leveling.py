import pytest
from django.core.exceptions import ValidationError

from apps.goals.domain.entities import UserProfileEntity
from apps.goals.domain.services.leveling import (
    apply_score,
    build_profile,
    calculate_level,
    calculate_level_progress,
    calculate_score_for_level,
    calculate_score_to_next_level,
)

LEVELS = [1, 2, 3, 5, 10, 50, 100]


@pytest.mark.parametrize("total, level", [
    (0, 1),
    (9.99, 1),
    (10, 2),
    (39.2, 2),
    (40, 3),
    (89.9, 3),
    (90, 4),
])
def test_level_from_total(total, level):
    assert calculate_level(total) == level


@pytest.mark.parametrize("level", LEVELS)
def test_threshold_inverts_to_same_level(level):
    assert calculate_level(calculate_score_for_level(level)) == level


@pytest.mark.parametrize("level", LEVELS)
def test_crossing_next_threshold(level):
    threshold = calculate_score_to_next_level(level)
    assert calculate_level(threshold - 1e-6) == level
    assert calculate_level(threshold) == level + 1


@pytest.mark.parametrize("total", [0, 0.5, 9.99, 10, 39.2, 40, 123.4, 1000, 12345.6])
def test_total_sits_between_thresholds(total):
    level = calculate_level(total)
    assert calculate_score_for_level(level) <= total < calculate_score_to_next_level(level)


def test_invalid_domain():
    with pytest.raises(ValidationError):
        calculate_level(-1)
    with pytest.raises(ValidationError):
        calculate_score_for_level(0)
    with pytest.raises(ValidationError):
        calculate_score_to_next_level(0)


def test_completion_from_empty_profile():
    # Przykład 39.2 XP: 1 + floor(sqrt(3.92)) = 2, nie 3.
    # Progi 10/40, więc wynik nie spada poniżej progu bieżącego poziomu.
    profile = apply_score(UserProfileEntity(id=1), 39.2)

    assert profile.total_score == pytest.approx(39.2)
    assert profile.level == 2
    assert profile.score_for_current_level == 10
    assert profile.score_to_next_level == 40
    assert profile.score_for_current_level <= profile.total_score


def test_build_profile_keeps_identity_and_badges():
    base = UserProfileEntity(id=7, badges=('early-bird',))
    profile = build_profile(123.4, base)

    assert profile.id == 7
    assert profile.badges == ('early-bird',)
    assert profile.level == calculate_level(123.4)


@pytest.mark.parametrize("total, expected", [
    (10, 0.0),
    (25, 50.0),
    (39.999, pytest.approx(99.9967, abs=1e-3)),
])
def test_level_progress(total, expected):
    assert calculate_level_progress(build_profile(total, UserProfileEntity(id=1))) == expected


def test_level_progress_is_clamped_for_drifted_profile():
    drifted = UserProfileEntity(id=1, level=3, total_score=39.2,
                                score_for_current_level=40, score_to_next_level=90)
    assert calculate_level_progress(drifted) == 0.0

    ahead = UserProfileEntity(id=1, level=1, total_score=55,
                              score_for_current_level=0, score_to_next_level=10)
    assert calculate_level_progress(ahead) == 100.0
