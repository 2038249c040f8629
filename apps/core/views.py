from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods
from apps.goals.adapters.orm_repositories import DjangoGoalStore
from apps.goals.domain.entities import DeadlineIndicator
from apps.goals.domain.services.completion import CompletionService
from apps.goals.domain.services.ranking import (
    SortOption, StateFilter, filter_goals, project_goals, sort_goals, todays_priorities,
)
from apps.goals.presenters import goal_to_dict, profile_to_dict
from apps.goals.views import json_domain_errors


@require_GET
@json_domain_errors
def dashboard_view(request):
    today = timezone.localdate()
    store = DjangoGoalStore()

    projections = sort_goals(project_goals(store.get_goals(), today), SortOption.PRIORITY)
    active = filter_goals(projections, state=StateFilter.ACTIVE)
    completed = filter_goals(projections, state=StateFilter.COMPLETED)
    limit = getattr(settings, 'LEVELER', {}).get('TODAY_PRIORITIES_LIMIT', 3)

    # Statystyki
    return JsonResponse({
        'profile': profile_to_dict(store.get_user_profile()),
        'todays_priorities': [goal_to_dict(p) for p in todays_priorities(projections, limit)],
        'goals_active': len(active),
        'goals_completed': len(completed),
        'goals_overdue': sum(1 for p in active if p.values.deadline_indicator == DeadlineIndicator.RED),
        'today': today.isoformat(),
    })


@require_GET
@json_domain_errors
def profile_view(request):
    return JsonResponse(profile_to_dict(DjangoGoalStore().get_user_profile()))


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def profile_repair_view(request):
    """Przelicza profil z historii punktów (naprawa rozjazdu)."""
    profile = CompletionService(DjangoGoalStore()).reconcile_profile()
    return JsonResponse(profile_to_dict(profile))
