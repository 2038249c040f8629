import logging
from functools import wraps

from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import JsonResponse, QueryDict
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from .adapters.orm_repositories import DjangoGoalStore
from .application.use_cases import (
    CreateGoalInput, CreateGoalUseCase, UpdateGoalInput, UpdateGoalUseCase,
)
from .domain.entities import EnergyLevel, GoalEntity, GoalStatus, GoalTag, Recurrence
from .domain.exceptions import GoalAlreadyCompleted, GoalNotFound, PersistenceError
from .domain.services.completion import CompletionService
from .domain.services.goal_service import GoalService
from .domain.services.ranking import (
    GoalProjection, SortOption, StateFilter, filter_goals, project_goals, sort_goals, todays_priorities,
)
from .domain.services.scoring import calculate_goal_values
from .filters import GoalFilter
from .forms import GoalForm
from .models import Goal
from .presenters import entry_to_dict, goal_to_dict, profile_to_dict

logger = logging.getLogger(__name__)

# Widoki zapisu to API JSON bez formularzy HTML i ciasteczka CSRF, stąd csrf_exempt


def _validation_errors(exc: ValidationError) -> dict:
    if hasattr(exc, 'error_dict'):
        return exc.message_dict
    return {'__all__': exc.messages}


def json_domain_errors(view):
    """Tłumaczy wyjątki domenowe na odpowiedzi JSON z właściwym kodem HTTP."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except GoalNotFound as e:
            return JsonResponse({'error': str(e)}, status=404)
        except GoalAlreadyCompleted as e:
            return JsonResponse({'error': str(e)}, status=409)
        except ValidationError as e:
            return JsonResponse({'errors': _validation_errors(e)}, status=400)
        except PersistenceError as e:
            logger.error("Persistence failure in %s: %s", view.__name__, e)
            return JsonResponse({'error': "Could not save changes, nothing was written"}, status=503)
    return wrapper


def _leveler_setting(key, default):
    return getattr(settings, 'LEVELER', {}).get(key, default)


def _value(cleaned_data, name, default):
    # 0 jest poprawną wartością (np. progress), więc nie używamy `or`
    value = cleaned_data.get(name)
    return default if value is None else value


def _optional_enum(enum_cls, value):
    return enum_cls(value) if value else None


def _goal_form_initial(goal: GoalEntity) -> QueryDict:
    """Aktualne wartości celu jako dane formularza (do częściowej edycji)."""
    data = QueryDict(mutable=True)
    data.setlist('tags', [t.value for t in goal.ordered_tags])
    data.update({
        'name': goal.name,
        'notes': goal.notes,
        'start_date': goal.start_date.isoformat(),
        'end_date': goal.end_date.isoformat(),
        'urgency': goal.urgency,
        'impact': goal.impact,
        'time_estimate': goal.time_estimate,
        'motivation': goal.motivation,
        'complexity': goal.complexity,
        'status': goal.status.value,
        'progress': goal.progress,
        'energy_level': goal.energy_level.value if goal.energy_level else '',
        'recurring': goal.recurring.value if goal.recurring else '',
    })
    return data


def _merge_post(initial: QueryDict, post: QueryDict) -> QueryDict:
    for key in post:
        initial.setlist(key, post.getlist(key))
    return initial


def _projection(goal: GoalEntity) -> dict:
    today = timezone.localdate()
    return goal_to_dict(GoalProjection(goal=goal, values=calculate_goal_values(goal, today)))


@require_GET
@json_domain_errors
def goal_list_view(request):
    """Lista celów z wartościami pochodnymi, filtrami i sortowaniem."""
    params = request.GET.copy()
    params.setdefault('state', 'active')

    # Filtry kolumnowe w bazie (django-filter), tagi i sortowanie w domenie
    f = GoalFilter(params, queryset=Goal.objects.prefetch_related('subtasks'))
    if not f.is_valid():
        return JsonResponse({'errors': f.errors}, status=400)

    try:
        tags = [GoalTag(t) for t in request.GET.getlist('tag')]
        sort_by = SortOption(request.GET.get('sort', SortOption.PRIORITY.value))
    except ValueError as e:
        return JsonResponse({'errors': {'__all__': [str(e)]}}, status=400)

    today = timezone.localdate()
    repo = DjangoGoalStore()
    projections = project_goals((repo.to_entity(m) for m in f.qs), today)
    projections = filter_goals(projections, state=StateFilter.ALL, tags=tags)
    projections = sort_goals(projections, sort_by)

    limit = _leveler_setting('TODAY_PRIORITIES_LIMIT', 3)
    return JsonResponse({
        'goals': [goal_to_dict(p) for p in projections],
        'todays_priorities': [p.goal.id for p in todays_priorities(projections, limit)],
        'sort': sort_by.value,
    })


@require_GET
@json_domain_errors
def goal_detail_view(request, pk):
    goal = DjangoGoalStore().get_goal(pk)
    if goal is None:
        raise GoalNotFound(pk)
    return JsonResponse(_projection(goal))


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def goal_create_view(request):
    form = GoalForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors}, status=400)

    cd = form.cleaned_data
    input_dto = CreateGoalInput(
        name=cd['name'],
        today=timezone.localdate(),
        tags=frozenset(GoalTag(t) for t in cd['tags']),
        notes=cd.get('notes', ''),
        start_date=cd.get('start_date'),
        end_date=cd.get('end_date'),
        urgency=_value(cd, 'urgency', 5),
        impact=_value(cd, 'impact', 5),
        time_estimate=_value(cd, 'time_estimate', 1.0),
        motivation=_value(cd, 'motivation', 5),
        complexity=_value(cd, 'complexity', 5),
        status=GoalStatus(cd.get('status') or GoalStatus.NOT_STARTED.value),
        progress=_value(cd, 'progress', 0),
        energy_level=_optional_enum(EnergyLevel, cd.get('energy_level')),
        recurring=_optional_enum(Recurrence, cd.get('recurring')),
        subtasks=form.subtask_lines(),
        deadline_days=_leveler_setting('DEFAULT_DEADLINE_DAYS', 7),
    )

    # Manual Dependency Injection
    repo = DjangoGoalStore()
    goal = CreateGoalUseCase(repository=repo).execute(input_dto)
    return JsonResponse(_projection(goal), status=201)


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def goal_edit_view(request, pk):
    repo = DjangoGoalStore()
    current = repo.get_goal(pk)
    if current is None:
        raise GoalNotFound(pk)

    # Pola nieprzesłane zachowują obecne wartości
    form = GoalForm(_merge_post(_goal_form_initial(current), request.POST))
    if not form.is_valid():
        return JsonResponse({'errors': form.errors}, status=400)

    cd = form.cleaned_data
    input_dto = UpdateGoalInput(
        goal_id=pk,
        name=cd['name'],
        tags=frozenset(GoalTag(t) for t in cd['tags']),
        notes=cd.get('notes', ''),
        start_date=cd.get('start_date') or current.start_date,
        end_date=cd.get('end_date') or current.end_date,
        urgency=_value(cd, 'urgency', current.urgency),
        impact=_value(cd, 'impact', current.impact),
        time_estimate=_value(cd, 'time_estimate', current.time_estimate),
        motivation=_value(cd, 'motivation', current.motivation),
        complexity=_value(cd, 'complexity', current.complexity),
        status=GoalStatus(cd.get('status') or current.status.value),
        progress=_value(cd, 'progress', current.progress),
        energy_level=_optional_enum(EnergyLevel, cd.get('energy_level')),
        recurring=_optional_enum(Recurrence, cd.get('recurring')),
    )

    goal = UpdateGoalUseCase(repository=repo).execute(input_dto)
    return JsonResponse(_projection(goal))


@csrf_exempt
@require_http_methods(["POST", "DELETE"])
@json_domain_errors
def goal_delete_view(request, pk):
    GoalService(DjangoGoalStore()).delete_goal(pk)
    return JsonResponse({'deleted': pk})


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def goal_complete_view(request, pk):
    service = CompletionService(DjangoGoalStore())
    result = service.complete_goal(pk)

    return JsonResponse({
        'goal': _projection(result.goal),
        'entry': entry_to_dict(result.entry),
        'profile': profile_to_dict(result.profile),
        'leveled_up': result.leveled_up,
        'next_goal': _projection(result.next_goal) if result.next_goal else None,
    })


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def subtask_add_view(request, goal_id):
    goal = GoalService(DjangoGoalStore()).add_subtask(goal_id, request.POST.get('text'))
    return JsonResponse(_projection(goal), status=201)


@csrf_exempt
@require_http_methods(["POST"])
@json_domain_errors
def subtask_toggle_view(request, item_id):
    goal = GoalService(DjangoGoalStore()).toggle_subtask(item_id)
    return JsonResponse(_projection(goal))


@csrf_exempt
@require_http_methods(["POST", "DELETE"])
@json_domain_errors
def subtask_delete_view(request, item_id):
    goal = GoalService(DjangoGoalStore()).remove_subtask(item_id)
    return JsonResponse(_projection(goal))
