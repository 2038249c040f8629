from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET
from apps.goals.adapters.orm_repositories import DjangoGoalStore
from .domain.services import ReportService


@require_GET
def stats_api_view(request):
    """
    API zwracające dane do wykresów (trend punktów, tagi).
    """
    service = ReportService(DjangoGoalStore())
    limit = getattr(settings, 'LEVELER', {}).get('SCORE_TREND_SIZE', 7)

    try:
        limit = int(request.GET.get('limit', limit))
    except ValueError:
        return JsonResponse({'errors': {'limit': ["limit must be an integer"]}}, status=400)

    response_data = {
        'summary': service.get_summary(),
        'score_trend': service.get_score_trend(limit),
        'tag_chart': service.get_tag_distribution(),
    }

    return JsonResponse(response_data)
