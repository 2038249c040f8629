import django_filters
from django import forms
from django.utils import timezone
from datetime import timedelta
from .models import Goal
from apps.goals.domain.services.ranking import StateFilter, Timeframe


class GoalFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(
        lookup_expr='icontains',
        label="Name contains",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search...'})
    )
    state = django_filters.ChoiceFilter(
        choices=[(s.value, s.value.capitalize()) for s in StateFilter],
        method='filter_state',
        label="Show",
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    timeframe = django_filters.ChoiceFilter(
        choices=[(t.value, t.value.capitalize()) for t in Timeframe],
        method='filter_timeframe',
        label="Starts",
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    class Meta:
        model = Goal
        fields = ['energy_level', 'recurring']

    def filter_state(self, queryset, name, value):
        if value == StateFilter.ACTIVE.value:
            return queryset.exclude(status=Goal.StatusChoices.COMPLETED)
        if value == StateFilter.COMPLETED.value:
            return queryset.filter(status=Goal.StatusChoices.COMPLETED)
        return queryset

    def filter_timeframe(self, queryset, name, value):
        today = timezone.localdate()
        if value == Timeframe.TODAY.value:
            return queryset.filter(start_date=today)
        if value == Timeframe.TOMORROW.value:
            return queryset.filter(start_date=today + timedelta(days=1))
        return queryset
