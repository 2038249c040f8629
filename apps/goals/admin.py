from django import forms
from django.contrib import admin
from .models import Goal, SubTask


class SubTaskInline(admin.TabularInline):
    model = SubTask
    extra = 1
    fields = ('text', 'completed', 'order')


class GoalAdminForm(forms.ModelForm):
    class Meta:
        model = Goal
        exclude = ('created_at', 'completed_at')

    def clean_status(self):
        # Ukończenie tylko przez protokół (historia punktów + profil),
        # a ukończonego celu nie da się "odznaczyć"
        status = self.cleaned_data['status']
        was_completed = bool(self.instance.pk) and self.instance.status == Goal.StatusChoices.COMPLETED
        if (status == Goal.StatusChoices.COMPLETED) != was_completed:
            raise forms.ValidationError("Status 'completed' is set only by the complete action")
        return status


@admin.register(Goal)
class GoalAdmin(admin.ModelAdmin):
    form = GoalAdminForm
    list_display = ('name', 'status', 'progress', 'start_date', 'end_date', 'recurring')
    list_filter = ('status', 'recurring', 'energy_level')
    search_fields = ('name', 'notes')
    readonly_fields = ('created_at', 'completed_at')
    inlines = [SubTaskInline]
