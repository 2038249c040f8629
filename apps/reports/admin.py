from django.contrib import admin
from .models import ScoreHistoryEntry


@admin.register(ScoreHistoryEntry)
class ScoreHistoryEntryAdmin(admin.ModelAdmin):
    list_display = ('goal_name', 'score', 'date')
    search_fields = ('goal_name',)

    # Historia jest tylko do odczytu, dopisuje ją protokół ukończenia
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
