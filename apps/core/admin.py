from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('level', 'total_score', 'score_for_current_level', 'score_to_next_level', 'updated_at')
    # Pola poziomu wynikają z total_score; zmienia je tylko protokół ukończenia
    readonly_fields = ('level', 'total_score', 'score_for_current_level', 'score_to_next_level')
