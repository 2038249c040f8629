from django.apps import AppConfig

class GoalsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.goals'  # Ważne: pełna ścieżka z 'apps.'
    label = 'goals'
