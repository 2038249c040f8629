from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Profil gracza (poziom, suma XP) oraz dashboard."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    label = 'core'
    verbose_name = 'Profile & dashboard'
