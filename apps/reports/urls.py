# apps/reports/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('api/stats/', views.stats_api_view, name='stats_api'),       # Dane JSON
]
