from django.urls import path
from . import views

urlpatterns = [
    path('profile/', views.profile_view, name='profile'),
    path('profile/repair/', views.profile_repair_view, name='profile_repair'),
]
