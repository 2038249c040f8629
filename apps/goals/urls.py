from django.urls import path
from . import views

urlpatterns = [
    path('', views.goal_list_view, name='goal_list'),
    path('new/', views.goal_create_view, name='goal_create'),
    path('<int:pk>/', views.goal_detail_view, name='goal_detail'),
    path('<int:pk>/edit/', views.goal_edit_view, name='goal_edit'),
    path('<int:pk>/delete/', views.goal_delete_view, name='goal_delete'),
    path('<int:pk>/complete/', views.goal_complete_view, name='goal_complete'),
    path('<int:goal_id>/subtasks/', views.subtask_add_view, name='subtask_add'),
    path('subtasks/<int:item_id>/toggle/', views.subtask_toggle_view, name='subtask_toggle'),
    path('subtasks/<int:item_id>/delete/', views.subtask_delete_view, name='subtask_delete'),
]
