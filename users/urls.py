# users/urls.py

from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('', views.user_list_view, name='user_list'),
    path('create/', views.user_create_view, name='user_create'),
    path('<int:user_id>/', views.user_detail_view, name='user_detail'),
    path('<int:user_id>/edit/', views.user_edit_view, name='user_edit'),
    path('<int:user_id>/delete/', views.user_delete_view, name='user_delete'),
]
