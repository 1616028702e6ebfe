# posts/urls.py

from django.urls import path
from . import views

app_name = 'posts'

urlpatterns = [
    path('', views.user_dashboard_view, name='user_dashboard'),
    path('posts/create/', views.user_create_post_view, name='user_create_post'),
    path('posts/<int:post_id>/', views.user_post_detail_view, name='user_post_detail'),
    path('posts/<int:post_id>/edit/', views.user_edit_post_view, name='user_edit_post'),
    path('posts/<int:post_id>/approve/', views.user_approve_post_view, name='user_approve_post'),
    path('posts/<int:post_id>/disapprove/', views.user_disapprove_post_view, name='user_disapprove_post'),
    path('posts/<int:post_id>/delete/', views.user_delete_post_view, name='user_delete_post'),
]
