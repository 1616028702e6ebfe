# posts/admin_urls.py

from django.urls import path
from . import views

app_name = 'posts_admin'

urlpatterns = [
    path('', views.admin_dashboard_view, name='dashboard'),
    path('posts/create/', views.create_post_view, name='create_post'),
    path('posts/<int:post_id>/', views.view_post_view, name='view_post'),
    path('posts/<int:post_id>/edit/', views.edit_post_view, name='edit_post'),
    path('posts/<int:post_id>/status/', views.update_post_status_view, name='update_status'),
    path('posts/<int:post_id>/mark-posted/', views.mark_post_posted_view, name='mark_posted'),
    path('posts/<int:post_id>/delete/', views.delete_post_view, name='delete_post'),
]
