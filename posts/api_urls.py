# posts/api_urls.py

from django.urls import path
from . import views

app_name = 'api'

urlpatterns = [
    path('upload/', views.upload_image_view, name='upload'),
]
