"""
URL configuration for the PostFlow project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('', include('core.urls')),
    path('dashboard/admin/', include('posts.admin_urls')),
    path('dashboard/admin/users/', include('users.urls')),
    path('dashboard/user/', include('posts.urls')),
    path('api/', include('posts.api_urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
