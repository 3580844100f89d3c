"""
URL configuration for hrm_project project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication endpoints
    path('auth/', include('core.user_accounts.auth_urls')),

    path('core/', include('core.urls')),
    path('hr/', include('HR.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
