"""
URL configuration for the Course Booking module.
"""
from django.contrib import admin
from django.conf import settings
from django.urls import path, include

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path('booking/', include('apps.booking.urls', namespace='booking')),
]

if settings.DEBUG:
    try:
        import debug_toolbar
    except ImportError:
        pass
    else:
        urlpatterns = [path('__debug__/', include(debug_toolbar.urls))] + urlpatterns
