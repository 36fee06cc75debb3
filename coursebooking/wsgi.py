"""
WSGI config for the Course Booking module.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'coursebooking.settings.production')

application = get_wsgi_application()
