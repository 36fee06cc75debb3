"""
Settings for the pytest run: sqlite in memory, local mail outbox.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')

from .base import *  # noqa: E402

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

AXES_ENABLED = False
AUTHENTICATION_BACKENDS = ['django.contrib.auth.backends.ModelBackend']

SITE_URL = 'https://courses.example.org'
TIME_ZONE = 'Europe/Vienna'
LANGUAGE_CODE = 'en-us'
