# apps/api/config/settings/test.py

from .base import *

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

R2_ACCESS_KEY = "test-access"
R2_SECRET_KEY = "test-secret"
R2_ENDPOINT = "https://r2.example.test"
R2_PUBLIC_BASE_URL = "https://cdn.example.test"
R2_BUCKET = "test-bucket"

LOGGING["root"]["level"] = "WARNING"
