# PATH: apps/api/config/settings/prod.py
from .base import *
import os

# ==================================================
# PROD MODE
# ==================================================

DEBUG = False

SECRET_KEY = os.environ["SECRET_KEY"]

# ==================================================
# SECURITY
# ==================================================

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# ==================================================
# ALLOWED HOSTS / CORS
# ==================================================
# "*" is never allowed in prod

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

CORS_ALLOW_ALL_ORIGINS = False

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]

CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = CORS_ALLOWED_ORIGINS

# ==================================================
# OBJECT STORAGE GUARD
# ==================================================

REQUIRED_ENV_VARS = [
    ("R2_ENDPOINT", R2_ENDPOINT),
    ("R2_BUCKET", R2_BUCKET),
    ("R2_PUBLIC_BASE_URL", R2_PUBLIC_BASE_URL),
]

_missing = [name for name, value in REQUIRED_ENV_VARS if not value]
if _missing:
    raise RuntimeError(f"Missing required settings in prod: {', '.join(_missing)}")

# ==================================================
# STATIC / MEDIA
# ==================================================
# gunicorn + nginx + CDN; Django does not serve files

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"},
}
