# apps/api/celery.py

from celery import Celery

# DJANGO_SETTINGS_MODULE is injected by the environment, never set here

app = Celery("quill")

app.config_from_object(
    "django.conf:settings",
    namespace="CELERY",
)

# tasks.py modules of INSTALLED_APPS
app.autodiscover_tasks()

# support packages are not Django apps
app.autodiscover_tasks(["apps.support.messaging"])
