# apps/api/config/asgi.py

import os

from django.core.asgi import get_asgi_application

# deployed processes run prod settings unless the environment says otherwise
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "apps.api.config.settings.prod")

application = get_asgi_application()
