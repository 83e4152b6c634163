"""WSGI entry point (``WSGI_APPLICATION``) for gunicorn and runserver."""

import os

from django.core.wsgi import get_wsgi_application

# BUILD_ENV=local images default to local settings; everything else to production
if "DJANGO_SETTINGS_MODULE" not in os.environ:
    build_env = os.environ.get("BUILD_ENV", "production").lower()
    os.environ["DJANGO_SETTINGS_MODULE"] = (
        "config.settings.local"
        if build_env == "local"
        else "config.settings.production"
    )

application = get_wsgi_application()
