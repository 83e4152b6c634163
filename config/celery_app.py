"""Celery worker entry point: ``celery -A config.celery_app worker``.

Only the content assistant runs here today (duplicate checks after an idea is
submitted); request handling never waits on it.
"""

import os

from celery import Celery
from celery.signals import setup_logging

# pytest and manage.py pass their own settings module; workers run production
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("idea_hub")
app.config_from_object("django.conf:settings", namespace="CELERY")


@setup_logging.connect
def use_django_logging(*args, **kwargs):
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


app.autodiscover_tasks(["idea_hub.ideas"])
