import os

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging

# Workers and beat run without a DJANGO_SETTINGS_MODULE in deployment; tests
# and local dev set it explicitly.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("neighborhub")

# All celery settings live in Django settings under the CELERY_ prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

app.conf.beat_schedule = {
    # Listings live for 30 days unless bumped; see Listing.expires_at
    "expire-marketplace-listings": {
        "task": "marketplace.expire_listings",
        "schedule": crontab(minute=0),
    },
}


@setup_logging.connect
def config_loggers(*args, **kwargs):
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


# Picks up neighborhub/<app>/tasks.py
app.autodiscover_tasks()
