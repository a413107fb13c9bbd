"""
Minimal project settings for running the scoring app on its own (tests,
shell). Host projects add ``scoring_app`` to their own INSTALLED_APPS.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-scoring-dev-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "scoring_app",
]

# The scoring engine keeps no state of its own.
DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"
LANGUAGE_CODE = "pt-br"

SCORING = {
    "THRESHOLD_MIN_RATIO": 0.8,
    "THRESHOLD_MAX_RATIO": 1.2,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "scoring_app": {
            "handlers": ["console"],
            "level": os.environ.get("SCORING_LOG_LEVEL", "WARNING"),
        },
    },
}
