"""Django settings for fuel stop planner project."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "change-me-in-production")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [host for host in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "fuel_stops",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# Nothing is persisted; every planning run lives only for its request.
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "fuel_stops": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")

DIRECTIONS_BASE_URL = os.getenv(
    "DIRECTIONS_BASE_URL", "https://maps.googleapis.com/maps/api/directions"
)
ROUTE_TIMEOUT_SECONDS = float(os.getenv("ROUTE_TIMEOUT_SECONDS", "12"))
ROUTE_RETRY_COUNT = int(os.getenv("ROUTE_RETRY_COUNT", "2"))

PLACES_BASE_URL = os.getenv("PLACES_BASE_URL", "https://maps.googleapis.com/maps/api/place")
PLACES_TIMEOUT_SECONDS = float(os.getenv("PLACES_TIMEOUT_SECONDS", "12"))
PLACES_RETRY_COUNT = int(os.getenv("PLACES_RETRY_COUNT", "2"))

STATION_SEARCH_RADIUS_METERS = float(os.getenv("STATION_SEARCH_RADIUS_METERS", "8000"))
MIN_USABLE_RANGE_MILES = float(os.getenv("MIN_USABLE_RANGE_MILES", "30"))
DEFAULT_RANGE_MILES = float(os.getenv("DEFAULT_RANGE_MILES", "300"))
DEFAULT_RESERVE_MILES = float(os.getenv("DEFAULT_RESERVE_MILES", "50"))
