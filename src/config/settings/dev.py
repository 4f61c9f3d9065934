"""
Django development settings for the intake API.
"""

from .base import *  # noqa: F403
from .base import INSTALLED_APPS, LOGGING, MIDDLEWARE, env

DEBUG = True

ALLOWED_HOSTS = ["*"]

SECRET_KEY = "django-insecure-dev-key-do-not-use-in-production"  # noqa: S105

# Local admin API token so the triage endpoints work without a .env
ADMIN_TOKEN = env("ADMIN_TOKEN", default="dev-admin-token")

# Debug toolbar
INSTALLED_APPS += ["debug_toolbar"]
MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")

INTERNAL_IPS = ["127.0.0.1"]

# Show "no channels configured" and health-check request lines
LOGGING["loggers"]["apps"]["level"] = "DEBUG"

# Plain static files for runserver
STORAGES = {
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}
