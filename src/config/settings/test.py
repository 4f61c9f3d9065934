"""
Django test settings for the intake API.
"""

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = False

SECRET_KEY = "django-insecure-test-key-only"  # noqa: S105

ALLOWED_HOSTS = ["*"]

# Use fast password hasher for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Use in-memory email backend
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Use DATABASE_URL if set (Docker), otherwise an in-memory SQLite database
DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite://:memory:"),
}

ADMIN_TOKEN = "test-admin-token"  # noqa: S105

# No outbound channels unless a test configures them explicitly
SLACK_WEBHOOK_URL = ""
SMTP_HOST = ""
SMTP_USER = ""
SMTP_PASS = ""
SMTP_TO = []
RESEND_API_KEY = ""
RESEND_FROM = ""
RESEND_TO = []

# Use simple static files storage in tests
STORAGES = {
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Let pytest's caplog see application logs
LOGGING["loggers"]["apps"]["propagate"] = True
