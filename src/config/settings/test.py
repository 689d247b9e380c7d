"""
Django test settings for the Tagad Platforms contact backend.
"""

import tempfile
from pathlib import Path

from .base import *  # noqa: F403
from .base import env

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

CORS_ALLOWED_ORIGINS = [
    "https://tagad-platforms-website.vercel.app",
    "http://localhost:5173",
]

EXPOSE_ERROR_DETAIL = False

CONTACT_LIST_API_KEY = ""
CONTACT_NOTIFICATION_EMAILS = ["team@tagadplatforms.com"]
CONTACT_EXPORT_DIR = str(Path(tempfile.gettempdir()) / "tagad-test-exports")

# Use simple static files storage in tests
STORAGES = {
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}
