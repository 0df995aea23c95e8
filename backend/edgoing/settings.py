"""
Django settings for the EdGoing content backend.

Everything deployment-specific is read from the environment so the same module
serves local development, tests and production.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _env_list(name: str, default=None):
    value = os.getenv(name)
    if not value:
        return list(default or [])
    return [item.strip() for item in value.split(",") if item.strip()]


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "edgoing-dev-only-secret-key")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = _env_list("DJANGO_ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "content.apps.ContentConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "edgoing.middleware.SimpleCORSMiddleware",
    "edgoing.middleware.ContentLanguageMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

CORS_ALLOWED_ORIGINS = _env_list(
    "CORS_ALLOWED_ORIGINS",
    [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://edgoing.com",
        "https://www.edgoing.com",
    ],
)

ROOT_URLCONF = "edgoing.urls"
WSGI_APPLICATION = "edgoing.wsgi.application"
ASGI_APPLICATION = "edgoing.asgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

if os.getenv("EDGOING_DB_ENGINE", "sqlite").lower() in ("postgres", "postgresql"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("EDGOING_DB_NAME", "edgoing"),
            "USER": os.getenv("EDGOING_DB_USER", "edgoing"),
            "PASSWORD": os.getenv("EDGOING_DB_PASSWORD", ""),
            "HOST": os.getenv("EDGOING_DB_HOST", "localhost"),
            "PORT": os.getenv("EDGOING_DB_PORT", "5432"),
            "CONN_MAX_AGE": int(os.getenv("EDGOING_DB_CONN_MAX_AGE", "60")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.getenv("EDGOING_DB_PATH", str(BASE_DIR / "db.sqlite3")),
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "zh-hans"
TIME_ZONE = os.getenv("EDGOING_TIME_ZONE", "Asia/Shanghai")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

# Content localization
CONTENT_CANONICAL_LANGUAGE = os.getenv("CONTENT_CANONICAL_LANGUAGE", "zh")
CONTENT_LANGUAGES = _env_list("CONTENT_LANGUAGES", [CONTENT_CANONICAL_LANGUAGE, "en"])
CONTENT_PARTIAL_FALLBACK = _env_bool("CONTENT_PARTIAL_FALLBACK", True)
# Alternate-name column on lookup tables, per locale.
LOOKUP_NAME_COLUMNS = {"en": "name_en"}

# Query cache
CONTENT_CACHE_ALIAS = "content"
CONTENT_CACHE_ENABLED = _env_bool("CONTENT_CACHE_ENABLED", True)
CACHE_TTL_CONTENT_LIST = int(os.getenv("CACHE_TTL_CONTENT_LIST", "300"))
CACHE_TTL_CONTENT_DETAIL = int(os.getenv("CACHE_TTL_CONTENT_DETAIL", "300"))
CACHE_TTL_SHOWCASE = int(os.getenv("CACHE_TTL_SHOWCASE", "600"))

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgoing-default",
    },
    CONTENT_CACHE_ALIAS: {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgoing-content",
        "TIMEOUT": CACHE_TTL_CONTENT_LIST,
        "OPTIONS": {"MAX_ENTRIES": int(os.getenv("CONTENT_CACHE_MAX_ENTRIES", "2000"))},
    },
}

# Notifications
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")
EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "25"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = _env_bool("EMAIL_USE_TLS", False)
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "no-reply@edgoing.com")
CONTENT_NOTIFICATION_RECIPIENTS = _env_list("CONTENT_NOTIFICATION_RECIPIENTS")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("EDGOING_LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "django.db.backends": {
            "level": "WARNING",
        },
    },
}
