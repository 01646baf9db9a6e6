"""
Django settings for core_backend project.

Environment variables are read from a .env file next to manage.py when
present. Shop and printer configuration that changes at runtime lives in
the database (shop_settings) rather than here.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-dev-only-change-me")
DEBUG = env_bool("DEBUG", True)
ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host]


# Application definition

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party apps
    "channels",
    "rest_framework",
    "django_filters",
    # Local apps
    "pricing",
    "discounts",
    "printing",
    "display",
    "shop_settings",
    "orders",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "core_backend.urls"

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

WSGI_APPLICATION = "core_backend.wsgi.application"
ASGI_APPLICATION = "core_backend.asgi.application"


# Database

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True


# Static and media files

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
MEDIA_URL = "/media/"
MEDIA_ROOT = Path(os.environ.get("MEDIA_ROOT", BASE_DIR / "media"))


# Django REST Framework

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
}


# Channels

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
    },
}


# Celery

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
# Run tasks inline when no broker is available (single-terminal installs, tests)
CELERY_TASK_ALWAYS_EAGER = env_bool("CELERY_TASK_ALWAYS_EAGER", False)


# Receipt printing

# Directory that relative image references (shop logo) are resolved against
RECEIPT_ASSETS_DIR = os.environ.get("RECEIPT_ASSETS_DIR", str(MEDIA_ROOT))


# Customer display (serial pole display attached to the terminal)

CUSTOMER_DISPLAY = {
    "ENABLED": env_bool("CUSTOMER_DISPLAY_ENABLED", False),
    "PORT": os.environ.get("CUSTOMER_DISPLAY_PORT", "/dev/ttyUSB0"),
    "BAUD_RATE": int(os.environ.get("CUSTOMER_DISPLAY_BAUD_RATE", 9600)),
    "WIDTH": int(os.environ.get("CUSTOMER_DISPLAY_WIDTH", 20)),
    "CURRENCY_SYMBOL": os.environ.get("CUSTOMER_DISPLAY_CURRENCY_SYMBOL", "$"),
    "WELCOME_TITLE": os.environ.get("CUSTOMER_DISPLAY_WELCOME_TITLE", "Welcome"),
    "WELCOME_SUBTITLE": os.environ.get("CUSTOMER_DISPLAY_WELCOME_SUBTITLE", ""),
}


# Logging

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose" if DEBUG else "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    # App loggers only set a level and propagate to the root handler
    "loggers": {
        "django": {"level": "INFO"},
        "printing": {"level": os.environ.get("PRINTING_LOG_LEVEL", LOG_LEVEL)},
        "display": {"level": os.environ.get("DISPLAY_LOG_LEVEL", LOG_LEVEL)},
        "orders": {"level": LOG_LEVEL},
        "discounts": {"level": LOG_LEVEL},
        "shop_settings": {"level": LOG_LEVEL},
    },
}
