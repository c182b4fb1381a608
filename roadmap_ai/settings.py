"""
=============================================================================
ROADMAP.AI Server - Django settings
=============================================================================

Loads the environment through `pydantic-settings` so that every variable is
typed and validated before Django starts.

Principles:
    1.  **Environment isolation**: `.env` and process environment separate
        development from production.
    2.  **Type validation**: an invalid variable stops startup immediately
        instead of failing at request time.
    3.  **Secrets**: keys are `SecretStr` and only unwrapped here.

Main variables:
    - `DJANGO_SECRET_KEY`: signing key (required in production)
    - `DJANGO_DEBUG`: debug mode (must be False in production)
    - `GEMINI_API_KEY`: Gemini API key
    - `FIREBASE_PROJECT_ID`: Firebase project used to verify ID tokens
=============================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# 1. Environment schema (pydantic-settings)
# -----------------------------------------------------------------------------
# project root (manage.py)
BASE_DIR = Path(__file__).resolve().parent.parent

class EnvSettings(BaseSettings):
    """
    Typed environment. Every variable is read through this class.
    """
    # Django core
    DJANGO_SECRET_KEY: SecretStr = Field(
        default="django-insecure-dev-only-do-not-use-in-production",
        description="Django secret key"
    )
    DJANGO_DEBUG: bool = Field(default=False, description="Debug mode")
    DJANGO_ALLOWED_HOSTS: List[str] = Field(
        default=["localhost", "127.0.0.1", "0.0.0.0", "testserver"],
        description="Allowed hosts"
    )

    # Database
    DATABASE_ENGINE: str = "django.db.backends.sqlite3"
    DATABASE_NAME: str = str(BASE_DIR / "db.sqlite3")
    DATABASE_USER: str = ""
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = ""
    DATABASE_PORT: str = ""
    DATABASE_CONN_MAX_AGE: int = 60

    # Gemini
    GEMINI_API_KEY: Optional[SecretStr] = None

    AI_DISABLE_LLM: bool = False
    AI_DISABLE_EXTERNAL: bool = False
    AI_DEFAULT_MODEL: str = "gemini-2.5-flash"
    AI_TIMEOUT: int = 30
    AI_MAX_RETRIES: int = 3

    # Roadmap generation
    ROADMAP_DEFAULT_MAX_STEPS: int = Field(default=10, ge=1)
    ROADMAP_MAX_STEPS_LIMIT: int = Field(default=20, ge=1)

    # Firebase (public web config + ID token audience)
    FIREBASE_API_KEY: str = ""
    FIREBASE_AUTH_DOMAIN: str = ""
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_STORAGE_BUCKET: str = ""
    FIREBASE_MESSAGING_SENDER_ID: str = ""
    FIREBASE_APP_ID: str = ""

    # Sessions
    SESSION_COOKIE_AGE: int = 24 * 60 * 60

    # Cache (Redis)
    REDIS_URL: Optional[str] = None
    CACHE_TIMEOUT: int = 300
    CACHE_MAX_ENTRIES: int = 1000

    # CORS
    CORS_ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="CORS allowed origins"
    )

    # Throttling
    THROTTLE_ANON_RATE: str = "100/hour"
    THROTTLE_USER_RATE: str = "1000/hour"

    # Security (prod)
    SECURE_SSL_REDIRECT: bool = False
    SECURE_HSTS_SECONDS: int = 31536000

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",  # unknown variables are ignored
        case_sensitive=True
    )

# load once
try:
    env = EnvSettings()
except Exception as e:
    # a broken environment is fatal
    print("=================================================================")
    print(" [CRITICAL] Failed to load environment settings")
    print(" Check the .env file and the process environment.")
    print(f" Error: {e}")
    print("=================================================================")
    sys.exit(1)


# -----------------------------------------------------------------------------
# 2. Django settings
# -----------------------------------------------------------------------------

SECRET_KEY = env.DJANGO_SECRET_KEY.get_secret_value()
DEBUG = env.DJANGO_DEBUG
ALLOWED_HOSTS = env.DJANGO_ALLOWED_HOSTS

# -----------------------------------------------------------------------------
# Applications
# -----------------------------------------------------------------------------
INSTALLED_APPS = [
    # Django
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.staticfiles",

    # third party
    "rest_framework",               # Django REST Framework
    "drf_spectacular",              # OpenAPI schema
    "corsheaders",                  # CORS

    # project
    "roadmap_ai.ai_core",
]

MIDDLEWARE = [
    # security first
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",  # static files

    # CORS (before CommonMiddleware)
    "corsheaders.middleware.CorsMiddleware",

    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "roadmap_ai.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    }
]

WSGI_APPLICATION = "roadmap_ai.wsgi.application"

# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------
DATABASES = {
    "default": {
        "ENGINE": env.DATABASE_ENGINE,
        "NAME": env.DATABASE_NAME,
        "USER": env.DATABASE_USER,
        "PASSWORD": env.DATABASE_PASSWORD,
        "HOST": env.DATABASE_HOST,
        "PORT": env.DATABASE_PORT,
        "CONN_MAX_AGE": env.DATABASE_CONN_MAX_AGE,
    }
}

# -----------------------------------------------------------------------------
# Internationalization
# -----------------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# -----------------------------------------------------------------------------
# Static files
# -----------------------------------------------------------------------------
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
CORS_ALLOW_ALL_ORIGINS = DEBUG  # everything allowed only in debug
CORS_ALLOWED_ORIGINS = env.CORS_ALLOWED_ORIGINS
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ["DELETE", "GET", "OPTIONS", "PATCH", "POST", "PUT"]
CORS_ALLOW_HEADERS = [
    "accept", "accept-encoding", "authorization", "content-type",
    "dnt", "origin", "user-agent", "x-csrftoken", "x-requested-with",
]

# -----------------------------------------------------------------------------
# Sessions (login endpoint)
# -----------------------------------------------------------------------------
SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"
SESSION_COOKIE_AGE = env.SESSION_COOKIE_AGE
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"

# session-authenticated writes send the csrftoken cookie back as X-CSRFToken
CSRF_COOKIE_SAMESITE = "Lax"
CSRF_TRUSTED_ORIGINS = list(env.CORS_ALLOWED_ORIGINS)

# -----------------------------------------------------------------------------
# Django REST Framework
# -----------------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ] + (["rest_framework.renderers.BrowsableAPIRenderer"] if DEBUG else []),
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "roadmap_ai.ai_core.controller.authentication.FirebaseBearerAuthentication",
        "roadmap_ai.ai_core.controller.authentication.SessionAuthContextAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "EXCEPTION_HANDLER": "roadmap_ai.ai_core.controller.exception_handler.api_exception_handler",
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": env.THROTTLE_ANON_RATE,
        "user": env.THROTTLE_USER_RATE,
    },
}

# -----------------------------------------------------------------------------
# OpenAPI (Swagger)
# -----------------------------------------------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "ROADMAP.AI API",
    "DESCRIPTION": "Roadmap generation, refinement and library API (generated by drf-spectacular)",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
}

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "[{asctime}] {levelname} {name} {module}:{lineno} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "simple": {
            "format": "[{asctime}] {levelname} {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose" if DEBUG else "simple",
            "stream": sys.stdout,
        },
        "file": {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": BASE_DIR / "logs" / "roadmap_ai.log",
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "json",
        },
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "roadmap_ai.ai_core": {"handlers": ["console", "file"], "level": env.LOG_LEVEL, "propagate": False},
        "": {"handlers": ["console"], "level": env.LOG_LEVEL},
    },
}
(BASE_DIR / "logs").mkdir(exist_ok=True)

# -----------------------------------------------------------------------------
# Cache
# -----------------------------------------------------------------------------
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "roadmap-ai",
        "TIMEOUT": env.CACHE_TIMEOUT,
        "OPTIONS": {"MAX_ENTRIES": env.CACHE_MAX_ENTRIES},
    }
}

if env.REDIS_URL:
    CACHES["default"] = {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": env.REDIS_URL,
        "TIMEOUT": env.CACHE_TIMEOUT,
        "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
    }

# -----------------------------------------------------------------------------
# AI / Firebase (module globals read through django.conf.settings)
# -----------------------------------------------------------------------------
GEMINI_API_KEY = env.GEMINI_API_KEY.get_secret_value() if env.GEMINI_API_KEY else ""

AI_DISABLE_LLM = env.AI_DISABLE_LLM
AI_DISABLE_EXTERNAL = env.AI_DISABLE_EXTERNAL
AI_DEFAULT_MODEL = env.AI_DEFAULT_MODEL
AI_TIMEOUT = env.AI_TIMEOUT
AI_MAX_RETRIES = env.AI_MAX_RETRIES

ROADMAP_DEFAULT_MAX_STEPS = env.ROADMAP_DEFAULT_MAX_STEPS
ROADMAP_MAX_STEPS_LIMIT = env.ROADMAP_MAX_STEPS_LIMIT

FIREBASE_API_KEY = env.FIREBASE_API_KEY
FIREBASE_AUTH_DOMAIN = env.FIREBASE_AUTH_DOMAIN
FIREBASE_PROJECT_ID = env.FIREBASE_PROJECT_ID
FIREBASE_STORAGE_BUCKET = env.FIREBASE_STORAGE_BUCKET
FIREBASE_MESSAGING_SENDER_ID = env.FIREBASE_MESSAGING_SENDER_ID
FIREBASE_APP_ID = env.FIREBASE_APP_ID

# -----------------------------------------------------------------------------
# Production security
# -----------------------------------------------------------------------------
if not DEBUG:
    SECURE_SSL_REDIRECT = env.SECURE_SSL_REDIRECT
    SECURE_HSTS_SECONDS = env.SECURE_HSTS_SECONDS
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
