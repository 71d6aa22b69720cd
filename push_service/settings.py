"""Django settings for the push relay service.

Every value is read from the environment so the same image runs in all
deployments.
"""

import os
from pathlib import Path

from relay.constants import DEFAULT_BATCH_SIZE
from relay.constants.push import FCM_BASE_URL as DEFAULT_FCM_BASE_URL
from relay.constants.push import FCM_LEGACY_SEND_URL as DEFAULT_FCM_LEGACY_SEND_URL
from relay.constants.push import GOOGLE_TOKEN_URI


def env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag such as ``true``/``false``/``1``/``0``."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: str = "") -> list[str]:
    """Read a comma separated list."""
    items = (item.strip() for item in os.getenv(name, default).split(","))
    return [item for item in items if item]


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-push-relay-dev-only")
DEBUG = env_bool("DEBUG", False)
ALLOWED_HOSTS = env_list("ALLOWED_HOSTS", "localhost,127.0.0.1")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "django_rq",
    "relay",
]

MIDDLEWARE = [
    "relay.middleware.RequestIDMiddleware",
    "relay.middleware.ProcessTimeMiddleware",
    "django.middleware.common.CommonMiddleware",
    "relay.middleware.SecurityHeadersMiddleware",
    "relay.middleware.SecurityContextMiddleware",
]

ROOT_URLCONF = "push_service.urls"
WSGI_APPLICATION = "push_service.wsgi.application"
ASGI_APPLICATION = "push_service.asgi.application"

# The queue and device token tables are owned by the hosted platform.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "postgres"),
        "USER": os.getenv("POSTGRES_USER", "postgres"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
        "OPTIONS": {
            "options": f"-c search_path={os.getenv('POSTGRES_SCHEMA', 'public')}",
            "connect_timeout": int(os.getenv("POSTGRES_CONNECT_TIMEOUT", "5")),
        },
    }
}

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": REDIS_URL,
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
            "SOCKET_CONNECT_TIMEOUT": 5,
            "SOCKET_TIMEOUT": 5,
        },
        "KEY_PREFIX": "push-relay",
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": int(os.getenv("RQ_DEFAULT_TIMEOUT", "300")),
    },
}

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": ["relay.auth.oauth2.OAuth2Authentication"],
    "DEFAULT_PERMISSION_CLASSES": ["relay.auth.permissions.HasPushScope"],
    "EXCEPTION_HANDLER": "relay.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Logging is configured by structlog in relay.logging.
LOGGING_CONFIG = None

# OAuth2 (inbound bearer tokens)
OAUTH2_SERVICE_ENABLED = env_bool("OAUTH2_SERVICE_ENABLED", True)
JWT_SECRET = os.getenv("JWT_SECRET", "")

# Push gateway
FCM_API_VERSION = os.getenv("FCM_API_VERSION", "v1")
FCM_SERVER_KEY = os.getenv("FCM_SERVER_KEY", "")
FCM_SERVICE_ACCOUNT_FILE = os.getenv("FCM_SERVICE_ACCOUNT_FILE", "")
FCM_PROJECT_ID = os.getenv("FCM_PROJECT_ID", "")
FCM_CLIENT_EMAIL = os.getenv("FCM_CLIENT_EMAIL", "")
FCM_PRIVATE_KEY = os.getenv("FCM_PRIVATE_KEY", "")
FCM_BASE_URL = os.getenv("FCM_BASE_URL", DEFAULT_FCM_BASE_URL)
FCM_LEGACY_SEND_URL = os.getenv("FCM_LEGACY_SEND_URL", DEFAULT_FCM_LEGACY_SEND_URL)
FCM_TOKEN_URI = os.getenv("FCM_TOKEN_URI", GOOGLE_TOKEN_URI)
FCM_REQUEST_TIMEOUT = float(os.getenv("FCM_REQUEST_TIMEOUT", "10"))

# Dispatch worker
PUSH_DISPATCH_BATCH_SIZE = int(
    os.getenv("PUSH_DISPATCH_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))
)
PUSH_DISPATCH_LOCK_ENABLED = env_bool("PUSH_DISPATCH_LOCK_ENABLED", True)
PUSH_DISPATCH_LOCK_KEY = os.getenv("PUSH_DISPATCH_LOCK_KEY", "push-dispatch-lease")
PUSH_DISPATCH_LOCK_TIMEOUT = int(os.getenv("PUSH_DISPATCH_LOCK_TIMEOUT", "300"))
PUSH_AUTO_DISPATCH = env_bool("PUSH_AUTO_DISPATCH", False)

# structlog JSON file + console output, configured when the app is ready
STRUCTLOG_ENABLED = env_bool("STRUCTLOG_ENABLED", True)
