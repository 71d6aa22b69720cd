"""ASGI entry point for the push relay service."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "push_service.settings")

application = get_asgi_application()
