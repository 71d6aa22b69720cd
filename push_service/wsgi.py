"""WSGI entry point used by Gunicorn (see start_server.py)."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "push_service.settings")

application = get_wsgi_application()
