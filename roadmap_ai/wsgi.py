"""WSGI entry point (gunicorn roadmap_ai.wsgi:application)."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "roadmap_ai.settings")

application = get_wsgi_application()
