"""WSGI config for the Ofrenda project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ofrenda.settings")

application = get_wsgi_application()
