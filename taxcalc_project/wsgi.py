"""
WSGI config for the tax estimation service
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'taxcalc_project.settings')

application = get_wsgi_application()
