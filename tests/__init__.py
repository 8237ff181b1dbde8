import os

import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'taxcalc_project.settings')
django.setup()
