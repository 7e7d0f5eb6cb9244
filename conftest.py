import os

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pathfinder_explorer.settings")
django.setup()
