"""
Settings module for location_directory project.

By default, imports local settings for development.
Override by setting DJANGO_SETTINGS_MODULE environment variable.
"""

from .local import *  # noqa: F401, F403
