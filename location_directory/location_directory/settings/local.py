"""
Local development settings for location_directory project.

Runs the API without login, keeps import and geocoding traces in separate
log files under logs/, and uses a short provider timeout so a missing
network fails fast.
"""

import os

from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

INSTALLED_APPS = INSTALLED_APPS + ["debug_toolbar"]  # noqa: F405

MIDDLEWARE = [  # noqa: F405
    "debug_toolbar.middleware.DebugToolbarMiddleware",
] + MIDDLEWARE  # noqa: F405

INTERNAL_IPS = ["127.0.0.1"]

DEBUG_TOOLBAR_CONFIG = {
    "SHOW_TOOLBAR_CALLBACK": lambda request: DEBUG,
    "IS_RUNNING_TESTS": False,
}

# The map front end and the import form run without login in development
REST_FRAMEWORK["DEFAULT_PERMISSION_CLASSES"] = [  # noqa: F405
    "rest_framework.permissions.AllowAny",
]

# Spreadsheet exports up to the import limit are read from memory
FILE_UPLOAD_MAX_MEMORY_SIZE = LOCATIONS_IMPORT_MAX_UPLOAD_BYTES  # noqa: F405

LOCATIONS_GEOCODE_TIMEOUT = float(os.environ.get("LOCATIONS_GEOCODE_TIMEOUT", 5))

LOGS_DIR = BASE_DIR / "logs"  # noqa: F405
os.makedirs(LOGS_DIR, exist_ok=True)

LOGGING = {  # noqa: F405
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "format": "{asctime} | {levelname:8} | {name:20} | {message}",
            "style": "{",
        },
        "trace": {
            "format": "{asctime} {levelname} {name}:{lineno} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
            "level": "INFO",
            "stream": "ext://sys.stdout",
        },
        "imports": {
            "class": "logging.FileHandler",
            "filename": LOGS_DIR / "imports.log",
            "formatter": "trace",
            "level": "DEBUG",
            "encoding": "utf-8",
        },
        "geocoding": {
            "class": "logging.FileHandler",
            "filename": LOGS_DIR / "geocoding.log",
            "formatter": "trace",
            "level": "DEBUG",
            "encoding": "utf-8",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django.request": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "locations": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        # Per-row skips, upserts and command summaries
        "locations.services": {
            "handlers": ["console", "imports"],
            "level": "DEBUG",
            "propagate": False,
        },
        "locations.management": {
            "handlers": ["console", "imports"],
            "level": "DEBUG",
            "propagate": False,
        },
        "locations.services.geocoding": {
            "handlers": ["console", "geocoding"],
            "level": "DEBUG",
            "propagate": False,
        },
        # Provider HTTP traffic
        "urllib3": {
            "handlers": ["geocoding"],
            "level": "DEBUG",
            "propagate": False,
        },
    },
}
