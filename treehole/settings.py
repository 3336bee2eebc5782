"""
Django settings for the Tree Hole project.

Every environment-dependent value is read through treehole.config, so this
module only maps validated configuration onto Django's setting names.
"""

from pathlib import Path

from treehole.config import get_config

BASE_DIR = Path(__file__).resolve().parent.parent

config = get_config()

SECRET_KEY = config.secret_key
DEBUG = config.debug
ALLOWED_HOSTS = config.allowed_host_list

TREEHOLE_ADMIN_TOKEN = config.admin_token

INSTALLED_APPS = [
    "rest_framework",
    "letters",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "treehole.urls"
WSGI_APPLICATION = "treehole.wsgi.application"

APPEND_SLASH = False

DATABASES = {
    "default": config.database(),
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# The calendar day of the daily quota is the UTC day.
USE_TZ = True
TIME_ZONE = "UTC"
USE_I18N = False

DATA_UPLOAD_MAX_MEMORY_SIZE = 1024 * 1024

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "letters": {
            "handlers": ["console"],
            "level": config.log_level,
            "propagate": False,
        },
        "treehole": {
            "handlers": ["console"],
            "level": config.log_level,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
