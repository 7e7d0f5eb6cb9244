import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _env_flag(name: str, default: bool) -> bool:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


DEBUG = _env_flag("PATHFINDER_DEBUG", False)
SECRET_KEY = os.environ.get("PATHFINDER_SECRET_KEY", "pathfinder-explorer-dev-key")
ALLOWED_HOSTS = [h.strip() for h in os.environ.get("PATHFINDER_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

# Frontier used by new workspaces: "scan" or "heap"
PATHFINDER_STRATEGY = os.environ.get("PATHFINDER_STRATEGY", "scan")
PATHFINDER_LOG_LEVEL = os.environ.get("PATHFINDER_LOG_LEVEL", "INFO").upper()

INSTALLED_APPS = [
    "pathfinder_explorer.explorer",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "pathfinder_explorer.urls"
DATABASES = {}
USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    },
    "loggers": {
        "api": {"handlers": ["console"], "level": PATHFINDER_LOG_LEVEL},
        "core": {"handlers": ["console"], "level": PATHFINDER_LOG_LEVEL},
        "pathfinder_explorer": {"handlers": ["console"], "level": PATHFINDER_LOG_LEVEL},
    },
}
