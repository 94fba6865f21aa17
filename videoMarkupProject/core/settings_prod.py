import os
from .settings import *  # noqa


DEBUG = False


def _env_list(name: str) -> list[str]:
    return [item.strip() for item in os.environ.get(name, "").split(",") if item.strip()]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ["DJANGO_SECRET_KEY"]
ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS")
CSRF_TRUSTED_ORIGINS = _env_list("CSRF_TRUSTED_ORIGINS")

SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE", True)
CSRF_COOKIE_SECURE = _env_flag("CSRF_COOKIE_SECURE", True)

STATIC_ROOT = os.environ.get("STATIC_ROOT", str(BASE_DIR / "staticfiles"))  # noqa: F405

VIDEO_MARKUP_MODULE = os.environ.get("VIDEO_MARKUP_MODULE", VIDEO_MARKUP_MODULE)  # noqa: F405
VIDEO_MARKUP_CACHE_OWNER = os.environ.get(
    "VIDEO_MARKUP_CACHE_OWNER", VIDEO_MARKUP_CACHE_OWNER  # noqa: F405
)
if not _env_flag("VIDEO_MARKUP_EDITOR_ENABLED", True):
    VIDEO_MARKUP_EDITOR = None

LOGGING["root"]["level"] = os.environ.get("DJANGO_LOG_LEVEL", "WARNING")  # noqa: F405
