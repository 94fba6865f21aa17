from .settings import *  # noqa


DEBUG = True
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS += ["django_browser_reload"]  # noqa: F405
MIDDLEWARE += ["django_browser_reload.middleware.BrowserReloadMiddleware"]  # noqa: F405

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
