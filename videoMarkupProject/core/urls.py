"""
URL configuration for the video markup project.

The module configuration page lives under `videomarkup/`; the Django admin
manages the raw settings and cache rows.
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("admin/", admin.site.urls),
    path(
        "",
        RedirectView.as_view(pattern_name="apps.videomarkup:config"),
        name="index",
    ),
    path("videomarkup/", include("apps.videomarkup.urls")),
]

if settings.DEBUG:
    # Include django_browser_reload URLs only in DEBUG mode
    urlpatterns += [
        path("__reload__/", include("django_browser_reload.urls")),
    ]
