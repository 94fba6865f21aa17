import logging

from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _
from django.views.decorators.http import require_http_methods

from apps.videomarkup.forms import VideoMarkupConfigForm
from apps.videomarkup.services.cache_store import CacheStore
from apps.videomarkup.services.editor import editor_attrs
from apps.videomarkup.services.exceptions import CacheStoreError, SettingsStoreError
from apps.videomarkup.services.layout import CLEAR_CACHE_FLAG
from apps.videomarkup.services.settings_store import ModuleSettingsStore

logger = logging.getLogger(__name__)


def _redirect_to_self(request):
    """Redirect back to the current URL, keeping the query string."""
    url = request.get_full_path()
    if request.htmx:
        response = HttpResponse("")
        response["HX-Redirect"] = url
        return response
    return redirect(url)


def _clear_cache(request, cache: CacheStore):
    try:
        cache.clear()
    except CacheStoreError as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, _("Cache cleared"))
    return _redirect_to_self(request)


def _cache_count(request, cache: CacheStore) -> int:
    try:
        return cache.count()
    except CacheStoreError as exc:
        messages.error(request, str(exc))
        return 0


@staff_member_required
@require_http_methods(["GET", "POST"])
def module_config(request):
    """
    Render and process the video markup module configuration.

    POST parameters:
    - `clearCache`: when present, clear the module's cache entries and
      redirect instead of saving the form.
    - any configuration field: saved when the form is valid.
    """
    cache = CacheStore()
    if request.method == "POST" and request.POST.get(CLEAR_CACHE_FLAG):
        return _clear_cache(request, cache)

    cache_count = _cache_count(request, cache)
    form = VideoMarkupConfigForm(
        request.POST if request.method == "POST" else None,
        store=ModuleSettingsStore(),
        cache_count=cache_count,
        editor_attrs=editor_attrs(request.session),
    )

    if request.method == "POST" and form.is_valid():
        try:
            changed = form.save()
        except SettingsStoreError as exc:
            messages.error(request, str(exc))
        else:
            if changed:
                messages.success(request, _("Configuration saved"))
            else:
                messages.info(request, _("No changes detected."))
            return _redirect_to_self(request)

    return render(
        request,
        "videomarkup/config.html",
        {"form": form, "cache_count": cache_count},
    )
