from typing import Any, Mapping

from django.conf import settings

EDITOR_DEFAULTS: dict[str, Any] = {
    "aceTheme": "monokai",
    "aceKeybinding": "none",
    "aceHeight": 25,
    "aceBehaviors": 1,
}

# Editor setting -> textarea data attribute
EDITOR_ATTRIBUTES = {
    "aceTheme": "data-theme",
    "aceKeybinding": "data-keybinding",
    "aceHeight": "data-height",
    "aceBehaviors": "data-behaviors",
}

SESSION_PREFIX = "videomarkup_editor_"


def editor_attrs(session: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Build the code editor data attributes for the markup template textarea.

    Each value comes from the first non-empty source of:
    - the user session (`videomarkup_editor_<key>`),
    - `settings.VIDEO_MARKUP_EDITOR`,
    - `EDITOR_DEFAULTS`.

    Returns an empty dict when `VIDEO_MARKUP_EDITOR` is None.
    """
    configured = getattr(settings, "VIDEO_MARKUP_EDITOR", EDITOR_DEFAULTS)
    if configured is None:
        return {}

    attrs = {}
    for key, default in EDITOR_DEFAULTS.items():
        value = session.get(SESSION_PREFIX + key) if session is not None else None
        if not value:
            value = configured.get(key)
        if not value:
            value = default
        attrs[EDITOR_ATTRIBUTES[key]] = value
    try:
        attrs["data-behaviors"] = int(attrs["data-behaviors"])
    except ValueError:
        attrs["data-behaviors"] = EDITOR_DEFAULTS["aceBehaviors"]
    return attrs
