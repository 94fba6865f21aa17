import re

from django.utils.html import escape
from django.utils.safestring import mark_safe

_LINK_RE = re.compile(r"\[([^\]]+)\]\((https?://[^\s)]+)\)")
_CODE_RE = re.compile(r"`([^`]+)`")
_EMPHASIS_RE = re.compile(r"\*([^*\s][^*]*)\*")


def render_inline_markdown(value) -> str:
    """
    Render the small markdown subset used in field descriptions and notes.

    Supports `[text](http://...)` links, `*emphasis*` and `code`; line breaks
    become `<br>`. Everything else is HTML-escaped.
    """
    if value is None:
        return ""
    text = escape(str(value))
    text = _LINK_RE.sub(r'<a href="\2" target="_blank" rel="noopener">\1</a>', text)
    text = _CODE_RE.sub(r"<code>\1</code>", text)
    text = _EMPHASIS_RE.sub(r"<em>\1</em>", text)
    return mark_safe("<br>".join(text.splitlines()))


def strip_namespace(name: str, namespace: str) -> str:
    """Return `name` without its `<namespace>_` prefix."""
    prefix = f"{namespace}_"
    return name[len(prefix):] if name.startswith(prefix) else name
