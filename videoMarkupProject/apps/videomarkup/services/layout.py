from typing import Any, Iterator

from django.template.loader import render_to_string
from django.utils.text import format_lazy
from django.utils.translation import gettext_lazy as _
from django.utils.translation import ngettext

from apps.videomarkup.options import PROVIDERS
from apps.videomarkup.services.compiler import compile_all
from apps.videomarkup.services.fields import (
    COLLAPSED_BLANK,
    COLLAPSED_YES,
    Fieldset,
    FieldSpec,
    IntegerField,
    MarkupField,
    TextareaField,
    TextField,
)

CLEAR_CACHE_FLAG = "clearCache"


def cache_status_message(count: int) -> str:
    return ngettext(
        "There is %d cached video.", "There are %d cached videos.", count
    ) % count


def markup_template_field(editor_attrs: dict[str, Any] | None = None) -> TextareaField:
    attrs = {"id": "hc_code"}
    attrs.update(editor_attrs or {})
    return TextareaField(
        name="markupTpl",
        label=_("Markup"),
        notes=format_lazy(
            _("Please refer to {} for details on how to use this field."), "README.md"
        ),
        icon="code",
        rows=10,
        collapsed=COLLAPSED_BLANK,
        attrs=attrs,
    )


def video_options_fieldset() -> Fieldset:
    return Fieldset(
        label=_("Video Options"),
        icon="cog",
        fields=[
            IntegerField(
                name="maxWidth",
                label=_("Max Width"),
                icon="arrows-h",
                column_width=50,
            ),
            IntegerField(
                name="maxHeight",
                label=_("Max Height"),
                icon="arrows-v",
                column_width=50,
            ),
            TextField(
                name="emptyValue",
                label=_("Empty Value"),
                description=_(
                    "This is the value that will be rendered if no response is "
                    "received from the oEmbed endpoint."
                ),
                icon="exclamation-circle",
                collapsed=COLLAPSED_BLANK,
            ),
        ],
    )


def provider_fieldsets() -> list[Fieldset]:
    return [
        Fieldset(
            label=provider.label,
            icon=provider.icon,
            notes=provider.notes,
            collapsed=provider.collapsed,
            fields=compile_all(provider.namespace, provider.options),
        )
        for provider in PROVIDERS
    ]


def cache_field(count: int) -> MarkupField:
    button = render_to_string(
        "videomarkup/partials/clear_cache_button.html",
        {"name": CLEAR_CACHE_FLAG, "label": _("Clear Cache")},
    )
    return MarkupField(
        name="cache",
        label=_("Cache"),
        value=button,
        description=cache_status_message(count),
        icon="files-o",
        collapsed=COLLAPSED_YES,
    )


def build_inputfields(
    cache_count: int = 0, editor_attrs: dict[str, Any] | None = None
) -> list[Fieldset]:
    """
    Build the complete configuration layout.

    Top-level fields are wrapped in unlabeled fieldsets so the result is a
    flat list of fieldsets. The cache block is only present when
    `cache_count` is greater than zero.
    """
    inputfields = [
        Fieldset(label="", fields=[markup_template_field(editor_attrs)]),
        video_options_fieldset(),
        *provider_fieldsets(),
    ]
    if cache_count:
        inputfields.append(Fieldset(label="", fields=[cache_field(cache_count)]))
    return inputfields


def iter_fields(inputfields: list[Fieldset]) -> Iterator[FieldSpec]:
    for fieldset in inputfields:
        yield from fieldset.fields
