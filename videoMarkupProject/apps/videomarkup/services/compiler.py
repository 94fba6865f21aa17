from dataclasses import fields
from typing import Any, Iterable, Mapping

from django.utils.translation import gettext_lazy as _

from apps.videomarkup.services.fields import (
    COLLAPSED_BLANK,
    FIELD_CLASSES,
    FieldSpec,
    OptionDescriptor,
    SelectField,
)

DEFAULT_TYPE = "select"


def binary_options() -> dict[str, Any]:
    """Choices for a provider option that is either unset, off or on."""
    return {
        "": "",
        "0": _("Disable"),
        "1": _("Enable"),
    }


def _declared(field_class: type) -> set[str]:
    return {f.name for f in fields(field_class) if f.init}


def field_name(namespace: str, key: str) -> str:
    return f"{namespace}_{key}"


def compile_option(
    namespace: str, key: str, descriptor: OptionDescriptor | Mapping[str, Any]
) -> FieldSpec:
    """
    Normalize one provider option descriptor into a render-ready field.

    - `type` defaults to "select".
    - `collapsed` defaults to COLLAPSED_BLANK.
    - select fields without explicit `options` get `binary_options()`.
    """
    if isinstance(descriptor, Mapping):
        descriptor = OptionDescriptor(**descriptor)

    field_type = descriptor.type or DEFAULT_TYPE
    field_class = FIELD_CLASSES[field_type]
    kwargs: dict[str, Any] = {
        "name": field_name(namespace, key),
        "label": descriptor.label,
        "description": descriptor.description,
        "notes": descriptor.notes,
        "icon": descriptor.icon,
        "collapsed": (
            COLLAPSED_BLANK if descriptor.collapsed is None else descriptor.collapsed
        ),
    }
    if field_class is SelectField:
        options = descriptor.options
        kwargs["options"] = dict(options) if options is not None else binary_options()
    elif descriptor.placeholder and "placeholder" in _declared(field_class):
        kwargs["placeholder"] = descriptor.placeholder
    return field_class(**kwargs)


def compile_all(
    namespace: str,
    table: Mapping[str, OptionDescriptor | Mapping[str, Any]]
    | Iterable[tuple[str, OptionDescriptor | Mapping[str, Any]]],
) -> list[FieldSpec]:
    """Compile a provider table, keeping its authoring order."""
    items = table.items() if isinstance(table, Mapping) else table
    return [compile_option(namespace, key, descriptor) for key, descriptor in items]
