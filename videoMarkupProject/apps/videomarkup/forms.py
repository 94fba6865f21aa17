from dataclasses import dataclass
from typing import Any

from django import forms

from apps.videomarkup.services.fields import Fieldset, FieldSpec
from apps.videomarkup.services.layout import build_inputfields, iter_fields
from apps.videomarkup.services.settings_store import ModuleSettingsStore

widget_css_class = "input w-full"


def build_form_field(spec: FieldSpec) -> forms.Field | None:
    """Return the Django form field for a compiled spec; markup has none."""
    common = {
        "label": spec.label,
        "help_text": spec.description,
        "required": False,
    }
    if spec.type == "select":
        return forms.TypedChoiceField(
            choices=list(spec.options.items()),
            empty_value=None,
            widget=forms.Select(attrs={"class": widget_css_class}),
            **common,
        )
    if spec.type == "text":
        return forms.CharField(
            empty_value=None,
            widget=forms.TextInput(
                attrs={"class": widget_css_class, "placeholder": spec.placeholder}
            ),
            **common,
        )
    if spec.type == "integer":
        return forms.IntegerField(
            min_value=spec.min_value,
            widget=forms.NumberInput(
                attrs={"class": widget_css_class, "placeholder": spec.placeholder}
            ),
            **common,
        )
    if spec.type == "textarea":
        return forms.CharField(
            empty_value=None,
            strip=False,
            widget=forms.Textarea(
                attrs={
                    "class": widget_css_class,
                    "rows": spec.rows,
                    "placeholder": spec.placeholder,
                    **spec.attrs,
                }
            ),
            **common,
        )
    return None


@dataclass
class FieldRow:
    spec: FieldSpec
    field: Any = None


@dataclass
class Section:
    fieldset: Fieldset
    rows: list[FieldRow]


class VideoMarkupConfigForm(forms.Form):
    """Module configuration form assembled from the compiled layout."""

    def __init__(self, *args, store=None, cache_count=0, editor_attrs=None, **kwargs):
        self.store = store or ModuleSettingsStore()
        kwargs.setdefault("initial", self.store.values())
        super().__init__(*args, **kwargs)

        self.inputfields = build_inputfields(
            cache_count=cache_count, editor_attrs=editor_attrs
        )
        for spec in iter_fields(self.inputfields):
            form_field = build_form_field(spec)
            if form_field is not None:
                self.fields[spec.name] = form_field

        self.sections = [
            Section(
                fieldset=fieldset,
                rows=[
                    FieldRow(
                        spec=spec,
                        field=self[spec.name] if spec.name in self.fields else None,
                    )
                    for spec in fieldset.fields
                ],
            )
            for fieldset in self.inputfields
        ]

    def save(self) -> list[str]:
        """Persist cleaned values; returns the keys that changed."""
        return self.store.save(self.cleaned_data)
