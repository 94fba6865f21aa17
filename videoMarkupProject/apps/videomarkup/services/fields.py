from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

# Collapse states understood by the config template.
COLLAPSED_NO = 0
COLLAPSED_YES = 1
COLLAPSED_BLANK = 2


class Toggle(str, Enum):
    """Stored state of a binary provider option."""

    UNSET = ""
    DISABLED = "0"
    ENABLED = "1"


@dataclass(frozen=True)
class OptionDescriptor:
    """Author-supplied description of one configurable provider parameter."""

    label: Any
    description: Any = ""
    notes: Any = ""
    icon: str = ""
    type: str | None = None
    options: Mapping[str, Any] | None = None
    collapsed: int | None = None
    placeholder: str = ""


@dataclass(frozen=True, kw_only=True)
class BaseField:
    name: str
    label: Any
    description: Any = ""
    notes: Any = ""
    icon: str = ""
    collapsed: int = COLLAPSED_NO
    column_width: int = 100

    def as_dict(self) -> dict[str, Any]:
        """Return the populated attributes, dropping blank optional ones."""
        data = asdict(self)
        for key in ("description", "notes", "icon", "placeholder"):
            if key in data and not data[key]:
                del data[key]
        if data.get("column_width") == 100:
            del data["column_width"]
        return data


@dataclass(frozen=True, kw_only=True)
class SelectField(BaseField):
    options: dict[str, Any] = field(default_factory=dict)
    type: str = field(default="select", init=False)


@dataclass(frozen=True, kw_only=True)
class TextField(BaseField):
    placeholder: str = ""
    type: str = field(default="text", init=False)


@dataclass(frozen=True, kw_only=True)
class IntegerField(BaseField):
    min_value: int | None = 0
    placeholder: str = ""
    type: str = field(default="integer", init=False)


@dataclass(frozen=True, kw_only=True)
class TextareaField(BaseField):
    rows: int = 5
    placeholder: str = ""
    attrs: dict[str, Any] = field(default_factory=dict)
    type: str = field(default="textarea", init=False)


@dataclass(frozen=True, kw_only=True)
class MarkupField(BaseField):
    """Read-only block of pre-rendered HTML."""

    value: str = ""
    type: str = field(default="markup", init=False)


FieldSpec = Union[SelectField, TextField, IntegerField, TextareaField, MarkupField]

FIELD_CLASSES: dict[str, type] = {
    "select": SelectField,
    "text": TextField,
    "integer": IntegerField,
    "textarea": TextareaField,
    "markup": MarkupField,
}


@dataclass(frozen=True)
class Fieldset:
    label: Any
    fields: list = field(default_factory=list)
    icon: str = ""
    notes: Any = ""
    collapsed: int = COLLAPSED_NO
    type: str = field(default="fieldset", init=False)
