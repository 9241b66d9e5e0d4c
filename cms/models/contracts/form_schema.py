"""
Form schema contract models.

A form schema is an ordered list of field definitions. Each field kind is its
own model and the union is discriminated on ``type``, so an unknown type can
never be parsed into a field. Wire keys are camelCase and dumps only include
keys that were set, which keeps stored schemas round-tripping through JSON.

Structural rules that span fields (unique names/ids) and the reproducible
error messages live in cms.services.form_schema_validator; parse raw payloads
through that module rather than calling FormSchema.model_validate directly.
"""

from typing import Annotated, Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from cms.models.enums import FieldType


class WireModel(BaseModel):
    """Base for models whose JSON keys are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys, only the keys that were set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# ==================== FIELD MODELS ====================


class FieldValidation(WireModel):
    """Per-field validation rules"""
    min_length: int | None = None
    max_length: int | None = None
    min: int | float | None = None
    max: int | float | None = None
    pattern: str | None = Field(default=None, description="Regex source string")
    custom_error_message: str | None = None


class _FieldBase(WireModel):
    id: str = Field(..., min_length=1, description="Client-generated id, stable across edits")
    name: str = Field(..., min_length=1, description="Storage key for submitted values")
    label: str = Field(..., min_length=1)
    placeholder: str | None = None
    required: bool | None = None
    default_value: str | int | float | bool | None = None
    options: list[str] | None = None
    validation: FieldValidation | None = None


class TextField(_FieldBase):
    type: Literal["text"] = "text"


class TextareaField(_FieldBase):
    type: Literal["textarea"] = "textarea"


class NumberField(_FieldBase):
    type: Literal["number"] = "number"


class EmailField(_FieldBase):
    type: Literal["email"] = "email"


class DateField(_FieldBase):
    type: Literal["date"] = "date"


class CheckboxField(_FieldBase):
    type: Literal["checkbox"] = "checkbox"


class SelectField(_FieldBase):
    type: Literal["select"] = "select"
    options: list[str] = Field(..., min_length=1)


FieldDefinition = Annotated[
    Union[
        TextField,
        TextareaField,
        NumberField,
        EmailField,
        DateField,
        CheckboxField,
        SelectField,
    ],
    Field(discriminator="type"),
]

field_definition_adapter: TypeAdapter[FieldDefinition] = TypeAdapter(FieldDefinition)


class FormSchema(WireModel):
    """Ordered field definitions; order is display/tab order."""
    fields: list[FieldDefinition] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        # Each field keeps its own set keys; the list itself is always emitted.
        return {"fields": [field.to_wire() for field in self.fields]}


# Ordered (value, label) pairs for field type pickers
FIELD_TYPE_CHOICES: tuple[tuple[str, str], ...] = (
    (FieldType.TEXT.value, "Text"),
    (FieldType.TEXTAREA.value, "Textarea"),
    (FieldType.NUMBER.value, "Number"),
    (FieldType.EMAIL.value, "Email"),
    (FieldType.DATE.value, "Date"),
    (FieldType.CHECKBOX.value, "Checkbox"),
    (FieldType.SELECT.value, "Select"),
)


def create_empty_field() -> TextField:
    """
    Build a new, unvalidated text field with a fresh id.

    Name is left empty for the editor to fill in; nothing is checked here.
    """
    return TextField.model_construct(
        _fields_set={
            "id", "name", "type", "label", "placeholder", "required",
            "default_value", "options", "validation",
        },
        id=str(uuid4()),
        name="",
        type="text",
        label="New Field",
        placeholder="",
        required=False,
        default_value="",
        options=[],
        validation=FieldValidation(),
    )
