"""Unit tests for form schema contract models"""

import json

import pytest
from pydantic import ValidationError

from cms.models.contracts.form_schema import (
    FIELD_TYPE_CHOICES,
    CheckboxField,
    FormSchema,
    NumberField,
    SelectField,
    TextField,
    create_empty_field,
    field_definition_adapter,
)
from cms.models.enums import FieldType
from tests.helpers.factories import make_field, make_schema


class TestFieldDefinitionUnion:
    """The field union is discriminated on type"""

    @pytest.mark.parametrize(
        "field_type,model",
        [("text", TextField), ("number", NumberField), ("checkbox", CheckboxField)],
    )
    def test_type_selects_model(self, field_type, model):
        """Each type value parses into its own model"""
        field = field_definition_adapter.validate_python(make_field(type=field_type))
        assert isinstance(field, model)

    def test_select_with_options(self):
        field = field_definition_adapter.validate_python(
            make_field(type="select", options=["A", "B"])
        )
        assert isinstance(field, SelectField)
        assert field.options == ["A", "B"]

    def test_unknown_type_rejected(self):
        """Types outside the closed set never parse"""
        with pytest.raises(ValidationError):
            field_definition_adapter.validate_python(make_field(type="color"))

    def test_select_requires_options(self):
        with pytest.raises(ValidationError):
            field_definition_adapter.validate_python(make_field(type="select", options=[]))

    def test_camel_case_keys_accepted(self):
        field = field_definition_adapter.validate_python(
            make_field(defaultValue="x", validation={"minLength": 1, "customErrorMessage": "bad"})
        )
        assert field.default_value == "x"
        assert field.validation.min_length == 1
        assert field.validation.custom_error_message == "bad"


class TestWireFormat:
    """Dumps use camelCase and only the keys that were sent"""

    def test_round_trip_preserves_payload(self):
        payload = make_schema(
            make_field(),
            make_field(
                id="f2",
                name="kind",
                type="select",
                label="Kind",
                options=["A"],
                defaultValue="A",
                validation={"maxLength": 5},
            ),
        )

        schema = FormSchema.model_validate(payload)

        assert schema.to_wire() == payload
        assert json.loads(json.dumps(schema.to_wire())) == payload

    def test_unset_optional_keys_omitted(self):
        wire = FormSchema.model_validate(make_schema(make_field())).to_wire()
        assert set(wire["fields"][0]) == {"id", "name", "type", "label", "required"}

    def test_order_preserved(self):
        payload = make_schema(
            make_field(id="a", name="a"), make_field(id="b", name="b"), make_field(id="c", name="c")
        )
        schema = FormSchema.model_validate(payload)
        assert [f.id for f in schema.fields] == ["a", "b", "c"]


class TestCreateEmptyField:
    def test_defaults(self):
        wire = create_empty_field().to_wire()

        assert wire["type"] == "text"
        assert wire["name"] == ""
        assert wire["label"] == "New Field"
        assert wire["placeholder"] == ""
        assert wire["required"] is False
        assert wire["defaultValue"] == ""
        assert wire["options"] == []
        assert wire["validation"] == {}

    def test_fresh_id_each_call(self):
        assert create_empty_field().id != create_empty_field().id


def test_field_type_choices_follow_enum_order():
    assert [value for value, _ in FIELD_TYPE_CHOICES] == [t.value for t in FieldType]
