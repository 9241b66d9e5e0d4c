"""Unit tests for the form schema validator"""

import pytest

from cms.core.exceptions import ValidationFailedError
from cms.models.contracts.form_schema import SelectField
from cms.services.form_schema_validator import (
    iter_violations,
    parse_form_schema,
    validate_form_schema,
)
from tests.helpers.factories import make_field, make_schema


def _message(payload) -> str:
    with pytest.raises(ValidationFailedError) as exc_info:
        validate_form_schema(payload)
    return exc_info.value.message


class TestSchemaShape:
    @pytest.mark.parametrize("payload", [None, [], {"fields": "nope"}, {"fields": None}, {}])
    def test_fields_must_be_array(self, payload):
        assert _message(payload) == "Invalid form schema: fields must be an array"

    def test_empty_fields_valid(self):
        validate_form_schema(make_schema())


class TestRequiredKeys:
    @pytest.mark.parametrize("key", ["id", "name", "type", "label"])
    def test_missing_key(self, key):
        field = make_field()
        del field[key]
        assert _message(make_schema(field)) == "Invalid field: id, name, type, and label are required"

    def test_empty_value_counts_as_missing(self):
        assert _message(make_schema(make_field(name=""))) == (
            "Invalid field: id, name, type, and label are required"
        )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ["a"]},
            {"id": {"x": 1}},
            {"type": ["text"]},
            {"label": 5},
        ],
    )
    def test_non_string_value_counts_as_missing(self, overrides):
        payload = make_schema(make_field(id="f0", name="first"), make_field(**overrides))

        with pytest.raises(ValidationFailedError) as exc_info:
            validate_form_schema(payload)

        assert exc_info.value.message == "Invalid field: id, name, type, and label are required"
        assert exc_info.value.rule == "required"
        assert exc_info.value.index == 1

    def test_non_object_field(self):
        assert _message(make_schema("applicant")) == (
            "Invalid field: id, name, type, and label are required"
        )


class TestDuplicates:
    def test_duplicate_name_references_name(self):
        """Two fields named email fail with a duplicate-name error naming email"""
        payload = make_schema(
            make_field(id="f1", name="email", type="email", label="Email"),
            make_field(id="f2", name="email", type="email", label="Email again"),
        )

        with pytest.raises(ValidationFailedError) as exc_info:
            validate_form_schema(payload)

        assert exc_info.value.message == "Duplicate field name: email"
        assert exc_info.value.field == "email"
        assert exc_info.value.rule == "duplicate_name"
        assert exc_info.value.index == 1

    def test_duplicate_id(self):
        payload = make_schema(make_field(id="f1", name="a"), make_field(id="f1", name="b"))
        assert _message(payload) == "Duplicate field ID: f1"

    def test_name_checked_before_id(self):
        payload = make_schema(make_field(id="f1", name="a"), make_field(id="f1", name="a"))
        assert _message(payload) == "Duplicate field name: a"


class TestFieldType:
    def test_invalid_type_lists_valid_set(self):
        assert _message(make_schema(make_field(type="color"))) == (
            "Invalid field type: color. "
            "Valid types are: text, textarea, number, email, date, checkbox, select"
        )

    def test_select_without_options_fails(self):
        payload = make_schema(make_field(type="select", options=[]))
        assert _message(payload) == "Select fields must have at least one option"

    def test_select_missing_options_fails(self):
        payload = make_schema(make_field(type="select"))
        assert _message(payload) == "Select fields must have at least one option"

    def test_select_with_one_option_passes(self):
        validate_form_schema(
            make_schema(make_field(), make_field(id="f2", name="kind", type="select", options=["A"]))
        )


class TestValidationRules:
    def test_min_length_above_max_length_fails(self):
        payload = make_schema(make_field(validation={"minLength": 10, "maxLength": 5}))
        assert _message(payload) == "minLength cannot be greater than maxLength"

    def test_min_length_below_max_length_passes(self):
        validate_form_schema(make_schema(make_field(validation={"minLength": 5, "maxLength": 10})))

    def test_negative_min_length(self):
        payload = make_schema(make_field(validation={"minLength": -1}))
        assert _message(payload) == "minLength must be non-negative"

    def test_negative_max_length(self):
        payload = make_schema(make_field(validation={"maxLength": -3}))
        assert _message(payload) == "maxLength must be non-negative"

    def test_min_above_max(self):
        payload = make_schema(make_field(type="number", validation={"min": 10, "max": 1.5}))
        assert _message(payload) == "min cannot be greater than max"

    def test_equal_bounds_pass(self):
        validate_form_schema(
            make_schema(make_field(type="number", validation={"min": 3, "max": 3}))
        )

    @pytest.mark.parametrize("value", ["5", True, [1]])
    def test_non_numeric_bound(self, value):
        payload = make_schema(make_field(validation={"maxLength": value}))
        assert _message(payload) == "maxLength must be a number"


class TestScanOrder:
    def test_first_violation_wins(self):
        """Fields are scanned left to right; the earliest offending field is reported"""
        payload = make_schema(
            make_field(id="f1", name="a"),
            make_field(id="f2", name="a"),
            make_field(id="f3", name="c", type="color"),
        )
        assert _message(payload) == "Duplicate field name: a"

    def test_iter_violations_reports_each_field_in_order(self):
        payload = make_schema(
            make_field(id="f1", name="a"),
            make_field(id="f2", name="b", label=""),
            make_field(id="f3", name="a"),
            make_field(id="f4", name="d", type="select", options=[]),
        )

        violations = list(iter_violations(payload))

        assert [v.index for v in violations] == [1, 2, 3]
        assert [v.rule for v in violations] == ["required", "duplicate_name", "options"]

    def test_valid_schema_has_no_violations(self):
        assert list(iter_violations(make_schema(make_field()))) == []


class TestParseFormSchema:
    def test_returns_typed_schema(self):
        schema = parse_form_schema(
            make_schema(make_field(), make_field(id="f2", name="kind", type="select", options=["A"]))
        )
        assert isinstance(schema.fields[1], SelectField)

    def test_structural_error_raised_before_parsing(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_form_schema(make_schema(make_field(type="color")))
        assert exc_info.value.rule == "type"

    def test_wrong_json_type_reported_as_validation_error(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_form_schema(make_schema(make_field(options="A,B")))
        assert exc_info.value.index == 0
        assert exc_info.value.field == "applicant"
