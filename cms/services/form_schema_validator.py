"""
Form Schema Validator

Structural validation of a raw form schema payload before it is persisted.

The validator works on the JSON exactly as received (dicts and lists), not on
parsed models, so the first reported violation is stable for a given payload.
Fields are scanned once, left to right, with running sets of seen names and
ids; a duplicate is reported at its second occurrence.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from pydantic import ValidationError

from cms.core.exceptions import ValidationFailedError
from cms.models.contracts.form_schema import FormSchema
from cms.models.enums import FieldType

logger = logging.getLogger(__name__)

VALID_FIELD_TYPES: tuple[str, ...] = tuple(t.value for t in FieldType)


@dataclass(frozen=True)
class SchemaViolation:
    """One broken rule, located by field index and (when known) field name."""
    message: str
    rule: str
    index: int | None = None
    field: str | None = None

    def to_error(self) -> ValidationFailedError:
        return ValidationFailedError(
            self.message, field=self.field, rule=self.rule, index=self.index
        )


def _is_number(value: Any) -> bool:
    # bool is an int subclass; True is not a usable length
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _field_label(field: dict[str, Any]) -> str | None:
    name = field.get("name")
    if isinstance(name, str) and name:
        return name
    field_id = field.get("id")
    return field_id if isinstance(field_id, str) and field_id else None


def _validation_violations(
    rules: dict[str, Any], index: int, field: str | None
) -> Iterator[SchemaViolation]:
    for key in ("minLength", "maxLength", "min", "max"):
        value = rules.get(key)
        if value is not None and not _is_number(value):
            yield SchemaViolation(f"{key} must be a number", key, index, field)
            return

    min_length = rules.get("minLength")
    max_length = rules.get("maxLength")
    if min_length is not None and min_length < 0:
        yield SchemaViolation("minLength must be non-negative", "minLength", index, field)
        return
    if max_length is not None and max_length < 0:
        yield SchemaViolation("maxLength must be non-negative", "maxLength", index, field)
        return
    if min_length is not None and max_length is not None and min_length > max_length:
        yield SchemaViolation(
            "minLength cannot be greater than maxLength", "minLength", index, field
        )
        return

    low = rules.get("min")
    high = rules.get("max")
    if low is not None and high is not None and low > high:
        yield SchemaViolation("min cannot be greater than max", "min", index, field)


def iter_violations(payload: Any) -> Iterator[SchemaViolation]:
    """
    Yield every structural violation in scan order.

    At most one violation is reported per field: the first rule it breaks.
    A field that is missing a required key is not added to the seen sets.

    Args:
        payload: Raw schema, expected shape ``{"fields": [...]}``

    Yields:
        SchemaViolation for each offending field, left to right
    """
    fields = payload.get("fields") if isinstance(payload, dict) else None
    if not isinstance(fields, list):
        yield SchemaViolation("Invalid form schema: fields must be an array", "fields")
        return

    seen_names: set[str] = set()
    seen_ids: set[str] = set()

    for index, field in enumerate(fields):
        # a non-string value counts as missing
        if not isinstance(field, dict) or not all(
            isinstance(field.get(key), str) and field[key]
            for key in ("id", "name", "type", "label")
        ):
            yield SchemaViolation(
                "Invalid field: id, name, type, and label are required",
                "required",
                index,
                _field_label(field) if isinstance(field, dict) else None,
            )
            continue

        name = field["name"]
        field_id = field["id"]
        label = _field_label(field)

        if name in seen_names:
            yield SchemaViolation(f"Duplicate field name: {name}", "duplicate_name", index, name)
            continue
        seen_names.add(name)

        if field_id in seen_ids:
            yield SchemaViolation(f"Duplicate field ID: {field_id}", "duplicate_id", index, label)
            continue
        seen_ids.add(field_id)

        field_type = field["type"]
        if field_type not in VALID_FIELD_TYPES:
            yield SchemaViolation(
                f"Invalid field type: {field_type}. "
                f"Valid types are: {', '.join(VALID_FIELD_TYPES)}",
                "type",
                index,
                label,
            )
            continue

        if field_type == FieldType.SELECT.value:
            options = field.get("options")
            if not isinstance(options, list) or not options:
                yield SchemaViolation(
                    "Select fields must have at least one option", "options", index, label
                )
                continue

        rules = field.get("validation")
        if isinstance(rules, dict):
            yield from _validation_violations(rules, index, label)


def validate_form_schema(payload: Any) -> None:
    """
    Validate a raw form schema.

    Raises:
        ValidationFailedError: For the first violation found
    """
    for violation in iter_violations(payload):
        logger.warning(
            f"Rejected form schema: {violation.message} "
            f"(field={violation.field}, index={violation.index})"
        )
        raise violation.to_error()


def parse_form_schema(payload: Any) -> FormSchema:
    """
    Validate a raw form schema, then parse it into typed field models.

    Args:
        payload: Raw schema, shape ``{"fields": [...]}``

    Returns:
        Parsed FormSchema

    Raises:
        ValidationFailedError: For the first violation found, or when a value
            has the wrong JSON type (e.g. a numeric label)
    """
    validate_form_schema(payload)
    try:
        return FormSchema.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        loc = first["loc"]
        index = loc[1] if len(loc) > 1 and isinstance(loc[1], int) else None
        field = None
        if index is not None:
            field = _field_label(payload["fields"][index])
        rule = str(loc[-1]) if loc else "type"
        message = f"Invalid value for {rule}: {first['msg']}"
        logger.warning(f"Rejected form schema: {message} (field={field}, index={index})")
        raise ValidationFailedError(message, field=field, rule=rule, index=index) from e
