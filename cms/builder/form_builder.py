"""
Form Builder

In-memory editor for a document type's form schema, driven by an admin UI.

The builder is deliberately permissive: it never rejects an edit, and
duplicate names or half-filled fields are only caught when the schema is
submitted and run through cms.services.form_schema_validator. For that
reason fields are held in their wire shape (camelCase dicts) rather than as
parsed field models, which would refuse incomplete input.

Every transition that changes the schema swaps in a new tuple of fields and
calls ``on_change`` once with a fresh ``{"fields": [...]}`` snapshot. Per-field
UI flags are view state only and never appear in the schema.
"""

import copy
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol

from cms.models.contracts.form_schema import FormSchema, create_empty_field

logger = logging.getLogger(__name__)

FieldData = dict[str, Any]
Schema = dict[str, Any]


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


@dataclass
class FieldUIState:
    """View-only flags for one field editor row."""
    expanded: bool = False
    show_validation: bool = False
    editing_name: bool = False
    temp_name: str = ""


class FormBuilder:
    """
    Ordered-list editor over a form schema.

    Example usage:
        builder = FormBuilder(initial_schema=stored, on_change=save_draft)
        field_id = builder.add_field()
        builder.update_field(field_id, {"name": "email", "type": "email"})
        builder.reorder(field_id, first_id)
    """

    def __init__(
        self,
        initial_schema: FormSchema | Mapping[str, Any] | None = None,
        on_change: Callable[[Schema], None] | None = None,
    ):
        self._on_change = on_change
        self._fields: tuple[FieldData, ...] = ()
        self._ui: dict[str, FieldUIState] = {}
        if initial_schema is not None:
            self._load(initial_schema)

    # ==================== STATE ====================

    @property
    def fields(self) -> tuple[FieldData, ...]:
        return tuple(copy.deepcopy(f) for f in self._fields)

    @property
    def schema(self) -> Schema:
        """Current schema as a JSON-ready snapshot."""
        return {"fields": [copy.deepcopy(f) for f in self._fields]}

    def field_ids(self) -> list[str]:
        return [f.get("id") for f in self._fields]

    def ui_state(self, field_id: str) -> FieldUIState:
        return self._ui.setdefault(field_id, FieldUIState())

    def to_json(self) -> str:
        """Pretty-printed schema, as shown in the preview panel."""
        return json.dumps(self.schema, indent=2)

    def _load(self, schema: FormSchema | Mapping[str, Any]) -> None:
        data = schema.to_wire() if isinstance(schema, FormSchema) else schema
        self._fields = tuple(copy.deepcopy(dict(f)) for f in data.get("fields") or [])
        self._ui = {}

    def _index_of(self, field_id: str | None) -> int | None:
        for index, field in enumerate(self._fields):
            if field.get("id") == field_id:
                return index
        return None

    def _commit(self, fields: tuple[FieldData, ...]) -> None:
        self._fields = fields
        if self._on_change is not None:
            self._on_change(self.schema)

    # ==================== TRANSITIONS ====================

    def reset(self, schema: FormSchema | Mapping[str, Any] | None) -> None:
        """
        Replace the schema when the embedding page loads a new one.

        Does not notify on_change; a None schema leaves the builder as is.
        """
        if schema is None:
            return
        self._load(schema)

    def add_field(self) -> str:
        """
        Append a new empty text field.

        Returns:
            The new field's id
        """
        field = create_empty_field().to_wire()
        self._commit(self._fields + (field,))
        return field["id"]

    def update_field(self, field_id: str, partial: Mapping[str, Any]) -> bool:
        """
        Merge ``partial`` (camelCase keys) into the field with ``field_id``.

        The field keeps its id and position. Nothing is validated here.

        Returns:
            False when no field has that id
        """
        index = self._index_of(field_id)
        if index is None:
            return False
        merged = {**self._fields[index], **copy.deepcopy(dict(partial)), "id": field_id}
        self._commit(self._fields[:index] + (merged,) + self._fields[index + 1:])
        return True

    def remove_field(self, field_id: str) -> bool:
        """Remove the field with ``field_id``; other fields are untouched."""
        index = self._index_of(field_id)
        if index is None:
            return False
        self._ui.pop(field_id, None)
        self._commit(self._fields[:index] + self._fields[index + 1:])
        return True

    def reorder(self, active_id: str, over_id: str | None) -> bool:
        """
        Handle a drag end: move ``active_id`` to the position of ``over_id``.

        Array-move semantics: the dragged field is removed and reinserted at
        the target index, shifting the fields in between by one.
        No-op when the ids are equal, ``over_id`` is None, or either is unknown.

        Returns:
            True when the order changed
        """
        if over_id is None or active_id == over_id:
            return False
        old_index = self._index_of(active_id)
        new_index = self._index_of(over_id)
        if old_index is None or new_index is None:
            return False

        fields = list(self._fields)
        fields.insert(new_index, fields.pop(old_index))
        self._commit(tuple(fields))
        return True

    def set_options_from_text(self, field_id: str, text: str) -> bool:
        """Set options from comma-separated text; blanks are dropped."""
        options = [option.strip() for option in text.split(",") if option.strip()]
        return self.update_field(field_id, {"options": options})

    def update_validation(self, field_id: str, partial: Mapping[str, Any]) -> bool:
        """
        Merge rules into the field's validation; a None value clears that rule.
        """
        index = self._index_of(field_id)
        if index is None:
            return False
        rules = dict(self._fields[index].get("validation") or {})
        for key, value in partial.items():
            if value is None:
                rules.pop(key, None)
            else:
                rules[key] = value
        return self.update_field(field_id, {"validation": rules})

    # ==================== INLINE NAME EDITING ====================

    def begin_name_edit(self, field_id: str) -> None:
        index = self._index_of(field_id)
        if index is None:
            return
        state = self.ui_state(field_id)
        state.editing_name = True
        state.temp_name = self._fields[index].get("name") or ""

    def set_temp_name(self, field_id: str, text: str) -> None:
        self.ui_state(field_id).temp_name = text

    def commit_name_edit(self, field_id: str) -> bool:
        """
        Apply the edited name (trimmed) if it differs from the current one.

        Uniqueness is not checked here.

        Returns:
            True when the field was updated
        """
        index = self._index_of(field_id)
        state = self.ui_state(field_id)
        state.editing_name = False
        if index is None:
            return False
        new_name = state.temp_name.strip()
        if new_name == self._fields[index].get("name"):
            return False
        return self.update_field(field_id, {"name": new_name})

    def cancel_name_edit(self, field_id: str) -> None:
        index = self._index_of(field_id)
        state = self.ui_state(field_id)
        state.editing_name = False
        name = self._fields[index].get("name") if index is not None else None
        state.temp_name = name or ""

    # ==================== VIEW TOGGLES ====================

    def toggle_expanded(self, field_id: str) -> bool:
        state = self.ui_state(field_id)
        state.expanded = not state.expanded
        return state.expanded

    def toggle_validation(self, field_id: str) -> bool:
        state = self.ui_state(field_id)
        state.show_validation = not state.show_validation
        return state.show_validation

    # ==================== SIDE EFFECTS ====================

    def copy_schema_to_clipboard(self, clipboard: Clipboard) -> bool:
        """
        Write the pretty-printed schema to ``clipboard``.

        Failures are logged and reported through the return value only.

        Returns:
            True when the clipboard accepted the text
        """
        try:
            clipboard.write_text(self.to_json())
        except Exception:
            logger.exception("Failed to copy schema")
            return False
        return True
