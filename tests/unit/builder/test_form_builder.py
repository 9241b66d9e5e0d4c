"""Unit tests for the form builder state machine"""

import json
import logging

import pytest

from cms.builder import FormBuilder
from cms.models.contracts.form_schema import FormSchema
from tests.helpers.factories import make_field, make_schema


def _abc_schema():
    return make_schema(
        make_field(id="A", name="a", label="A"),
        make_field(id="B", name="b", label="B"),
        make_field(id="C", name="c", label="C"),
    )


@pytest.fixture
def changes():
    return []


@pytest.fixture
def builder(changes):
    return FormBuilder(initial_schema=_abc_schema(), on_change=changes.append)


class FakeClipboard:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("clipboard unavailable")
        self.text = text


class TestReorder:
    def test_move_last_before_first(self, builder, changes):
        """Dragging C over A yields C, A, B with ids preserved"""
        assert builder.reorder("C", "A") is True

        assert builder.field_ids() == ["C", "A", "B"]
        assert [f["name"] for f in builder.fields] == ["c", "a", "b"]
        assert len(changes) == 1
        assert [f["id"] for f in changes[0]["fields"]] == ["C", "A", "B"]

    def test_move_first_after_last(self, builder):
        builder.reorder("A", "C")
        assert builder.field_ids() == ["B", "C", "A"]

    def test_adjacent_swap(self, builder):
        builder.reorder("B", "A")
        assert builder.field_ids() == ["B", "A", "C"]

    @pytest.mark.parametrize("active,over", [("A", "A"), ("A", None), ("X", "A"), ("A", "X")])
    def test_no_op(self, builder, changes, active, over):
        assert builder.reorder(active, over) is False
        assert builder.field_ids() == ["A", "B", "C"]
        assert changes == []


class TestFieldTransitions:
    def test_add_field_appends_empty_field(self, builder, changes):
        new_id = builder.add_field()

        assert builder.field_ids()[-1] == new_id
        added = builder.fields[-1]
        assert added["name"] == ""
        assert added["label"] == "New Field"
        assert added["type"] == "text"
        assert len(changes) == 1

    def test_add_field_never_rejects_duplicates(self, changes):
        empty = FormBuilder(on_change=changes.append)
        empty.add_field()
        empty.add_field()
        assert [f["name"] for f in empty.fields] == ["", ""]
        assert len(changes) == 2

    def test_update_field_merges_in_place(self, builder, changes):
        assert builder.update_field("B", {"label": "Bee", "required": False}) is True

        field = builder.fields[1]
        assert field["id"] == "B"
        assert field["label"] == "Bee"
        assert field["required"] is False
        assert field["name"] == "b"
        assert len(changes) == 1

    def test_update_field_cannot_change_id(self, builder):
        builder.update_field("B", {"id": "Z"})
        assert builder.field_ids() == ["A", "B", "C"]

    def test_update_field_allows_duplicate_name(self, builder):
        """Uniqueness is left to the validator at submit time"""
        builder.update_field("B", {"name": "a"})
        assert [f["name"] for f in builder.fields] == ["a", "a", "c"]

    def test_update_unknown_field(self, builder, changes):
        assert builder.update_field("X", {"label": "x"}) is False
        assert changes == []

    def test_remove_field(self, builder, changes):
        assert builder.remove_field("B") is True
        assert builder.field_ids() == ["A", "C"]
        assert [f["name"] for f in builder.fields] == ["a", "c"]
        assert len(changes) == 1

    def test_set_options_from_text(self, builder):
        builder.set_options_from_text("A", " Red, Green ,, Blue ,")
        assert builder.fields[0]["options"] == ["Red", "Green", "Blue"]

    def test_update_validation_merges_and_clears(self, builder):
        builder.update_validation("A", {"minLength": 2, "maxLength": 10})
        builder.update_validation("A", {"maxLength": None, "pattern": "^[a-z]+$"})
        assert builder.fields[0]["validation"] == {"minLength": 2, "pattern": "^[a-z]+$"}

    def test_snapshots_are_independent(self, builder, changes):
        builder.update_field("A", {"options": ["x"]})
        changes[0]["fields"][0]["options"].append("mutated")
        assert builder.fields[0]["options"] == ["x"]


class TestNameEditing:
    def test_commit_trims_and_updates(self, builder, changes):
        builder.begin_name_edit("A")
        assert builder.ui_state("A").editing_name is True
        assert builder.ui_state("A").temp_name == "a"

        builder.set_temp_name("A", "  applicant  ")
        assert builder.commit_name_edit("A") is True

        assert builder.fields[0]["name"] == "applicant"
        assert builder.ui_state("A").editing_name is False
        assert len(changes) == 1

    def test_commit_unchanged_name_is_silent(self, builder, changes):
        builder.begin_name_edit("A")
        builder.set_temp_name("A", " a ")
        assert builder.commit_name_edit("A") is False
        assert changes == []

    def test_cancel_restores_temp_name(self, builder, changes):
        builder.begin_name_edit("A")
        builder.set_temp_name("A", "other")
        builder.cancel_name_edit("A")

        assert builder.ui_state("A").temp_name == "a"
        assert builder.ui_state("A").editing_name is False
        assert builder.fields[0]["name"] == "a"
        assert changes == []


class TestViewState:
    def test_toggles_do_not_touch_schema(self, builder, changes):
        assert builder.toggle_expanded("A") is True
        assert builder.toggle_validation("A") is True
        assert builder.toggle_expanded("A") is False

        assert changes == []
        assert "expanded" not in builder.fields[0]

    def test_reset_replaces_without_notifying(self, builder, changes):
        builder.toggle_expanded("A")
        builder.reset(make_schema(make_field(id="Z", name="z")))

        assert builder.field_ids() == ["Z"]
        assert builder.ui_state("A").expanded is False
        assert changes == []

    def test_reset_with_none_keeps_schema(self, builder):
        builder.reset(None)
        assert builder.field_ids() == ["A", "B", "C"]

    def test_accepts_typed_schema(self):
        builder = FormBuilder(initial_schema=FormSchema.model_validate(_abc_schema()))
        assert builder.schema == _abc_schema()


class TestCopySchema:
    def test_writes_pretty_json(self, builder):
        clipboard = FakeClipboard()

        assert builder.copy_schema_to_clipboard(clipboard) is True

        assert clipboard.text == json.dumps(_abc_schema(), indent=2)
        assert builder.to_json() == clipboard.text

    def test_failure_logged_not_raised(self, builder, changes, caplog):
        with caplog.at_level(logging.ERROR, logger="cms.builder.form_builder"):
            assert builder.copy_schema_to_clipboard(FakeClipboard(fail=True)) is False

        assert "Failed to copy schema" in caplog.text
        assert builder.field_ids() == ["A", "B", "C"]
        assert changes == []
