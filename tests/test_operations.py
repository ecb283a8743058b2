"""Tests for partial card update operations."""

import pytest

from super_message.errors import ValidationError
from super_message.models.operations import (
    APPEND_INDEX,
    InsertOp,
    RemoveOp,
    SetOp,
    UnsetOp,
    UpdatePart,
)


class TestSetOp:
    def test_last_write_wins(self):
        op = SetOp().add("title", "a").add("title", "b").add("list.0.done", True)
        assert op.to_wire() == {"$set": {"title": "b", "list.0.done": True}}

    def test_delete(self):
        op = SetOp().add("a", 1).add("b", 2).delete("a").delete("missing")
        assert op.values == {"b": 2}


class TestUnsetOp:
    def test_duplicates_are_ignored(self):
        op = UnsetOp().add("a", "b").add("a")
        assert op.to_wire() == {"$unset": ["a", "b"]}

    def test_delete_drops_exactly_one_path(self):
        op = UnsetOp().add("a", "b", "c").delete("b")
        assert op.key_paths == ["a", "c"]

    def test_delete_first_and_last(self):
        op = UnsetOp().add("a", "b", "c").delete("a").delete("c")
        assert op.key_paths == ["b"]

    def test_delete_missing_path_is_a_noop(self):
        op = UnsetOp().add("a").delete("z")
        assert op.key_paths == ["a"]


class TestInsertOp:
    def test_append_wire_format(self):
        op = InsertOp.append("list", [{"id": 1, "title": "milk"}])
        assert op.to_wire() == {
            "$insert": {"$keypath": "list", "$ele": [{"id": 1, "title": "milk"}], "$index": APPEND_INDEX}
        }

    def test_tuple_is_accepted(self):
        assert InsertOp.append("list", (1, 2)).insert.elements == [1, 2]

    @pytest.mark.parametrize("values", [None, "abc", b"abc", {"a": 1}, {1, 2}, 5])
    def test_rejects_non_sequence(self, values):
        with pytest.raises(ValidationError) as exc:
            InsertOp.append("list", values)
        assert exc.value.field == "values"


class TestRemoveOp:
    def test_wire_format(self):
        assert RemoveOp.at("list", [0, 2]).to_wire() == {"$remove": {"$keypath": "list", "$indexes": [0, 2]}}


class TestUpdatePart:
    def test_ops_keep_submission_order(self):
        batch = UpdatePart()
        batch.add_set(SetOp().add("list.0.done", True))
        batch.add_remove(RemoveOp.at("list", [0]))
        assert batch.to_wire() == {
            "ops": [
                {"$set": {"list.0.done": True}},
                {"$remove": {"$keypath": "list", "$indexes": [0]}},
            ]
        }

    def test_none_ops_are_ignored(self):
        batch = UpdatePart().add_set(None).add_unset(None).add_insert(None).add_remove(None)
        assert batch.ops == []

    def test_empty_batch_omits_everything(self):
        assert UpdatePart().to_wire() == {}

    def test_flags(self):
        batch = UpdatePart().ignore_errors().mark_no_more_contents().add(UnsetOp().add("draft"))
        assert batch.to_wire() == {
            "ignoreError": True,
            "noMoreContents": True,
            "ops": [{"$unset": ["draft"]}],
        }

    def test_parse_wire_back_into_typed_ops(self):
        batch = (
            UpdatePart()
            .add(SetOp().add("count", 3))
            .add(UnsetOp().add("draft"))
            .add(InsertOp.append("list", ["x"]))
            .add(RemoveOp.at("list", [1]))
        )
        parsed = UpdatePart.model_validate(batch.to_wire())
        assert [type(op) for op in parsed.ops] == [SetOp, UnsetOp, InsertOp, RemoveOp]
        assert parsed.to_wire() == batch.to_wire()
