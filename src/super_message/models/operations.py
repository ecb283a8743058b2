"""
Partial card updates — the ``updatePart`` payload.

A batch is an ordered list of operations over key-paths into the card's
data (``list.0.done``). The client applies them in order; with
``ignoreError`` it skips a failing op, otherwise it stops at the first
failure and keeps what was already applied.
"""

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Optional, Union

from pydantic import Field

from super_message.errors import ValidationError
from super_message.models.envelope import WireModel

# $index value meaning "append to the end of the target array"
APPEND_INDEX = -1


class _Op(WireModel):
    model_config = {"populate_by_name": True, "extra": "forbid"}


class SetOp(_Op):
    """$set — assign values at key-paths, creating or replacing them."""
    values: dict[str, Any] = Field(default_factory=dict, alias="$set")

    def add(self, key_path: str, value: Any) -> "SetOp":
        self.values[key_path] = value
        return self

    def delete(self, key_path: str) -> "SetOp":
        self.values.pop(key_path, None)
        return self


class UnsetOp(_Op):
    """$unset — remove key-paths from the card data."""
    key_paths: list[str] = Field(default_factory=list, alias="$unset")

    def add(self, *key_paths: str) -> "UnsetOp":
        for key_path in key_paths:
            if key_path not in self.key_paths:
                self.key_paths.append(key_path)
        return self

    def delete(self, key_path: str) -> "UnsetOp":
        """Drop a pending key-path; the others keep their order."""
        self.key_paths = [p for p in self.key_paths if p != key_path]
        return self


class Insertion(WireModel):
    key_path: str = Field(alias="$keypath")
    elements: list[Any] = Field(alias="$ele")
    index: int = Field(default=APPEND_INDEX, alias="$index")


class InsertOp(_Op):
    """$insert — add elements to an existing array."""
    insert: Insertion = Field(alias="$insert")

    @classmethod
    def append(cls, key_path: str, values: Sequence[Any]) -> "InsertOp":
        """Append ``values`` to the array at ``key_path``.

        Raises:
            ValidationError: If ``values`` is not a list or tuple-like sequence.
        """
        if (
            values is None
            or isinstance(values, (str, bytes, bytearray, Mapping))
            or not isinstance(values, Sequence)
        ):
            raise ValidationError(
                f"insert values must be an ordered sequence, got {type(values).__name__}",
                field="values",
            )
        return cls(insert=Insertion(key_path=key_path, elements=list(values)))


class Removal(WireModel):
    key_path: str = Field(alias="$keypath")
    indexes: list[int] = Field(alias="$indexes")


class RemoveOp(_Op):
    """$remove — delete array elements; the array shrinks.

    Indexes address the array as it is on the client before this batch runs.
    """
    remove: Removal = Field(alias="$remove")

    @classmethod
    def at(cls, key_path: str, indexes: Sequence[int]) -> "RemoveOp":
        return cls(remove=Removal(key_path=key_path, indexes=list(indexes)))


Operation = Union[SetOp, UnsetOp, InsertOp, RemoveOp]


class UpdatePart(WireModel):
    ignore_error: bool = Field(default=False, alias="ignoreError")
    no_more_contents: bool = Field(default=False, alias="noMoreContents")
    ops: list[Operation] = Field(default_factory=list)

    omit_empty: ClassVar[frozenset[str]] = frozenset({"ignore_error", "no_more_contents", "ops"})

    def add(self, op: Optional[Operation]) -> "UpdatePart":
        if op is not None:
            self.ops.append(op)
        return self

    def add_set(self, op: Optional[SetOp]) -> "UpdatePart":
        return self.add(op)

    def add_unset(self, op: Optional[UnsetOp]) -> "UpdatePart":
        return self.add(op)

    def add_insert(self, op: Optional[InsertOp]) -> "UpdatePart":
        return self.add(op)

    def add_remove(self, op: Optional[RemoveOp]) -> "UpdatePart":
        return self.add(op)

    def ignore_errors(self) -> "UpdatePart":
        self.ignore_error = True
        return self

    def mark_no_more_contents(self) -> "UpdatePart":
        """Tell the client paging has reached the end; it stops requesting more."""
        self.no_more_contents = True
        return self
