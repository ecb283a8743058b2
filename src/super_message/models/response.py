"""
Card response envelope — the body returned to the client for a card action.
"""

from enum import IntEnum
from typing import Any, ClassVar, Optional

from pydantic import Field, model_validator

from super_message.models.envelope import WireModel
from super_message.models.operations import UpdatePart

DISMISS_DURATION = 1500  # ms
RESPONSE_VERSION = 0


class TipType(IntEnum):
    INFO = 0
    SUCCESS = 1
    WARNING = 2
    ERROR = 3


class Dismiss(WireModel):
    """Transient tip shown by the client, then dismissed after ``duration`` ms."""
    type: TipType = TipType.INFO
    duration: int = DISMISS_DURATION
    tip: str = ""


class DeleteMessage(WireModel):
    id: int = 0
    local_id: int = Field(default=0, alias="localID")

    omit_empty: ClassVar[frozenset[str]] = frozenset({"id", "local_id"})


class UpdateMessage(WireModel):
    id: int = 0
    local_id: int = Field(default=0, alias="localID")
    title: str = ""
    data: Optional[Any] = None
    template_id: str = Field(default="", alias="tid")
    template_version: int = Field(default=0, alias="tv")

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {"id", "local_id", "title", "template_id", "template_version"}
    )


class NewMessage(WireModel):
    template_id: str = Field(default="", alias="tid")
    template_version: int = Field(default=0, alias="tv")
    title: str = ""
    data: Optional[Any] = None

    omit_empty: ClassVar[frozenset[str]] = frozenset({"template_id", "template_version", "title"})


# envelope field holding each primary action
PRIMARY_FIELDS = ("delete", "update_part", "update", "new")


class ResponseEnvelope(WireModel):
    delete: Optional[DeleteMessage] = None
    update_part: Optional[UpdatePart] = Field(default=None, alias="updatePart")
    update: Optional[UpdateMessage] = None
    new: Optional[NewMessage] = None
    dismiss: Optional[Dismiss] = None
    version: int = RESPONSE_VERSION

    @model_validator(mode="after")
    def _single_primary(self) -> "ResponseEnvelope":
        present = [name for name in PRIMARY_FIELDS if getattr(self, name) is not None]
        if len(present) > 1:
            raise ValueError(f"at most one primary action allowed, got {', '.join(present)}")
        return self

    @property
    def primary(self) -> Optional[WireModel]:
        for name in PRIMARY_FIELDS:
            action = getattr(self, name)
            if action is not None:
                return action
        return None
