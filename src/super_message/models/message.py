"""
Message push models — POST/PUT /v1/messages.
"""

from typing import Any, Optional

from pydantic import Field

from super_message.errors import ValidationError
from super_message.models.envelope import WireModel


class MessageContent(WireModel):
    # template id and version come from the template management console
    template_id: str = Field(alias="templateID")
    template_version: int = Field(alias="templateVersion")
    # shown in the channel list and in OS notifications
    title: str
    data: Optional[dict[str, Any]] = None

    def checked(self) -> "MessageContent":
        """Return a trimmed copy, raising ValidationError on missing fields."""
        template_id = self.template_id.strip()
        if not template_id:
            raise ValidationError("template id is required", field="template_id")
        if self.template_version < 1:
            raise ValidationError(
                "invalid template version, version number must be greater than 0",
                field="template_version",
            )
        title = self.title.strip()
        if not title:
            raise ValidationError("message title is required", field="title")
        return self.model_copy(update={"template_id": template_id, "title": title})


class CreateMessageRequest(MessageContent):
    # leave recipients empty and set to_all to push to every channel member
    recipients: list[str] = Field(default_factory=list)
    to_all: bool = Field(default=False, alias="toAll")


class UpdateMessageRequest(MessageContent):
    id: int


class CreateMessageResult(WireModel):
    id: int
