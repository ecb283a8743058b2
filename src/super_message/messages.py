"""
Messages REST API — push, update and delete channel messages.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from super_message.errors import InfrastructureError, ValidationError
from super_message.models.message import CreateMessageRequest, CreateMessageResult, UpdateMessageRequest
from super_message.transport.http import HttpClient


def _check_message_id(message_id: int) -> None:
    if not isinstance(message_id, int) or message_id <= 0:
        raise ValidationError("message id is required", field="message_id")


def _invalid_arguments(e: PydanticValidationError) -> ValidationError:
    error = e.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else None
    return ValidationError(f"invalid message arguments: {error['msg']}", field=field)


class MessagesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(
        self,
        template_id: str,
        template_version: int,
        title: str,
        data: Optional[dict[str, Any]] = None,
        recipients: Optional[list[str]] = None,
        to_all: bool = False,
    ) -> int:
        """Push a message to the channel, or only to ``recipients``. Returns the new message id."""
        try:
            request = CreateMessageRequest(
                template_id=template_id,
                template_version=template_version,
                title=title,
                data=data,
                recipients=recipients or [],
                to_all=to_all,
            )
        except PydanticValidationError as e:
            raise _invalid_arguments(e) from e
        request = request.checked()
        result = await self._http.post("/messages", request.to_wire())
        try:
            return CreateMessageResult.model_validate(result).id
        except PydanticValidationError as e:
            raise InfrastructureError(f"malformed create message response: {result!r}") from e

    async def update(
        self,
        message_id: int,
        template_id: str,
        template_version: int,
        title: str,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        """Replace template, title and data of an existing message. Recipients cannot change."""
        _check_message_id(message_id)
        try:
            request = UpdateMessageRequest(
                id=message_id,
                template_id=template_id,
                template_version=template_version,
                title=title,
                data=data,
            )
        except PydanticValidationError as e:
            raise _invalid_arguments(e) from e
        request = request.checked()
        await self._http.put("/messages", request.to_wire())

    async def delete(self, message_id: int) -> None:
        _check_message_id(message_id)
        await self._http.delete("/messages", params={"id": message_id})
