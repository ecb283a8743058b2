"""
Card responses — tell the client what to do with the card that sent a request.

One response carries at most one primary action (delete the card, replace
it, show a new one, or patch part of its data) plus an optional tip:

    Response().delete_this_message(ctx).show_success("Added to your list").output()

``output()`` is final: the client expects exactly one body per request.
"""

from typing import Any, Optional, Union

from super_message.errors import BusinessError, ResponseStateError, SuperMessageError, ValidationError
from super_message.models.operations import UpdatePart
from super_message.models.response import (
    DISMISS_DURATION,
    RESPONSE_VERSION,
    DeleteMessage,
    Dismiss,
    NewMessage,
    ResponseEnvelope,
    TipType,
    UpdateMessage,
)
from super_message.query import RequestContext

RESPONSE_CONTENT_TYPE = "application/json"

PrimaryAction = Union[DeleteMessage, UpdateMessage, NewMessage, UpdatePart]

_ENVELOPE_FIELD = {
    DeleteMessage: "delete",
    UpdateMessage: "update",
    NewMessage: "new",
    UpdatePart: "update_part",
}

INVALID_REQUEST_TIP = "Unable to parse the request"
INVALID_TOKEN_TIP = "Unable to verify your identity, the request token is invalid"
UNAVAILABLE_TIP = "Service temporarily unavailable"


def _envelope_field(action: PrimaryAction) -> str:
    for action_type, field in _ENVELOPE_FIELD.items():
        if isinstance(action, action_type):
            return field
    raise TypeError(f"not a primary response action: {type(action).__name__}")


class Response:
    def __init__(self, version: int = RESPONSE_VERSION):
        self._version = version
        self._primary: Optional[PrimaryAction] = None
        self._dismiss: Optional[Dismiss] = None
        self._sent = False

    @property
    def primary(self) -> Optional[PrimaryAction]:
        return self._primary

    @property
    def dismiss(self) -> Optional[Dismiss]:
        return self._dismiss

    @property
    def sent(self) -> bool:
        return self._sent

    def _ensure_open(self) -> None:
        if self._sent:
            raise ResponseStateError("response has already been output")

    def _set_primary(self, action: PrimaryAction) -> "Response":
        self._ensure_open()
        if self._primary is not None:
            raise ResponseStateError(
                f"response already carries a {_envelope_field(self._primary)} action"
            )
        self._primary = action
        return self

    def delete_this_message(self, ctx: RequestContext) -> "Response":
        """Delete the card the request came from."""
        return self._set_primary(DeleteMessage(id=ctx.message_id, local_id=ctx.message_local_id))

    def update_this_message(self, ctx: RequestContext, title: str, data: Any) -> "Response":
        """Replace title and data of the originating card, keeping its template."""
        return self.update_this_message_with_template(
            ctx, ctx.template_id, ctx.template_version, title, data,
        )

    def update_this_message_with_template(
        self, ctx: RequestContext, template_id: str, template_version: int, title: str, data: Any,
    ) -> "Response":
        return self._set_primary(UpdateMessage(
            id=ctx.message_id,
            local_id=ctx.message_local_id,
            title=title,
            data=data,
            template_id=template_id,
            template_version=template_version,
        ))

    def new_message(self, template_id: str, template_version: int, title: str, data: Any = None) -> "Response":
        """Show a new client-side card."""
        return self._set_primary(NewMessage(
            template_id=template_id,
            template_version=template_version,
            title=title,
            data=data,
        ))

    def update_part_data(self, update_part: UpdatePart) -> "Response":
        """Patch part of the originating card's data in place."""
        return self._set_primary(update_part)

    def show_tip(self, tip_type: TipType, tip: str, duration: int = DISMISS_DURATION) -> "Response":
        self._ensure_open()
        self._dismiss = Dismiss(type=tip_type, duration=duration, tip=tip)
        return self

    def show_info(self, tip: str, duration: int = DISMISS_DURATION) -> "Response":
        return self.show_tip(TipType.INFO, tip, duration)

    def show_success(self, tip: str, duration: int = DISMISS_DURATION) -> "Response":
        return self.show_tip(TipType.SUCCESS, tip, duration)

    def show_warning(self, tip: str, duration: int = DISMISS_DURATION) -> "Response":
        return self.show_tip(TipType.WARNING, tip, duration)

    def show_error(self, tip: str, duration: int = DISMISS_DURATION) -> "Response":
        return self.show_tip(TipType.ERROR, tip, duration)

    def envelope(self) -> ResponseEnvelope:
        fields: dict[str, Any] = {"dismiss": self._dismiss, "version": self._version}
        if self._primary is not None:
            fields[_envelope_field(self._primary)] = self._primary
        return ResponseEnvelope(**fields)

    def to_dict(self) -> dict[str, Any]:
        return self.envelope().to_wire()

    def output(self) -> bytes:
        """Encode the response body. Nothing may be added afterwards."""
        self._ensure_open()
        body = self.envelope().model_dump_json(by_alias=True).encode("utf-8")
        self._sent = True
        return body

    def __repr__(self) -> str:
        action = _envelope_field(self._primary) if self._primary is not None else None
        return f"Response(primary={action!r}, dismiss={self._dismiss is not None}, sent={self._sent})"


def show_info(tip: str) -> bytes:
    """Body of a response that only shows an info tip."""
    return Response().show_info(tip).output()


def show_success(tip: str) -> bytes:
    """Body of a response that only shows a success tip."""
    return Response().show_success(tip).output()


def show_warning(tip: str) -> bytes:
    """Body of a response that only shows a warning tip."""
    return Response().show_warning(tip).output()


def show_error(tip: str) -> bytes:
    """Body of a response that only shows an error tip."""
    return Response().show_error(tip).output()


def response_for_error(exc: SuperMessageError) -> Response:
    """Error tip for a failed request: reject bad input, ask for re-authentication
    on an invalid token, otherwise report the service as unavailable."""
    if isinstance(exc, ValidationError):
        return Response().show_error(INVALID_REQUEST_TIP)
    if isinstance(exc, BusinessError) and exc.is_invalid_request_token():
        return Response().show_error(INVALID_TOKEN_TIP)
    return Response().show_error(UNAVAILABLE_TIP)
