"""
Query parameters the client attaches when a user acts on a card or menu.

    rt   request token (required)
    rte  request token expiry, unix seconds (required)
    cid  channel id (required)
    id   message id
    lid  local message id
    tid  template id
    tv   template version

A message id of 0 is normal: requests triggered from the channel menu
produce a new client-side message that the platform does not store.
"""

import re
from collections.abc import Mapping
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel

from super_message.errors import ValidationError

QueryLike = Union[Mapping[str, Any], httpx.QueryParams, httpx.URL, str]

_INT_RE = re.compile(r"^[+-]?[0-9]+$")

# rte, id and lid are 64-bit on the wire; tv fits the same range
_INT_MIN, _INT_MAX = -(2**63), 2**63 - 1


class RequestContext(BaseModel):
    request_token: str
    token_expired_at: int
    channel_id: str
    message_id: int = 0
    message_local_id: int = 0
    template_id: str = ""
    template_version: int = 0

    model_config = {"frozen": True}

    @classmethod
    def from_query(cls, params: QueryLike) -> "RequestContext":
        return decode_query(params)

    def check_for_message_request(self) -> None:
        """Check the fields a request sent from a message card must carry.

        Raises:
            ValidationError: On a negative id or a missing template.
        """
        if self.message_id < 0:
            raise ValidationError("invalid message id", field="id")
        if self.message_local_id < 0:
            raise ValidationError("invalid local message id", field="lid")
        if not self.template_id:
            raise ValidationError("template id is required", field="tid")
        if self.template_version <= 0:
            raise ValidationError("invalid template version number", field="tv")


def _as_mapping(params: QueryLike) -> Mapping[str, Any]:
    if isinstance(params, httpx.URL):
        return params.params
    if isinstance(params, str):
        # a bare query may carry an unencoded "?" inside a value
        if "://" in params or params.startswith("/"):
            return httpx.URL(params).params
        return httpx.QueryParams(params[1:] if params.startswith("?") else params)
    return params


def _first(params: Mapping[str, Any], name: str) -> str:
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    return str(value).strip()


def _parse_int(name: str, raw: str, message: Optional[str] = None) -> int:
    if not _INT_RE.match(raw):
        raise ValidationError(message or f"invalid {name} value", field=name)
    value = int(raw)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValidationError(message or f"{name} value out of range", field=name)
    return value


def decode_query(params: QueryLike) -> RequestContext:
    """Decode the request context from query parameters.

    ``params`` may be a mapping (list values from ``parse_qs`` are fine),
    ``httpx.QueryParams``, an ``httpx.URL`` or a raw query string / URL.

    Raises:
        ValidationError: Naming the first missing or malformed parameter.
    """
    query = _as_mapping(params)

    # rt/rte/cid are always sent
    request_token = _first(query, "rt")
    if not request_token:
        raise ValidationError("request token is required", field="rt")

    raw_expiry = _first(query, "rte")
    if not raw_expiry:
        raise ValidationError("token expiration is required", field="rte")
    token_expired_at = _parse_int("rte", raw_expiry)

    channel_id = _first(query, "cid")
    if not channel_id:
        raise ValidationError("channel id not presented", field="cid")

    # the rest are converted when present; check_for_message_request() validates them
    fields: dict[str, Any] = {}
    raw_id = _first(query, "id")
    if raw_id:
        fields["message_id"] = _parse_int("id", raw_id)
    raw_local_id = _first(query, "lid")
    if raw_local_id:
        fields["message_local_id"] = _parse_int("lid", raw_local_id)
    fields["template_id"] = _first(query, "tid")
    raw_version = _first(query, "tv")
    if raw_version:
        fields["template_version"] = _parse_int("tv", raw_version)

    return RequestContext(
        request_token=request_token,
        token_expired_at=token_expired_at,
        channel_id=channel_id,
        **fields,
    )
