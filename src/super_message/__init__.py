"""
super-message-sdk — Super Message channel SDK for Python.

Verify the users behind card requests and tell their client how to
update the card: delete it, replace it, patch it or show a tip.
"""

from super_message.client import SuperMessage, AsyncSuperMessage
from super_message.auth import AuthenticatedRequest, RequestTokenVerifier
from super_message.cache import RequestTokenCache, MemoryCache
from super_message.messages import MessagesAPI
from super_message.query import RequestContext, decode_query
from super_message.response import (
    Response,
    response_for_error,
    show_error,
    show_info,
    show_success,
    show_warning,
)
from super_message.models.member import Member
from super_message.models.operations import UpdatePart, SetOp, UnsetOp, InsertOp, RemoveOp
from super_message.models.response import ResponseEnvelope, TipType
from super_message.errors import (
    SuperMessageError,
    ValidationError,
    BusinessError,
    InfrastructureError,
    StorageError,
    ResponseStateError,
)

__version__ = "0.1.0"
__all__ = [
    "SuperMessage",
    "AsyncSuperMessage",
    "AuthenticatedRequest",
    "RequestTokenVerifier",
    "RequestTokenCache",
    "MemoryCache",
    "MessagesAPI",
    "RequestContext",
    "decode_query",
    "Response",
    "response_for_error",
    "show_info",
    "show_success",
    "show_warning",
    "show_error",
    "Member",
    "UpdatePart",
    "SetOp",
    "UnsetOp",
    "InsertOp",
    "RemoveOp",
    "ResponseEnvelope",
    "TipType",
    "SuperMessageError",
    "ValidationError",
    "BusinessError",
    "InfrastructureError",
    "StorageError",
    "ResponseStateError",
]
