"""
Super Message error types.

ValidationError     — bad local input, never retried.
BusinessError       — the platform rejected the call with a numeric code.
InfrastructureError — transport failure, unexpected status, malformed envelope.
"""

from typing import Any, Optional, Union

# Platform codes meaning the request token is unknown or has expired.
INVALID_REQUEST_TOKEN_CODES = frozenset({10000, 10001})


class SuperMessageError(Exception):
    def __init__(self, code: Union[int, str], message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ValidationError(SuperMessageError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__("validation_error", message, {"field": field} if field else None)
        self.field = field


class BusinessError(SuperMessageError):
    def __init__(self, code: int, message: str):
        super().__init__(code, message)

    def __str__(self) -> str:
        return f"API Error[{self.code}]: {self.message}"

    def is_invalid_request_token(self) -> bool:
        """True when the platform reports the request token as invalid or expired."""
        return self.code in INVALID_REQUEST_TOKEN_CODES


class InfrastructureError(SuperMessageError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("infrastructure_error", message, {"status_code": status_code} if status_code else None)
        self.status_code = status_code


class StorageError(SuperMessageError):
    def __init__(self, message: str):
        super().__init__("storage_error", message)


class ResponseStateError(SuperMessageError):
    def __init__(self, message: str):
        super().__init__("response_state_error", message)
