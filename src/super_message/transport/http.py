"""
REST HTTP client for the Super Message platform API.

Every call carries the channel's access token as the ``accessToken`` query
parameter and returns the ``data`` of the standard envelope
{ "code": 0, "message": "", "data": ... }.
"""

import logging
import os
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from super_message.errors import BusinessError, InfrastructureError, ValidationError
from super_message.models.envelope import APIEnvelope

_LOG = logging.getLogger(__name__)

DEFAULT_API_HOST = "https://api.super-message.com"
API_PATH_PREFIX = "/v1"
USER_AGENT = "super-message-sdk/0.1.0"


def _api_host_from_env() -> str:
    return os.environ.get("SM_API", DEFAULT_API_HOST).strip() or DEFAULT_API_HOST


# read once at import, like the other process-wide settings
API_HOST = _api_host_from_env()


class HttpClient:
    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = (base_url or API_HOST).rstrip("/")
        self._access_token = access_token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}{API_PATH_PREFIX}",
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _unwrap(resp: httpx.Response) -> Any:
        try:
            envelope = APIEnvelope.model_validate_json(resp.content)
        except PydanticValidationError as e:
            raise InfrastructureError(f"malformed response envelope: {resp.text[:200]}") from e
        if envelope.code != 0:
            raise BusinessError(envelope.code, envelope.message)
        return envelope.data

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        if not self._access_token:
            raise ValidationError("access token is required", field="access_token")
        query = {**(params or {}), "accessToken": self._access_token}
        _LOG.debug("%s %s%s", method, API_PATH_PREFIX, path)
        try:
            resp = await self._client.request(method, path, params=query, json=body)
        except httpx.HTTPError as e:
            raise InfrastructureError(f"{method} {path} failed: {e}") from e
        if resp.status_code != 200:
            raise InfrastructureError(
                f"the server api responded with an unexpected status code, expect 200, but got {resp.status_code}",
                status_code=resp.status_code,
            )
        return self._unwrap(resp)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("POST", path, body=body)

    async def put(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("PUT", path, body=body)

    async def delete(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("DELETE", path, params=params)

    async def close(self) -> None:
        await self._client.aclose()
