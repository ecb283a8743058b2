"""
Request token verification.

Users act on cards in the client; the client calls your server with a short
lived request token (``rt``). Verify it here to learn which member made the
request. Within one token lifetime the same user keeps the same token, so
verified tokens are cached until they expire.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from super_message.cache import RequestTokenCache, mask_token
from super_message.errors import InfrastructureError, StorageError
from super_message.models.member import Member
from super_message.query import QueryLike, RequestContext, decode_query
from super_message.transport.http import HttpClient

_LOG = logging.getLogger(__name__)

# tokens this close to expiry are not worth caching
CACHE_MIN_REMAINING_S = 10


class AuthenticatedRequest(BaseModel):
    """Who sent a request and from where; handed to request handlers explicitly."""
    context: RequestContext
    member: Member

    model_config = {"frozen": True}


class RequestTokenVerifier:
    def __init__(
        self,
        http: HttpClient,
        cache: Optional[RequestTokenCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._http = http
        self._cache = cache
        self._clock = clock

    @property
    def cache(self) -> Optional[RequestTokenCache]:
        return self._cache

    async def verify(self, request_token: str, timeout: Optional[float] = None) -> Member:
        """Resolve the member behind ``request_token``.

        Args:
            request_token: The ``rt`` query parameter.
            timeout: Optional bound in seconds on the remote call.

        Raises:
            BusinessError: The platform rejected the token; check
                ``is_invalid_request_token()`` to ask the user to re-authenticate.
            InfrastructureError: Network failure, timeout or a malformed reply.
                Nothing is cached in that case.
        """
        if self._cache is not None:
            member = self._cache.get(request_token)
            if member is not None:
                _LOG.debug("request token %s served from cache", mask_token(request_token))
                return member

        _LOG.debug("verifying request token %s with the platform", mask_token(request_token))
        call = self._http.get("/user/verify", params={"token": request_token})
        try:
            data = await (call if timeout is None else asyncio.wait_for(call, timeout))
        except asyncio.TimeoutError as e:
            raise InfrastructureError(f"verifying request token timed out after {timeout}s") from e

        try:
            member = Member.model_validate(data)
        except PydanticValidationError as e:
            raise InfrastructureError(f"malformed member in verify response: {data!r}") from e

        if self._cache is not None and member.open_id and member.expired_at - CACHE_MIN_REMAINING_S > self._clock():
            try:
                self._cache.set(request_token, member)
            except StorageError as e:
                _LOG.warning("could not cache request token %s: %s", mask_token(request_token), e)
        return member

    async def authenticate(self, params: QueryLike, timeout: Optional[float] = None) -> AuthenticatedRequest:
        """Decode the inbound query and verify its request token.

        Raises:
            ValidationError: Missing or malformed query parameters.
            BusinessError, InfrastructureError: As for ``verify``.
        """
        context = decode_query(params)
        member = await self.verify(context.request_token, timeout=timeout)
        return AuthenticatedRequest(context=context, member=member)

    def forget(self, request_token: str) -> None:
        """Drop a cached token, e.g. from the channel unsubscribe hook."""
        if self._cache is not None:
            self._cache.delete(request_token)
