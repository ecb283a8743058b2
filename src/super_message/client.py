"""
AsyncSuperMessage / SuperMessage — main SDK clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from super_message.auth import AuthenticatedRequest, RequestTokenVerifier
from super_message.cache import RequestTokenCache
from super_message.messages import MessagesAPI
from super_message.models.member import Member
from super_message.query import QueryLike
from super_message.transport.http import HttpClient


class AsyncSuperMessage:
    """Async Super Message client (primary).

    ``access_token`` is the channel's token for the platform API. Pass a
    ``cache`` to avoid a verification round trip on every user request:

        client = AsyncSuperMessage("access-token", cache=MemoryCache())   # in-process
        client = AsyncSuperMessage("access-token")                        # always verify remotely

    A shared store (e.g. Redis) behind RequestTokenCache also survives restarts.
    """

    def __init__(
        self,
        access_token: str,
        cache: Optional[RequestTokenCache] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = HttpClient(access_token, base_url=base_url, timeout=timeout, transport=transport)
        self.verifier = RequestTokenVerifier(self.http, cache)
        self.messages = MessagesAPI(self.http)

    @property
    def cache(self) -> Optional[RequestTokenCache]:
        return self.verifier.cache

    async def verify_request_token(self, request_token: str, timeout: Optional[float] = None) -> Member:
        """Return the member behind a request token; see RequestTokenVerifier.verify."""
        return await self.verifier.verify(request_token, timeout=timeout)

    async def authenticate(self, params: QueryLike, timeout: Optional[float] = None) -> AuthenticatedRequest:
        """Decode an inbound request's query and verify who sent it."""
        return await self.verifier.authenticate(params, timeout=timeout)

    def forget_request_token(self, request_token: str) -> None:
        """Call from the unsubscribe hook so a cached token stops being honoured."""
        self.verifier.forget(request_token)

    async def close(self) -> None:
        await self.http.close()


class SuperMessage:
    """Sync wrapper around AsyncSuperMessage. Runs the event loop internally.

    The loop runs one call at a time: give each worker thread its own
    SuperMessage. Instances may share one cache.
    """

    def __init__(self, access_token: str, **kwargs: Any):
        self._async = AsyncSuperMessage(access_token, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def cache(self) -> Optional[RequestTokenCache]:
        return self._async.cache

    def verify_request_token(self, request_token: str, timeout: Optional[float] = None) -> Member:
        return self._run(self._async.verify_request_token(request_token, timeout=timeout))

    def authenticate(self, params: QueryLike, timeout: Optional[float] = None) -> AuthenticatedRequest:
        return self._run(self._async.authenticate(params, timeout=timeout))

    def forget_request_token(self, request_token: str) -> None:
        self._async.forget_request_token(request_token)

    def create_message(
        self,
        template_id: str,
        template_version: int,
        title: str,
        data: Optional[dict[str, Any]] = None,
        recipients: Optional[list[str]] = None,
        to_all: bool = False,
    ) -> int:
        return self._run(self._async.messages.create(
            template_id, template_version, title, data, recipients=recipients, to_all=to_all,
        ))

    def update_message(
        self,
        message_id: int,
        template_id: str,
        template_version: int,
        title: str,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        self._run(self._async.messages.update(message_id, template_id, template_version, title, data))

    def delete_message(self, message_id: int) -> None:
        self._run(self._async.messages.delete(message_id))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
