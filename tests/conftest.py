"""Shared fixtures: a fake clock and a scripted platform behind httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest

from super_message.transport.http import HttpClient

NOW = 1_700_000_000
ACCESS_TOKEN = "channel-access-token"
BASE_URL = "https://api.test"


class FakeClock:
    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def api_response(data: Any = None, code: int = 0, message: str = "", status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"code": code, "message": message, "data": data})


class FakePlatform:
    """Replays queued responses (or raises queued exceptions) and records requests."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def body(self, index: int = -1) -> Optional[dict[str, Any]]:
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def http(platform: FakePlatform) -> HttpClient:
    return HttpClient(ACCESS_TOKEN, base_url=BASE_URL, transport=platform.transport)
